"""Pure calendar aggregation - month grids and per-day counts, no I/O."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Mapping

from .dates import DateKey, DayStatus, classify, date_key, format_month_title
from .entries import DailyEntry, Task, is_blank

GRID_DAYS = 42
MAX_TASK_DOTS = 5
WEEKDAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


@dataclass(frozen=True)
class DayAggregate:
    """Task counts for one day."""

    total_count: int = 0
    completed_count: int = 0
    reminder_count: int = 0

    @property
    def has_entries(self) -> bool:
        return self.total_count > 0


def aggregate_tasks(tasks: Iterable[Task]) -> DayAggregate:
    """
    Count tasks for badges and calendar cells.

    Pure function - no I/O. A completed reminder is not pending, whether
    or not it was ever shown.
    """
    total = completed = reminders = 0
    for task in tasks:
        if is_blank(task.text):
            continue
        total += 1
        if task.completed:
            completed += 1
        elif task.is_reminder:
            reminders += 1
    return DayAggregate(total_count=total, completed_count=completed, reminder_count=reminders)


def aggregate_entry(entry: DailyEntry | None) -> DayAggregate:
    if entry is None:
        return DayAggregate()
    return aggregate_tasks(entry.tasks)


@dataclass(frozen=True)
class CalendarCell:
    """One day in the month grid."""

    date: date
    other_month: bool
    status: DayStatus
    aggregate: DayAggregate

    @property
    def key(self) -> DateKey:
        return date_key(self.date)

    @property
    def is_past(self) -> bool:
        return self.status is DayStatus.PAST

    @property
    def is_today(self) -> bool:
        return self.status is DayStatus.TODAY

    @property
    def has_entries(self) -> bool:
        return self.aggregate.has_entries

    def task_dots(self) -> tuple[list[bool], int]:
        """Up to five dots (True = completed, completed first) and the overflow count."""
        shown = min(self.aggregate.total_count, MAX_TASK_DOTS)
        dots = [i < self.aggregate.completed_count for i in range(shown)]
        return dots, max(self.aggregate.total_count - MAX_TASK_DOTS, 0)


@dataclass(frozen=True)
class MonthGrid:
    """Six weeks of calendar cells covering a month."""

    year: int
    month: int
    cells: tuple[CalendarCell, ...]

    @property
    def title(self) -> str:
        return format_month_title(self.year, self.month)

    @property
    def weeks(self) -> list[tuple[CalendarCell, ...]]:
        return [self.cells[i : i + 7] for i in range(0, len(self.cells), 7)]


def grid_start(year: int, month: int) -> date:
    """The Sunday on or before the 1st of the month."""
    first = date(year, month, 1)
    # weekday(): Monday=0 .. Sunday=6
    return first - timedelta(days=(first.weekday() + 1) % 7)


def build_month_grid(
    year: int,
    month: int,
    entries: Mapping[DateKey, DailyEntry],
    now: datetime,
) -> MonthGrid:
    """
    Build the 42-cell grid for a month.

    Pure function - no I/O. Days from the neighbouring months are included
    and flagged other_month.
    """
    start = grid_start(year, month)
    cells = []
    for offset in range(GRID_DAYS):
        day = start + timedelta(days=offset)
        cells.append(
            CalendarCell(
                date=day,
                other_month=(day.year, day.month) != (year, month),
                status=classify(day, now),
                aggregate=aggregate_entry(entries.get(date_key(day))),
            )
        )
    return MonthGrid(year=year, month=month, cells=tuple(cells))
