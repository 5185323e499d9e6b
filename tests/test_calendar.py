"""Tests for month grid and per-day aggregation."""

from datetime import date, datetime

import pytest

from anoto.core.calendar import (
    GRID_DAYS,
    CalendarCell,
    DayAggregate,
    aggregate_tasks,
    build_month_grid,
    grid_start,
)
from anoto.core.dates import DayStatus
from anoto.core.entries import DailyEntry, Task, task_id


@pytest.fixture
def now():
    return datetime(2025, 6, 9, 9, 30)


def make_entry(key: str, *tasks: tuple[str, bool, bool]) -> DailyEntry:
    created = datetime(2025, 6, 1, 8, 0)
    entry = DailyEntry(date=key, created_at=created, last_modified=created)
    for line, (text, completed, is_reminder) in enumerate(tasks):
        entry.put(
            line,
            Task(
                id=task_id(line),
                text=text,
                created_at=created,
                reminder_date=key,
                completed=completed,
                is_reminder=is_reminder,
            ),
        )
    return entry


class TestAggregateTasks:
    def test_three_tasks_two_done_one_reminder(self):
        entry = make_entry(
            "2025-06-10",
            ("Buy milk", True, True),
            ("Call mom", True, False),
            ("Pay rent", False, True),
        )
        agg = aggregate_tasks(entry.tasks)
        assert agg == DayAggregate(total_count=3, completed_count=2, reminder_count=1)
        assert agg.has_entries

    def test_completed_reminder_not_pending_even_if_never_shown(self):
        entry = make_entry("2025-06-10", ("Buy milk", True, True))
        agg = aggregate_tasks(entry.tasks)
        assert agg.reminder_count == 0
        assert agg.completed_count == 1

    def test_blank_tasks_not_counted(self):
        created = datetime(2025, 6, 1)
        blank = Task(id="line-0", text="  ", created_at=created, reminder_date="2025-06-10")
        assert aggregate_tasks([blank]) == DayAggregate()

    def test_empty(self):
        assert aggregate_tasks([]).has_entries is False


class TestGridStart:
    def test_month_starting_sunday(self):
        # June 2025 starts on a Sunday
        assert grid_start(2025, 6) == date(2025, 6, 1)

    def test_month_starting_midweek(self):
        # July 2025 starts on a Tuesday
        assert grid_start(2025, 7) == date(2025, 6, 29)

    def test_month_starting_saturday(self):
        # February 2025 starts on a Saturday
        assert grid_start(2025, 2) == date(2025, 1, 26)


class TestBuildMonthGrid:
    def test_grid_shape(self, now):
        grid = build_month_grid(2025, 7, {}, now)
        assert len(grid.cells) == GRID_DAYS
        assert len(grid.weeks) == 6
        assert all(len(week) == 7 for week in grid.weeks)
        assert all(cell.date.weekday() == 6 for cell in (week[0] for week in grid.weeks))
        assert grid.title == "July 2025"

    def test_other_month_flags(self, now):
        grid = build_month_grid(2025, 7, {}, now)
        assert grid.cells[0].date == date(2025, 6, 29)
        assert grid.cells[0].other_month
        assert grid.cells[2].date == date(2025, 7, 1)
        assert not grid.cells[2].other_month
        assert grid.cells[-1].date == date(2025, 8, 9)
        assert grid.cells[-1].other_month

    def test_past_today_future_flags(self, now):
        grid = build_month_grid(2025, 6, {}, now)
        by_day = {c.date: c for c in grid.cells}
        assert by_day[date(2025, 6, 8)].is_past
        assert by_day[date(2025, 6, 9)].is_today
        assert not by_day[date(2025, 6, 9)].is_past
        future = by_day[date(2025, 6, 10)]
        assert not future.is_past and not future.is_today

    def test_counts_from_entries(self, now):
        entries = {
            "2025-06-10": make_entry(
                "2025-06-10",
                ("Buy milk", True, True),
                ("Call mom", True, True),
                ("Pay rent", False, True),
            ),
            "2025-06-11": make_entry("2025-06-11"),
        }
        grid = build_month_grid(2025, 6, entries, now)
        by_key = {c.key: c for c in grid.cells}

        busy = by_key["2025-06-10"]
        assert busy.has_entries
        assert busy.aggregate == DayAggregate(3, 2, 1)

        shell = by_key["2025-06-11"]
        assert not shell.has_entries

    def test_neighbouring_month_entries_counted(self, now):
        entries = {"2025-07-01": make_entry("2025-07-01", ("Trip", False, True))}
        grid = build_month_grid(2025, 6, entries, now)
        cell = next(c for c in grid.cells if c.key == "2025-07-01")
        assert cell.other_month
        assert cell.aggregate.reminder_count == 1


class TestTaskDots:
    def make_cell(self, total: int, completed: int) -> CalendarCell:
        return CalendarCell(
            date=date(2025, 6, 10),
            other_month=False,
            status=DayStatus.FUTURE,
            aggregate=DayAggregate(total_count=total, completed_count=completed),
        )

    def test_completed_dots_first(self):
        dots, overflow = self.make_cell(3, 2).task_dots()
        assert dots == [True, True, False]
        assert overflow == 0

    def test_overflow_past_five(self):
        dots, overflow = self.make_cell(8, 1).task_dots()
        assert len(dots) == 5
        assert dots[0] is True and dots[1] is False
        assert overflow == 3

    def test_no_tasks(self):
        assert self.make_cell(0, 0).task_dots() == ([], 0)
