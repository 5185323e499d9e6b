"""Pure day-page read model - the fixed-size page of line slots."""

from dataclasses import dataclass, field
from datetime import date, datetime

from .dates import DateKey, DayStatus, as_day, classify, date_key, format_long_date
from .entries import DailyEntry, Task

DEFAULT_PAGE_SIZE = 20


@dataclass
class DayPage:
    """Everything needed to render one day."""

    date: date
    key: DateKey
    title: str
    status: DayStatus
    lines: list[Task | None]
    last_modified: datetime | None = None
    overflow: list[Task] = field(default_factory=list)

    @property
    def editable(self) -> bool:
        return self.status is not DayStatus.PAST

    @property
    def status_label(self) -> str:
        return self.status.label

    @property
    def prompt(self) -> str:
        return self.status.prompt

    @property
    def is_blank(self) -> bool:
        return not self.overflow and all(line is None for line in self.lines)


def build_page(
    target: date,
    entry: DailyEntry | None,
    now: datetime,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> DayPage:
    """
    Lay a day's tasks out on a page of line slots.

    Pure function - no I/O. Tasks stored past the last slot are listed in
    `overflow` in line order, so nothing stored is ever hidden.
    """
    lines: list[Task | None] = [None] * page_size
    overflow: list[Task] = []
    for task in entry.copy_tasks() if entry else []:
        if task.line_index < page_size:
            lines[task.line_index] = task
        else:
            overflow.append(task)

    day = as_day(target)
    return DayPage(
        date=day,
        key=date_key(day),
        title=format_long_date(day),
        status=classify(day, now),
        lines=lines,
        last_modified=entry.last_modified if entry else None,
        overflow=overflow,
    )
