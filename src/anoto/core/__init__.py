"""Functional core - pure journal logic with no I/O."""

from .dates import (
    DateKey,
    DayStatus,
    date_key,
    parse_date_key,
    classify,
    is_editable,
    shift_day,
    shift_month,
    format_long_date,
    format_month_title,
)
from .entries import DailyEntry, EntryStore, MalformedEntryError, ReminderState, Task, task_id
from .calendar import CalendarCell, DayAggregate, MonthGrid, aggregate_tasks, build_month_grid
from .page import DEFAULT_PAGE_SIZE, DayPage, build_page

__all__ = [
    # Dates
    "DateKey",
    "DayStatus",
    "date_key",
    "parse_date_key",
    "classify",
    "is_editable",
    "shift_day",
    "shift_month",
    "format_long_date",
    "format_month_title",
    # Entries
    "DailyEntry",
    "EntryStore",
    "MalformedEntryError",
    "ReminderState",
    "Task",
    "task_id",
    # Calendar
    "CalendarCell",
    "DayAggregate",
    "MonthGrid",
    "aggregate_tasks",
    "build_month_grid",
    # Page
    "DEFAULT_PAGE_SIZE",
    "DayPage",
    "build_page",
]
