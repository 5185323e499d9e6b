"""Date keys and the past/today/future edit policy - no I/O dependencies."""

from datetime import date, datetime, timedelta
from enum import Enum

DateKey = str


class DayStatus(Enum):
    """Where a day sits relative to today."""

    PAST = "past"
    TODAY = "today"
    FUTURE = "future"

    @property
    def label(self) -> str:
        """Page status badge."""
        labels = {"past": "Read Only", "today": "Today", "future": "Future"}
        return labels[self.value]

    @property
    def prompt(self) -> str:
        """Text shown on an empty page."""
        prompts = {
            "past": "This page is from the past and cannot be edited.",
            "today": "What's on your mind today?",
            "future": "Plan for this future day...",
        }
        return prompts[self.value]


def date_key(value: date) -> DateKey:
    """
    Canonical YYYY-MM-DD key for a calendar day.

    Uses the value's own year/month/day. A datetime keeps its wall-clock
    day, so 23:59 and 00:01 on the same local day share a key. Never
    convert to UTC before calling this.
    """
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def parse_date_key(key: str) -> date:
    """Parse a canonical DateKey. Raises ValueError for anything else."""
    if not isinstance(key, str):
        raise ValueError(f"Date key must be a string, got {type(key).__name__}")
    parsed = date.fromisoformat(key)
    if date_key(parsed) != key:
        raise ValueError(f"Not a canonical date key: {key!r}")
    return parsed


def classify(target: date, now: datetime) -> DayStatus:
    """
    Classify a day as past, today or future.

    Pure function - no I/O. Zero-padded keys compare correctly as strings.
    """
    target_key = date_key(target)
    today_key = date_key(now)
    if target_key < today_key:
        return DayStatus.PAST
    if target_key == today_key:
        return DayStatus.TODAY
    return DayStatus.FUTURE


def is_editable(target: date, now: datetime) -> bool:
    """Only today and future days accept writes."""
    return classify(target, now) is not DayStatus.PAST


def as_day(value: date) -> date:
    """Drop the time part of a datetime, keeping its local calendar day."""
    if isinstance(value, datetime):
        return value.date()
    return value


def shift_day(value: date, days: int) -> date:
    """Move N days forward (negative for backward)."""
    return as_day(value) + timedelta(days=days)


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move N months forward or backward, rolling the year."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def format_long_date(value: date) -> str:
    """Format as 'Tuesday, June 10, 2025'."""
    return f"{value.strftime('%A')}, {value.strftime('%B')} {value.day}, {value.year}"


def format_month_title(year: int, month: int) -> str:
    """Format as 'June 2025'."""
    return f"{date(year, month, 1).strftime('%B')} {year}"
