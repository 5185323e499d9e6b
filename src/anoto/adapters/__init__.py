"""Adapters - I/O implementations of ports."""

from .apscheduler_runner import APSchedulerRunner
from .clock import FixedClock, SystemClock
from .console_notifier import ConsoleNotifier
from .file_entries import FileEntryRepository

__all__ = [
    "APSchedulerRunner",
    "FixedClock",
    "SystemClock",
    "ConsoleNotifier",
    "FileEntryRepository",
]
