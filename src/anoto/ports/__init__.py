"""Ports - interfaces/protocols for external dependencies."""

from .clock import Clock
from .entry_repo import EntryRepository
from .notifier import Notifier
from .scheduler import RecurringScheduler

__all__ = [
    "Clock",
    "EntryRepository",
    "Notifier",
    "RecurringScheduler",
]
