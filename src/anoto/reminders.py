"""Reminder engine - surfaces tasks written ahead of time once their day arrives."""

import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable

from .core.dates import date_key
from .core.entries import Task
from .journal import JournalEngine
from .ports import Notifier, RecurringScheduler

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 60
REMINDER_TITLE = "Anoto Reminder"
SCAN_JOB_ID = "reminder_scan"


class ReminderEngine:
    """
    Periodic scan of today's page for pending reminders.

    Each reminder fires at most once. It is marked shown under the store
    lock before delivery, and stays shown even when delivery fails: there
    are no retries.
    """

    def __init__(
        self,
        journal: JournalEngine,
        notifier: Notifier,
        scheduler: RecurringScheduler | None = None,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
        refresh: Callable[[], None] | None = None,
    ):
        self.journal = journal
        self.notifier = notifier
        self.scheduler = scheduler
        self.interval_seconds = interval_seconds
        self.refresh = refresh
        self.running = False

    def scan_due_reminders(self, now: datetime | None = None) -> list[Task]:
        """
        Notify every due reminder on today's page.

        Only the entry for today's key is looked at. Returns the tasks that
        fired.
        """
        now = now or self.journal.clock.now()
        key = date_key(now)
        store = self.journal.store

        with store.lock:
            entry = store.get(key)
            due = [t for t in entry.tasks if t.is_due] if entry else []
            if not due:
                return []
            for task in due:
                task.reminder_shown = True
            entry.last_modified = now
            snapshot = entry.to_dict()
            fired = [replace(t) for t in due]

        for task in fired:
            self._deliver(task)
        self.journal.persist(snapshot)
        logger.info(f"Fired {len(fired)} reminder(s) for {key}")
        return fired

    def _deliver(self, task: Task) -> None:
        try:
            delivered = self.notifier.notify(REMINDER_TITLE, task.text)
        except Exception as e:
            logger.error(f"Notifier raised for {task.id} on {task.reminder_date}: {e}")
            return
        if not delivered:
            logger.warning(f"Reminder {task.id} on {task.reminder_date} was not delivered")

    def _tick(self) -> None:
        if self.refresh is not None:
            try:
                self.refresh()
            except Exception as e:
                logger.error(f"Refresh before reminder scan failed: {e}")
        self.scan_due_reminders()

    def start(self) -> None:
        """Scan once now, then on every interval."""
        if self.running:
            return
        self.running = True
        self.scan_due_reminders()
        if self.scheduler is not None:
            self.scheduler.every(self.interval_seconds, self._tick, SCAN_JOB_ID)

    def stop(self) -> None:
        if not self.running:
            return
        self.running = False
        if self.scheduler is not None:
            self.scheduler.cancel(SCAN_JOB_ID)
