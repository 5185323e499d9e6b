"""Journal engine - task edits against the entry store with the day edit policy.

Writes to past days are silent no-ops: callers get the unchanged task list
back and nothing is saved.
"""

import logging
from dataclasses import replace
from datetime import date
from typing import Callable

from .core.calendar import DayAggregate, MonthGrid, aggregate_entry, build_month_grid
from .core.dates import DateKey, DayStatus, classify, date_key, is_editable
from .core.entries import DailyEntry, EntryStore, MalformedEntryError, Task, is_blank, task_id
from .core.page import DEFAULT_PAGE_SIZE, DayPage, build_page
from .ports import Clock, EntryRepository

logger = logging.getLogger(__name__)

CompletionCue = Callable[[DateKey, Task], None]


def load_store(repository: EntryRepository) -> EntryStore:
    """Build an entry store from every stored record, dropping malformed ones."""
    entries = []
    for record in repository.load_all():
        try:
            entries.append(DailyEntry.from_dict(record))
        except MalformedEntryError as e:
            logger.warning(f"Dropping malformed entry: {e}")
    return EntryStore({e.date: e for e in entries})


class JournalEngine:
    """
    Reads and edits the tasks of any day.

    Every mutation runs under the store lock; saving happens after the lock
    is released, on a snapshot taken while holding it.
    """

    def __init__(
        self,
        store: EntryStore,
        clock: Clock,
        repository: EntryRepository | None = None,
        on_completed: CompletionCue | None = None,
    ):
        self.store = store
        self.clock = clock
        self.repository = repository
        self.on_completed = on_completed

    @classmethod
    def load(
        cls,
        repository: EntryRepository,
        clock: Clock,
        on_completed: CompletionCue | None = None,
    ) -> "JournalEngine":
        """Create an engine holding everything the repository has stored."""
        return cls(load_store(repository), clock, repository, on_completed)

    def reload(self) -> None:
        """
        Replace the in-memory store with a fresh load from the repository.

        Reminders already shown in memory stay shown even when the stored
        record missed that save; repaired records are written back.
        """
        if self.repository is None:
            return
        fresh = load_store(self.repository)
        repaired = []
        with self.store.lock:
            for entry in fresh:
                current = self.store.get(entry.date)
                if current is not None and entry.keep_shown_reminders(current):
                    repaired.append(entry.to_dict())
            self.store.replace_all(list(fresh))

        for record in repaired:
            self.persist(record)

    def persist(self, record: dict) -> None:
        """Save an entry snapshot. Failures are logged, memory stays authoritative."""
        if self.repository is None:
            return
        try:
            self.repository.save(record)
        except OSError as e:
            logger.error(f"Failed to save entry {record.get('date')}: {e}")

    def classify(self, target: date) -> DayStatus:
        return classify(target, self.clock.now())

    # ============== Read model ==============

    def get_tasks(self, target: date) -> list[Task]:
        """Tasks for a day in line order, or an empty list."""
        with self.store.lock:
            entry = self.store.get(date_key(target))
            return entry.copy_tasks() if entry else []

    def get_daily_aggregate(self, target: date) -> DayAggregate:
        with self.store.lock:
            return aggregate_entry(self.store.get(date_key(target)))

    def get_month_grid(self, year: int, month: int) -> MonthGrid:
        with self.store.lock:
            return build_month_grid(year, month, self.store.as_mapping(), self.clock.now())

    def get_page(self, target: date, page_size: int = DEFAULT_PAGE_SIZE) -> DayPage:
        with self.store.lock:
            return build_page(target, self.store.get(date_key(target)), self.clock.now(), page_size)

    # ============== Write model ==============

    def set_line_text(self, target: date, line_index: int, text: str) -> list[Task]:
        """
        Write a line of a day's page.

        Blank text vacates the line. Text on an occupied line replaces only
        the text. Text on a vacant line creates a task, promoted to a
        reminder when the day is still in the future.
        """
        now = self.clock.now()
        key = date_key(target)

        with self.store.lock:
            entry = self.store.get(key)
            if line_index < 0 or not is_editable(target, now):
                logger.debug(f"Ignoring write to line {line_index} of {key}")
                return entry.copy_tasks() if entry else []

            existing = entry.get(line_index) if entry else None
            if is_blank(text):
                if existing is None:
                    return entry.copy_tasks() if entry else []
                entry.remove(line_index)
            elif existing is not None:
                existing.text = text
            else:
                if entry is None:
                    entry = DailyEntry(date=key, created_at=now, last_modified=now)
                    self.store.put(entry)
                entry.put(
                    line_index,
                    Task(
                        id=task_id(line_index),
                        text=text,
                        created_at=now,
                        reminder_date=key,
                        is_reminder=classify(target, now) is DayStatus.FUTURE,
                    ),
                )

            entry.last_modified = now
            snapshot = entry.to_dict()
            tasks = entry.copy_tasks()

        self.persist(snapshot)
        return tasks

    def toggle_completion(self, target: date, line_index: int) -> list[Task]:
        """
        Flip a task between open and done.

        Only open -> done reports the completion cue; undoing is silent.
        """
        now = self.clock.now()
        key = date_key(target)

        with self.store.lock:
            entry = self.store.get(key)
            task = entry.get(line_index) if entry else None
            if task is None or not is_editable(target, now):
                logger.debug(f"Ignoring toggle of line {line_index} of {key}")
                return entry.copy_tasks() if entry else []

            task.completed = not task.completed
            entry.last_modified = now
            snapshot = entry.to_dict()
            tasks = entry.copy_tasks()
            completed = replace(task) if task.completed else None

        self.persist(snapshot)
        if completed is not None and self.on_completed is not None:
            try:
                self.on_completed(key, completed)
            except Exception as e:
                logger.error(f"Completion cue failed for {completed.id} on {key}: {e}")
        return tasks
