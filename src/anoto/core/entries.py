"""Pure journal domain model - tasks, daily entries and the entry store."""

import re
import threading
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Iterator

from .dates import DateKey, parse_date_key

_TASK_ID = re.compile(r"^line-(\d+)$")


class MalformedEntryError(ValueError):
    """A stored entry record is missing fields or holds invalid values."""


class ReminderState(Enum):
    """Reminder lifecycle of a single task."""

    NOT_REMINDER = "not_reminder"
    PENDING = "pending"
    SHOWN = "shown"


def task_id(line_index: int) -> str:
    """Stable task id for a line slot."""
    return f"line-{line_index}"


def line_index_of(task_id_value: str) -> int:
    """Line slot encoded in a task id. Raises ValueError if malformed."""
    match = _TASK_ID.match(task_id_value) if isinstance(task_id_value, str) else None
    if not match:
        raise ValueError(f"Invalid task id: {task_id_value!r}")
    return int(match.group(1))


def is_blank(text: str) -> bool:
    return not text.strip()


@dataclass
class Task:
    """A single line of a day's page."""

    id: str
    text: str
    created_at: datetime
    reminder_date: DateKey
    completed: bool = False
    is_reminder: bool = False
    reminder_shown: bool = False

    @property
    def line_index(self) -> int:
        return line_index_of(self.id)

    @property
    def reminder_state(self) -> ReminderState:
        if not self.is_reminder:
            return ReminderState.NOT_REMINDER
        if self.reminder_shown:
            return ReminderState.SHOWN
        return ReminderState.PENDING

    @property
    def is_due(self) -> bool:
        """Pending reminder that has not been completed."""
        return self.reminder_state is ReminderState.PENDING and not self.completed

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "createdAt": self.created_at.isoformat(),
            "isReminder": self.is_reminder,
            "reminderShown": self.reminder_shown,
            "reminderDate": self.reminder_date,
        }

    @classmethod
    def from_dict(cls, data: dict, entry_date: DateKey) -> "Task":
        """Create Task from a stored record."""
        if not isinstance(data, dict):
            raise MalformedEntryError(f"Task record must be an object, got {type(data).__name__}")
        try:
            line_index_of(data["id"])
            text = data["text"]
            flags = (data["completed"], data["isReminder"], data["reminderShown"])
            created_at = datetime.fromisoformat(data["createdAt"])
            parse_date_key(data.get("reminderDate") or entry_date)
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedEntryError(f"Invalid task in {entry_date}: {e}") from e

        if not isinstance(text, str) or not all(isinstance(f, bool) for f in flags):
            raise MalformedEntryError(f"Invalid task field types in {entry_date}")

        completed, is_reminder, reminder_shown = flags
        return cls(
            id=data["id"],
            text=text,
            created_at=created_at,
            # a reminder is always due on the page that holds it
            reminder_date=entry_date,
            completed=completed,
            is_reminder=is_reminder,
            reminder_shown=reminder_shown,
        )


@dataclass
class DailyEntry:
    """All tasks written on one day, keyed by line slot."""

    date: DateKey
    created_at: datetime
    last_modified: datetime
    slots: dict[int, Task] = field(default_factory=dict)

    @property
    def tasks(self) -> list[Task]:
        """Non-empty tasks in line order."""
        return [self.slots[i] for i in sorted(self.slots) if not is_blank(self.slots[i].text)]

    @property
    def is_empty(self) -> bool:
        return not self.tasks

    def get(self, line_index: int) -> Task | None:
        task = self.slots.get(line_index)
        if task is None or is_blank(task.text):
            return None
        return task

    def put(self, line_index: int, task: Task) -> None:
        self.slots[line_index] = task

    def remove(self, line_index: int) -> Task | None:
        return self.slots.pop(line_index, None)

    def keep_shown_reminders(self, previous: "DailyEntry") -> bool:
        """
        Carry reminder_shown over from an older copy of this entry.

        Matches tasks by id and creation time. Returns True if any flag was
        restored.
        """
        restored = False
        for index, task in self.slots.items():
            old = previous.slots.get(index)
            if old is None or not old.reminder_shown or task.reminder_shown:
                continue
            if old.id == task.id and old.created_at == task.created_at:
                task.reminder_shown = True
                restored = True
        return restored

    def copy_tasks(self) -> list[Task]:
        """Detached copies of the tasks, safe to hand to callers."""
        return [replace(t) for t in self.tasks]

    def to_dict(self) -> dict:
        """Serialize for storage. Blank tasks are never written."""
        return {
            "date": self.date,
            "tasks": [t.to_dict() for t in self.tasks],
            "createdAt": self.created_at.isoformat(),
            "lastModified": self.last_modified.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DailyEntry":
        """
        Create DailyEntry from a stored record.

        Raises MalformedEntryError if the record cannot be trusted.
        Blank tasks are dropped silently.
        """
        if not isinstance(data, dict):
            raise MalformedEntryError(f"Entry record must be an object, got {type(data).__name__}")
        try:
            key = data["date"]
            parse_date_key(key)
            created_at = datetime.fromisoformat(data["createdAt"])
            last_modified = datetime.fromisoformat(data["lastModified"])
            raw_tasks = data["tasks"]
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedEntryError(f"Invalid entry record: {e}") from e

        if not isinstance(raw_tasks, list):
            raise MalformedEntryError(f"Tasks for {key} must be a list")

        entry = cls(date=key, created_at=created_at, last_modified=last_modified)
        for raw in raw_tasks:
            task = Task.from_dict(raw, key)
            if is_blank(task.text):
                continue
            if task.line_index in entry.slots:
                raise MalformedEntryError(f"Duplicate task id {task.id} in {key}")
            entry.put(task.line_index, task)
        return entry


class EntryStore:
    """
    In-memory mapping of DateKey to DailyEntry.

    Edits and reminder scans share one re-entrant lock; callers hold
    `lock` for the whole read-modify-write.
    """

    def __init__(self, entries: dict[DateKey, DailyEntry] | None = None):
        self._entries: dict[DateKey, DailyEntry] = dict(entries or {})
        self.lock = threading.RLock()

    def get(self, key: DateKey) -> DailyEntry | None:
        return self._entries.get(key)

    def put(self, entry: DailyEntry) -> None:
        self._entries[entry.date] = entry

    def replace_all(self, entries: list[DailyEntry]) -> None:
        with self.lock:
            self._entries = {e.date: e for e in entries}

    def keys(self) -> list[DateKey]:
        return sorted(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[DailyEntry]:
        return iter([self._entries[k] for k in self.keys()])

    def as_mapping(self) -> dict[DateKey, DailyEntry]:
        return dict(self._entries)
