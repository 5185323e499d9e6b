"""Shared fakes for the journal and reminder tests."""

import copy
import json
from datetime import datetime

import pytest

from anoto.adapters.clock import FixedClock
from anoto.journal import JournalEngine


class ManualScheduler:
    """RecurringScheduler that only runs jobs when virtual time is advanced."""

    def __init__(self):
        self.jobs: dict[str, list] = {}  # job_id -> [interval, func, elapsed]

    def every(self, seconds, func, job_id):
        self.jobs[job_id] = [seconds, func, 0.0]

    def cancel(self, job_id):
        self.jobs.pop(job_id, None)

    def advance(self, seconds: float) -> None:
        for job_id in list(self.jobs):
            job = self.jobs.get(job_id)
            if job is None:
                continue
            job[2] += seconds
            while job[2] >= job[0] and job_id in self.jobs:
                job[2] -= job[0]
                job[1]()


class RecordingNotifier:
    """Notifier that remembers every call."""

    def __init__(self, result: bool = True, error: Exception | None = None):
        self.calls: list[tuple[str, str]] = []
        self.result = result
        self.error = error

    def notify(self, title, body):
        self.calls.append((title, body))
        if self.error is not None:
            raise self.error
        return self.result

    @property
    def bodies(self) -> list[str]:
        return [body for _, body in self.calls]


class MemoryRepository:
    """EntryRepository kept in a dict, round-tripping records through JSON."""

    def __init__(self, records: list | None = None):
        self.records: dict[str, object] = {}
        self.saves: list[dict] = []
        self.loose: list = list(records or [])
        self.fail_saves = False

    def load_all(self):
        return [copy.deepcopy(r) for r in self.loose] + [
            json.loads(json.dumps(r)) for r in self.records.values()
        ]

    def save(self, record):
        if self.fail_saves:
            raise OSError("disk full")
        self.records[record["date"]] = json.loads(json.dumps(record))
        self.saves.append(record)


@pytest.fixture
def clock():
    # Monday 2025-06-09, mid-morning
    return FixedClock(datetime(2025, 6, 9, 9, 30))


@pytest.fixture
def repository():
    return MemoryRepository()


@pytest.fixture
def make_repository():
    return MemoryRepository


@pytest.fixture
def journal(repository, clock):
    return JournalEngine.load(repository, clock)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def scheduler():
    return ManualScheduler()
