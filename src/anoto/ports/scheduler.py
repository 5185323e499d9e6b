"""Recurring job scheduler interface."""

from typing import Callable, Protocol


class RecurringScheduler(Protocol):
    """Interface for running a function on a fixed interval."""

    def every(self, seconds: float, func: Callable[[], object], job_id: str) -> None:
        """Run func every N seconds until cancelled."""
        ...

    def cancel(self, job_id: str) -> None:
        """Stop a recurring job. Unknown ids are ignored."""
        ...
