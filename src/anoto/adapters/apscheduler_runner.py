"""APScheduler adapter - runs recurring jobs on a background thread."""

import logging
from typing import Callable

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.schedulers.base import BaseScheduler
from apscheduler.triggers.interval import IntervalTrigger

logger = logging.getLogger(__name__)


class APSchedulerRunner:
    """
    APScheduler-backed scheduler.

    Implements RecurringScheduler protocol. Wraps any APScheduler scheduler;
    a BackgroundScheduler is created when none is given. Use a
    BlockingScheduler to keep the process in the foreground.
    """

    def __init__(self, scheduler: BaseScheduler | None = None):
        self.scheduler = scheduler or BackgroundScheduler()

    def every(self, seconds: float, func: Callable[[], object], job_id: str) -> None:
        self.scheduler.add_job(
            func,
            IntervalTrigger(seconds=seconds),
            id=job_id,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        logger.info(f"Scheduled {job_id} every {seconds:g}s")

    def cancel(self, job_id: str) -> None:
        if self.scheduler.get_job(job_id) is None:
            return
        self.scheduler.remove_job(job_id)
        logger.info(f"Cancelled {job_id}")

    def start(self) -> None:
        """Start the underlying scheduler. Blocks for a BlockingScheduler."""
        self.scheduler.start()

    def shutdown(self) -> None:
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
