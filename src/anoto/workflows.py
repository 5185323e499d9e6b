"""Shared wiring layer between the CLI and long-running processes.

Each build_* function turns a Config into a ready-to-use engine or adapter.
"""

import click

from .adapters.apscheduler_runner import APSchedulerRunner
from .adapters.clock import SystemClock
from .adapters.console_notifier import ConsoleNotifier
from .adapters.file_entries import FileEntryRepository
from .config import Config
from .core.dates import DateKey
from .core.entries import Task
from .journal import CompletionCue, JournalEngine
from .ports import Clock, Notifier
from .reminders import ReminderEngine


def get_repository(config: Config) -> FileEntryRepository:
    """Resolve the entries directory from config."""
    return FileEntryRepository(config.entries_dir)


def get_clock(config: Config) -> SystemClock:
    return SystemClock(config.timezone)


def completion_cue(config: Config) -> CompletionCue | None:
    """Terminal cue for a task going from open to done."""
    if config.completion_cue != "bell":
        return None

    def ring(key: DateKey, task: Task) -> None:
        click.echo("\a", nl=False)

    return ring


def build_journal(config: Config, clock: Clock | None = None) -> JournalEngine:
    """Load every stored entry into a journal engine."""
    return JournalEngine.load(
        get_repository(config),
        clock or get_clock(config),
        on_completed=completion_cue(config),
    )


def build_notifier(config: Config) -> Notifier:
    """Pick the reminder notifier named in config."""
    if config.notifier == "telegram":
        from .adapters.telegram_notifier import TelegramNotifier

        return TelegramNotifier(config.telegram_bot_token, config.telegram_chat_ids)
    return ConsoleNotifier(bell=config.completion_cue == "bell")


def build_reminders(
    config: Config,
    journal: JournalEngine,
    scheduler: APSchedulerRunner | None = None,
    notifier: Notifier | None = None,
    refresh: bool = False,
) -> ReminderEngine:
    """
    Create the reminder engine for a journal.

    With refresh=True every scheduled scan first reloads entries from disk,
    so edits made by other anoto processes are picked up.
    """
    return ReminderEngine(
        journal,
        notifier or build_notifier(config),
        scheduler=scheduler,
        interval_seconds=config.reminder_interval,
        refresh=journal.reload if refresh else None,
    )
