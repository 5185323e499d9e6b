"""Anoto CLI - daily planner and journal."""

import json
import logging
import sys
from dataclasses import replace
from datetime import date

import click

from .config import load_config
from .core.calendar import WEEKDAY_NAMES, MonthGrid
from .core.dates import as_day, shift_day, shift_month
from .core.page import DayPage
from .journal import JournalEngine
from .workflows import build_journal, build_reminders

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@click.group()
@click.option("--data-dir", envvar="ANOTO_DATA_DIR", default=None,
              help="Directory holding the daily entry files")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.version_option(package_name="anoto")
@click.pass_context
def main(ctx, data_dir: str | None, debug: bool):
    """Anoto - daily planner and journal."""
    if debug:
        logging.basicConfig(format=LOG_FORMAT, level=logging.DEBUG)

    config = load_config()
    if data_dir:
        config = replace(config, data_dir=data_dir)
    ctx.obj = config


def _get_journal(ctx) -> JournalEngine:
    return build_journal(ctx.obj)


def _resolve_date(journal: JournalEngine, target_date: str | None, offset: int) -> date:
    """Parse --date (defaults to today) and apply --offset days."""
    if target_date:
        try:
            base = date.fromisoformat(target_date)
        except ValueError:
            raise click.BadParameter(f"Expected YYYY-MM-DD, got {target_date!r}", param_hint="--date")
    else:
        base = as_day(journal.clock.now())
    return shift_day(base, offset)


def _task_dict(task) -> dict:
    return {"line": task.line_index + 1, **task.to_dict()}


def _render_task(number: int, width: int, task) -> None:
    box = "[x]" if task.completed else "[ ]"
    text = click.style(task.text, dim=True) if task.completed else task.text
    marker = ""
    if task.is_reminder and not task.completed:
        marker = "  (reminded)" if task.reminder_shown else "  (reminder)"
    click.echo(f"{number:>{width}}. {box} {text}{marker}")


def _render_page(page: DayPage) -> None:
    badge = click.style(f"[{page.status_label}]", fg="yellow" if page.editable else "red")
    click.echo(f"{click.style(page.title, bold=True)}  {badge}\n")

    if page.is_blank:
        click.echo(click.style(f"  {page.prompt}", dim=True))
        click.echo()

    last = page.overflow[-1].line_index + 1 if page.overflow else len(page.lines)
    width = len(str(last))
    for number, task in enumerate(page.lines, start=1):
        if task is None:
            if not page.is_blank:
                click.echo(click.style(f"{number:>{width}}.", dim=True))
            continue
        _render_task(number, width, task)

    for task in page.overflow:
        _render_task(task.line_index + 1, width, task)

    if page.last_modified:
        click.echo(f"\nLast modified: {page.last_modified.strftime('%Y-%m-%d %H:%M')}")


@main.command()
@click.option("--date", "-d", "target_date", default=None,
              help="Date to view (YYYY-MM-DD), defaults to today")
@click.option("--offset", "-o", default=0, help="Days to move from --date (e.g. -1, 1)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def day(ctx, target_date: str | None, offset: int, as_json: bool):
    """Show a day's page."""
    journal = _get_journal(ctx)
    target = _resolve_date(journal, target_date, offset)
    page = journal.get_page(target, ctx.obj.page_size)

    if as_json:
        aggregate = journal.get_daily_aggregate(target)
        click.echo(
            json.dumps(
                {
                    "date": page.key,
                    "status": page.status.value,
                    "editable": page.editable,
                    "tasks": [_task_dict(t) for t in page.lines if t is not None]
                    + [_task_dict(t) for t in page.overflow],
                    "total_count": aggregate.total_count,
                    "completed_count": aggregate.completed_count,
                    "reminder_count": aggregate.reminder_count,
                },
                indent=2,
            )
        )
        return

    _render_page(page)


def _read_only(target: date) -> None:
    click.echo(f"{target.isoformat()} is in the past and read only. Nothing changed.")


def _check_line(ctx, line: int) -> None:
    page_size = ctx.obj.page_size
    if line > page_size:
        raise click.BadParameter(f"Pages have {page_size} lines, got {line}", param_hint="LINE")


@main.command()
@click.argument("line", type=click.IntRange(min=1))
@click.argument("text")
@click.option("--date", "-d", "target_date", default=None,
              help="Date to write to (YYYY-MM-DD), defaults to today")
@click.pass_context
def write(ctx, line: int, text: str, target_date: str | None):
    """Write TEXT on LINE of a day's page."""
    _check_line(ctx, line)
    journal = _get_journal(ctx)
    target = _resolve_date(journal, target_date, 0)
    if not journal.get_page(target).editable:
        _read_only(target)
        return

    tasks = journal.set_line_text(target, line - 1, text)
    task = next((t for t in tasks if t.line_index == line - 1), None)
    if task is None:
        click.echo(f"Line {line} of {target.isoformat()} is empty.")
    elif task.is_reminder:
        click.echo(f"✓ Line {line} saved. Reminder set for {task.reminder_date}.")
    else:
        click.echo(f"✓ Line {line} saved.")


@main.command()
@click.argument("line", type=click.IntRange(min=1))
@click.option("--date", "-d", "target_date", default=None,
              help="Date to clear (YYYY-MM-DD), defaults to today")
@click.pass_context
def clear(ctx, line: int, target_date: str | None):
    """Erase LINE of a day's page."""
    journal = _get_journal(ctx)
    target = _resolve_date(journal, target_date, 0)
    if not journal.get_page(target).editable:
        _read_only(target)
        return

    journal.set_line_text(target, line - 1, "")
    click.echo(f"✓ Line {line} cleared.")


@main.command()
@click.argument("line", type=click.IntRange(min=1))
@click.option("--date", "-d", "target_date", default=None,
              help="Date of the task (YYYY-MM-DD), defaults to today")
@click.pass_context
def done(ctx, line: int, target_date: str | None):
    """Toggle LINE between open and done."""
    journal = _get_journal(ctx)
    target = _resolve_date(journal, target_date, 0)
    if not journal.get_page(target).editable:
        _read_only(target)
        return

    tasks = journal.toggle_completion(target, line - 1)
    task = next((t for t in tasks if t.line_index == line - 1), None)
    if task is None:
        click.echo(f"Line {line} of {target.isoformat()} is empty.")
    elif task.completed:
        click.echo(f"✓ Done: {task.text}")
    else:
        click.echo(f"Reopened: {task.text}")


def _render_month(grid: MonthGrid) -> None:
    click.echo(click.style(grid.title.center(7 * 6), bold=True))
    click.echo("".join(f"{name:>6}" for name in WEEKDAY_NAMES))

    for week in grid.weeks:
        row = []
        for cell in week:
            if cell.aggregate.reminder_count:
                mark = "!"
            elif cell.has_entries:
                mark = "*"
            else:
                mark = " "
            text = f"{cell.date.day:>5}{mark}"
            if cell.is_today:
                text = click.style(text, bold=True, underline=True)
            elif cell.other_month:
                text = click.style(text, dim=True)
            row.append(text)
        click.echo("".join(row))

    click.echo("\n  * has entries   ! pending reminders")

    busy = [c for c in grid.cells if c.has_entries and not c.other_month]
    if busy:
        click.echo()
    for cell in busy:
        agg = cell.aggregate
        dots, overflow = cell.task_dots()
        dots_str = "".join("●" if d else "○" for d in dots) + (f" +{overflow}" if overflow else "")
        reminders = f", {agg.reminder_count} reminder(s)" if agg.reminder_count else ""
        click.echo(
            f"  {cell.date.strftime('%b %d')}  {dots_str:<9} "
            f"{agg.completed_count}/{agg.total_count} done{reminders}"
        )


@main.command()
@click.option("--month", "-m", "target_month", default=None,
              help="Month to view (YYYY-MM), defaults to this month")
@click.option("--offset", "-o", default=0, help="Months to move from --month (e.g. -1, 1)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def month(ctx, target_month: str | None, offset: int, as_json: bool):
    """Show the calendar for a month."""
    journal = _get_journal(ctx)
    if target_month:
        try:
            year, month_number = (int(part) for part in target_month.split("-"))
            date(year, month_number, 1)
        except ValueError:
            raise click.BadParameter(f"Expected YYYY-MM, got {target_month!r}", param_hint="--month")
    else:
        today = as_day(journal.clock.now())
        year, month_number = today.year, today.month
    try:
        year, month_number = shift_month(year, month_number, offset)
        grid = journal.get_month_grid(year, month_number)
    except (ValueError, OverflowError):
        raise click.BadParameter(
            f"No calendar for {year:04d}-{month_number:02d}",
            param_hint="--month",
        )

    if as_json:
        click.echo(
            json.dumps(
                {
                    "year": grid.year,
                    "month": grid.month,
                    "cells": [
                        {
                            "date": c.key,
                            "other_month": c.other_month,
                            "is_past": c.is_past,
                            "is_today": c.is_today,
                            "has_entries": c.has_entries,
                            "total_count": c.aggregate.total_count,
                            "completed_count": c.aggregate.completed_count,
                            "reminder_count": c.aggregate.reminder_count,
                        }
                        for c in grid.cells
                    ],
                },
                indent=2,
            )
        )
        return

    _render_month(grid)


@main.command()
@click.pass_context
def remind(ctx):
    """Fire today's due reminders once and exit."""
    journal = _get_journal(ctx)
    try:
        engine = build_reminders(ctx.obj, journal)
    except ValueError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    fired = engine.scan_due_reminders()
    if not fired:
        click.echo("No reminders due.")


@main.command()
@click.pass_context
def watch(ctx):
    """Run the reminder loop in the foreground."""
    from apscheduler.schedulers.blocking import BlockingScheduler

    from .adapters.apscheduler_runner import APSchedulerRunner

    if not logging.getLogger().handlers:
        logging.basicConfig(format=LOG_FORMAT, level=logging.INFO)

    config = ctx.obj
    journal = _get_journal(ctx)
    scheduler_kwargs = {"timezone": config.timezone} if config.timezone else {}
    runner = APSchedulerRunner(BlockingScheduler(**scheduler_kwargs))
    try:
        engine = build_reminders(config, journal, scheduler=runner, refresh=True)
    except ValueError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Watching for reminders every {config.reminder_interval}s")
    click.echo("Press Ctrl+C to stop")
    engine.start()
    try:
        runner.start()
    except (KeyboardInterrupt, SystemExit):
        click.echo("\nStopped.")
    finally:
        engine.stop()
        runner.shutdown()


if __name__ == "__main__":
    main()
