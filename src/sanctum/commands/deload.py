"""Deload week commands."""

from datetime import datetime

import click

from ..db import ProgressRepository
from ..services.calendar_projection import calculate_deload_weeks
from ..utils.dates import format_short_date
from .base import async_command, echo_info, echo_success, ensure_initialized


@click.group()
def deload():
    """Manage deload weeks.

    A deload is suggested every N weeks (5 by default) after the last one.
    """
    pass


@deload.command("start")
@click.pass_context
@async_command
async def start(ctx: click.Context):
    """Begin a deload period."""
    db_path = ensure_initialized(ctx)

    repo = ProgressRepository(db_path)
    progress = await repo.load()
    if progress.is_deload_week:
        echo_info("Already deloading.")
        return

    progress.start_deload()
    await repo.save(progress)
    echo_success("Deload started. Run 'sanctum deload end' when you're done.")


@deload.command("end")
@click.pass_context
@async_command
async def end(ctx: click.Context):
    """End the deload period; the next one is scheduled from today."""
    db_path = ensure_initialized(ctx)

    repo = ProgressRepository(db_path)
    progress = await repo.load()
    if not progress.is_deload_week:
        echo_info("No deload in progress.")
        return

    now = datetime.now()
    progress.end_deload(now)
    await repo.save(progress)

    upcoming = calculate_deload_weeks(progress, count=1, now=now)[0]
    echo_success("Deload finished.")
    click.echo(f"Next deload: week of {format_short_date(upcoming.start_date, now)}")


@deload.command("record")
@click.pass_context
@async_command
async def record(ctx: click.Context):
    """Record a deload that already happened (today)."""
    db_path = ensure_initialized(ctx)

    repo = ProgressRepository(db_path)
    progress = await repo.load()
    progress.record_deload(datetime.now())
    await repo.save(progress)
    echo_success(f"Deload recorded on {progress.last_deload_date}")


@deload.command("interval")
@click.argument("weeks", type=click.IntRange(min=1))
@click.pass_context
@async_command
async def interval(ctx: click.Context, weeks: int):
    """Set the number of weeks between deloads."""
    db_path = ensure_initialized(ctx)

    repo = ProgressRepository(db_path)
    progress = await repo.load()
    progress.update_deload_interval(weeks)
    await repo.save(progress)
    echo_success(f"Deload every {weeks} weeks")
