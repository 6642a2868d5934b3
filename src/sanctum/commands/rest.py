"""Explicit rest day commands."""

from datetime import datetime

import click

from ..db import ProgressRepository
from ..utils.dates import format_relative_date, to_iso_date
from .base import async_command, echo_info, echo_success, ensure_initialized

DATE_TYPE = click.DateTime(formats=["%Y-%m-%d"])


@click.group()
def rest():
    """Mark days off.

    No workout is projected onto a rest day; the calendar shows it as R.
    """
    pass


@rest.command("add")
@click.argument("day", type=DATE_TYPE, required=False)
@click.pass_context
@async_command
async def add(ctx: click.Context, day: datetime | None):
    """Mark a date (default: today) as a rest day."""
    db_path = ensure_initialized(ctx)

    iso = to_iso_date(day or datetime.now())
    repo = ProgressRepository(db_path)
    progress = await repo.load()

    if not progress.add_rest_day(iso):
        echo_info(f"{iso} is already a rest day.")
        return

    await repo.save(progress)
    echo_success(f"Rest day added: {iso}")


@rest.command("remove")
@click.argument("day", type=DATE_TYPE)
@click.pass_context
@async_command
async def remove(ctx: click.Context, day: datetime):
    """Unmark a rest day."""
    db_path = ensure_initialized(ctx)

    iso = to_iso_date(day)
    repo = ProgressRepository(db_path)
    progress = await repo.load()

    if not progress.remove_rest_day(iso):
        echo_info(f"{iso} is not a rest day.")
        return

    await repo.save(progress)
    echo_success(f"Rest day removed: {iso}")


@rest.command("list")
@click.pass_context
@async_command
async def list_rest_days(ctx: click.Context):
    """List marked rest days."""
    db_path = ensure_initialized(ctx)

    progress = await ProgressRepository(db_path).load()
    if not progress.rest_days:
        echo_info("No rest days marked.")
        return

    now = datetime.now()
    for iso in sorted(progress.rest_days):
        click.echo(f"  {iso}  {format_relative_date(iso, now)}")
