"""Cycle position commands."""

import click

from ..db import ProgressRepository
from .base import async_command, echo_success, ensure_initialized


@click.group()
def cycle():
    """Manage the current training cycle."""
    pass


@cycle.command("set")
@click.argument("number", type=click.IntRange(min=1))
@click.pass_context
@async_command
async def set_cycle(ctx: click.Context, number: int):
    """Jump to a cycle number.

    Useful when syncing with a cycle logged somewhere else.
    """
    db_path = ensure_initialized(ctx)

    repo = ProgressRepository(db_path)
    progress = await repo.load()
    progress.update_cycle(number)
    await repo.save(progress)
    echo_success(f"Current cycle set to {number}")
