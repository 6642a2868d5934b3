"""Reset progress command."""

import click

from ..db import ProgressRepository
from .base import async_command, echo_success, ensure_initialized


@click.command()
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
async def reset(ctx: click.Context, yes: bool):
    """Erase all progress and in-progress workouts."""
    db_path = ensure_initialized(ctx)

    if not yes and not click.confirm(
        "This deletes all workout history (run 'sanctum export' first to keep a backup). Continue?"
    ):
        return

    progress = await ProgressRepository(db_path).reset()
    echo_success(f"Progress reset. Cycle 1 starts {progress.cycle_start_date}.")
