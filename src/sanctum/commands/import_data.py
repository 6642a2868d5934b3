"""Import progress command."""

import click

from ..db import ProgressRepository
from .base import async_command, echo_error, echo_success, ensure_initialized


@click.command("import")
@click.argument("backup_file", type=click.File("r"))
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
async def import_data(ctx: click.Context, backup_file, yes: bool):
    """Replace all progress with a JSON backup.

    The backup must contain currentCycle, cycleStartDate,
    deloadIntervalWeeks, and workoutLogs. Invalid files are rejected and
    leave current progress untouched.
    """
    db_path = ensure_initialized(ctx)

    content = backup_file.read()

    if not yes and not click.confirm("This replaces all current progress. Continue?"):
        return

    repo = ProgressRepository(db_path)
    if not await repo.import_json(content):
        echo_error("Invalid backup file. Progress was not changed.")
        ctx.exit(1)

    progress = await repo.load()
    echo_success(
        f"Imported {len(progress.workout_logs)} workouts (cycle {progress.current_cycle})"
    )
