"""Initialize project command."""

import click

from ..db import ProgressRepository, get_db_path, init_db
from ..models.program import SANCTUM_PROGRAM
from .base import async_command, echo_info, echo_success, get_ctx_data_dir


@click.command()
@click.pass_context
@async_command
async def init(ctx: click.Context):
    """Initialize the sanctum database.

    Creates the data directory and the SQLite database, then stores a
    fresh progress record starting at cycle 1 today. Running it again
    keeps existing progress.
    """
    data_dir = get_ctx_data_dir(ctx)
    db_path = get_db_path(data_dir)
    existed = db_path.exists()

    echo_info(f"Initializing sanctum in {data_dir}")

    await init_db(db_path)
    echo_success("Database initialized")

    repo = ProgressRepository(db_path)
    progress = await repo.load()
    if existed:
        echo_info(f"Existing progress kept (cycle {progress.current_cycle})")
    else:
        await repo.save(progress)
        echo_success(f"Progress started: cycle 1 from {progress.cycle_start_date}")

    click.echo()
    click.echo(f"Program: {SANCTUM_PROGRAM.program_name} ({SANCTUM_PROGRAM.days_per_cycle}-day cycle)")
    click.echo()
    click.echo("Next steps:")
    click.echo("  sanctum calendar          # See your projected training calendar")
    click.echo("  sanctum workout start     # Start the next workout")
