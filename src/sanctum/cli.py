"""CLI entry point for sanctum."""

import logging
from pathlib import Path

import click

from . import __version__
from .commands import (
    calendar,
    cycle,
    deload,
    export,
    import_data,
    init,
    program,
    reset,
    rest,
    serve,
    status,
    units,
    volume,
    workout,
)
from .db.engine import DATA_DIR_ENV

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.version_option(version=__version__, prog_name="sanctum")
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar=DATA_DIR_ENV,
    help="Directory holding sanctum.db (env: SANCTUM_DATA_DIR)",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging verbosity",
)
@click.pass_context
def main(ctx: click.Context, data_dir: Path | None, log_level: str):
    """sanctum: workout tracker for the six-day Sanctum program.

    Logs your sets, projects a training calendar from how often you
    actually train, and schedules deload weeks.

    Example usage:

        # Initialize the database
        sanctum init

        # See what's coming up
        sanctum calendar

        # Log today's workout
        sanctum workout start
        sanctum workout set 1 1 1 --weight 135 --reps 10 --done
        sanctum workout finish 1
    """
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["data_dir"] = data_dir


# Register commands
main.add_command(init)
main.add_command(calendar)
main.add_command(status)
main.add_command(program)
main.add_command(workout)
main.add_command(rest)
main.add_command(deload)
main.add_command(cycle)
main.add_command(volume)
main.add_command(units)
main.add_command(export)
main.add_command(import_data)
main.add_command(reset)
main.add_command(serve)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
