"""Training calendar command."""

import json
from datetime import datetime

import click

from ..db import ProgressRepository
from ..services.calendar_projection import build_calendar_projection
from .base import CELL_WIDTH, async_command, ensure_initialized, format_cell

DAY_HEADERS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
LABEL_WIDTH = 16


@click.command()
@click.option(
    "--date",
    "as_of",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Render the calendar as of this date (default: today)",
)
@click.option("--json", "as_json", is_flag=True, help="Print the projection as JSON")
@click.pass_context
@async_command
async def calendar(ctx: click.Context, as_of: datetime | None, as_json: bool):
    """Show the projected training calendar.

    Three weeks of history plus projected workouts and deload weeks.

    \b
    Legend:
      Pull+   completed workout      Pull   projected workout
      -       missed day             .      rest day
      DL      deload day             R      rest day you marked
      [..]    today
    """
    db_path = ensure_initialized(ctx)

    now = as_of or datetime.now()
    progress = await ProgressRepository(db_path).load(now)
    projection = build_calendar_projection(progress, now)

    if as_json:
        click.echo(json.dumps(projection.to_dict(), indent=2))
        return

    freq = projection.frequency
    click.echo()
    click.echo(
        click.style(f"Cycle {progress.current_cycle}", bold=True)
        + f"  |  {freq.workouts_per_week:g} workouts/week ({freq.confidence.value})"
    )
    if projection.next_workout:
        nxt = projection.next_workout
        click.echo(f"Next: Day {nxt.day_number} - {nxt.day_name} (cycle {nxt.cycle})")
    click.echo()

    click.echo(" " * LABEL_WIDTH + " ".join(h.ljust(CELL_WIDTH) for h in DAY_HEADERS).rstrip())
    for week in projection.weeks:
        label = week.week_label.ljust(LABEL_WIDTH)
        if week.is_current_week:
            label = click.style(label, bold=True)
        elif week.is_deload_week:
            label = click.style(label, fg="yellow")
        click.echo(label + " ".join(format_cell(cell) for cell in week.cells).rstrip())
