"""Training volume commands."""

import click

from ..db import ProgressRepository, SettingsRepository
from ..services.volume import calculate_workout_volume, format_volume, get_current_cycle_volume
from ..utils.dates import format_short_date
from .base import async_command, echo_info, ensure_initialized, format_table


@click.command()
@click.option("--cycle", "-c", "cycle_number", type=int, help="Cycle to show (default: current)")
@click.option("--all", "show_all", is_flag=True, help="Summarize every cycle")
@click.pass_context
@async_command
async def volume(ctx: click.Context, cycle_number: int | None, show_all: bool):
    """Show total volume (weight x reps) per cycle."""
    db_path = ensure_initialized(ctx)

    progress = await ProgressRepository(db_path).load()
    unit = await SettingsRepository(db_path).get_unit()

    if show_all:
        rows = []
        for number in progress.get_cycle_numbers():
            data = get_current_cycle_volume(progress.workout_logs, number)
            rows.append([
                str(number),
                str(len(progress.get_logs_for_cycle(number))),
                str(data.sets),
                format_volume(data.total_volume, unit),
            ])
        click.echo(format_table(["Cycle", "Workouts", "Sets", "Volume"], rows))
        return

    number = cycle_number or progress.current_cycle
    data = get_current_cycle_volume(progress.workout_logs, number)
    logs = progress.get_logs_for_cycle(number)

    click.echo()
    click.echo(click.style(f"Cycle {number}", bold=True))
    click.echo(f"Total volume: {format_volume(data.total_volume, unit)}")
    click.echo(f"Sets: {data.sets}  Exercises: {data.exercises}")

    if not logs:
        echo_info("No workouts logged in this cycle.")
        return

    click.echo()
    rows = [
        [
            f"Day {log.day_number}",
            log.day_name,
            format_short_date(log.date),
            format_volume(calculate_workout_volume(log), unit),
        ]
        for log in logs
    ]
    click.echo(format_table(["Day", "Workout", "Date", "Volume"], rows))
