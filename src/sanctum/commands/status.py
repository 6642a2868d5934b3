"""Progress status command."""

from datetime import datetime

import click

from ..db import ActiveWorkoutRepository, ProgressRepository, SettingsRepository
from ..models.program import SANCTUM_PROGRAM
from ..services.calendar_projection import (
    calculate_deload_weeks,
    estimate_frequency,
    get_next_workout_day,
)
from ..services.volume import format_volume, get_current_cycle_volume
from ..utils.dates import format_relative_date, format_short_date
from .base import async_command, echo_info, echo_warning, ensure_initialized


@click.command()
@click.pass_context
@async_command
async def status(ctx: click.Context):
    """Show cycle position, training pace, and deload status."""
    db_path = ensure_initialized(ctx)

    now = datetime.now()
    progress = await ProgressRepository(db_path).load(now)
    unit = await SettingsRepository(db_path).get_unit()
    active_days = await ActiveWorkoutRepository(db_path).list_days()

    click.echo()
    click.echo(click.style(f"{SANCTUM_PROGRAM.program_name} - Cycle {progress.current_cycle}", bold=True))
    click.echo("=" * 50)

    done = {log.day_number for log in progress.get_logs_for_cycle(progress.current_cycle)}
    for day in SANCTUM_PROGRAM.workout_days:
        mark = click.style("[done]", fg="green") if day.day_number in done else "      "
        click.echo(f"  {mark} Day {day.day_number}: {day.name}")

    slot = get_next_workout_day(progress)
    click.echo()
    click.echo(
        f"Next workout: Day {slot.day_number} - "
        f"{SANCTUM_PROGRAM.get_day_name(slot.day_number)} (cycle {slot.cycle})"
    )

    completed = progress.completed_logs
    if completed:
        last = max(completed, key=lambda log: (log.date, log.recency_key))
        click.echo(f"Last workout: {last.day_name}, {format_relative_date(last.date, now)}")

    freq = estimate_frequency(progress.workout_logs, now)
    click.echo(
        f"Pace: {freq.workouts_per_week:g} workouts/week, "
        f"every {freq.avg_days_between_workouts:g} days ({freq.confidence.value} confidence)"
    )

    volume = get_current_cycle_volume(progress.workout_logs, progress.current_cycle)
    click.echo(
        f"Cycle volume: {format_volume(volume.total_volume, unit)} "
        f"({volume.sets} sets, {volume.exercises} exercises)"
    )

    click.echo()
    if progress.is_deload_week:
        echo_warning("Deload in progress. Run 'sanctum deload end' when finished.")
    else:
        upcoming = calculate_deload_weeks(progress, freq, 1, now)[0]
        click.echo(
            f"Next deload: week of {format_short_date(upcoming.start_date, now)} "
            f"(every {progress.deload_interval_weeks} weeks)"
        )
        if progress.should_suggest_deload(now):
            echo_warning("A deload is due. Run 'sanctum deload start' to begin one.")

    if active_days:
        days = ", ".join(str(d) for d in active_days)
        echo_info(f"Workout in progress for day {days}. Run 'sanctum workout show <day>'.")
