"""Program display command."""

import click

from ..models.program import SANCTUM_PROGRAM
from .base import echo_error, format_table


@click.command()
@click.argument("day_number", type=int, required=False)
@click.pass_context
def program(ctx: click.Context, day_number: int | None):
    """Show the Sanctum program, or one day of it in detail."""
    if day_number is None:
        click.echo(SANCTUM_PROGRAM.get_summary().rstrip())
        return

    day = SANCTUM_PROGRAM.get_workout_day(day_number)
    if day is None:
        echo_error(
            f"Unknown day {day_number}. Days run 1-{SANCTUM_PROGRAM.days_per_cycle}."
        )
        ctx.exit(1)

    click.echo()
    click.echo(click.style(f"Day {day.day_number}: {day.name}", bold=True))
    click.echo()

    rows = []
    for ex in day.exercises:
        name = ex.name + (" (per side)" if ex.per_side else "")
        rows.append([
            str(ex.order),
            name,
            ex.category.value,
            f"{ex.sets}x{ex.reps}",
            ex.rest,
        ])
    click.echo(format_table(["#", "Exercise", "Category", "Sets", "Rest"], rows))

    notes = [ex for ex in day.exercises if ex.notes]
    if notes:
        click.echo()
        for ex in notes:
            click.echo(f"  {ex.name}: {ex.notes}")
