"""Weight unit preference command."""

import click

from ..db import SettingsRepository
from ..utils.units import WeightUnit
from .base import async_command, echo_info, echo_success, ensure_initialized


@click.command()
@click.argument("unit", type=click.Choice([u.value for u in WeightUnit]), required=False)
@click.pass_context
@async_command
async def units(ctx: click.Context, unit: str | None):
    """Show or set the display unit (lb or kg).

    Weights are always stored in pounds; this only changes display and
    the unit 'workout set --weight' expects.
    """
    db_path = ensure_initialized(ctx)

    repo = SettingsRepository(db_path)
    if unit is None:
        current = await repo.get_unit()
        echo_info(f"Display unit: {current.value}")
        return

    await repo.set_unit(WeightUnit(unit))
    echo_success(f"Display unit set to {unit}")
