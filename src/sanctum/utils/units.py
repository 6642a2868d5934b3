"""Weight unit conversion and formatting.

Weights are always stored in pounds; conversion happens only for display.
"""

from enum import Enum

from .numbers import format_number, round_half_up

LB_TO_KG = 0.453592


class WeightUnit(str, Enum):
    """Display units for weight and volume."""

    LB = "lb"
    KG = "kg"

    @classmethod
    def parse(cls, value: str | None) -> "WeightUnit":
        """Parse a stored unit, falling back to pounds for anything unknown."""
        return cls.KG if value == cls.KG.value else cls.LB


def convert_weight(lbs: float, unit: WeightUnit) -> float:
    """Convert a pound figure to the display unit (one decimal for kg)."""
    if unit == WeightUnit.KG:
        return round_half_up(lbs * LB_TO_KG, 1)
    return lbs


def to_pounds(value: float, unit: WeightUnit) -> float:
    """Convert a weight entered in the display unit back to pounds."""
    if unit == WeightUnit.KG:
        return round_half_up(value / LB_TO_KG, 1)
    return value


def format_weight(lbs: float, unit: WeightUnit) -> str:
    """Format a single weight, e.g. "135 lb" or "61.2 kg"."""
    value = convert_weight(lbs, unit)
    if value == int(value):
        return f"{int(value)} {unit.value}"
    return f"{value} {unit.value}"


def format_volume_with_unit(volume: float, unit: WeightUnit) -> str:
    """Format a volume figure, abbreviating from 10,000 upward.

    "8,450 lb", "42.5k lb", "19.3k kg".
    """
    converted = convert_weight(volume, unit)
    if converted >= 10000:
        return f"{converted / 1000:.1f}k {unit.value}"
    return f"{format_number(converted)} {unit.value}"
