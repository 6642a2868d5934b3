"""Calendar projection, volume, PR, and validation services."""

from .calendar_projection import (
    build_calendar_projection,
    calculate_deload_weeks,
    estimate_frequency,
    get_next_workout_day,
    project_future_days,
)
from .pr_detector import find_previous_workout, is_set_pr
from .validator import get_incomplete_sets, validate_workout_completion
from .volume import (
    calculate_exercise_volume,
    calculate_set_volume,
    calculate_total_volume,
    calculate_workout_volume,
    format_volume,
    get_current_cycle_volume,
)

__all__ = [
    "build_calendar_projection",
    "calculate_deload_weeks",
    "calculate_exercise_volume",
    "calculate_set_volume",
    "calculate_total_volume",
    "calculate_workout_volume",
    "estimate_frequency",
    "find_previous_workout",
    "format_volume",
    "get_current_cycle_volume",
    "get_incomplete_sets",
    "get_next_workout_day",
    "is_set_pr",
    "project_future_days",
    "validate_workout_completion",
]
