"""Data models for sanctum."""

from .calendar import (
    CalendarCell,
    CalendarCellType,
    CalendarProjection,
    CalendarWeekRow,
    FrequencyConfidence,
    FrequencyEstimate,
)
from .program import SANCTUM_PROGRAM, ExerciseCategory, Program, ProgramExercise, WorkoutDay
from .progress import ActiveWorkout, ExerciseLog, SetLog, UserProgress, WorkoutLog
from .validation import IncompleteSetInfo, ValidationResult

__all__ = [
    "ActiveWorkout",
    "CalendarCell",
    "CalendarCellType",
    "CalendarProjection",
    "CalendarWeekRow",
    "ExerciseCategory",
    "ExerciseLog",
    "FrequencyConfidence",
    "FrequencyEstimate",
    "IncompleteSetInfo",
    "Program",
    "ProgramExercise",
    "SANCTUM_PROGRAM",
    "SetLog",
    "UserProgress",
    "ValidationResult",
    "WorkoutDay",
    "WorkoutLog",
]
