"""Training volume (weight x reps) aggregation."""

from dataclasses import dataclass

from ..models.progress import ExerciseLog, SetLog, WorkoutLog
from ..utils.units import WeightUnit, format_volume_with_unit


@dataclass
class VolumeData:
    """Aggregate volume figures for a cycle."""

    total_volume: float
    sets: int
    exercises: int

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "totalVolume": self.total_volume,
            "sets": self.sets,
            "exercises": self.exercises,
        }


def calculate_set_volume(set_log: SetLog) -> float:
    """Volume of one set; zero unless completed with weight and reps."""
    if not set_log.completed or set_log.weight is None or set_log.reps is None:
        return 0
    return set_log.weight * set_log.reps


def calculate_exercise_volume(exercise: ExerciseLog) -> float:
    """Sum of set volumes, or zero for a skipped exercise."""
    if exercise.skipped:
        return 0
    return sum(calculate_set_volume(s) for s in exercise.sets)


def calculate_total_volume(exercises: list[ExerciseLog]) -> float:
    """Sum of exercise volumes."""
    return sum(calculate_exercise_volume(ex) for ex in exercises)


def calculate_workout_volume(workout: WorkoutLog) -> float:
    """Total volume of a logged workout."""
    return calculate_total_volume(workout.exercises)


def get_current_cycle_volume(workouts: list[WorkoutLog], cycle: int) -> VolumeData:
    """Volume, completed sets, and distinct exercises for one cycle.

    Only completed logs count.
    """
    cycle_workouts = [w for w in workouts if w.cycle == cycle and w.completed]

    total_volume = sum(calculate_workout_volume(w) for w in cycle_workouts)
    total_sets = sum(
        1
        for w in cycle_workouts
        for ex in w.exercises
        for s in ex.sets
        if s.completed
    )
    unique_exercises = {
        ex.exercise_name
        for w in cycle_workouts
        for ex in w.exercises
        if not ex.skipped
    }

    return VolumeData(
        total_volume=total_volume,
        sets=total_sets,
        exercises=len(unique_exercises),
    )


def format_volume(volume: float, unit: WeightUnit = WeightUnit.LB) -> str:
    """Format a pound volume for display, e.g. "8,450 lb" or "42.5k lb"."""
    return format_volume_with_unit(volume, unit)
