"""Active workout session handling.

Creates in-progress workouts from the program table, applies set edits,
runs rest timers, and turns a finished session into a WorkoutLog.
"""

from datetime import date, datetime
from uuid import uuid4

from ..models.program import SANCTUM_PROGRAM, Program
from ..models.progress import (
    ActiveWorkout,
    ExerciseLog,
    RestTimerState,
    SetLog,
    UserProgress,
    WorkoutLog,
)
from ..models.validation import ValidationResult
from ..utils.dates import to_iso_date
from ..utils.timers import now_ms, rest_remaining_seconds, session_elapsed_seconds
from .calendar_projection import get_next_workout_day
from .validator import validate_workout_completion
from .volume import calculate_total_volume


class WorkoutIncompleteError(Exception):
    """Raised when finishing a workout that still has required sets open."""

    def __init__(self, result: ValidationResult):
        self.result = result
        super().__init__("; ".join(result.errors) or "Workout is incomplete")


def create_active_workout(
    day_number: int,
    cycle: int,
    program: Program = SANCTUM_PROGRAM,
    start_time: int | None = None,
) -> ActiveWorkout:
    """Start a workout with one empty set per target set."""
    day = program.get_workout_day(day_number)
    if day is None:
        raise ValueError(f"Unknown workout day {day_number}")

    exercises = [
        ExerciseLog(
            exercise_name=ex.name,
            sets=[SetLog(set_number=i + 1) for i in range(ex.sets)],
        )
        for ex in day.exercises
    ]
    return ActiveWorkout(
        day_number=day_number,
        cycle=cycle,
        exercises=exercises,
        start_time=start_time if start_time is not None else now_ms(),
    )


def _get_set(workout: ActiveWorkout, exercise_index: int, set_index: int) -> SetLog:
    if not 0 <= exercise_index < len(workout.exercises):
        raise ValueError(f"Invalid exercise index {exercise_index}")
    sets = workout.exercises[exercise_index].sets
    if not 0 <= set_index < len(sets):
        raise ValueError(f"Invalid set index {set_index}")
    return sets[set_index]


def update_set(
    workout: ActiveWorkout,
    exercise_index: int,
    set_index: int,
    weight: float | None = None,
    reps: int | None = None,
    completed: bool | None = None,
    timestamp: int | None = None,
) -> SetLog:
    """Apply edits to one set; arguments left as None are unchanged."""
    set_log = _get_set(workout, exercise_index, set_index)
    if weight is not None:
        set_log.weight = weight
    if reps is not None:
        set_log.reps = reps
    if completed is not None:
        set_log.completed = completed
        if completed:
            set_log.timestamp = timestamp if timestamp is not None else now_ms()
    return set_log


def skip_exercise(workout: ActiveWorkout, exercise_index: int, skipped: bool = True) -> None:
    """Mark an exercise as skipped (or un-skip it)."""
    if not 0 <= exercise_index < len(workout.exercises):
        raise ValueError(f"Invalid exercise index {exercise_index}")
    workout.exercises[exercise_index].skipped = skipped


def replace_exercise(workout: ActiveWorkout, exercise_index: int, substitute: str | None) -> None:
    """Record a substitute exercise, or clear it with None."""
    if not 0 <= exercise_index < len(workout.exercises):
        raise ValueError(f"Invalid exercise index {exercise_index}")
    workout.exercises[exercise_index].replaced_with = substitute or None


def start_rest_timer(
    workout: ActiveWorkout,
    exercise_index: int,
    set_index: int,
    program: Program = SANCTUM_PROGRAM,
    started_at: int | None = None,
) -> RestTimerState:
    """Start the rest timer after a set, sized by the exercise category."""
    _get_set(workout, exercise_index, set_index)
    exercises = program.get_exercises_for_day(workout.day_number)
    if exercise_index >= len(exercises):
        raise ValueError(f"Day {workout.day_number} has no exercise {exercise_index}")
    duration = exercises[exercise_index].rest_seconds

    workout.rest_timer = RestTimerState(
        exercise_index=exercise_index,
        set_index=set_index,
        started_at=started_at if started_at is not None else now_ms(),
        duration=duration,
    )
    return workout.rest_timer


def rest_timer_remaining(workout: ActiveWorkout, current_ms: int | None = None) -> int:
    """Seconds left on the workout's rest timer (0 when none is running)."""
    if workout.rest_timer is None:
        return 0
    return rest_remaining_seconds(
        workout.rest_timer.started_at, workout.rest_timer.duration, current_ms
    )


def dismiss_rest_timer(workout: ActiveWorkout) -> None:
    """Stop the rest timer."""
    workout.rest_timer = None


def validate_active_workout(
    workout: ActiveWorkout, program: Program = SANCTUM_PROGRAM
) -> ValidationResult:
    """Validate an active workout against its program day."""
    return validate_workout_completion(
        workout.exercises, program.get_exercises_for_day(workout.day_number)
    )


def finish_workout(
    progress: UserProgress,
    workout: ActiveWorkout,
    program: Program = SANCTUM_PROGRAM,
    now: date | datetime | None = None,
    current_ms: int | None = None,
    session_notes: str | None = None,
    force: bool = False,
) -> WorkoutLog:
    """Turn an active workout into a completed log on ``progress``.

    Raises WorkoutIncompleteError unless every required set is filled in
    (or ``force`` is set). When the log completes the current cycle, the
    progress moves on to the next cycle.
    """
    result = validate_active_workout(workout, program)
    if not result.is_valid and not force:
        raise WorkoutIncompleteError(result)

    log = WorkoutLog(
        id=uuid4().hex,
        date=to_iso_date(now or datetime.now()),
        cycle=workout.cycle,
        day_number=workout.day_number,
        day_name=program.get_day_name(workout.day_number),
        exercises=workout.exercises,
        completed=True,
        total_volume=calculate_total_volume(workout.exercises),
        duration=session_elapsed_seconds(workout.start_time, current_ms),
        session_notes=session_notes or None,
        is_deload=progress.is_deload_week,
    )
    progress.add_workout_log(log)

    next_slot = get_next_workout_day(progress, program)
    if next_slot.cycle > progress.current_cycle:
        progress.update_cycle(next_slot.cycle)

    return log
