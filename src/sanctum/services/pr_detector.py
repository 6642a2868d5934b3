"""Personal record detection against the previous same-day workout."""

from ..models.progress import SetLog, WorkoutLog


def find_previous_workout(
    day_number: int, current_id: str, all_logs: list[WorkoutLog]
) -> WorkoutLog | None:
    """Most recent other completed workout for the same program day."""
    candidates = [
        log
        for log in all_logs
        if log.day_number == day_number and log.completed and log.id != current_id
    ]
    if not candidates:
        return None
    return max(candidates, key=lambda log: (log.date, log.recency_key))


def get_best_set_volume(exercise_name: str, workout: WorkoutLog) -> float:
    """Best weight x reps for an exercise in a workout.

    Returns 0 if the exercise is absent, skipped, or has no completed set
    with both weight and reps.
    """
    exercise = next(
        (ex for ex in workout.exercises if ex.exercise_name == exercise_name), None
    )
    if exercise is None or exercise.skipped:
        return 0

    best = 0
    for s in exercise.sets:
        if s.completed and s.weight is not None and s.reps is not None:
            best = max(best, s.weight * s.reps)
    return best


def is_set_pr(
    set_log: SetLog, exercise_name: str, previous_workout: WorkoutLog | None
) -> bool:
    """Check whether a set beats the previous workout's best set volume.

    A first-ever workout for a slot never produces PRs, and matching the
    previous best is not a PR.
    """
    if previous_workout is None:
        return False
    if not set_log.completed or set_log.weight is None or set_log.reps is None:
        return False

    current_volume = set_log.weight * set_log.reps
    previous_best = get_best_set_volume(exercise_name, previous_workout)

    if previous_best <= 0:
        return False

    return current_volume > previous_best
