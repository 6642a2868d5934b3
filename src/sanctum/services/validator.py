"""Checks that a workout is complete enough to be finished."""

from ..models.program import ProgramExercise
from ..models.progress import ExerciseLog, SetLog
from ..models.validation import IncompleteSetInfo, MissingField, ValidationResult


def _missing_fields(set_log: SetLog) -> list[MissingField]:
    if not set_log.completed:
        return [MissingField.COMPLETED]

    missing = []
    if set_log.weight is None:
        missing.append(MissingField.WEIGHT)
    if set_log.reps is None:
        missing.append(MissingField.REPS)
    return missing


def is_set_incomplete(set_log: SetLog) -> bool:
    """A set is incomplete unless completed with weight and reps."""
    return bool(_missing_fields(set_log))


def get_incomplete_sets(
    exercise_logs: list[ExerciseLog],
    exercise_definitions: list[ProgramExercise],
) -> list[IncompleteSetInfo]:
    """List incomplete sets, skipping exercises marked as skipped.

    Optionality comes from the program exercise at the same index.
    """
    incomplete: list[IncompleteSetInfo] = []

    for exercise_index, exercise_log in enumerate(exercise_logs):
        if exercise_log.skipped:
            continue

        is_optional = False
        if exercise_index < len(exercise_definitions):
            is_optional = exercise_definitions[exercise_index].optional

        for set_index, set_log in enumerate(exercise_log.sets):
            missing = _missing_fields(set_log)
            if missing:
                incomplete.append(
                    IncompleteSetInfo(
                        exercise_index=exercise_index,
                        exercise_name=exercise_log.exercise_name,
                        set_index=set_index,
                        set_number=set_log.set_number,
                        missing_fields=missing,
                        is_optional=is_optional,
                    )
                )

    return incomplete


def _error_messages(incomplete_sets: list[IncompleteSetInfo]) -> list[str]:
    # Group required sets by exercise, keeping first-seen order
    by_exercise: dict[str, list[int]] = {}
    for info in incomplete_sets:
        if info.is_optional:
            continue
        by_exercise.setdefault(info.exercise_name, []).append(info.set_number)

    errors = []
    for exercise_name, set_numbers in by_exercise.items():
        set_word = "set" if len(set_numbers) == 1 else "sets"
        numbers = ", ".join(str(n) for n in set_numbers)
        errors.append(f"{exercise_name}: {set_word} {numbers} incomplete")
    return errors


def validate_workout_completion(
    exercise_logs: list[ExerciseLog],
    exercise_definitions: list[ProgramExercise],
) -> ValidationResult:
    """Validate that every required, non-skipped set is filled in."""
    incomplete_sets = get_incomplete_sets(exercise_logs, exercise_definitions)
    required = [info for info in incomplete_sets if not info.is_optional]

    return ValidationResult(
        is_valid=not required,
        errors=_error_messages(incomplete_sets),
        incomplete_sets=incomplete_sets,
    )
