"""Active workout routes.

Exercise and set indexes in these routes are 0-based, matching the
indexes reported by validation results.
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field

from ...db import ActiveWorkoutRepository, ProgressRepository
from ...models.program import SANCTUM_PROGRAM
from ...models.progress import ActiveWorkout
from ...services.calendar_projection import get_next_workout_day
from ...services.pr_detector import find_previous_workout, is_set_pr
from ...services.workout_session import (
    WorkoutIncompleteError,
    create_active_workout,
    dismiss_rest_timer,
    finish_workout,
    replace_exercise,
    rest_timer_remaining,
    skip_exercise,
    start_rest_timer,
    update_set,
    validate_active_workout,
)
from ...utils.timers import session_elapsed_seconds
from ..deps import get_active_repo, get_progress_repo

router = APIRouter(prefix="/workouts", tags=["workouts"])


class SetUpdate(BaseModel):
    weight: float | None = Field(None, ge=0)
    reps: int | None = Field(None, ge=0)
    completed: bool | None = None


class SkipRequest(BaseModel):
    skipped: bool = True


class ReplaceRequest(BaseModel):
    substitute: str | None = None


class FinishRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_notes: str | None = Field(None, alias="sessionNotes")
    force: bool = False


def _workout_response(workout: ActiveWorkout) -> dict:
    return {
        "workout": workout.to_dict(),
        "validation": validate_active_workout(workout).to_dict(),
        "elapsedSeconds": session_elapsed_seconds(workout.start_time),
        "restRemaining": rest_timer_remaining(workout),
    }


async def _get_active(repo: ActiveWorkoutRepository, day_number: int) -> ActiveWorkout:
    workout = await repo.get(day_number)
    if workout is None:
        raise HTTPException(status_code=404, detail=f"No workout in progress for day {day_number}")
    return workout


@router.get("")
async def list_active_workouts(repo: ActiveWorkoutRepository = Depends(get_active_repo)):
    """Day numbers with a workout in progress."""
    return {"days": await repo.list_days()}


@router.get("/{day_number}")
async def get_active_workout(
    day_number: int,
    repo: ActiveWorkoutRepository = Depends(get_active_repo),
):
    """An in-progress workout with its validation state."""
    return _workout_response(await _get_active(repo, day_number))


@router.post("/{day_number}", status_code=201)
async def start_workout(
    day_number: int,
    restart: bool = Query(False),
    active_repo: ActiveWorkoutRepository = Depends(get_active_repo),
    progress_repo: ProgressRepository = Depends(get_progress_repo),
):
    """Start a workout for a program day."""
    if SANCTUM_PROGRAM.get_workout_day(day_number) is None:
        raise HTTPException(status_code=404, detail=f"Unknown day {day_number}")
    if await active_repo.has(day_number) and not restart:
        raise HTTPException(
            status_code=409, detail=f"Day {day_number} already has a workout in progress"
        )

    progress = await progress_repo.load()
    workout = create_active_workout(day_number, progress.current_cycle)
    await active_repo.save(workout)
    return _workout_response(workout)


@router.patch("/{day_number}/exercises/{exercise_index}/sets/{set_index}")
async def update_workout_set(
    day_number: int,
    exercise_index: int,
    set_index: int,
    body: SetUpdate,
    active_repo: ActiveWorkoutRepository = Depends(get_active_repo),
    progress_repo: ProgressRepository = Depends(get_progress_repo),
):
    """Edit a set; completing it starts the rest timer."""
    workout = await _get_active(active_repo, day_number)
    try:
        set_log = update_set(
            workout, exercise_index, set_index, body.weight, body.reps, body.completed
        )
        if body.completed:
            start_rest_timer(workout, exercise_index, set_index)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    await active_repo.save(workout)

    progress = await progress_repo.load()
    previous = find_previous_workout(day_number, "", progress.workout_logs)
    exercise_name = workout.exercises[exercise_index].exercise_name
    return {
        "set": set_log.to_dict(),
        "isPr": is_set_pr(set_log, exercise_name, previous),
        "restTimer": workout.rest_timer.to_dict() if workout.rest_timer else None,
    }


@router.post("/{day_number}/exercises/{exercise_index}/skip")
async def skip_workout_exercise(
    day_number: int,
    exercise_index: int,
    body: SkipRequest,
    repo: ActiveWorkoutRepository = Depends(get_active_repo),
):
    """Skip (or un-skip) an exercise."""
    workout = await _get_active(repo, day_number)
    try:
        skip_exercise(workout, exercise_index, body.skipped)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    await repo.save(workout)
    return _workout_response(workout)


@router.post("/{day_number}/exercises/{exercise_index}/replace")
async def replace_workout_exercise(
    day_number: int,
    exercise_index: int,
    body: ReplaceRequest,
    repo: ActiveWorkoutRepository = Depends(get_active_repo),
):
    """Record (or clear) a substitute exercise."""
    workout = await _get_active(repo, day_number)
    try:
        replace_exercise(workout, exercise_index, body.substitute)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    await repo.save(workout)
    return _workout_response(workout)


@router.delete("/{day_number}/rest-timer")
async def dismiss_workout_rest_timer(
    day_number: int,
    repo: ActiveWorkoutRepository = Depends(get_active_repo),
):
    """Stop the rest timer."""
    workout = await _get_active(repo, day_number)
    dismiss_rest_timer(workout)
    await repo.save(workout)
    return _workout_response(workout)


@router.delete("/{day_number}")
async def discard_workout(
    day_number: int,
    repo: ActiveWorkoutRepository = Depends(get_active_repo),
):
    """Throw away an in-progress workout."""
    existed = await repo.has(day_number)
    await repo.clear(day_number)
    return {"discarded": existed}


@router.post("/{day_number}/finish")
async def finish_active_workout(
    day_number: int,
    body: FinishRequest | None = None,
    active_repo: ActiveWorkoutRepository = Depends(get_active_repo),
    progress_repo: ProgressRepository = Depends(get_progress_repo),
):
    """Validate and log a workout.

    Responds 400 with the validation result when required sets are still
    open, unless ``force`` is set.
    """
    body = body or FinishRequest()
    workout = await _get_active(active_repo, day_number)
    progress = await progress_repo.load()
    cycle_before = progress.current_cycle

    try:
        log = finish_workout(
            progress, workout, session_notes=body.session_notes, force=body.force
        )
    except WorkoutIncompleteError as e:
        raise HTTPException(status_code=400, detail=e.result.to_dict())

    await progress_repo.save(progress)
    await active_repo.clear(day_number)

    slot = get_next_workout_day(progress)
    return {
        "log": log.to_dict(),
        "cycleAdvanced": progress.current_cycle > cycle_before,
        "nextWorkout": {
            "dayNumber": slot.day_number,
            "dayName": SANCTUM_PROGRAM.get_day_name(slot.day_number),
            "cycle": slot.cycle,
        },
    }
