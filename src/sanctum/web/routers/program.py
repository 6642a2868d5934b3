"""Program routes."""

from fastapi import APIRouter, HTTPException

from ...models.program import SANCTUM_PROGRAM

router = APIRouter(prefix="/program", tags=["program"])


@router.get("")
async def get_program():
    """The full Sanctum program table."""
    return SANCTUM_PROGRAM.to_dict()


@router.get("/days/{day_number}")
async def get_program_day(day_number: int):
    """A single program day with its exercises."""
    day = SANCTUM_PROGRAM.get_workout_day(day_number)
    if day is None:
        raise HTTPException(status_code=404, detail=f"Unknown day {day_number}")

    data = day.to_dict()
    data["abbreviation"] = day.abbreviation
    for ex, ex_data in zip(day.exercises, data["exercises"]):
        ex_data["restSeconds"] = ex.rest_seconds
    return data
