"""Progress routes: rest days, deloads, cycles, volume, and backups."""

import json

from fastapi import APIRouter, Body, Depends, HTTPException, Path, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, field_validator

from ...db import ProgressRepository, SettingsRepository
from ...db.repositories import backup_file_name
from ...services.calendar_projection import get_next_workout_day
from ...services.volume import format_volume, get_current_cycle_volume
from ...utils.dates import parse_local_date
from ...utils.units import WeightUnit
from ..deps import (
    ISO_DATE_PATTERN,
    get_progress_repo,
    get_settings_repo,
    resolve_now,
)

router = APIRouter(prefix="/progress", tags=["progress"])


class RestDayRequest(BaseModel):
    date: str = Field(pattern=ISO_DATE_PATTERN)

    @field_validator("date")
    @classmethod
    def date_must_exist(cls, value: str) -> str:
        parse_local_date(value)
        return value


class CycleRequest(BaseModel):
    cycle: int = Field(ge=1)


class DeloadIntervalRequest(BaseModel):
    weeks: int = Field(ge=1)


@router.get("")
async def get_progress(
    as_of: str | None = Query(None, alias="date", pattern=ISO_DATE_PATTERN),
    repo: ProgressRepository = Depends(get_progress_repo),
):
    """Stored progress plus the next workout and deload suggestion."""
    now = resolve_now(as_of)
    progress = await repo.load(now)
    slot = get_next_workout_day(progress)
    return {
        "progress": progress.to_dict(),
        "nextWorkout": {"dayNumber": slot.day_number, "cycle": slot.cycle},
        "shouldSuggestDeload": progress.should_suggest_deload(now),
    }


@router.post("/rest-days")
async def add_rest_day(
    body: RestDayRequest,
    repo: ProgressRepository = Depends(get_progress_repo),
):
    """Mark a date as explicit rest."""
    progress = await repo.load()
    added = progress.add_rest_day(body.date)
    if added:
        await repo.save(progress)
    return {"added": added, "restDays": progress.rest_days}


@router.delete("/rest-days/{rest_date}")
async def remove_rest_day(
    rest_date: str = Path(pattern=ISO_DATE_PATTERN),
    repo: ProgressRepository = Depends(get_progress_repo),
):
    """Unmark a rest date."""
    try:
        parse_local_date(rest_date)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Invalid date: {rest_date}")

    progress = await repo.load()
    removed = progress.remove_rest_day(rest_date)
    if removed:
        await repo.save(progress)
    return {"removed": removed, "restDays": progress.rest_days}


@router.post("/deload/start")
async def start_deload(repo: ProgressRepository = Depends(get_progress_repo)):
    """Enter a deload period."""
    progress = await repo.load()
    progress.start_deload()
    await repo.save(progress)
    return {"isDeloadWeek": True, "lastDeloadDate": progress.last_deload_date}


@router.post("/deload/end")
async def end_deload(repo: ProgressRepository = Depends(get_progress_repo)):
    """Leave the deload period, anchoring the next one to today."""
    progress = await repo.load()
    if not progress.is_deload_week:
        raise HTTPException(status_code=409, detail="No deload in progress")
    progress.end_deload()
    await repo.save(progress)
    return {"isDeloadWeek": False, "lastDeloadDate": progress.last_deload_date}


@router.post("/deload/record")
async def record_deload(repo: ProgressRepository = Depends(get_progress_repo)):
    """Record a deload that happened today."""
    progress = await repo.load()
    progress.record_deload()
    await repo.save(progress)
    return {"isDeloadWeek": progress.is_deload_week, "lastDeloadDate": progress.last_deload_date}


@router.put("/deload/interval")
async def update_deload_interval(
    body: DeloadIntervalRequest,
    repo: ProgressRepository = Depends(get_progress_repo),
):
    """Change the weeks between deloads."""
    progress = await repo.load()
    progress.update_deload_interval(body.weeks)
    await repo.save(progress)
    return {"deloadIntervalWeeks": progress.deload_interval_weeks}


@router.put("/cycle")
async def update_cycle(
    body: CycleRequest,
    repo: ProgressRepository = Depends(get_progress_repo),
):
    """Jump to a cycle number."""
    progress = await repo.load()
    progress.update_cycle(body.cycle)
    await repo.save(progress)
    return {"currentCycle": progress.current_cycle}


@router.get("/cycles")
async def list_cycles(repo: ProgressRepository = Depends(get_progress_repo)):
    """Cycle numbers with logged workouts, newest first."""
    progress = await repo.load()
    return {"cycles": progress.get_cycle_numbers()}


@router.get("/volume/{cycle}")
async def get_cycle_volume(
    cycle: int,
    progress_repo: ProgressRepository = Depends(get_progress_repo),
    settings_repo: SettingsRepository = Depends(get_settings_repo),
):
    """Volume, completed sets, and distinct exercises for a cycle."""
    progress = await progress_repo.load()
    unit = await settings_repo.get_unit()
    data = get_current_cycle_volume(progress.workout_logs, cycle)
    return {
        **data.to_dict(),
        "cycle": cycle,
        "formatted": format_volume(data.total_volume, unit),
        "workouts": [log.to_dict() for log in progress.get_logs_for_cycle(cycle)],
    }


@router.get("/units")
async def get_units(repo: SettingsRepository = Depends(get_settings_repo)):
    """Display unit preference."""
    return {"unit": (await repo.get_unit()).value}


@router.put("/units/{unit}")
async def set_units(unit: WeightUnit, repo: SettingsRepository = Depends(get_settings_repo)):
    """Set the display unit."""
    await repo.set_unit(unit)
    return {"unit": unit.value}


@router.get("/export")
async def export_progress(repo: ProgressRepository = Depends(get_progress_repo)):
    """Download progress as a JSON backup."""
    content = json.loads(await repo.export_json())
    return JSONResponse(
        content=content,
        headers={"Content-Disposition": f'attachment; filename="{backup_file_name()}"'},
    )


@router.post("/import")
async def import_progress(
    payload: dict = Body(...),
    repo: ProgressRepository = Depends(get_progress_repo),
):
    """Replace progress with an uploaded backup."""
    if not await repo.import_json(json.dumps(payload)):
        raise HTTPException(status_code=400, detail="Invalid progress backup")

    progress = await repo.load()
    return {"imported": True, "workoutLogs": len(progress.workout_logs)}


@router.post("/reset")
async def reset_progress(repo: ProgressRepository = Depends(get_progress_repo)):
    """Erase all progress and in-progress workouts."""
    progress = await repo.reset()
    return progress.to_dict()
