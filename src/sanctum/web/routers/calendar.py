"""Calendar projection routes."""

from fastapi import APIRouter, Depends, Query

from ...db import ProgressRepository
from ...services.calendar_projection import (
    build_calendar_projection,
    calculate_deload_weeks,
    estimate_frequency,
)
from ..deps import ISO_DATE_PATTERN, get_progress_repo, resolve_now

router = APIRouter(prefix="/calendar", tags=["calendar"])


@router.get("")
async def get_calendar(
    as_of: str | None = Query(None, alias="date", pattern=ISO_DATE_PATTERN),
    repo: ProgressRepository = Depends(get_progress_repo),
):
    """Full calendar projection as of today (or ``?date=``)."""
    now = resolve_now(as_of)
    progress = await repo.load(now)
    return build_calendar_projection(progress, now).to_dict()


@router.get("/frequency")
async def get_frequency(
    as_of: str | None = Query(None, alias="date", pattern=ISO_DATE_PATTERN),
    repo: ProgressRepository = Depends(get_progress_repo),
):
    """Estimated training frequency."""
    now = resolve_now(as_of)
    progress = await repo.load(now)
    return estimate_frequency(progress.workout_logs, now).to_dict()


@router.get("/deloads")
async def get_deload_weeks(
    count: int = Query(2, ge=1, le=10),
    as_of: str | None = Query(None, alias="date", pattern=ISO_DATE_PATTERN),
    repo: ProgressRepository = Depends(get_progress_repo),
):
    """Upcoming deload weeks."""
    now = resolve_now(as_of)
    progress = await repo.load(now)
    weeks = calculate_deload_weeks(progress, count=count, now=now)
    return {
        "isDeloadWeek": progress.is_deload_week,
        "deloadWeeks": [week.to_dict() for week in weeks],
    }
