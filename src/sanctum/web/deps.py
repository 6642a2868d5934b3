"""Shared request dependencies."""

from datetime import datetime, time

from fastapi import HTTPException, Request

from ..db import ActiveWorkoutRepository, ProgressRepository, SettingsRepository
from ..utils.dates import parse_local_date

ISO_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


def get_progress_repo(request: Request) -> ProgressRepository:
    """Progress repository bound to the app's database."""
    return ProgressRepository(request.app.state.db_path)


def get_active_repo(request: Request) -> ActiveWorkoutRepository:
    """Active workout repository bound to the app's database."""
    return ActiveWorkoutRepository(request.app.state.db_path)


def get_settings_repo(request: Request) -> SettingsRepository:
    """Settings repository bound to the app's database."""
    return SettingsRepository(request.app.state.db_path)


def resolve_now(as_of: str | None) -> datetime:
    """Current time, or midnight of an ``as_of`` date."""
    if as_of is None:
        return datetime.now()
    try:
        return datetime.combine(parse_local_date(as_of), time())
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid date: {as_of}")
