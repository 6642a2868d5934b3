"""Pytest configuration and fixtures."""

import asyncio
import tempfile
from datetime import datetime
from pathlib import Path

import pytest

from sanctum.db import init_db
from sanctum.models.progress import ExerciseLog, SetLog, UserProgress, WorkoutLog

# Tuesday
FIXED_NOW = datetime(2026, 2, 10)


@pytest.fixture
def now():
    """A fixed Tuesday used as "today" across tests."""
    return FIXED_NOW


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def initialized_db(temp_db_path):
    """A temporary database with the schema created."""
    asyncio.run(init_db(temp_db_path))
    return temp_db_path


@pytest.fixture
def make_log():
    """Factory for completed workout logs."""

    def _make_log(**overrides) -> WorkoutLog:
        data = {
            "id": "1",
            "date": "2026-02-01",
            "cycle": 1,
            "day_number": 1,
            "day_name": "Pull",
            "exercises": [],
            "completed": True,
        }
        data.update(overrides)
        return WorkoutLog(**data)

    return _make_log


@pytest.fixture
def make_progress():
    """Factory for user progress starting 2026-01-01."""

    def _make_progress(**overrides) -> UserProgress:
        data = {
            "current_cycle": 1,
            "cycle_start_date": "2026-01-01",
            "deload_interval_weeks": 5,
            "is_deload_week": False,
            "workout_logs": [],
            "rest_days": [],
        }
        data.update(overrides)
        return UserProgress(**data)

    return _make_progress


@pytest.fixture
def make_exercise():
    """Factory for an exercise log from (weight, reps, completed) tuples."""

    def _make_exercise(name: str, sets: list[tuple], skipped: bool = False) -> ExerciseLog:
        return ExerciseLog(
            exercise_name=name,
            sets=[
                SetLog(set_number=i + 1, weight=weight, reps=reps, completed=completed)
                for i, (weight, reps, completed) in enumerate(sets)
            ],
            skipped=skipped,
        )

    return _make_exercise
