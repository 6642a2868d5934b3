"""Integration tests for a full training history.

These tests run two complete cycles through the session, storage, and
projection layers against a real SQLite file. They are slower than the
unit tests and are not collected by default; run them with
``pytest integration_tests``.
"""

import asyncio
import json
import tempfile
from datetime import datetime
from pathlib import Path

import pytest

from sanctum.db import ActiveWorkoutRepository, ProgressRepository, init_db
from sanctum.models.calendar import CalendarCellType, FrequencyConfidence
from sanctum.models.progress import UserProgress
from sanctum.services.calendar_projection import (
    build_calendar_projection,
    estimate_frequency,
    get_next_workout_day,
)
from sanctum.services.pr_detector import find_previous_workout, is_set_pr
from sanctum.services.volume import format_volume, get_current_cycle_volume
from sanctum.services.workout_session import create_active_workout, finish_workout, update_set

CYCLE_ONE_DATES = ["2026-01-05", "2026-01-06", "2026-01-07", "2026-01-09", "2026-01-10", "2026-01-12"]
CYCLE_TWO_DATES = ["2026-01-13", "2026-01-14", "2026-01-16", "2026-01-17", "2026-01-19", "2026-01-20"]


async def train(db_path: Path, iso_date: str, weight: float) -> None:
    """Log the next program day on a date, with every set filled in."""
    progress_repo = ProgressRepository(db_path)
    active_repo = ActiveWorkoutRepository(db_path)
    now = datetime.fromisoformat(iso_date)

    progress = await progress_repo.load(now)
    slot = get_next_workout_day(progress)
    start_ms = int(now.timestamp() * 1000)

    workout = create_active_workout(slot.day_number, progress.current_cycle, start_time=start_ms)
    for ei, exercise in enumerate(workout.exercises):
        for si in range(len(exercise.sets)):
            update_set(workout, ei, si, weight=weight, reps=10, completed=True, timestamp=start_ms)
    await active_repo.save(workout)

    stored = await active_repo.get(slot.day_number)
    finish_workout(progress, stored, now=now, current_ms=start_ms + 3_600_000)
    await progress_repo.save(progress)
    await active_repo.clear(slot.day_number)


@pytest.fixture(scope="module")
def trained_db():
    """A database holding two finished cycles."""
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "sanctum.db"

        async def setup():
            await init_db(db_path)
            await ProgressRepository(db_path).save(UserProgress.default(datetime(2026, 1, 5)))
            for iso_date in CYCLE_ONE_DATES:
                await train(db_path, iso_date, 100)
            for iso_date in CYCLE_TWO_DATES:
                await train(db_path, iso_date, 105)

        asyncio.run(setup())
        yield db_path


@pytest.fixture
def progress(trained_db):
    """Stored progress after two cycles."""
    return asyncio.run(ProgressRepository(trained_db).load())


class TestTrainingFlow:
    """End-to-end checks over two cycles of training."""

    def test_cycles_advance(self, progress):
        """Test finishing day 6 twice lands on cycle 3."""
        assert progress.current_cycle == 3
        assert len(progress.workout_logs) == 12
        assert get_next_workout_day(progress).day_number == 1
        assert [log.sequence for log in progress.workout_logs] == list(range(1, 13))

    def test_no_sessions_left(self, trained_db):
        """Test finished sessions are cleared from storage."""
        assert asyncio.run(ActiveWorkoutRepository(trained_db).list_days()) == []

    def test_cycle_volume(self, progress):
        """Test cycle one's volume from 52 exercises of two sets each."""
        data = get_current_cycle_volume(progress.workout_logs, 1)
        assert data.sets == 104
        assert data.total_volume == 104 * 1000
        assert format_volume(data.total_volume) == "104.0k lb"

    def test_heavier_cycle_sets_prs(self, progress):
        """Test cycle two's heavier sets beat cycle one."""
        latest = progress.get_last_workout_for_day(1)
        assert latest.cycle == 2

        previous = find_previous_workout(1, latest.id, progress.workout_logs)
        assert previous.cycle == 1
        first_set = latest.exercises[0].sets[0]
        assert is_set_pr(first_set, latest.exercises[0].exercise_name, previous)

    def test_frequency_from_history(self, progress):
        """Test a dense history gives a confident estimate."""
        freq = estimate_frequency(progress.workout_logs, datetime(2026, 1, 21))
        assert freq.confidence == FrequencyConfidence.HIGH
        assert freq.workouts_per_week > 5

    def test_calendar(self, progress):
        """Test the calendar shows history, today, and the first deload."""
        result = build_calendar_projection(progress, datetime(2026, 1, 21))

        assert result.find_cell("2026-01-05").type == CalendarCellType.PAST_COMPLETED
        assert result.find_cell("2026-01-08").type == CalendarCellType.PAST_MISSED
        today = result.find_cell("2026-01-21")
        assert today.type == CalendarCellType.TODAY
        assert today.workout.day_number == 1
        assert today.workout.cycle == 3
        assert any(w.is_deload_week and w.week_start_date == "2026-02-09" for w in result.weeks)

    def test_backup_restores_into_new_database(self, trained_db, progress):
        """Test an export imports into a fresh database unchanged."""
        exported = asyncio.run(ProgressRepository(trained_db).export_json())

        with tempfile.TemporaryDirectory() as tmpdir:
            restored_path = Path(tmpdir) / "restored.db"

            async def restore():
                await init_db(restored_path)
                repo = ProgressRepository(restored_path)
                assert await repo.import_json(exported)
                return await repo.load()

            restored = asyncio.run(restore())

        assert restored == progress
        assert json.loads(exported)["currentCycle"] == 3
