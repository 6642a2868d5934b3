"""Data access layer for sanctum.

Everything is stored as JSON documents in a single key-value table with
last-write-wins semantics. Read failures never propagate: corrupt or
missing documents fall back to defaults (or None) and are logged.
"""

import json
import logging
from datetime import date, datetime
from pathlib import Path

import aiosqlite

from ..models.progress import ActiveWorkout, UserProgress
from ..utils.dates import parse_local_date, to_iso_date
from ..utils.units import WeightUnit
from .engine import get_db_path

logger = logging.getLogger(__name__)

PROGRESS_KEY = "sanctum-progress"
ACTIVE_WORKOUT_KEY_PREFIX = "sanctum-active-workout"
UNITS_KEY = "sanctum-units"


def active_workout_key(day_number: int) -> str:
    """Storage key for a day's in-progress workout."""
    return f"{ACTIVE_WORKOUT_KEY_PREFIX}-{day_number}"


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_valid_progress_data(data) -> bool:
    """Structural check applied to imported progress documents."""
    return (
        isinstance(data, dict)
        and _is_number(data.get("currentCycle"))
        and isinstance(data.get("cycleStartDate"), str)
        and _is_number(data.get("deloadIntervalWeeks"))
        and isinstance(data.get("workoutLogs"), list)
    )


def check_progress_dates(progress: UserProgress) -> None:
    """Raise ValueError unless every stored date is a real calendar date."""
    parse_local_date(progress.cycle_start_date)
    if progress.last_deload_date:
        parse_local_date(progress.last_deload_date)
    for log in progress.workout_logs:
        parse_local_date(log.date)
    for rest_date in progress.rest_days:
        parse_local_date(rest_date)


def is_valid_active_workout_data(data) -> bool:
    """Structural check applied to stored active workouts."""
    if not isinstance(data, dict):
        return False
    if not _is_number(data.get("dayNumber")) or not _is_number(data.get("cycle")):
        return False
    if not _is_number(data.get("startTime")):
        return False
    if not isinstance(data.get("exercises"), list):
        return False

    for exercise in data["exercises"]:
        if not isinstance(exercise, dict):
            return False
        if not isinstance(exercise.get("exerciseName"), str):
            return False
        if not isinstance(exercise.get("sets"), list):
            return False
        if not isinstance(exercise.get("notes"), str):
            return False

    return True


class KeyValueStore:
    """Async JSON-text key-value store backed by SQLite."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def get(self, key: str) -> str | None:
        """Get the raw value for a key."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
            row = await cursor.fetchone()
            return row[0] if row else None

    async def set(self, key: str, value: str) -> None:
        """Create or replace a value."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (key, value),
            )
            await db.commit()

    async def delete(self, key: str) -> None:
        """Remove a key (no-op if absent)."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            await db.commit()

    async def keys(self, prefix: str = "") -> list[str]:
        """List keys starting with a prefix."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT key FROM kv_store WHERE key LIKE ? ORDER BY key",
                (f"{prefix}%",),
            )
            rows = await cursor.fetchall()
            return [row[0] for row in rows]


class ProgressRepository:
    """Repository for the user's progress document."""

    def __init__(self, db_path: Path | None = None):
        self.store = KeyValueStore(db_path)

    async def load(self, today: date | datetime | None = None) -> UserProgress:
        """Load progress, falling back to fresh defaults on any read problem."""
        raw = await self.store.get(PROGRESS_KEY)
        if raw is None:
            logger.info("No stored progress, starting fresh")
            return UserProgress.default(today)

        try:
            data = json.loads(raw)
            if not is_valid_progress_data(data):
                raise ValueError("missing required progress fields")
            progress = UserProgress.from_dict(data)
            check_progress_dates(progress)
            return progress
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("Stored progress is unreadable, using defaults: %s", e)
            return UserProgress.default(today)

    async def save(self, progress: UserProgress) -> None:
        """Persist progress."""
        await self.store.set(PROGRESS_KEY, json.dumps(progress.to_dict()))

    async def export_json(self, today: date | datetime | None = None) -> str:
        """Serialize current progress as an indented JSON backup."""
        progress = await self.load(today)
        return json.dumps(progress.to_dict(), indent=2)

    async def import_json(self, json_data: str) -> bool:
        """Replace progress with an imported backup.

        Returns False, leaving stored progress untouched, if the payload is
        not valid JSON, is missing required fields, or holds a date that is
        not a real calendar date.
        """
        try:
            data = json.loads(json_data)
            if not is_valid_progress_data(data):
                logger.warning("Rejected progress import: missing required fields")
                return False
            progress = UserProgress.from_dict(data)
            check_progress_dates(progress)
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("Rejected progress import: %s", e)
            return False

        await self.save(progress)
        return True

    async def reset(self, today: date | datetime | None = None) -> UserProgress:
        """Reset to defaults and discard all in-progress workouts."""
        await ActiveWorkoutRepository(self.store.db_path).clear_all()
        progress = UserProgress.default(today)
        await self.save(progress)
        return progress


class ActiveWorkoutRepository:
    """Repository for per-day in-progress workouts."""

    def __init__(self, db_path: Path | None = None):
        self.store = KeyValueStore(db_path)

    async def save(self, workout: ActiveWorkout) -> None:
        """Persist an active workout under its day key."""
        await self.store.set(
            active_workout_key(workout.day_number), json.dumps(workout.to_dict())
        )

    async def get(self, day_number: int) -> ActiveWorkout | None:
        """Load a day's active workout; invalid data reads as None."""
        raw = await self.store.get(active_workout_key(day_number))
        if raw is None:
            return None

        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.warning("Active workout for day %s is not valid JSON: %s", day_number, e)
            return None

        if not is_valid_active_workout_data(data):
            logger.warning("Invalid active workout structure for day %s", day_number)
            return None

        try:
            return ActiveWorkout.from_dict(data)
        except (KeyError, TypeError) as e:
            logger.warning("Active workout for day %s could not be loaded: %s", day_number, e)
            return None

    async def clear(self, day_number: int) -> None:
        """Discard a day's active workout."""
        await self.store.delete(active_workout_key(day_number))

    async def has(self, day_number: int) -> bool:
        """Check whether anything is stored for a day."""
        return await self.store.get(active_workout_key(day_number)) is not None

    async def list_days(self) -> list[int]:
        """Day numbers with a stored active workout, ascending."""
        days = []
        for key in await self.store.keys(f"{ACTIVE_WORKOUT_KEY_PREFIX}-"):
            suffix = key[len(ACTIVE_WORKOUT_KEY_PREFIX) + 1:]
            if suffix.isdigit():
                days.append(int(suffix))
        return sorted(days)

    async def clear_all(self) -> None:
        """Discard every active workout."""
        for day_number in await self.list_days():
            await self.clear(day_number)


class SettingsRepository:
    """Repository for display preferences."""

    def __init__(self, db_path: Path | None = None):
        self.store = KeyValueStore(db_path)

    async def get_unit(self) -> WeightUnit:
        """Preferred weight unit, pounds unless kilograms was chosen."""
        return WeightUnit.parse(await self.store.get(UNITS_KEY))

    async def set_unit(self, unit: WeightUnit) -> None:
        """Store the preferred weight unit."""
        await self.store.set(UNITS_KEY, unit.value)


def backup_file_name(now: date | datetime | None = None) -> str:
    """Backup file name, e.g. sanctum-backup-2025-02-08.json."""
    return f"sanctum-backup-{to_iso_date(now or datetime.now())}.json"
