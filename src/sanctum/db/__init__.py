"""Database layer for sanctum."""

from .engine import get_data_dir, get_db_path, init_db
from .repositories import (
    ActiveWorkoutRepository,
    KeyValueStore,
    ProgressRepository,
    SettingsRepository,
)

__all__ = [
    "ActiveWorkoutRepository",
    "get_data_dir",
    "get_db_path",
    "init_db",
    "KeyValueStore",
    "ProgressRepository",
    "SettingsRepository",
]
