"""Database engine setup and initialization."""

import os
from pathlib import Path

import aiosqlite

# Default data directory, overridable with SANCTUM_DATA_DIR
DATA_DIR = Path(__file__).parent.parent.parent.parent / "data"
DATA_DIR_ENV = "SANCTUM_DATA_DIR"
DB_FILENAME = "sanctum.db"


def get_data_dir() -> Path:
    """Get the data directory, honoring the environment override."""
    env_dir = os.environ.get(DATA_DIR_ENV)
    return Path(env_dir) if env_dir else DATA_DIR


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    if data_dir is None:
        data_dir = get_data_dir()
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / DB_FILENAME


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        # Progress, active workouts, and settings are JSON documents by key
        await db.execute("""
            CREATE TABLE IF NOT EXISTS kv_store (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)
        await db.commit()
