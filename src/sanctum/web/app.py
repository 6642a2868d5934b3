"""FastAPI application for the sanctum JSON API."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from .. import __version__
from ..db.engine import get_db_path, init_db
from .routers import calendar, program, progress, workouts

logger = logging.getLogger(__name__)


def create_app(db_path: Path | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialize the database on startup."""
        if not app.state.db_path.exists():
            logger.info("Creating database at %s", app.state.db_path)
        await init_db(app.state.db_path)
        yield

    app = FastAPI(
        title="sanctum",
        description="Workout tracker with calendar projection and deload scheduling",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.db_path = db_path or get_db_path()

    app.include_router(calendar.router)
    app.include_router(progress.router)
    app.include_router(program.router)
    app.include_router(workouts.router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app
