"""FastAPI application for the fitloop JSON API."""

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from .. import __version__
from ..config import Config
from ..db.engine import get_db_path, init_db
from .routers import progress, prompts, session


def create_app(db_path: Path | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if db_path is None:
        db_path = get_db_path(Config.from_env().data_dir)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialize the database on startup."""
        await init_db(app.state.db_path)
        yield

    app = FastAPI(
        title="fitloop",
        description="Adaptive training meta-prompt generator",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.db_path = db_path

    app.include_router(prompts.router)
    app.include_router(session.router)
    app.include_router(progress.router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app
