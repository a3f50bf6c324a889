"""FastAPI application factory."""

import logging

from fastapi import FastAPI

from clubwatch import __version__
from clubwatch.api.routes import fixtures, watcher
from clubwatch.config import setup_logging
from clubwatch.database import init_db

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


def create_app(init_database: bool = True) -> FastAPI:
    """Build the API app.

    Args:
        init_database: Create/migrate the schema at the configured DB_PATH first
    """
    setup_logging()
    if init_database:
        init_db()

    app = FastAPI(title="Clubwatch", version=__version__)
    app.include_router(watcher.router, prefix=f"{API_PREFIX}/watcher", tags=["Watcher"])
    app.include_router(fixtures.router, prefix=f"{API_PREFIX}/fixtures", tags=["Fixtures"])

    @app.get("/health")
    def health():
        return {"status": "healthy", "version": __version__}

    logger.info("[STARTUP] Clubwatch API v%s ready", __version__)
    return app
