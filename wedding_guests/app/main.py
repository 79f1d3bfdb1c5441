"""
Entrypoint for the development backend.

``create_app`` builds and configures the FastAPI application; the
module-level ``app`` lets uvicorn find it directly::

    uvicorn wedding_guests.app.main:app --reload

Set ``ADMIN_PASSWORD`` (and optionally ``ADMIN_EMAIL``) before the first
start so an account exists to log in with.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from ..core.config import settings
from ..core.db import init_db
from ..core.logging_config import setup_logging
from .api.router import router


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Creates the database file on first start and seeds the admin.
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured application instance ready to be served.
    """
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)
    app.include_router(router)

    @app.get("/health", include_in_schema=False)
    async def health() -> dict:
        return {"status": "healthy"}

    return app


app = create_app()
