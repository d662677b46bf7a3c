"""
Main entrypoint for the Series Tracker API.

This module assembles the FastAPI application: logging, CORS, request
logging, exception handlers, the series routes and the health check.
The ``create_app`` function builds and configures the app, which is
then instantiated at module import time as ``app``, so it can be
served directly::

    uvicorn series_tracker_api.app.main:app --reload

Interactive documentation is available at ``/docs`` and ``/redoc``.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.endpoints import health
from .api.errors import convert_unexpected_errors, register_exception_handlers
from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.logging_config import REQUEST_ID_HEADER, log_requests, setup_logging
from .repositories import SeriesRepository, build_repository

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[SeriesRepository] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use; defaults to the environment-derived
        ``settings`` singleton.
    repository : Optional[SeriesRepository]
        Storage backend to use.  When omitted one is built from
        ``settings.storage_backend``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    # Configure logging before anything else so that startup messages
    # are formatted consistently.
    setup_logging(settings.log_level, settings.log_file or None)

    repository = repository or build_repository(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Create tables / apply migrations before the first request.
        repository.initialize()
        logger.info("%s %s started", settings.project_name, settings.api_version)
        try:
            yield
        finally:
            # Runs after the server has drained in-flight requests.
            repository.close()
            logger.info("Storage released, shutdown complete")

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        description="Track watch progress and rankings of TV series.",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.series_repository = repository

    # The last middleware added is the outermost.
    app.middleware("http")(convert_unexpected_errors)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Accept", "Authorization", "Content-Type", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
        max_age=300,
    )
    app.middleware("http")(log_requests)

    register_exception_handlers(app)

    app.include_router(api_router, prefix=settings.api_prefix)
    app.include_router(health.router)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
