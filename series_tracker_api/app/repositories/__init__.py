"""
Storage backends for series.

``build_repository`` picks the backend named by the settings; the
service layer only ever sees the abstract ``SeriesRepository``.
"""

from ..core.config import Settings
from ..core.db import get_database_path
from .base import SeriesRepository
from .memory import InMemorySeriesRepository
from .sqlite import SQLiteSeriesRepository


def build_repository(settings: Settings) -> SeriesRepository:
    """Create the repository configured by ``settings.storage_backend``."""
    backend = settings.storage_backend.lower()
    if backend == "memory":
        return InMemorySeriesRepository()
    if backend == "sqlite":
        return SQLiteSeriesRepository(
            get_database_path(settings.database_url),
            timeout=settings.database_timeout,
        )
    raise ValueError(f"Unknown storage backend: {settings.storage_backend!r}")


__all__ = [
    "SeriesRepository",
    "InMemorySeriesRepository",
    "SQLiteSeriesRepository",
    "build_repository",
]
