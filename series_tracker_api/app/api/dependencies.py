"""
FastAPI dependency providers.

The repository is created once by the application factory and kept on
``app.state``; a lightweight ``SeriesService`` is built around it per
request.  Tests swap storage by overriding ``get_series_repository``
through ``app.dependency_overrides``.
"""

from fastapi import Depends, Request

from ..repositories.base import SeriesRepository
from ..services.series_service import SeriesService


def get_series_repository(request: Request) -> SeriesRepository:
    return request.app.state.series_repository


def get_series_service(
    repository: SeriesRepository = Depends(get_series_repository),
) -> SeriesService:
    return SeriesService(repository)
