"""
Series endpoints.

CRUD routes for series plus the partial updates exposed as PATCH
actions (status, episode, upvote, downvote).  Handlers only unpack the
request and delegate to ``SeriesService``; errors raised by the
service are turned into responses by the handlers in ``api/errors.py``.
"""

from typing import Annotated, List

from fastapi import APIRouter, Depends, Path, status

from ...schemas.series import (
    INT64_MAX,
    INT64_MIN,
    ErrorResponse,
    SeriesCreate,
    SeriesRead,
    SeriesUpdate,
    StatusUpdate,
)
from ...services.series_service import SeriesService
from ..dependencies import get_series_service

router = APIRouter()

# Ids outside the 64-bit range cannot exist in storage; reject them as
# invalid before any lookup.
SeriesId = Annotated[int, Path(ge=INT64_MIN, le=INT64_MAX)]

_ERRORS = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse, "description": "Invalid id or body"},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse, "description": "Series not found"},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse, "description": "Storage failure"},
}


@router.get("", response_model=List[SeriesRead], responses=_ERRORS)
async def list_series(service: SeriesService = Depends(get_series_service)) -> List[SeriesRead]:
    """List every tracked series."""
    return await service.list_series()


@router.post("", response_model=SeriesRead, status_code=status.HTTP_201_CREATED, responses=_ERRORS)
async def create_series(
    series_in: SeriesCreate,
    service: SeriesService = Depends(get_series_service),
) -> SeriesRead:
    """Create a series.  ``title`` is required; any ``id`` in the body is ignored."""
    return await service.create_series(series_in)


@router.get("/{series_id}", response_model=SeriesRead, responses=_ERRORS)
async def get_series(
    series_id: SeriesId,
    service: SeriesService = Depends(get_series_service),
) -> SeriesRead:
    return await service.get_series(series_id)


@router.put("/{series_id}", response_model=SeriesRead, responses=_ERRORS)
async def replace_series(
    series_id: SeriesId,
    series_in: SeriesUpdate,
    service: SeriesService = Depends(get_series_service),
) -> SeriesRead:
    """Replace every field of a series.  The id in the path wins over the body."""
    return await service.replace_series(series_id, series_in)


@router.delete("/{series_id}", status_code=status.HTTP_204_NO_CONTENT, responses=_ERRORS)
async def delete_series(
    series_id: SeriesId,
    service: SeriesService = Depends(get_series_service),
) -> None:
    await service.delete_series(series_id)
    return None


@router.patch("/{series_id}/status", response_model=SeriesRead, responses=_ERRORS)
async def update_series_status(
    series_id: SeriesId,
    update: StatusUpdate,
    service: SeriesService = Depends(get_series_service),
) -> SeriesRead:
    """Change only the status of a series."""
    return await service.update_status(series_id, update)


@router.patch("/{series_id}/episode", response_model=SeriesRead, responses=_ERRORS)
async def advance_series_episode(
    series_id: SeriesId,
    service: SeriesService = Depends(get_series_service),
) -> SeriesRead:
    """Increment the last watched episode.

    Does nothing (and still succeeds) once the last episode has been
    reached.
    """
    return await service.advance_episode(series_id)


@router.patch("/{series_id}/upvote", response_model=SeriesRead, responses=_ERRORS)
async def upvote_series(
    series_id: SeriesId,
    service: SeriesService = Depends(get_series_service),
) -> SeriesRead:
    return await service.upvote(series_id)


@router.patch("/{series_id}/downvote", response_model=SeriesRead, responses=_ERRORS)
async def downvote_series(
    series_id: SeriesId,
    service: SeriesService = Depends(get_series_service),
) -> SeriesRead:
    return await service.downvote(series_id)
