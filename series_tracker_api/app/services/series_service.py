"""
Business logic for series.

``SeriesService`` implements every operation on a series resource on
top of an injected ``SeriesRepository``.  Methods return schema
objects on success and raise ``InvalidInputError``,
``SeriesNotFoundError`` or ``StorageError`` otherwise; the API layer
turns those into HTTP responses.

Counter operations (episode, upvote, downvote) are delegated to
``SeriesRepository.adjust`` which performs the arithmetic inside the
backend, so concurrent requests on the same series never lose updates.
Replace and status updates are last-writer-wins.

Repository calls block (SQLite may wait on a locked database), so they
run in the worker threadpool and never stall the event loop.
"""

import logging
from typing import List

from starlette.concurrency import run_in_threadpool

from ..core.errors import InvalidInputError, SeriesNotFoundError
from ..repositories.base import SeriesRepository
from ..schemas.series import (
    SeriesCreate,
    SeriesRead,
    SeriesUpdate,
    StatusUpdate,
    is_valid_title,
)

logger = logging.getLogger(__name__)


class SeriesService:
    """Service for tracking series watch progress."""

    def __init__(self, repository: SeriesRepository) -> None:
        self.repository = repository

    async def list_series(self) -> List[SeriesRead]:
        return await run_in_threadpool(self.repository.list_all)

    async def get_series(self, series_id: int) -> SeriesRead:
        """Retrieve a single series or raise ``SeriesNotFoundError``."""
        series = await run_in_threadpool(self.repository.find_by_id, series_id)
        if series is None:
            raise SeriesNotFoundError(series_id)
        return series

    async def create_series(self, data: SeriesCreate) -> SeriesRead:
        """Validate and store a new series.

        Raises ``InvalidInputError`` when the title is empty; nothing is
        written in that case.
        """
        if not is_valid_title(data.title):
            raise InvalidInputError("Field 'title' is required")
        series = await run_in_threadpool(self.repository.insert, data)
        logger.info("Created series %s '%s'", series.id, series.title)
        return series

    async def replace_series(self, series_id: int, data: SeriesUpdate) -> SeriesRead:
        """Overwrite every mutable field of an existing series.

        The id always comes from the path.  Unlike creation, an empty
        title is accepted here; it is only logged.
        """
        current = await self.get_series(series_id)
        if not is_valid_title(data.title):
            logger.warning("Series %s replaced with an empty title", series_id)
        updated = current.model_copy(
            update={
                "title": data.title,
                "status": data.status,
                "last_episode_watched": data.last_episode_watched,
                "total_episodes": data.total_episodes,
                "ranking": data.ranking,
            }
        )
        stored = await run_in_threadpool(self.repository.replace, updated)
        if stored is None:
            raise SeriesNotFoundError(series_id)
        logger.info("Replaced series %s", series_id)
        return stored

    async def delete_series(self, series_id: int) -> None:
        if await run_in_threadpool(self.repository.delete_by_id, series_id) == 0:
            raise SeriesNotFoundError(series_id)
        logger.info("Deleted series %s", series_id)

    async def update_status(self, series_id: int, update: StatusUpdate) -> SeriesRead:
        """Set only the status field and return the refreshed series."""
        await self.get_series(series_id)
        if not update.status:
            raise InvalidInputError("Field 'status' must not be empty")
        if await run_in_threadpool(self.repository.set_status, series_id, update.status) == 0:
            raise SeriesNotFoundError(series_id)
        logger.info("Series %s status set to '%s'", series_id, update.status)
        return await self.get_series(series_id)

    async def advance_episode(self, series_id: int) -> SeriesRead:
        """Mark one more episode as watched.

        When a total is known and already reached, the series is
        returned unchanged; that is a successful no-op, not an error.
        """
        series = await self.get_series(series_id)
        if 0 < series.total_episodes <= series.last_episode_watched:
            logger.debug("Series %s already caught up at episode %s", series_id, series.last_episode_watched)
            return series
        return await self._adjust(series, "last_episode_watched", 1)

    async def upvote(self, series_id: int) -> SeriesRead:
        series = await self.get_series(series_id)
        return await self._adjust(series, "ranking", 1)

    async def downvote(self, series_id: int) -> SeriesRead:
        # No floor: rankings may become negative.
        series = await self.get_series(series_id)
        return await self._adjust(series, "ranking", -1)

    async def _adjust(self, series: SeriesRead, field: str, delta: int) -> SeriesRead:
        value = await run_in_threadpool(self.repository.adjust, series.id, field, delta)
        if value is None:
            raise SeriesNotFoundError(series.id)
        logger.info("Series %s %s adjusted by %+d to %s", series.id, field, delta, value)
        return series.model_copy(update={field: value})
