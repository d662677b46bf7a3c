"""
Persistence contract for series.

``SeriesRepository`` is the only storage interface the service layer
knows about.  Every method raises ``StorageError`` when the backend
fails; "no such row" is reported through return values, never as an
exception.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..schemas.series import SeriesCreate, SeriesRead

# Fields that may be changed through ``adjust``, mapped to column names.
COUNTER_FIELDS = {
    "last_episode_watched": "last_episode_watched",
    "ranking": "ranking",
}


class SeriesRepository(ABC):
    """Abstract storage backend for series."""

    def initialize(self) -> None:
        """Prepare the backend (create tables, apply migrations)."""

    def close(self) -> None:
        """Release backend resources on shutdown."""

    @abstractmethod
    def list_all(self) -> List[SeriesRead]:
        """Return every stored series, in insertion order."""

    @abstractmethod
    def find_by_id(self, series_id: int) -> Optional[SeriesRead]:
        """Return the series with ``series_id`` or ``None``."""

    @abstractmethod
    def insert(self, data: SeriesCreate) -> SeriesRead:
        """Store a new series and return it with its assigned id."""

    @abstractmethod
    def replace(self, series: SeriesRead) -> Optional[SeriesRead]:
        """Overwrite all mutable fields of ``series.id``.

        Returns the stored series, or ``None`` when the row no longer
        exists.
        """

    @abstractmethod
    def set_status(self, series_id: int, status: str) -> int:
        """Write only the status column; return the number of rows changed."""

    @abstractmethod
    def delete_by_id(self, series_id: int) -> int:
        """Delete a series; return the number of rows removed."""

    @abstractmethod
    def adjust(self, series_id: int, field: str, delta: int) -> Optional[int]:
        """Atomically add ``delta`` to a counter field.

        The addition happens inside the backend as a single statement,
        so concurrent callers never lose updates.  Returns the value
        after the change, or ``None`` when no row matched.
        """

    @staticmethod
    def counter_column(field: str) -> str:
        try:
            return COUNTER_FIELDS[field]
        except KeyError:
            raise ValueError(f"{field!r} is not an adjustable counter") from None
