"""
In-memory implementation of ``SeriesRepository``.

Data lives in a dict guarded by a lock, so the atomicity guarantees
match the SQLite backend.  Stored and returned objects are copies;
callers can never mutate repository state by accident.
"""

import itertools
import threading
from typing import Dict, List, Optional

from ..schemas.series import SeriesCreate, SeriesRead
from .base import SeriesRepository


class InMemorySeriesRepository(SeriesRepository):
    """Keep series in process memory.  Nothing survives a restart."""

    def __init__(self) -> None:
        self._rows: Dict[int, SeriesRead] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def list_all(self) -> List[SeriesRead]:
        with self._lock:
            return [row.model_copy() for row in self._rows.values()]

    def find_by_id(self, series_id: int) -> Optional[SeriesRead]:
        with self._lock:
            row = self._rows.get(series_id)
            return row.model_copy() if row else None

    def insert(self, data: SeriesCreate) -> SeriesRead:
        with self._lock:
            series = SeriesRead(id=next(self._ids), **data.model_dump())
            self._rows[series.id] = series
            return series.model_copy()

    def replace(self, series: SeriesRead) -> Optional[SeriesRead]:
        with self._lock:
            if series.id not in self._rows:
                return None
            self._rows[series.id] = series.model_copy()
            return series

    def set_status(self, series_id: int, status: str) -> int:
        with self._lock:
            row = self._rows.get(series_id)
            if row is None:
                return 0
            self._rows[series_id] = row.model_copy(update={"status": status})
            return 1

    def delete_by_id(self, series_id: int) -> int:
        with self._lock:
            return 1 if self._rows.pop(series_id, None) else 0

    def adjust(self, series_id: int, field: str, delta: int) -> Optional[int]:
        column = self.counter_column(field)
        with self._lock:
            row = self._rows.get(series_id)
            if row is None:
                return None
            value = getattr(row, column) + delta
            self._rows[series_id] = row.model_copy(update={column: value})
            return value
