"""
SQLite implementation of ``SeriesRepository``.

Each call opens its own connection via ``core.db.get_cursor`` so the
repository can be shared freely between concurrent requests.  All
queries use parameterized statements; the only interpolated SQL
identifiers come from the fixed ``COUNTER_FIELDS`` whitelist.
"""

import logging
import sqlite3
from typing import List, Optional

from ..core.db import get_cursor, init_db
from ..schemas.series import SeriesCreate, SeriesRead
from .base import SeriesRepository

logger = logging.getLogger(__name__)

_COLUMNS = "id, title, status, last_episode_watched, total_episodes, ranking"


class SQLiteSeriesRepository(SeriesRepository):
    """Store series in a SQLite database file."""

    def __init__(self, db_path: str, timeout: float = 5.0) -> None:
        self.db_path = db_path
        self.timeout = timeout

    def _cursor(self, operation: str):
        return get_cursor(self.db_path, self.timeout, operation=operation)

    def initialize(self) -> None:
        logger.info("Using SQLite database at %s", self.db_path)
        init_db(self.db_path, self.timeout)

    def list_all(self) -> List[SeriesRead]:
        with self._cursor("list") as cursor:
            rows = cursor.execute(f"SELECT {_COLUMNS} FROM series ORDER BY id").fetchall()
        return [self._row_to_series(row) for row in rows]

    def find_by_id(self, series_id: int) -> Optional[SeriesRead]:
        with self._cursor("lookup") as cursor:
            row = cursor.execute(
                f"SELECT {_COLUMNS} FROM series WHERE id = ?",
                (series_id,),
            ).fetchone()
        if not row:
            return None
        return self._row_to_series(row)

    def insert(self, data: SeriesCreate) -> SeriesRead:
        with self._cursor("insert") as cursor:
            cursor.execute(
                """
                INSERT INTO series (title, status, last_episode_watched, total_episodes, ranking)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    data.title,
                    data.status,
                    data.last_episode_watched,
                    data.total_episodes,
                    data.ranking,
                ),
            )
            series_id = cursor.lastrowid
        return SeriesRead(id=series_id, **data.model_dump())

    def replace(self, series: SeriesRead) -> Optional[SeriesRead]:
        with self._cursor("replace") as cursor:
            cursor.execute(
                """
                UPDATE series
                SET title = ?, status = ?, last_episode_watched = ?, total_episodes = ?, ranking = ?
                WHERE id = ?
                """,
                (
                    series.title,
                    series.status,
                    series.last_episode_watched,
                    series.total_episodes,
                    series.ranking,
                    series.id,
                ),
            )
            if cursor.rowcount == 0:
                return None
        return series

    def set_status(self, series_id: int, status: str) -> int:
        with self._cursor("status update") as cursor:
            cursor.execute("UPDATE series SET status = ? WHERE id = ?", (status, series_id))
            return cursor.rowcount

    def delete_by_id(self, series_id: int) -> int:
        with self._cursor("delete") as cursor:
            cursor.execute("DELETE FROM series WHERE id = ?", (series_id,))
            return cursor.rowcount

    def adjust(self, series_id: int, field: str, delta: int) -> Optional[int]:
        column = self.counter_column(field)
        with self._cursor(f"{field} adjustment") as cursor:
            # The UPDATE opens a write transaction; the SELECT below runs
            # inside it, so no other writer can interleave before commit.
            cursor.execute(
                f"UPDATE series SET {column} = {column} + ? WHERE id = ?",
                (delta, series_id),
            )
            if cursor.rowcount == 0:
                return None
            row = cursor.execute(
                f"SELECT {column} FROM series WHERE id = ?",
                (series_id,),
            ).fetchone()
        return row[column]

    @staticmethod
    def _row_to_series(row: sqlite3.Row) -> SeriesRead:
        """Convert a database row to a SeriesRead schema instance."""
        return SeriesRead(
            id=row["id"],
            title=row["title"],
            status=row["status"],
            last_episode_watched=row["last_episode_watched"],
            total_episodes=row["total_episodes"],
            ranking=row["ranking"],
        )
