"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), a cursor context manager that commits on success
and translates driver failures into ``StorageError`` (``get_cursor``),
and ``init_db`` which applies migrations on application start.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .errors import StorageError

logger = logging.getLogger(__name__)

MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        -- AUTOINCREMENT guarantees ids of deleted series are never reused.
        CREATE TABLE IF NOT EXISTS series (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL,
            status TEXT NOT NULL DEFAULT '',
            last_episode_watched INTEGER NOT NULL DEFAULT 0,
            total_episodes INTEGER NOT NULL DEFAULT 0,
            ranking INTEGER NOT NULL DEFAULT 0
        );
        """,
    ),
]


def get_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths are used as is; relative ones are resolved against
    the current working directory.
    """
    if os.path.isabs(database_url):
        return database_url
    return str(Path(database_url).resolve())


def get_connection(db_path: str, timeout: float = 5.0) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    ``timeout`` is how long a writer waits for a competing writer's
    lock before giving up with ``database is locked``.
    """
    conn = sqlite3.connect(db_path, timeout=timeout)
    # Return rows as dict-like objects keyed by column name
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor(db_path: str, timeout: float = 5.0, operation: str = "query") -> Iterator[sqlite3.Cursor]:
    """Yield a cursor, commit on success and always close the connection.

    Any ``sqlite3.Error`` raised while connecting, inside the block or
    on commit is re-raised as ``StorageError``; uncommitted work is
    discarded when the connection closes.
    """
    try:
        conn = get_connection(db_path, timeout)
    except sqlite3.Error as exc:
        logger.error("Could not open database %s: %s", db_path, exc)
        raise StorageError(f"Storage unavailable during {operation}") from exc
    try:
        yield conn.cursor()
        conn.commit()
    except sqlite3.Error as exc:
        logger.error("Database error during %s: %s", operation, exc)
        raise StorageError(f"Storage failure during {operation}") from exc
    finally:
        conn.close()


def init_db(db_path: str, timeout: float = 5.0) -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any new migrations defined in
    ``MIGRATIONS``.  If you add a new migration, append it with an
    incremented version number.
    """
    with get_cursor(db_path, timeout, operation="migration") as cursor:
        # WAL lets readers proceed while a counter update holds the write lock.
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                logger.info("Applied migration %s", version)
                current_version = version
