"""
Error taxonomy shared by the storage and service layers.

Services raise these exceptions; only the API layer decides which HTTP
status code each one becomes (see ``api/errors.py``).
"""


class SeriesTrackerError(Exception):
    """Base class for all expected application errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(SeriesTrackerError):
    """The caller supplied a missing or empty required field."""


class SeriesNotFoundError(SeriesTrackerError):
    """The referenced series does not exist."""

    def __init__(self, series_id: int) -> None:
        super().__init__(f"Series {series_id} not found")
        self.series_id = series_id


class StorageError(SeriesTrackerError):
    """The persistence backend failed (I/O, locking, constraints)."""
