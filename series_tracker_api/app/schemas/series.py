"""
Pydantic models for series data.

``SeriesBase`` holds the mutable fields shared by every payload.
``SeriesCreate`` and ``SeriesUpdate`` are request bodies for creation
and full replacement, ``SeriesRead`` adds the ``id`` for responses.
Attributes are snake_case in Python and camelCase on the wire; request
bodies accept only the camelCase names.
"""

from pydantic import BaseModel, Field

# Statuses clients are expected to use.  They are documented but not
# enforced: any non-empty string is accepted.
RECOMMENDED_STATUSES = ("Plan to Watch", "Watching", "Completed", "Dropped")


# Bounds of a signed 64-bit integer, the widest value SQLite stores.
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def is_valid_title(title: str) -> bool:
    """A series title is valid when it is non-empty."""
    return bool(title)


class SeriesBase(BaseModel):
    title: str = Field("", examples=["Attack on Titan"])
    status: str = Field("", examples=["Watching"])
    last_episode_watched: int = Field(0, ge=0, le=INT64_MAX, alias="lastEpisodeWatched", examples=[10])
    total_episodes: int = Field(0, ge=0, le=INT64_MAX, alias="totalEpisodes", examples=[24])
    ranking: int = Field(0, ge=INT64_MIN, le=INT64_MAX, examples=[8])


class SeriesCreate(SeriesBase):
    """Schema for creating a series.

    The title is required and must not be empty; the service enforces
    this so that a missing title and an empty one produce the same
    error.  An ``id`` in the body is ignored.
    """


class SeriesUpdate(SeriesBase):
    """Schema for replacing every mutable field of a series.

    Omitted fields fall back to their zero values, so a replace always
    overwrites the whole record.
    """


class SeriesRead(SeriesBase):
    """Schema for reading a series from the API."""

    id: int = Field(..., examples=[1])

    model_config = {
        "populate_by_name": True,
        "from_attributes": True,
    }


class StatusUpdate(BaseModel):
    """Body of the partial status update."""

    status: str = Field("", examples=["Completed"])


class ErrorResponse(BaseModel):
    """Body returned with every error status code."""

    message: str = Field(..., examples=["Series 1 not found"])
