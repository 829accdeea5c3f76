import uuid
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from constants.omdb import NOT_AVAILABLE
from core.validation import (
    MAX_POSTER_URL_LENGTH,
    MAX_TITLE_LENGTH,
    is_valid_imdb_id,
    is_valid_poster_url,
    is_valid_year,
)

MediaType = Literal["movie", "series", "episode"]
WatchStatus = Literal["watching", "completed", "plan_to_watch", "on_hold", "dropped"]


class WatchlistEntryCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    imdb_id: str
    title: str = Field(min_length=1, max_length=MAX_TITLE_LENGTH)
    year: str | None = None
    poster_url: str | None = Field(default=None, max_length=MAX_POSTER_URL_LENGTH)
    media_type: MediaType

    @field_validator("imdb_id")
    @classmethod
    def _check_imdb_id(cls, value: str) -> str:
        if not is_valid_imdb_id(value):
            raise ValueError("Invalid IMDB ID format")
        return value

    @field_validator("year", "poster_url", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and value.strip() in ("", NOT_AVAILABLE):
            return None
        return value

    @field_validator("year")
    @classmethod
    def _check_year(cls, value: str | None) -> str | None:
        if value is not None and not is_valid_year(value):
            raise ValueError("Year must look like YYYY or YYYY-YYYY")
        return value

    @field_validator("poster_url")
    @classmethod
    def _check_poster_url(cls, value: str | None) -> str | None:
        if value is not None and not is_valid_poster_url(value):
            raise ValueError("Poster must be an http(s) URL")
        return value

    @classmethod
    def from_omdb(cls, record: dict) -> "WatchlistEntryCreate":
        """Build an entry from an OMDb search result or detail record."""
        return cls(
            imdb_id=record.get("imdbID", ""),
            title=record.get("Title", ""),
            year=record.get("Year"),
            poster_url=record.get("Poster"),
            media_type=record.get("Type", ""),
        )


class WatchlistEntryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    imdb_id: str
    title: str
    year: str | None
    poster_url: str | None
    media_type: str
    rating: int | None
    status: str
    created_at: datetime


class RatingUpdate(BaseModel):
    rating: int | None = Field(default=None, ge=0, le=5)

    @field_validator("rating")
    @classmethod
    def _zero_means_unrated(cls, value: int | None) -> int | None:
        return value or None


class StatusUpdate(BaseModel):
    status: WatchStatus


class MutationResult(BaseModel):
    """Outcome of a watchlist write, shaped for a user-facing notice."""

    code: Literal["added", "duplicate", "removed", "updated", "not_found", "failed"]
    message: str
    entry: WatchlistEntryRead | None = None

    @computed_field
    @property
    def level(self) -> str:
        if self.code == "duplicate":
            return "info"
        if self.code in ("not_found", "failed"):
            return "error"
        return "success"

    @property
    def ok(self) -> bool:
        return self.level != "error"


class StatusCount(BaseModel):
    status: str
    label: str
    count: int


class WatchlistStats(BaseModel):
    total: int
    movies: int
    series: int
    rated: int
    avg_rating: float | None
    by_status: dict[str, int]
    status_breakdown: list[StatusCount]
    rating_distribution: dict[int, int]


class ProfileRead(BaseModel):
    id: str
    email: str | None
    member_since: str | None
    summary: WatchlistStats
