"""Catalog records: genres, fetched movies, and movies saved in the local store."""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class Genre(BaseModel):
    """A catalog-defined movie category."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str


class Movie(BaseModel):
    """Canonical movie record as returned by the catalog detail endpoint.

    Field names follow the TMDB wire format so that stored JSON files keep
    their TMDB shape. ``poster_path`` is relative to the image CDN.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    title: str
    overview: str = ""
    vote_average: float = 0.0
    release_date: str = ""
    poster_path: str | None = None
    runtime: int | None = None
    genre_ids: frozenset[int] = Field(default_factory=frozenset)

    @field_validator("overview", "release_date", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("genre_ids", mode="before")
    @classmethod
    def none_to_no_genres(cls, v: Any) -> Any:
        return frozenset() if v is None else v

    @field_serializer("genre_ids")
    def serialize_genre_ids(self, genre_ids: frozenset[int]) -> list[int]:
        return sorted(genre_ids)

    @classmethod
    def from_catalog(cls, detail: dict[str, Any], genre_ids: list[int] | None) -> "Movie":
        """Build a movie from a detail payload plus the genre ids of its summary.

        The detail endpoint returns full genre objects instead of ids, so the
        ids are taken from the discovery result that listed the movie.
        """
        return cls.model_validate({**detail, "genre_ids": genre_ids or []})

    def has_genre(self, genre_id: int) -> bool:
        return genre_id in self.genre_ids


class SavedMovie(Movie):
    """A movie persisted in the local store. Never mutated after creation."""

    saved_at: datetime

    @classmethod
    def stamp(cls, movie: Movie, now: datetime | None = None) -> "SavedMovie":
        """Create the stored copy of a catalog movie."""
        fields = movie.model_dump(exclude={"saved_at"})
        return cls(**fields, saved_at=now or datetime.now(UTC))

    def __repr__(self) -> str:
        return f"<SavedMovie(id={self.id}, title={self.title!r})>"
