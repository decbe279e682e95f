"""Ledger entry recording that a movie was shown to a user."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field


class Recommendation(BaseModel):
    """A movie sent to a user.

    The ledger never holds two entries for the same (movie_id, user_id) pair
    written by the pool manager, but the model itself does not enforce it.
    """

    model_config = ConfigDict(frozen=True)

    movie_id: int
    user_id: int
    recommended_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    def __repr__(self) -> str:
        return f"<Recommendation(movie_id={self.movie_id}, user_id={self.user_id})>"
