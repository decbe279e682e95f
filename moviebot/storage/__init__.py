"""JSON-backed storage for saved movies and the recommendation ledger."""

from moviebot.storage.movies import MovieStore
from moviebot.storage.recommendations import RecommendationLedger

__all__ = ["MovieStore", "RecommendationLedger"]
