"""Catalog access and the recommendation pool."""

from moviebot.services.genres import GenreDirectory
from moviebot.services.pool import PoolManager, RecommendationBatch
from moviebot.services.tmdb import TMDBCatalog

__all__ = ["GenreDirectory", "PoolManager", "RecommendationBatch", "TMDBCatalog"]
