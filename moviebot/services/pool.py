"""Recommendation pool manager.

Keeps a per-genre pool of movies the user has not seen yet, topping it up
from the catalog when it runs low, and hands out a small random batch that is
recorded in the ledger so it is never sent to the same user again.

Strategy for one ``recommend`` call:
1. Compute the eligible movies (in genre, not yet sent to the user)
2. If fewer than the low-water mark, fetch catalog pages 1..max_pages in
   order, saving each page before re-checking; stop once the high-water mark
   is reached
3. Shuffle the eligible movies uniformly and take the first ``k``
4. Record the picks in the ledger before they are delivered
"""

import asyncio
import random
from dataclasses import dataclass

from moviebot.constants import (
    DEFAULT_RECOMMENDATION_COUNT,
    POOL_HIGH_WATER_MARK,
    POOL_LOW_WATER_MARK,
    POOL_MAX_PAGES,
)
from moviebot.exceptions import PersistenceFailure
from moviebot.models.movie import Genre, SavedMovie
from moviebot.services.genres import GenreDirectory
from moviebot.services.tmdb import TMDBCatalog
from moviebot.storage.movies import MovieStore
from moviebot.storage.recommendations import RecommendationLedger
from moviebot.utils.logging import get_logger, LogContext

logger = get_logger(__name__)


@dataclass
class RecommendationBatch:
    """Movies picked for one genre selection."""

    genre: Genre
    movies: list[SavedMovie]

    @property
    def is_empty(self) -> bool:
        return not self.movies


class PoolManager:
    """Selects unseen movies for a user and replenishes the local pool.

    Calls to ``recommend`` are serialized so that two overlapping requests
    cannot pick the same movie for a user before either is recorded.
    """

    def __init__(
        self,
        catalog: TMDBCatalog,
        store: MovieStore,
        ledger: RecommendationLedger,
        genres: GenreDirectory | None = None,
        rng: random.Random | None = None,
        low_water_mark: int = POOL_LOW_WATER_MARK,
        high_water_mark: int = POOL_HIGH_WATER_MARK,
        max_pages: int = POOL_MAX_PAGES,
    ) -> None:
        self.catalog = catalog
        self.store = store
        self.ledger = ledger
        self.genres = genres
        self._rng = rng or random.Random()
        self.low_water_mark = low_water_mark
        self.high_water_mark = high_water_mark
        self.max_pages = max_pages
        self._lock = asyncio.Lock()

    def eligible_for(self, genre_id: int, user_id: int) -> list[SavedMovie]:
        """Stored movies in the genre that were never sent to the user."""
        return self.store.find_eligible(genre_id, self.ledger.seen_ids_for(user_id))

    async def recommend(
        self,
        genre_id: int,
        user_id: int,
        k: int = DEFAULT_RECOMMENDATION_COUNT,
    ) -> list[SavedMovie]:
        """Pick up to ``k`` unseen movies of a genre and record them as sent.

        Returns an empty list when no unseen movie is available, in which
        case nothing is recorded.

        A failed write of the store or ledger file is logged and the call
        carries on with the in-memory state, so the user still gets the
        movies and they still count as sent.

        Raises:
            CatalogUnavailable: If the catalog failed during replenishment.
                Pages saved before the failure stay saved; nothing is recorded.
        """
        if k < 1:
            raise ValueError(f"k must be at least 1, got {k}")

        log = LogContext(logger, user=user_id, genre=genre_id)

        async with self._lock:
            eligible = await self._replenish(genre_id, user_id, log)
            if not eligible:
                log.info("No unseen movies available")
                return []

            selected = self._select(eligible, k)
            try:
                self.ledger.record_batch([movie.id for movie in selected], user_id)
            except PersistenceFailure:
                log.error("Ledger not saved, picks are kept in memory only")

        log.info(f"Recommended {len(selected)} movies out of {len(eligible)} eligible")
        return selected

    async def recommend_by_name(
        self,
        genre_name: str,
        user_id: int,
        k: int = DEFAULT_RECOMMENDATION_COUNT,
    ) -> RecommendationBatch:
        """Recommend movies for a genre chosen by its display name.

        Raises:
            InvalidGenreSelection: If the name is not a known genre
        """
        if self.genres is None:
            raise RuntimeError("PoolManager was created without a genre directory")

        genre = self.genres.resolve(genre_name)
        movies = await self.recommend(genre.id, user_id, k)
        return RecommendationBatch(genre=genre, movies=movies)

    async def _replenish(self, genre_id: int, user_id: int, log: LogContext) -> list[SavedMovie]:
        eligible = self.eligible_for(genre_id, user_id)
        if len(eligible) >= self.low_water_mark:
            return eligible

        log.info(f"Only {len(eligible)} eligible movies, fetching more from the catalog")

        for page in range(1, self.max_pages + 1):
            movies = await self.catalog.fetch_movies_by_genre(genre_id, page)
            try:
                inserted = self.store.upsert(movies)
            except PersistenceFailure:
                log.error(f"Page {page} not saved, movies are kept in memory only")
            else:
                log.debug(f"Page {page}: {inserted} new movies")
            eligible = self.eligible_for(genre_id, user_id)

            if len(eligible) >= self.high_water_mark:
                break

        return eligible

    def _select(self, eligible: list[SavedMovie], k: int) -> list[SavedMovie]:
        """Uniformly shuffle a copy of the candidates and take the first ``k``."""
        candidates = list(eligible)
        self._rng.shuffle(candidates)
        return candidates[: min(k, len(candidates))]
