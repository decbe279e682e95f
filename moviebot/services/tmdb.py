"""TMDB API integration for the genre taxonomy and genre discovery pages."""

import asyncio
from typing import Any

import httpx
from pydantic import ValidationError

from moviebot.constants import (
    DISCOVER_MIN_VOTE_COUNT,
    DISCOVER_SORT_BY,
    TMDB_API_BASE_URL,
)
from moviebot.exceptions import CatalogUnavailable
from moviebot.models.movie import Genre, Movie
from moviebot.utils.http_client import get_tmdb_client
from moviebot.utils.logging import get_logger

logger = get_logger(__name__)


class TMDBCatalog:
    """Read-only client for the TMDB movie catalog.

    Every failure (network error, non-2xx status, malformed payload) is
    raised as ``CatalogUnavailable``; nothing is retried.

    Usage:
        catalog = TMDBCatalog(api_key="...", language="pt-BR")
        genres = await catalog.fetch_genre_taxonomy()
        movies = await catalog.fetch_movies_by_genre(28, page=1)
    """

    def __init__(
        self,
        api_key: str,
        language: str = "pt-BR",
        client: httpx.AsyncClient | None = None,
        base_url: str = TMDB_API_BASE_URL,
    ) -> None:
        self.api_key = api_key
        self.language = language
        self.base_url = base_url.rstrip("/")
        self._client = client
        # Support both API key v3 and Bearer token
        if api_key.startswith("eyJ"):
            # Bearer token (API Read Access Token)
            self.headers = {
                "Authorization": f"Bearer {api_key}",
                "Accept": "application/json",
            }
            self.use_api_key_param = False
        else:
            # API key v3 - pass as query parameter
            self.headers = {"Accept": "application/json"}
            self.use_api_key_param = True

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is not None:
            return self._client
        return get_tmdb_client()

    def _params(self, **params: Any) -> dict[str, str]:
        """Build query params with locale and, for v3 keys, the API key."""
        query = {"language": self.language}
        query.update({k: str(v) for k, v in params.items()})
        if self.use_api_key_param:
            query["api_key"] = self.api_key
        return query

    async def _get_json(self, path: str, **params: Any) -> dict[str, Any]:
        """GET a catalog endpoint and decode its JSON object.

        Raises:
            CatalogUnavailable: On transport errors, error statuses or bad JSON
        """
        try:
            response = await self.client.get(
                f"{self.base_url}{path}",
                params=self._params(**params),
                headers=self.headers,
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise CatalogUnavailable(
                f"TMDB {path} returned {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise CatalogUnavailable(f"TMDB {path} request failed: {e}") from e
        except ValueError as e:
            raise CatalogUnavailable(f"TMDB {path} returned invalid JSON") from e

        if not isinstance(data, dict):
            raise CatalogUnavailable(f"TMDB {path} returned an unexpected payload")
        return data

    async def fetch_genre_taxonomy(self) -> list[Genre]:
        """Get the official movie genres, in catalog order."""
        data = await self._get_json("/genre/movie/list")
        try:
            return [Genre.model_validate(genre) for genre in data["genres"]]
        except (KeyError, TypeError, ValidationError) as e:
            raise CatalogUnavailable("TMDB genre list is malformed") from e

    async def fetch_movies_by_genre(self, genre_id: int, page: int = 1) -> list[Movie]:
        """Discover one page of well-rated movies in a genre, with full details.

        The detail lookups for the page run concurrently. If any of them
        fails the whole page fails; partial pages are never returned.

        Args:
            genre_id: TMDB genre id
            page: Page number (1-based)

        Returns:
            Movies of the page, in no particular order
        """
        params = {
            "with_genres": genre_id,
            "sort_by": DISCOVER_SORT_BY,
            "vote_count.gte": DISCOVER_MIN_VOTE_COUNT,
            "page": page,
        }
        data = await self._get_json("/discover/movie", **params)
        try:
            summaries = list(data["results"])
        except (KeyError, TypeError) as e:
            raise CatalogUnavailable("TMDB discover page is malformed") from e

        logger.debug(f"Discover genre={genre_id} page={page}: {len(summaries)} results")
        return list(await asyncio.gather(*(self._fetch_detail(s) for s in summaries)))

    async def _fetch_detail(self, summary: dict[str, Any]) -> Movie:
        """Fetch a movie's details and merge in the summary's genre ids."""
        try:
            movie_id = int(summary["id"])
        except (KeyError, TypeError, ValueError) as e:
            raise CatalogUnavailable("TMDB discover result without an id") from e

        detail = await self._get_json(f"/movie/{movie_id}")
        try:
            return Movie.from_catalog(detail, summary.get("genre_ids"))
        except ValidationError as e:
            raise CatalogUnavailable(f"TMDB movie {movie_id} is malformed") from e
