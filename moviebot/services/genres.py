"""In-memory directory of catalog genres, keyed by display name."""

from moviebot.exceptions import InvalidGenreSelection
from moviebot.models.movie import Genre
from moviebot.services.tmdb import TMDBCatalog
from moviebot.utils.logging import get_logger

logger = get_logger(__name__)


class GenreDirectory:
    """Maps genre names to genres for the lifetime of the process.

    Genre names double as the bot's menu entries and as input validation: a
    message is a genre selection iff its text is one of the names here.
    """

    def __init__(self, catalog: TMDBCatalog) -> None:
        self._catalog = catalog
        self._by_name: dict[str, Genre] = {}

    async def refresh(self) -> list[Genre]:
        """Rebuild the mapping from the catalog taxonomy.

        Raises:
            CatalogUnavailable: If the taxonomy could not be fetched
        """
        genres = await self._catalog.fetch_genre_taxonomy()
        self._by_name = {genre.name: genre for genre in genres}
        logger.info(f"Loaded {len(self._by_name)} genres")
        return genres

    async def ensure_loaded(self) -> None:
        """Fetch the taxonomy only if no genre is known yet."""
        if not self._by_name:
            await self.refresh()

    def resolve(self, name: str) -> Genre:
        """Find a genre by its exact (trimmed) display name.

        Raises:
            InvalidGenreSelection: If no genre has this name
        """
        genre = self._by_name.get(name.strip())
        if genre is None:
            raise InvalidGenreSelection(name)
        return genre

    @property
    def names(self) -> list[str]:
        """Genre names in catalog order."""
        return list(self._by_name)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip() in self._by_name

    def __len__(self) -> int:
        return len(self._by_name)
