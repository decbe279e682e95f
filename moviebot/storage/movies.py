"""Local store of every movie ever fetched from the catalog."""

from collections.abc import Iterable, Iterator
from datetime import UTC, datetime
from pathlib import Path

from moviebot.models.movie import Movie, SavedMovie
from moviebot.storage.base import JsonFile
from moviebot.utils.logging import get_logger

logger = get_logger(__name__)


class MovieStore:
    """Append-only collection of saved movies keyed by catalog id.

    Usage:
        store = MovieStore(Path("filmes.json"))
        store.load()

        inserted = store.upsert(movies)
        eligible = store.find_eligible(genre_id=28, excluded_movie_ids={550, 680})
    """

    def __init__(self, path: Path) -> None:
        self._file: JsonFile[SavedMovie] = JsonFile(path, SavedMovie)
        self._movies: list[SavedMovie] = []
        self._ids: set[int] = set()

    @property
    def path(self) -> Path:
        return self._file.path

    def load(self) -> None:
        """Load saved movies from disk, bootstrapping an empty file if needed."""
        self._movies = []
        self._ids = set()
        for movie in self._file.load_or_bootstrap():
            # Files written by hand or by older versions may repeat an id
            if movie.id in self._ids:
                continue
            self._movies.append(movie)
            self._ids.add(movie.id)

    def save(self) -> None:
        self._file.write(self._movies)

    def upsert(self, movies: Iterable[Movie]) -> int:
        """Save movies not stored yet and return how many were inserted.

        Movies whose id is already stored are skipped, keeping the first copy
        and its ``saved_at`` untouched. The file is only rewritten when at
        least one movie was inserted.

        Raises:
            PersistenceFailure: If the store could not be written
        """
        now = datetime.now(UTC)
        new_movies: list[SavedMovie] = []

        for movie in movies:
            if movie.id in self._ids:
                continue
            new_movies.append(SavedMovie.stamp(movie, now))
            self._ids.add(movie.id)

        if not new_movies:
            return 0

        self._movies.extend(new_movies)
        self.save()
        logger.info(f"{len(new_movies)} new movies saved to {self.path.name}")
        return len(new_movies)

    def find_eligible(self, genre_id: int, excluded_movie_ids: set[int]) -> list[SavedMovie]:
        """Stored movies in the genre whose id is not excluded, in insertion order."""
        return [
            movie
            for movie in self._movies
            if movie.has_genre(genre_id) and movie.id not in excluded_movie_ids
        ]

    def get(self, movie_id: int) -> SavedMovie | None:
        for movie in self._movies:
            if movie.id == movie_id:
                return movie
        return None

    def __contains__(self, movie_id: object) -> bool:
        return movie_id in self._ids

    def __iter__(self) -> Iterator[SavedMovie]:
        return iter(self._movies)

    def __len__(self) -> int:
        return len(self._movies)
