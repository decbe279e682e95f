"""Durable ledger of which movies have been shown to which users."""

from collections import defaultdict
from collections.abc import Iterable, Iterator
from datetime import UTC, datetime
from pathlib import Path

from moviebot.models.recommendation import Recommendation
from moviebot.storage.base import JsonFile
from moviebot.utils.logging import get_logger

logger = get_logger(__name__)


class RecommendationLedger:
    """Records (movie, user) pairs already sent.

    The persisted list is the source of truth; a per-user index of movie ids
    is rebuilt on load and kept in step with every recorded batch.
    """

    def __init__(self, path: Path) -> None:
        self._file: JsonFile[Recommendation] = JsonFile(path, Recommendation)
        self._entries: list[Recommendation] = []
        self._seen: defaultdict[int, set[int]] = defaultdict(set)

    @property
    def path(self) -> Path:
        return self._file.path

    def load(self) -> None:
        """Load the ledger from disk, bootstrapping an empty file if needed."""
        self._entries = self._file.load_or_bootstrap()
        self._seen = defaultdict(set)
        for entry in self._entries:
            self._seen[entry.user_id].add(entry.movie_id)

    def save(self) -> None:
        self._file.write(self._entries)

    def has_seen(self, movie_id: int, user_id: int) -> bool:
        return movie_id in self._seen.get(user_id, ())

    def seen_ids_for(self, user_id: int) -> set[int]:
        """Ids of every movie already sent to the user (a copy)."""
        return set(self._seen.get(user_id, ()))

    def record_batch(self, movie_ids: Iterable[int], user_id: int) -> list[Recommendation]:
        """Append one entry per movie id for the user and persist the ledger.

        The entries stay in memory even if the write fails, so the movies are
        still treated as shown for the rest of the process lifetime.

        Raises:
            PersistenceFailure: If the ledger could not be written
        """
        now = datetime.now(UTC)
        entries = [
            Recommendation(movie_id=movie_id, user_id=user_id, recommended_at=now)
            for movie_id in movie_ids
        ]
        if not entries:
            return []

        self._entries.extend(entries)
        self._seen[user_id].update(entry.movie_id for entry in entries)
        self.save()
        logger.debug(f"Recorded {len(entries)} recommendations for user {user_id}")
        return entries

    def entries_for(self, user_id: int) -> list[Recommendation]:
        return [entry for entry in self._entries if entry.user_id == user_id]

    def __iter__(self) -> Iterator[Recommendation]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
