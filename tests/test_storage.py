"""Tests for the JSON-backed movie store and recommendation ledger."""

import json
from datetime import datetime
from pathlib import Path
from unittest.mock import patch

import pytest

from factories import make_movie
from moviebot.exceptions import PersistenceFailure
from moviebot.storage.base import JsonFile
from moviebot.storage.movies import MovieStore
from moviebot.storage.recommendations import RecommendationLedger


class TestBootstrap:
    """Tests for loading missing or unreadable files."""

    def test_missing_file_creates_empty_store(self, movies_path: Path):
        """A missing file is created empty on load."""
        store = MovieStore(movies_path)
        store.load()

        assert len(store) == 0
        assert json.loads(movies_path.read_text()) == []

    def test_corrupt_file_is_replaced(self, movies_path: Path):
        """Unreadable JSON starts an empty store instead of failing."""
        movies_path.write_text("{not json")

        store = MovieStore(movies_path)
        store.load()

        assert len(store) == 0
        assert json.loads(movies_path.read_text()) == []

    def test_missing_ledger_creates_empty_file(self, ledger_path: Path):
        """The ledger bootstraps the same way as the store."""
        ledger = RecommendationLedger(ledger_path)
        ledger.load()

        assert len(ledger) == 0
        assert json.loads(ledger_path.read_text()) == []

    def test_unwritable_location_is_not_fatal(self, tmp_path: Path):
        """If the bootstrap write fails, loading still succeeds in memory."""
        path = tmp_path / "occupied"
        path.mkdir()

        store = MovieStore(path)
        store.load()

        assert len(store) == 0

    def test_reads_tmdb_shaped_file(self, movies_path: Path):
        """Files with the TMDB field names and ISO timestamps load as-is."""
        movies_path.write_text(
            json.dumps(
                [
                    {
                        "id": 550,
                        "title": "Clube da Luta",
                        "overview": "Um homem deprimido...",
                        "vote_average": 8.4,
                        "release_date": "1999-10-15",
                        "poster_path": "/fight.jpg",
                        "runtime": 139,
                        "genre_ids": [18, 53],
                        "saved_at": "2024-05-01T12:00:00.000Z",
                        "budget": 63000000,
                    }
                ]
            )
        )

        store = MovieStore(movies_path)
        store.load()

        movie = store.get(550)
        assert movie is not None
        assert movie.genre_ids == frozenset({18, 53})
        assert movie.runtime == 139
        assert movie.saved_at.year == 2024


class TestMovieStoreUpsert:
    """Tests for MovieStore.upsert."""

    def test_inserts_new_movies(self, store: MovieStore):
        """New movies are saved and counted."""
        inserted = store.upsert([make_movie(1, 28), make_movie(2, 35)])

        assert inserted == 2
        assert len(store) == 2
        assert 1 in store and 2 in store

    def test_duplicate_keeps_first_copy(self, store: MovieStore):
        """Re-inserting an id leaves the first record and its saved_at untouched."""
        store.upsert([make_movie(1, 28, title="Original")])
        first = store.get(1)
        assert first is not None

        inserted = store.upsert([make_movie(1, 28, 35, title="Changed")])

        assert inserted == 0
        assert len(store) == 1
        kept = store.get(1)
        assert kept is not None
        assert kept.title == "Original"
        assert kept.saved_at == first.saved_at
        assert kept.genre_ids == frozenset({28})

    def test_dedups_within_one_batch(self, store: MovieStore):
        """Overlapping entries in the same batch are saved once."""
        inserted = store.upsert([make_movie(7, 28), make_movie(7, 28)])

        assert inserted == 1
        assert len(store) == 1

    def test_persists_after_insert(self, store: MovieStore, movies_path: Path):
        """Inserted movies survive a reload with all fields."""
        store.upsert([make_movie(3, 28, 12, poster_path="/abc.jpg", overview="Plot")])

        reloaded = MovieStore(movies_path)
        reloaded.load()

        movie = reloaded.get(3)
        assert movie is not None
        assert movie.poster_path == "/abc.jpg"
        assert movie.overview == "Plot"
        assert movie.genre_ids == frozenset({12, 28})
        assert isinstance(movie.saved_at, datetime)

    def test_no_write_when_nothing_inserted(self, store: MovieStore):
        """The file is not rewritten when every movie was already stored."""
        store.upsert([make_movie(1, 28)])

        with patch.object(JsonFile, "write") as write:
            assert store.upsert([make_movie(1, 28)]) == 0
            assert store.upsert([]) == 0

        write.assert_not_called()

    def test_write_failure_raises(self, tmp_path: Path):
        """A failed write raises PersistenceFailure but keeps the movie in memory."""
        path = tmp_path / "occupied"
        path.mkdir()
        store = MovieStore(path)
        store.load()

        with pytest.raises(PersistenceFailure):
            store.upsert([make_movie(1, 28)])

        assert 1 in store


class TestFindEligible:
    """Tests for MovieStore.find_eligible."""

    @pytest.fixture
    def stocked(self, store: MovieStore) -> MovieStore:
        store.upsert(
            [
                make_movie(1, 28),
                make_movie(2, 28, 35),
                make_movie(3, 35),
                make_movie(4, 18, 28),
                make_movie(5, 18),
                make_movie(6),
            ]
        )
        return store

    def test_filters_by_genre(self, stocked: MovieStore):
        """Only movies whose genre set contains the genre are returned."""
        assert [m.id for m in stocked.find_eligible(28, set())] == [1, 2, 4]
        assert [m.id for m in stocked.find_eligible(35, set())] == [2, 3]
        assert [m.id for m in stocked.find_eligible(18, set())] == [4, 5]

    def test_excludes_seen_ids(self, stocked: MovieStore):
        """Excluded ids are dropped even when the genre matches."""
        assert [m.id for m in stocked.find_eligible(28, {2, 3})] == [1, 4]

    def test_unknown_genre(self, stocked: MovieStore):
        """A genre no movie has yields nothing."""
        assert stocked.find_eligible(99, set()) == []


class TestRecommendationLedger:
    """Tests for RecommendationLedger."""

    def test_record_batch(self, ledger: RecommendationLedger):
        """Recorded pairs are reported as seen for that user only."""
        entries = ledger.record_batch([10, 11], user_id=1)

        assert len(entries) == 2
        assert ledger.has_seen(10, 1)
        assert ledger.has_seen(11, 1)
        assert not ledger.has_seen(10, 2)
        assert not ledger.has_seen(12, 1)
        assert ledger.seen_ids_for(1) == {10, 11}
        assert ledger.seen_ids_for(2) == set()

    def test_same_movie_for_different_users(self, ledger: RecommendationLedger):
        """A movie can be shown to several users."""
        ledger.record_batch([10], user_id=1)
        ledger.record_batch([10], user_id=2)

        assert len(ledger) == 2
        assert ledger.has_seen(10, 1) and ledger.has_seen(10, 2)

    def test_persists_and_reloads(self, ledger: RecommendationLedger, ledger_path: Path):
        """Entries round-trip through the JSON file with their timestamps."""
        ledger.record_batch([10, 11], user_id=1)

        data = json.loads(ledger_path.read_text())
        assert {entry["movie_id"] for entry in data} == {10, 11}
        assert all(entry["user_id"] == 1 for entry in data)
        assert all("recommended_at" in entry for entry in data)

        reloaded = RecommendationLedger(ledger_path)
        reloaded.load()
        assert len(reloaded) == 2
        assert reloaded.has_seen(11, 1)

    def test_empty_batch_is_noop(self, ledger: RecommendationLedger):
        """Recording nothing does not write."""
        with patch.object(JsonFile, "write") as write:
            assert ledger.record_batch([], user_id=1) == []

        write.assert_not_called()

    def test_seen_ids_is_a_copy(self, ledger: RecommendationLedger):
        """Mutating the returned set does not change the ledger."""
        ledger.record_batch([10], user_id=1)
        ledger.seen_ids_for(1).add(99)

        assert not ledger.has_seen(99, 1)
