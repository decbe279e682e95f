"""Pytest configuration and fixtures."""

import random
from pathlib import Path

import pytest

from factories import FakeCatalog
from moviebot.services.genres import GenreDirectory
from moviebot.services.pool import PoolManager
from moviebot.storage.movies import MovieStore
from moviebot.storage.recommendations import RecommendationLedger


@pytest.fixture
def movies_path(tmp_path: Path) -> Path:
    return tmp_path / "filmes.json"


@pytest.fixture
def ledger_path(tmp_path: Path) -> Path:
    return tmp_path / "recomendados.json"


@pytest.fixture
def store(movies_path: Path) -> MovieStore:
    """An empty, loaded movie store backed by a temp file."""
    store = MovieStore(movies_path)
    store.load()
    return store


@pytest.fixture
def ledger(ledger_path: Path) -> RecommendationLedger:
    """An empty, loaded recommendation ledger backed by a temp file."""
    ledger = RecommendationLedger(ledger_path)
    ledger.load()
    return ledger


@pytest.fixture
def catalog() -> FakeCatalog:
    return FakeCatalog()


@pytest.fixture
def genres(catalog: FakeCatalog) -> GenreDirectory:
    return GenreDirectory(catalog)  # type: ignore[arg-type]


@pytest.fixture
def pool(
    catalog: FakeCatalog,
    store: MovieStore,
    ledger: RecommendationLedger,
    genres: GenreDirectory,
) -> PoolManager:
    """Pool manager wired to the fake catalog with a seeded RNG."""
    return PoolManager(
        catalog,  # type: ignore[arg-type]
        store,
        ledger,
        genres=genres,
        rng=random.Random(1234),
    )
