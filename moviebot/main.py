"""Bot entrypoint: builds the object graph once and starts polling."""

from moviebot.bot import build_application
from moviebot.config import get_settings
from moviebot.services.genres import GenreDirectory
from moviebot.services.pool import PoolManager
from moviebot.services.tmdb import TMDBCatalog
from moviebot.storage.movies import MovieStore
from moviebot.storage.recommendations import RecommendationLedger
from moviebot.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def main() -> None:
    settings = get_settings()
    setup_logging()
    logger.info("Starting bot...")

    store = MovieStore(settings.movies_path)
    store.load()
    ledger = RecommendationLedger(settings.recommendations_path)
    ledger.load()

    catalog = TMDBCatalog(api_key=settings.tmdb_api_key, language=settings.tmdb_language)
    genres = GenreDirectory(catalog)
    pool = PoolManager(catalog, store, ledger, genres=genres)

    logger.info(f"Saved movies: {len(store)}")
    logger.info(f"Recommendations made: {len(ledger)}")

    application = build_application(settings, pool, genres)
    application.run_polling()


if __name__ == "__main__":
    main()
