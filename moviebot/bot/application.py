"""Telegram application wiring."""

from telegram.ext import Application, ApplicationBuilder, CommandHandler, MessageHandler, filters

from moviebot.bot.handlers import (
    GENRES_KEY,
    LOCALE_KEY,
    PER_REQUEST_KEY,
    POOL_KEY,
    handle_text,
    on_error,
    start,
)
from moviebot.config import Settings
from moviebot.exceptions import CatalogUnavailable
from moviebot.services.genres import GenreDirectory
from moviebot.services.pool import PoolManager
from moviebot.utils.http_client import close_tmdb_client
from moviebot.utils.logging import get_logger

logger = get_logger(__name__)


async def _post_init(application: Application) -> None:
    """Load the genre taxonomy before polling starts."""
    genres: GenreDirectory = application.bot_data[GENRES_KEY]
    try:
        await genres.refresh()
    except CatalogUnavailable as e:
        # Retried lazily on the next incoming message
        logger.warning(f"Could not load genres at startup: {e}")


async def _post_shutdown(application: Application) -> None:
    await close_tmdb_client()


def build_application(
    settings: Settings,
    pool: PoolManager,
    genres: GenreDirectory,
) -> Application:
    """Build the polling application with handlers and shared state."""
    application = (
        ApplicationBuilder()
        .token(settings.telegram_bot_token)
        .post_init(_post_init)
        .post_shutdown(_post_shutdown)
        .build()
    )
    application.bot_data.update(
        {
            POOL_KEY: pool,
            GENRES_KEY: genres,
            LOCALE_KEY: settings.bot_locale,
            PER_REQUEST_KEY: settings.recommendations_per_request,
        }
    )

    application.add_handler(CommandHandler("start", start))
    application.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, handle_text))
    application.add_error_handler(on_error)
    return application
