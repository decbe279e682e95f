"""Telegram update handlers.

Any text that exactly matches a genre name is a genre selection; everything
else gets the genre menu back.
"""

from telegram import Bot, Update
from telegram.constants import ParseMode
from telegram.error import TelegramError
from telegram.ext import ContextTypes

from moviebot.bot.messages import format_caption, genre_keyboard, poster_url
from moviebot.exceptions import CatalogUnavailable, InvalidGenreSelection
from moviebot.i18n import t
from moviebot.models.movie import SavedMovie
from moviebot.services.genres import GenreDirectory
from moviebot.services.pool import PoolManager
from moviebot.utils.logging import get_logger, LogContext

logger = get_logger(__name__)

# Keys of the shared objects stored in Application.bot_data
POOL_KEY = "pool"
GENRES_KEY = "genres"
LOCALE_KEY = "locale"
PER_REQUEST_KEY = "recommendations_per_request"


def _pool(context: ContextTypes.DEFAULT_TYPE) -> PoolManager:
    return context.bot_data[POOL_KEY]


def _genres(context: ContextTypes.DEFAULT_TYPE) -> GenreDirectory:
    return context.bot_data[GENRES_KEY]


def _locale(context: ContextTypes.DEFAULT_TYPE) -> str:
    return context.bot_data[LOCALE_KEY]


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start by showing the genre menu."""
    if update.effective_chat is None:
        return
    chat_id = update.effective_chat.id
    logger.info(f"/start from chat {chat_id}")
    genres = await _load_genres(context, chat_id)
    if genres is not None:
        await _show_menu(context, chat_id, genres)


async def handle_text(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Dispatch a text message to the recommendation flow or the menu."""
    if update.effective_chat is None or update.message is None:
        return

    chat_id = update.effective_chat.id
    text = (update.message.text or "").strip()

    genres = await _load_genres(context, chat_id)
    if genres is None:
        return

    if text in genres:
        await send_recommendations(context, chat_id, text)
    else:
        await _show_menu(context, chat_id, genres)


async def _load_genres(
    context: ContextTypes.DEFAULT_TYPE, chat_id: int
) -> GenreDirectory | None:
    """Make sure the genre map is built, or tell the chat it failed.

    An empty taxonomy counts as a failure, since there is nothing to offer.
    """
    genres = _genres(context)
    try:
        await genres.ensure_loaded()
    except CatalogUnavailable:
        logger.exception(f"Could not load genres for chat {chat_id}")
    else:
        if len(genres):
            return genres
        logger.error(f"Catalog returned no genres for chat {chat_id}")

    await context.bot.send_message(chat_id, t("recommendations.error", _locale(context)))
    return None


async def _show_menu(
    context: ContextTypes.DEFAULT_TYPE, chat_id: int, genres: GenreDirectory
) -> None:
    await context.bot.send_message(
        chat_id,
        t("menu.prompt", _locale(context), count=context.bot_data[PER_REQUEST_KEY]),
        reply_markup=genre_keyboard(genres.names),
    )


async def send_recommendations(
    context: ContextTypes.DEFAULT_TYPE,
    chat_id: int,
    genre_name: str,
) -> None:
    """Pick unseen movies of the genre for the chat and send one card each."""
    locale = _locale(context)
    log = LogContext(logger, chat=chat_id, genre=genre_name)

    try:
        batch = await _pool(context).recommend_by_name(
            genre_name, chat_id, k=context.bot_data[PER_REQUEST_KEY]
        )
    except InvalidGenreSelection:
        await _show_menu(context, chat_id, _genres(context))
        return
    except CatalogUnavailable:
        log.exception("Failed to pick recommendations")
        await context.bot.send_message(chat_id, t("recommendations.error", locale))
        return

    if batch.is_empty:
        await context.bot.send_message(
            chat_id, t("recommendations.none", locale, genre=batch.genre.name)
        )
        return

    # Movies are already recorded as sent; a delivery failure does not undo that
    try:
        for movie in batch.movies:
            await send_movie(context.bot, chat_id, movie, locale)
    except TelegramError:
        log.exception("Failed to deliver recommendations")
        await context.bot.send_message(chat_id, t("recommendations.error", locale))
        return

    log.info(f"Sent {len(batch.movies)} movies")


async def send_movie(bot: Bot, chat_id: int, movie: SavedMovie, locale: str) -> None:
    """Send a movie card: the poster with a caption, or plain text without a poster."""
    caption = format_caption(movie, locale)
    photo = poster_url(movie)

    if photo is None:
        await bot.send_message(chat_id, caption, parse_mode=ParseMode.MARKDOWN_V2)
    else:
        await bot.send_photo(chat_id, photo, caption=caption, parse_mode=ParseMode.MARKDOWN_V2)


async def on_error(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    logger.error("Unhandled telegram error", exc_info=context.error)
