"""Rendering of genre menus and movie cards for Telegram.

Captions are sent as MarkdownV2, so every interpolated value goes through
``escape_markdown(..., version=2)``.
"""

from telegram import ReplyKeyboardMarkup
from telegram.helpers import escape_markdown

from moviebot.constants import TMDB_IMAGE_BASE_URL, TMDB_POSTER_SIZE
from moviebot.i18n import t
from moviebot.models.movie import SavedMovie

# Telegram rejects photo captions longer than 1024 characters
MAX_OVERVIEW_LENGTH = 700


def _md(value: object) -> str:
    return escape_markdown(str(value), version=2)


def poster_url(movie: SavedMovie) -> str | None:
    """Full CDN URL of the movie poster, if it has one."""
    if not movie.poster_path:
        return None
    return f"{TMDB_IMAGE_BASE_URL}/{TMDB_POSTER_SIZE}{movie.poster_path}"


def _truncate(text: str, limit: int = MAX_OVERVIEW_LENGTH) -> str:
    """Escape ``text`` and shorten it until the escaped form fits in ``limit``.

    Characters are escaped one at a time so an escape sequence is never split.
    """
    escaped = _md(text)
    if len(escaped) <= limit:
        return escaped

    pieces = []
    size = 1  # the ellipsis
    for char in text:
        piece = _md(char)
        if size + len(piece) > limit:
            break
        pieces.append(piece)
        size += len(piece)
    return "".join(pieces).rstrip() + "…"


def format_caption(movie: SavedMovie, locale: str) -> str:
    """MarkdownV2 caption with title, overview, rating, runtime and release date."""
    overview = _truncate(movie.overview) if movie.overview else _md(t("movie.no_overview", locale))
    runtime = movie.runtime if movie.runtime else t("movie.runtime_unknown", locale)
    release_date = movie.release_date or "-"

    return (
        f"🎬 *{_md(movie.title)}*\n\n"
        f"📝 {overview}\n"
        f"⭐️ {_md(t('movie.rating', locale))}: {_md(f'{movie.vote_average:g}')}\n"
        f"🕐 {_md(t('movie.runtime', locale))}: {_md(runtime)} {_md(t('movie.minutes', locale))}\n"
        f"📅 {_md(t('movie.release_date', locale))}: {_md(release_date)}"
    )


def genre_keyboard(genre_names: list[str]) -> ReplyKeyboardMarkup:
    """One-time keyboard with one genre per row."""
    return ReplyKeyboardMarkup(
        [[name] for name in genre_names],
        one_time_keyboard=True,
        resize_keyboard=True,
    )
