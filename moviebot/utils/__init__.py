"""Utility modules for the movie bot."""

from moviebot.utils.http_client import close_tmdb_client, get_tmdb_client
from moviebot.utils.logging import get_logger, LogContext, setup_logging

__all__ = [
    # HTTP
    "close_tmdb_client",
    "get_tmdb_client",
    # Logging
    "get_logger",
    "LogContext",
    "setup_logging",
]
