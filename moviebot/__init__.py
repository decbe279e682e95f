"""Telegram bot that recommends unseen movies by genre."""

__version__ = "0.1.0"
