"""Telegram chat gateway."""

from moviebot.bot.application import build_application

__all__ = ["build_application"]
