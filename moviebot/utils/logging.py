"""Log setup for the bot process and per-request log prefixes."""

import logging
import sys

from moviebot.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Libraries that log every HTTP request or polling cycle at INFO
_CHATTY_LOGGERS = ("httpx", "httpcore", "telegram", "apscheduler")


def setup_logging(level: str | None = None) -> None:
    """Send all logs to stdout.

    Without an explicit ``level`` the LOG_LEVEL setting is used, then INFO in
    production and DEBUG anywhere else.
    """
    settings = get_settings()
    level = level or settings.log_level or ("INFO" if settings.is_production else "DEBUG")

    logging.basicConfig(
        level=getattr(logging, level),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class LogContext:
    """Logger wrapper that tags each line, e.g. ``[chat=42] [genre=Ação] Sent 3 movies``."""

    def __init__(self, logger: logging.Logger, **tags: object) -> None:
        self.logger = logger
        self.prefix = " ".join(f"[{key}={value}]" for key, value in tags.items())

    def _tagged(self, msg: str) -> str:
        return f"{self.prefix} {msg}" if self.prefix else msg

    def debug(self, msg: str, *args, **kwargs) -> None:
        self.logger.debug(self._tagged(msg), *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self.logger.info(self._tagged(msg), *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self.logger.error(self._tagged(msg), *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs) -> None:
        """Like ``error`` but with the active traceback attached."""
        self.logger.exception(self._tagged(msg), *args, **kwargs)
