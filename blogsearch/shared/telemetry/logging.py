"""Logging configuration for the application."""

import logging
import sys

from blogsearch.core.config import get_settings
from blogsearch.shared.context import RequestIdLogFilter

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"

# Each keystroke-driven search issues Firestore calls; their request lines
# only show up at DEBUG.
_HTTP_CLIENT_LOGGERS = ("httpx", "httpcore", "google.auth")


def _level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging() -> None:
    """Configure application-wide logging.

    Level is settings.log_level, or DEBUG when settings.debug is True.
    Output goes to stdout, each line tagged with the current request id.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else _level(settings.log_level)

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIdLogFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.basicConfig(level=log_level, handlers=[handler])

    for name in _HTTP_CLIENT_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))
