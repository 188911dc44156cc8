"""Root logger setup for the command line."""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV_VAR = "DDRSCORES_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Third-party loggers that announce every request at INFO.
_CHATTY_LOGGERS = ("httpx", "hishel")


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Set up the root logger for one CLI run.

    Without an explicit ``level`` the ``DDRSCORES_LOG_LEVEL`` variable decides,
    falling back to INFO. Request chatter from the HTTP stack only shows up at
    DEBUG; the resilient client already logs each request there.
    """

    resolved = level if level is not None else _level_from_environment()
    logging.basicConfig(level=resolved, format=LOG_FORMAT, datefmt="%H:%M:%S", force=force)
    chatty_level = logging.NOTSET if resolved <= logging.DEBUG else logging.WARNING
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(chatty_level)


def _level_from_environment() -> int:
    raw = (os.getenv(LOG_LEVEL_ENV_VAR) or "").strip().upper()
    if not raw:
        return logging.INFO
    if raw.isdigit():
        return int(raw)
    resolved = logging.getLevelName(raw)
    return resolved if isinstance(resolved, int) else logging.INFO
