"""Root logger setup for the travelsync CLI."""

from __future__ import annotations

import logging
import os
from typing import Final

from .errors import ConfigurationError

LOG_LEVEL_ENV: Final[str] = "TRAVELSYNC_LOG_LEVEL"
LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Engine echo is only useful when the import itself runs at DEBUG.
_CHATTY_LOGGERS: Final[tuple[str, ...]] = ("sqlalchemy.engine", "alembic")


def parse_log_level(value: str) -> int:
    """Map a level name (``debug``, ``WARNING``) or number to a logging level."""

    text = value.strip()
    if text.isdigit():
        return int(text)
    level = logging.getLevelNamesMapping().get(text.upper())
    if level is None:
        raise ConfigurationError(f"Unknown log level {value!r}")
    return level


def get_log_level(default: int = logging.INFO) -> int:
    raw = os.getenv(LOG_LEVEL_ENV)
    if raw is None or not raw.strip():
        return default
    try:
        return parse_log_level(raw)
    except ConfigurationError as exc:
        raise ConfigurationError(f"{LOG_LEVEL_ENV}: {exc}") from exc


def configure_logging(*, level: int | None = None, force: bool = False) -> int:
    """Initialise the root logger and return the level it was set to.

    ``level`` wins over ``TRAVELSYNC_LOG_LEVEL``, which wins over INFO. Database
    and migration loggers stay at WARNING unless the import runs at DEBUG.
    """

    resolved = get_log_level() if level is None else level
    logging.basicConfig(
        level=resolved,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        force=force,
    )
    chatty_level = resolved if resolved <= logging.DEBUG else max(resolved, logging.WARNING)
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(chatty_level)
    return resolved
