"""File logging for the TUI session.

The terminal is in raw mode while the editor runs, so records only go to a
rotating file under the platform log directory, never to stderr.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path

from platformdirs import user_log_dir

APP_NAME = "lazyrebase"
LOG_LEVEL_ENV = "LAZYREBASE_LOG_LEVEL"
LOG_FILENAME = "lazyrebase.log"
DEFAULT_LEVEL = "WARNING"
# logging.captureWarnings routes warnings here
WARNINGS_LOGGER = "py.warnings"


@dataclass(frozen=True)
class LoggingRuntime:
    level_name: str
    level: int
    file_path: Path


def parse_level(raw: str | None) -> tuple[str, int]:
    normalized = str(raw or DEFAULT_LEVEL).strip().upper()
    level = logging.getLevelName(normalized)
    if not isinstance(level, int):
        normalized, level = DEFAULT_LEVEL, logging.WARNING
    return normalized, level


def default_log_path() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def configure(level: str | None = None, file_path: Path | None = None) -> LoggingRuntime | None:
    """Attach a rotating file handler to the ``lazyrebase`` and warnings loggers.

    ``level`` overrides ``$LAZYREBASE_LOG_LEVEL``. Returns ``None`` when the
    log directory cannot be created; the application then runs unlogged.
    """
    level_name, level_value = parse_level(level if level is not None else os.environ.get(LOG_LEVEL_ENV))
    path = file_path if file_path is not None else default_log_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(path, maxBytes=2 * 1024 * 1024, backupCount=3, encoding="utf-8")
    except OSError:
        return None
    handler.setLevel(level_value)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s [%(threadName)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )

    for name in (APP_NAME, WARNINGS_LOGGER):
        logger = logging.getLogger(name)
        logger.setLevel(level_value)
        logger.propagate = False
        for existing in list(logger.handlers):
            logger.removeHandler(existing)
            existing.close()
        logger.addHandler(handler)
    logging.captureWarnings(True)
    return LoggingRuntime(level_name=level_name, level=level_value, file_path=path)


__all__ = ["LoggingRuntime", "configure", "default_log_path", "parse_level"]
