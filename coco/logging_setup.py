"""Logging bootstrap for the coco runtime.

The terminal belongs to the UI while a session runs, so records only go to
a rotating file when ``COCO_LOG_FILE`` names one.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOGGER_NAME = "coco"
LEVEL_ENV = "COCO_LOG_LEVEL"
FILE_ENV = "COCO_LOG_FILE"

_CONFIGURED = False


def _parse_level(raw: str | None) -> int:
    normalized = str(raw or "WARNING").strip().upper()
    level = getattr(logging, normalized, logging.WARNING)
    return level if isinstance(level, int) else logging.WARNING


def _make_file_handler(level: int, file_path: str) -> logging.Handler:
    handler = RotatingFileHandler(
        file_path,
        maxBytes=5 * 1024 * 1024,
        backupCount=2,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    return handler


def configure(environ: dict[str, str] | None = None) -> logging.Logger:
    """Attach handlers to the ``coco`` logger once.

    Repeated calls return the already configured logger.
    """
    global _CONFIGURED
    logger = logging.getLogger(LOGGER_NAME)
    if _CONFIGURED:
        return logger

    env = os.environ if environ is None else environ
    level = _parse_level(env.get(LEVEL_ENV))
    logger.setLevel(level)
    logger.propagate = False
    logger.handlers.clear()

    file_path = env.get(FILE_ENV)
    if file_path:
        Path(file_path).parent.mkdir(parents=True, exist_ok=True)
        logger.addHandler(_make_file_handler(level, file_path))
    else:
        logger.addHandler(logging.NullHandler())

    _CONFIGURED = True
    return logger


def reset() -> None:
    """Forget prior configuration; used by tests."""
    global _CONFIGURED
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    _CONFIGURED = False
