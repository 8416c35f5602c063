"""
Logging setup for gedcom-codec.

Every module asks ``get_logger(__name__)`` for a logger under the
``gedcom_codec`` namespace. The namespace root owns the handlers:

* ``logs/gedcom_codec.log`` receives everything at the configured level.
* stderr only sees warnings and errors, unless ``debug: true`` is set.

Tags the decoder could not place are reported on a separate logger,
``gedcom_codec.unhandled_tags``, which also writes its own
``logs/unhandled_tags.log`` so a conversion run leaves a list of what was
kept as user-defined data.
"""

from __future__ import annotations

import logging
from logging import Logger, StreamHandler
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, List, Optional

from gedcom_codec.config import get_config
from gedcom_codec.utils.pathing import resolve_project_path

BASE_LOGGER_NAME = "gedcom_codec"
UNHANDLED_TAGS_LOGGER = f"{BASE_LOGGER_NAME}.unhandled_tags"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_loggers: Dict[str, Logger] = {}
_level: Optional[int] = None


def _log_dir() -> Path:
    cfg = get_config()
    log_dir = resolve_project_path(cfg.logging.get("dir") or cfg.paths.get("logs_dir") or "logs")
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def _file_handler(filename: str, level: int) -> logging.Handler:
    path = _log_dir() / filename
    if get_config().logging.get("rotate", False):
        handler: logging.Handler = RotatingFileHandler(
            path,
            maxBytes=5 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
    else:
        handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _setup() -> int:
    """Attach the shared handlers to the namespace root on first use."""
    global _level
    if _level is not None:
        return _level

    cfg = get_config()
    debug = bool(cfg.debug)
    configured = getattr(logging, str(cfg.logging.get("level", "INFO")).upper(), logging.INFO)
    level = logging.DEBUG if debug else configured

    base = logging.getLogger(BASE_LOGGER_NAME)
    base.setLevel(level)
    base.propagate = False

    filename = cfg.logging.get("file")
    if filename:
        base.addHandler(_file_handler(filename, level))

    console = StreamHandler()
    console.setLevel(logging.DEBUG if debug else logging.WARNING)
    console.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    base.addHandler(console)

    _loggers[BASE_LOGGER_NAME] = base
    _level = level
    return level


def get_logger(name: Optional[str] = None) -> Logger:
    """
    Return a logger inside the ``gedcom_codec`` namespace.

    Names outside the namespace are prefixed, so ``get_logger("loader")``
    and ``get_logger("gedcom_codec.loader")`` are the same logger.
    """
    level = _setup()
    logger_name = name or BASE_LOGGER_NAME
    if logger_name != BASE_LOGGER_NAME and not logger_name.startswith(BASE_LOGGER_NAME + "."):
        logger_name = f"{BASE_LOGGER_NAME}.{logger_name}"

    cached = _loggers.get(logger_name)
    if cached is not None:
        return cached

    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    _loggers[logger_name] = logger
    return logger


def get_unhandled_tags_logger() -> Logger:
    """
    Logger for the decoder's unhandled-tag report.

    Records go to ``unhandled_tags.log`` as well as the main log.
    """
    logger = get_logger(UNHANDLED_TAGS_LOGGER)
    if not any(getattr(h, "unhandled_tags_file", False) for h in logger.handlers):
        handler = _file_handler("unhandled_tags.log", logging.INFO)
        handler.unhandled_tags_file = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    if logger.level > logging.INFO:
        logger.setLevel(logging.INFO)
    return logger


def list_active_loggers() -> List[str]:
    """Names of the loggers handed out so far."""
    return sorted(_loggers)
