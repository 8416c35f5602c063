"""
Logging package for ``gedcom_codec``.

Modules call ``get_logger(__name__)``; the decoder's report of unplaced
tags goes through ``get_unhandled_tags_logger()``.
"""

from .logger import (
    UNHANDLED_TAGS_LOGGER,
    get_logger,
    get_unhandled_tags_logger,
    list_active_loggers,
)

__all__ = [
    "UNHANDLED_TAGS_LOGGER",
    "get_logger",
    "get_unhandled_tags_logger",
    "list_active_loggers",
]
