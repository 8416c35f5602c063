"""
gedcom_codec.normalization package

Contains normalization helpers such as:

- names (split_personal_name)
"""

from .names import ParsedName, split_personal_name

__all__ = ["ParsedName", "split_personal_name"]
