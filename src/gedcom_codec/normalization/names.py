"""
names.py
Split GEDCOM personal names ("Given /Surname/ Suffix") into their parts.

GEDCOM marks the surname with slashes; real files are less tidy:
- the closing slash may be missing (" First /Last ")
- slashes may appear in given names ("First/Alt /Last/")
- surnames may carry alternatives ("/Fetters/Fletcher/")
- nicknames are often embedded in quotes ('John "Jack" /Bryan/')
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List

_NICKNAME_RE = re.compile(r'\s*"([^"]*)"\s*')


@dataclass(frozen=True, slots=True)
class ParsedName:
    full: str = ""
    given: str = ""
    surname: str = ""
    suffix: str = ""
    nickname: str = ""


def _is_surname_part(part: str) -> bool:
    # A surname part touches both of its slashes.
    return bool(part) and not part.startswith(" ") and not part.endswith(" ")


def _join_words(*words: str) -> str:
    return " ".join(w for w in words if w)


def _extract_nickname(given: str) -> tuple[str, str]:
    m = _NICKNAME_RE.search(given)
    if m is None:
        return given, ""
    cleaned = (given[: m.start()] + " " + given[m.end():]).strip()
    return cleaned, m.group(1)


def split_personal_name(name: str) -> ParsedName:
    """
    Parse "First Name /Surname/ suffix" into a ParsedName.

    The surname is the first slash-delimited part with no whitespace after its
    opening slash or before its closing one; directly following parts of the
    same shape are appended to it ("/Smith/Smyth/"). Text before the surname
    is the given name, text after it the suffix.

    Examples:
        'First Name /Last Name/'  -> given "First Name", surname "Last Name"
        '/Last/ Karl II'          -> surname "Last", suffix "Karl II"
        'John "Jack" /Bryan/'     -> given "John", nickname "Jack"
        'First/ Last / '          -> no surname; full and given "First/ Last"
    """
    name = name.strip()

    parts: List[str] = name.split("/")
    if len(parts) == 1:
        return ParsedName(full=name, given=name)

    for i in range(1, len(parts)):
        if not _is_surname_part(parts[i]):
            continue

        given = "/".join(parts[:i]).strip()
        surname = parts[i]
        suffix = "/".join(parts[i + 1:]).strip()

        for j in range(i + 1, len(parts)):
            if not _is_surname_part(parts[j]):
                break
            surname += "/" + parts[j]
            suffix = "/".join(parts[j + 1:]).strip()

        given, nickname = _extract_nickname(given)
        return ParsedName(
            full=_join_words(given, surname, suffix),
            given=given,
            surname=surname,
            suffix=suffix,
            nickname=nickname,
        )

    trimmed = name.rstrip("/ ")
    return ParsedName(full=trimmed, given=trimmed)
