# src/gedcom_codec/loader/references.py

from __future__ import annotations

from typing import Any, Dict, Iterator, Optional, Tuple, Type, TypeVar

T = TypeVar("T")


class ReferenceTable:
    """
    Map of (record kind, xref) -> shared record instance.

    The first lookup of an xref, whether it comes from a definition
    (``0 @F1@ FAM``) or a pointer (``1 FAMC @F1@``), creates the record; every
    later lookup returns that same object, so records may be defined before
    or after they are referenced.

    An empty xref never touches the table and yields a fresh anonymous record
    (inline media, inline source citations, records missing their xref).
    """

    def __init__(self) -> None:
        self._refs: Dict[Tuple[type, str], Any] = {}

    def get_or_create(self, kind: Type[T], xref: str) -> T:
        if not xref:
            return kind()

        key = (kind, xref)
        record = self._refs.get(key)
        if record is None:
            record = kind(xref=xref)
            self._refs[key] = record
        return record

    def get(self, kind: Type[T], xref: str) -> Optional[T]:
        return self._refs.get((kind, xref))

    def __contains__(self, key: Tuple[type, str]) -> bool:
        return key in self._refs

    def __len__(self) -> int:
        return len(self._refs)

    def __iter__(self) -> Iterator[Tuple[type, str]]:
        return iter(self._refs)

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f"<ReferenceTable refs={len(self._refs)}>"


def strip_pointer(value: str) -> str:
    """
    Return the xref inside a pointer value ("@I1@" -> "I1").

    Values that are not pointers (free text such as an inline source
    citation) yield "" so the caller gets an anonymous record.
    """
    v = (value or "").strip()
    if len(v) > 2 and v.startswith("@") and v.endswith("@"):
        return v[1:-1]
    return ""
