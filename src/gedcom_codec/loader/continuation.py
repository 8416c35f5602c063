# src/gedcom_codec/loader/continuation.py

"""
Continuation handling for GEDCOM text fields.

Rules (GEDCOM 5.5.1):
    - CONC: Append text directly to the field. No newline added.
    - CONT: Append a newline + the text.

Examples:
    Parent NOTE value: "Line one"
    Child CONC value:  " and more"
        → "Line one and more"

    Child CONT value:  "Second line"
        → "Line one and more\nSecond line"

The decoder binds a ``TextField`` to whichever string attribute a text-bearing
tag populated (NOTE, TITL, ADDR, ...) and feeds it the continuation lines that
follow, in file order.
"""

from __future__ import annotations

from typing import Any, Optional

CONTINUATION_TAGS = frozenset({"CONT", "CONC"})


def continue_text(text: str, tag: str, value: str) -> str:
    """Apply one CONT/CONC line to ``text`` and return the result."""
    if tag == "CONT":
        return text + "\n" + value
    if tag == "CONC":
        return text + value
    raise ValueError(f"Not a continuation tag: {tag!r}")


class TextField:
    """
    Accumulator bound to one string attribute of a record.

    ``index`` selects an element when the attribute is a list of strings
    (e.g. the TEXT entries of a citation's DATA block).
    """

    __slots__ = ("owner", "attr", "index")

    def __init__(self, owner: Any, attr: str, index: Optional[int] = None) -> None:
        self.owner = owner
        self.attr = attr
        self.index = index

    @property
    def key(self) -> str:
        """Name used for this field in ``owner.field_user_defined``."""
        if self.index is not None:
            return f"{self.attr}[{self.index}]"
        return self.attr

    def get(self) -> str:
        current = getattr(self.owner, self.attr)
        if self.index is not None:
            return current[self.index]
        return current

    def set(self, text: str) -> None:
        if self.index is not None:
            getattr(self.owner, self.attr)[self.index] = text
        else:
            setattr(self.owner, self.attr, text)

    def extend(self, tag: str, value: str) -> bool:
        """Apply ``tag`` if it continues this field; return False otherwise."""
        if tag not in CONTINUATION_TAGS:
            return False
        self.set(continue_text(self.get(), tag, value))
        return True

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f"<TextField {type(self.owner).__name__}.{self.attr}>"


class PublicationFacts(TextField):
    """
    SOUR.PUBL accumulator.

    Ancestry exports put DATE and PLAC lines under PUBL instead of
    SOUR.DATA.EVEN; those are folded into the facts as ", <value>".
    """

    __slots__ = ()

    def extend(self, tag: str, value: str) -> bool:
        if super().extend(tag, value):
            return True
        if tag in ("DATE", "PLAC"):
            text = self.get()
            self.set(f"{text}, {value}" if text else value)
            return True
        return False
