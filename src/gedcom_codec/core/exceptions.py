from typing import Optional


class GedcomError(Exception):
    """Base exception for decode and encode failures."""


class GedcomSyntaxError(GedcomError, ValueError):
    """Raised when the scanner meets bytes that cannot form a GEDCOM line."""

    def __init__(self, message: str, lineno: int = 0, offset: int = 0):
        self.reason = message
        self.lineno = lineno
        self.offset = offset
        super().__init__(f"Line {lineno} (offset {offset}): {message}")


class UnexpectedEndOfInput(GedcomSyntaxError):
    """Raised when the input ends in the middle of a line."""


class GedcomEncodeError(GedcomError):
    """Raised when a record graph cannot be written, e.g. a pointer without an xref."""

    def __init__(self, message: str, tag: Optional[str] = None):
        self.tag = tag
        super().__init__(message)
