from gedcom_codec.core.exceptions import (
    GedcomEncodeError,
    GedcomError,
    GedcomSyntaxError,
    UnexpectedEndOfInput,
)

__all__ = [
    "GedcomEncodeError",
    "GedcomError",
    "GedcomSyntaxError",
    "UnexpectedEndOfInput",
]
