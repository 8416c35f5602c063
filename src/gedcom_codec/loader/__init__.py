# src/gedcom_codec/loader/__init__.py

"""
Public interface for the GEDCOM loader stack.

Intended usage from other parts of the project and tests:

    from gedcom_codec.loader import (
        Line,
        Scanner,
        Decoder,
        decode,
        loads,
        load_file,
        tokenize_file,
        tokenize_line,
    )
"""

from __future__ import annotations

from .continuation import PublicationFacts, TextField, continue_text
from .decoder import Context, Decoder, Frame, decode, load_file, loads
from .references import ReferenceTable, strip_pointer
from .tokenizer import Line, Scanner, ScanState, tokenize, tokenize_file, tokenize_line

__all__ = [
    "Context",
    "Decoder",
    "Frame",
    "Line",
    "PublicationFacts",
    "ReferenceTable",
    "ScanState",
    "Scanner",
    "TextField",
    "continue_text",
    "decode",
    "load_file",
    "loads",
    "strip_pointer",
    "tokenize",
    "tokenize_file",
    "tokenize_line",
]
