# src/gedcom_codec/loader/tokenizer.py

"""
Byte-level GEDCOM scanner.

The scanner is a small state machine that turns a readable stream into
``Line`` tokens:

    <level> [@<xref>@] <tag> [<value>]<terminator>

It knows nothing about GEDCOM semantics: pointers in the value position are
left untouched and CONT/CONC lines are returned like any other line. The one
exception is the malformed-note recovery described on ``Scanner``.
"""

from __future__ import annotations

import io
import re
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, TextIO, Union

from gedcom_codec.config import get_config
from gedcom_codec.core.exceptions import GedcomSyntaxError, UnexpectedEndOfInput


@dataclass(frozen=True)
class Line:
    """
    A single GEDCOM line token.

    Attributes:
        lineno: 1-based physical line number where the line starts.
        offset: Byte offset of the first level digit in the stream.
        level: Parsed GEDCOM level (0, 1, 2, ...).
        tag: GEDCOM tag, e.g. "INDI", "NOTE", "CONT", "_MYOWNTAG".
        xref: Defining cross-reference without the surrounding '@', or "".
        value: The line payload as-is (may be a pointer such as "@F1@").
    """
    lineno: int
    offset: int
    level: int
    tag: str
    xref: str = ""
    value: str = ""


class ScanState(IntEnum):
    BEGIN = 0
    LEVEL = 1
    SEEK_TAG_OR_XREF = 2
    SEEK_TAG = 3
    TAG = 4
    XREF = 5
    SEEK_VALUE = 6
    VALUE = 7
    END = 8
    ERROR = 9


_CR = 0x0D
_LF = 0x0A
_SPACE = 0x20
_AT = 0x40
_WHITESPACE = frozenset(b" \t\r\n")
_DIGITS = frozenset(b"0123456789")
_TAG_CHARS = frozenset(
    b"0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz_"
)
_BOM = b"\xef\xbb\xbf"
_EOL = re.compile(rb"[\r\n]")

Stream = Union[BinaryIO, TextIO]


class Scanner:
    """
    Pull-based GEDCOM tokenizer.

    Reads ``read_size`` bytes at a time into a working buffer and refills it
    once every byte has been consumed. Each call to ``next_line`` returns the
    next ``Line`` or ``None`` at a clean end of input.

    Rules:
        - Whitespace (including stray CR/LF) before the level is skipped, as
          is a UTF-8 byte-order mark at the very start of the stream.
        - Line terminators are LF, CRLF or a bare CR.
        - A ``NOTE`` value whose line is not followed by a digit is assumed to
          contain a raw line break (seen in some vendor exports); the break
          is kept as "\\n" and the value continues on the next physical line.
        - End of input in the middle of a line raises UnexpectedEndOfInput.
        - Values are decoded as UTF-8 with ``surrogateescape``: bytes from
          ANSEL or ANSI files survive as lone surrogates and are written back
          unchanged by the encoder.

    Any error is fatal: the scanner stays in the error state and re-raises
    the same error on every later call.
    """

    def __init__(
        self,
        stream: Stream,
        read_size: Optional[int] = None,
        *,
        start_line: int = 1,
    ) -> None:
        self._stream = stream
        self._read_size = read_size or get_config().read_size
        self._buf = b""
        self._pos = 0
        self._base = 0  # stream offset of self._buf[0]
        self._eof = False
        self._lineno = start_line
        self._after_cr = False
        self._error: Optional[GedcomSyntaxError] = None
        self.state = ScanState.BEGIN

    # ------------------------------------------------------------------ #
    # Buffer management
    # ------------------------------------------------------------------ #

    @property
    def offset(self) -> int:
        """Stream offset of the next unconsumed byte."""
        return self._base + self._pos

    @property
    def lineno(self) -> int:
        return self._lineno

    def _fill(self) -> bool:
        if self._eof:
            return False
        chunk = self._stream.read(self._read_size)
        if isinstance(chunk, str):
            chunk = chunk.encode("utf-8", errors="surrogateescape")
        if not chunk:
            self._eof = True
            return False
        self._base += len(self._buf)
        self._buf = chunk
        self._pos = 0
        return True

    def _peek(self) -> Optional[int]:
        if self._pos >= len(self._buf) and not self._fill():
            return None
        return self._buf[self._pos]

    def _advance(self) -> None:
        c = self._buf[self._pos]
        self._pos += 1
        if c == _LF:
            if not self._after_cr:
                self._lineno += 1
            self._after_cr = False
        elif c == _CR:
            self._lineno += 1
            self._after_cr = True
        else:
            self._after_cr = False

    def _consume_terminator(self) -> None:
        c = self._buf[self._pos]
        self._advance()
        if c == _CR and self._peek() == _LF:
            self._advance()

    # ------------------------------------------------------------------ #
    # State machine
    # ------------------------------------------------------------------ #

    def _fail(self, message: str, lineno: int, offset: int, *, eof: bool = False) -> GedcomSyntaxError:
        self.state = ScanState.ERROR
        err_cls = UnexpectedEndOfInput if eof else GedcomSyntaxError
        self._error = err_cls(message, lineno=lineno, offset=offset)
        return self._error

    def next_line(self) -> Optional[Line]:
        """Scan and return the next line, or None when the input is exhausted."""
        if self._error is not None:
            raise self._error

        level = bytearray()
        xref = bytearray()
        tag = bytearray()
        value = bytearray()
        start_line = self._lineno
        start_offset = self.offset
        self.state = ScanState.BEGIN

        while True:
            c = self._peek()
            state = self.state

            if c is None:
                if state == ScanState.BEGIN:
                    self.state = ScanState.END
                    return None
                raise self._fail(
                    "unexpected end of input", self._lineno, self.offset, eof=True
                )

            if state == ScanState.BEGIN:
                if self.offset < len(_BOM) and c == _BOM[self.offset]:
                    self._advance()
                elif c in _DIGITS:
                    start_line = self._lineno
                    start_offset = self.offset
                    level.append(c)
                    self._advance()
                    self.state = ScanState.LEVEL
                elif c in _WHITESPACE:
                    self._advance()
                else:
                    raise self._fail(
                        "found non-whitespace before level", self._lineno, self.offset
                    )

            elif state == ScanState.LEVEL:
                if c in _DIGITS:
                    level.append(c)
                elif c == _SPACE:
                    self.state = ScanState.SEEK_TAG_OR_XREF
                else:
                    raise self._fail(
                        "level contained non-numerics", self._lineno, self.offset
                    )
                self._advance()

            elif state == ScanState.SEEK_TAG_OR_XREF:
                if c in _TAG_CHARS:
                    tag.append(c)
                    self.state = ScanState.TAG
                elif c == _AT:
                    self.state = ScanState.XREF
                elif c != _SPACE:
                    raise self._fail(
                        "expected tag or xref after level", self._lineno, self.offset
                    )
                self._advance()

            elif state == ScanState.SEEK_TAG:
                if c in _TAG_CHARS:
                    tag.append(c)
                    self.state = ScanState.TAG
                elif c != _SPACE:
                    raise self._fail(
                        "expected tag after xref", self._lineno, self.offset
                    )
                self._advance()

            elif state == ScanState.XREF:
                if c in _TAG_CHARS or c == _AT:
                    xref.append(c)
                elif c == _SPACE:
                    if len(xref) < 2 or xref[-1] != _AT or _AT in xref[:-1]:
                        raise self._fail(
                            f"malformed xref @{xref.decode('ascii', 'replace')}",
                            self._lineno,
                            self.offset,
                        )
                    del xref[-1]
                    self.state = ScanState.SEEK_TAG
                else:
                    raise self._fail(
                        "xref contained non-alphanumeric", self._lineno, self.offset
                    )
                self._advance()

            elif state == ScanState.TAG:
                if c in _TAG_CHARS:
                    tag.append(c)
                    self._advance()
                elif c == _SPACE:
                    self.state = ScanState.SEEK_VALUE
                    self._advance()
                elif c == _CR or c == _LF:
                    self._consume_terminator()
                    break
                else:
                    raise self._fail(
                        "tag contained non-alphanumeric", self._lineno, self.offset
                    )

            elif state == ScanState.SEEK_VALUE:
                if c == _CR or c == _LF:
                    self._consume_terminator()
                    break
                if c != _SPACE:
                    self.state = ScanState.VALUE
                    continue
                self._advance()

            elif state == ScanState.VALUE:
                if c == _CR or c == _LF:
                    self._consume_terminator()
                    if tag == b"NOTE" and self._note_continues():
                        value.append(_LF)
                        continue
                    break
                # Copy everything up to the next terminator in one step.
                m = _EOL.search(self._buf, self._pos)
                end = m.start() if m else len(self._buf)
                value += self._buf[self._pos:end]
                self._pos = end
                self._after_cr = False

        self.state = ScanState.END
        return Line(
            lineno=start_line,
            offset=start_offset,
            level=int(level),
            tag=tag.decode("ascii"),
            xref=xref.decode("ascii"),
            value=value.decode("utf-8", errors="surrogateescape"),
        )

    def _note_continues(self) -> bool:
        nxt = self._peek()
        return nxt is not None and nxt not in _DIGITS

    def __iter__(self) -> Iterator[Line]:
        while True:
            line = self.next_line()
            if line is None:
                return
            yield line


# ---------------------------------------------------------------------- #
# Convenience wrappers
# ---------------------------------------------------------------------- #

def tokenize(stream: Stream, read_size: Optional[int] = None) -> Iterator[Line]:
    """Yield every Line from an already-open binary or text stream."""
    yield from Scanner(stream, read_size)


def tokenize_line(line: str, lineno: int = 1) -> Line:
    """
    Parse a single GEDCOM line (terminator optional) into a Line.

    Examples:
        "0 HEAD"
        "0 @I1@ INDI"
        "1 NAME John /Doe/"
    """
    if not line.endswith(("\n", "\r")):
        line += "\n"
    scanner = Scanner(io.BytesIO(line.encode("utf-8", errors="surrogateescape")), start_line=lineno)
    token = scanner.next_line()
    if token is None:
        raise GedcomSyntaxError("empty or whitespace-only line", lineno=lineno)
    return token


def tokenize_file(path: Union[str, Path], read_size: Optional[int] = None) -> Iterator[Line]:
    """
    Yield Line objects for every GEDCOM line in the given file.

    Raises:
        FileNotFoundError: if `path` does not exist.
        GedcomSyntaxError: if the file cannot be scanned.
    """
    file_path = Path(path)

    if not file_path.is_file():
        raise FileNotFoundError(f"GEDCOM file not found: {file_path}")

    with file_path.open("rb") as f:
        yield from Scanner(f, read_size)
