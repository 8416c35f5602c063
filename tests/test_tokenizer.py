# tests/test_tokenizer.py

from __future__ import annotations

import io

import pytest

from gedcom_codec.core.exceptions import GedcomSyntaxError, UnexpectedEndOfInput
from gedcom_codec.loader import Line, Scanner, ScanState, tokenize, tokenize_file, tokenize_line
from gedcom_codec.utils import mock_file_path


def scan(data: bytes, read_size: int = 4096) -> list[Line]:
    return list(Scanner(io.BytesIO(data), read_size))


def test_tokenize_line_simple_head() -> None:
    token = tokenize_line("0 HEAD", lineno=1)
    assert token.lineno == 1
    assert token.level == 0
    assert token.xref == ""
    assert token.tag == "HEAD"
    assert token.value == ""


def test_tokenize_line_with_xref_and_tag_only() -> None:
    token = tokenize_line("0 @I1@ INDI", lineno=1)
    assert token.level == 0
    assert token.xref == "I1"
    assert token.tag == "INDI"
    assert token.value == ""


def test_tokenize_line_with_value() -> None:
    token = tokenize_line("1 NOTE This is a test note", lineno=10)
    assert token.lineno == 10
    assert token.level == 1
    assert token.tag == "NOTE"
    assert token.value == "This is a test note"


def test_pointer_value_is_left_untouched() -> None:
    token = tokenize_line("1 FAMC @F1@")
    assert token.xref == ""
    assert token.value == "@F1@"


def test_tokenize_line_with_bom_on_first_line() -> None:
    token = tokenize_line("\ufeff0 HEAD", lineno=1)
    assert token.level == 0
    assert token.tag == "HEAD"


def test_multi_digit_level_and_user_tag() -> None:
    token = tokenize_line("12 _MYOWNTAG some value")
    assert token.level == 12
    assert token.tag == "_MYOWNTAG"
    assert token.value == "some value"


def test_tokenize_line_invalid_level_raises() -> None:
    with pytest.raises(GedcomSyntaxError):
        tokenize_line("X HEAD", lineno=1)


def test_tokenize_line_missing_tag_raises() -> None:
    with pytest.raises(GedcomSyntaxError):
        tokenize_line("0 ", lineno=1)


def test_tokenize_line_empty_raises() -> None:
    with pytest.raises(GedcomSyntaxError):
        tokenize_line("   ")


def test_trailing_space_is_kept_in_value() -> None:
    lines = scan(b"1 SEX F \r")
    assert lines == [Line(lineno=1, offset=0, level=1, tag="SEX", value="F ")]


def test_leading_whitespace_and_repeated_spaces() -> None:
    lines = scan(b"  \r\n\t 1     SEX      F\n")
    assert len(lines) == 1
    line = lines[0]
    assert (line.level, line.tag, line.value) == (1, "SEX", "F")
    assert line.lineno == 2


@pytest.mark.parametrize(
    "terminator",
    [b"\n", b"\r\n", b"\r"],
    ids=["unix", "windows", "mac-classic"],
)
def test_line_endings(terminator: bytes) -> None:
    data = terminator.join([b"0 HEAD", b"1 CHAR UTF-8", b"0 @I1@ INDI", b"0 TRLR"]) + terminator
    lines = scan(data)

    assert [(l.level, l.xref, l.tag, l.value) for l in lines] == [
        (0, "", "HEAD", ""),
        (1, "", "CHAR", "UTF-8"),
        (0, "I1", "INDI", ""),
        (0, "", "TRLR", ""),
    ]
    assert [l.lineno for l in lines] == [1, 2, 3, 4]


def test_missing_final_newline_is_unexpected_eof() -> None:
    scanner = Scanner(io.BytesIO(b"0 HEAD\n0 TRLR"))
    assert scanner.next_line().tag == "HEAD"
    with pytest.raises(UnexpectedEndOfInput):
        scanner.next_line()


def test_empty_input_yields_nothing() -> None:
    assert scan(b"") == []
    assert scan(b" \r\n\n") == []


def test_bom_is_skipped() -> None:
    lines = scan(b"\xef\xbb\xbf0 HEAD\n0 TRLR\n")
    assert [l.tag for l in lines] == ["HEAD", "TRLR"]
    assert lines[0].offset == 3


def test_small_read_size_spans_buffers() -> None:
    data = b"0 HEAD\n1 NOTE a value that is longer than the buffer\n0 TRLR\n"
    lines = scan(data, read_size=3)
    assert [l.tag for l in lines] == ["HEAD", "NOTE", "TRLR"]
    assert lines[1].value == "a value that is longer than the buffer"
    assert lines[2].offset == data.index(b"0 TRLR")


def test_text_stream_is_accepted() -> None:
    lines = list(tokenize(io.StringIO("0 HEAD\n1 NAME Ærø /Ølsen/\n")))
    assert lines[1].value == "Ærø /Ølsen/"


def test_non_utf8_bytes_are_carried_as_surrogates() -> None:
    lines = scan(b"1 NAME Jos\xe9\n")
    assert lines[0].value == "Jos\udce9"
    assert lines[0].value.encode("utf-8", errors="surrogateescape") == b"Jos\xe9"


def test_note_with_raw_line_break_is_folded() -> None:
    data = b"0 @I1@ INDI\n1 NOTE first part\nsecond part\n1 SEX M\n"
    lines = scan(data)
    assert [l.tag for l in lines] == ["INDI", "NOTE", "SEX"]
    assert lines[1].value == "first part\nsecond part"
    assert lines[2].lineno == 4


def test_non_note_line_is_not_folded() -> None:
    with pytest.raises(GedcomSyntaxError):
        scan(b"1 TITL first part\nsecond part\n")


@pytest.mark.parametrize(
    "data, message",
    [
        (b"0 HEAD\nX\n", "found non-whitespace before level"),
        (b"0A HEAD\n", "level contained non-numerics"),
        (b"0 #HEAD\n", "expected tag or xref after level"),
        (b"0 @I1@ #INDI\n", "expected tag after xref"),
        (b"0 @I1 INDI\n", "malformed xref"),
        (b"0 @I-1@ INDI\n", "xref contained non-alphanumeric"),
        (b"0 HE#D\n", "tag contained non-alphanumeric"),
    ],
)
def test_syntax_errors(data: bytes, message: str) -> None:
    with pytest.raises(GedcomSyntaxError) as excinfo:
        scan(data)
    assert message in str(excinfo.value)


def test_error_reports_line_and_offset() -> None:
    with pytest.raises(GedcomSyntaxError) as excinfo:
        scan(b"0 HEAD\n1 CH#R UTF-8\n")
    err = excinfo.value
    assert err.lineno == 2
    assert err.offset == 11
    assert "Line 2 (offset 11)" in str(err)


def test_errors_are_sticky() -> None:
    scanner = Scanner(io.BytesIO(b"0 HE#D\n0 TRLR\n"))
    with pytest.raises(GedcomSyntaxError) as first:
        scanner.next_line()
    with pytest.raises(GedcomSyntaxError) as second:
        scanner.next_line()
    assert first.value is second.value
    assert scanner.state == ScanState.ERROR


def test_tokenize_file_reads_existing_mock_file() -> None:
    tokens = list(tokenize_file(mock_file_path("minimal.ged")))

    assert tokens, "Expected at least one token from mock GEDCOM file"
    assert tokens[0].level == 0
    assert tokens[0].tag == "HEAD"
    assert tokens[-1].tag == "TRLR"


def test_tokenize_file_missing_raises() -> None:
    with pytest.raises(FileNotFoundError):
        list(tokenize_file(mock_file_path("does_not_exist.ged")))
