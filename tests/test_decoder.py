# tests/test_decoder.py

from __future__ import annotations

import io
import logging

import pytest

from gedcom_codec.core.exceptions import GedcomSyntaxError, UnexpectedEndOfInput
from gedcom_codec.loader import Decoder, load_file, loads
from gedcom_codec.registry import Gedcom, Trailer
from gedcom_codec.utils import mock_file_path


def indi(body: str, xref: str = "I1") -> str:
    """Wrap level-1 lines in a minimal file with one individual."""
    return f"0 HEAD\n0 @{xref}@ INDI\n{body}0 TRLR\n"


class ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.messages: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())


def make_tag_logger() -> tuple[logging.Logger, ListHandler]:
    logger = logging.getLogger("tests.unhandled_tags")
    logger.handlers.clear()
    logger.propagate = False
    logger.setLevel(logging.INFO)
    handler = ListHandler()
    logger.addHandler(handler)
    return logger, handler


# ---------------------------------------------------------------------------
# Basic structure
# ---------------------------------------------------------------------------


def test_minimal_file() -> None:
    g = load_file(mock_file_path("minimal.ged"))

    assert isinstance(g, Gedcom)
    assert g.header is not None
    assert g.header.version == "5.5.1"
    assert g.header.form == "LINEAGE-LINKED"
    assert g.header.character_set == "UTF-8"
    assert len(g.individuals) == 1
    person = g.individuals[0]
    assert person.xref == "I1"
    assert person.names[0].name == "John /Smith/"
    assert person.sex == "M"
    assert isinstance(g.trailer, Trailer)


def test_empty_input_gives_empty_graph() -> None:
    g = loads("")
    assert g.header is None
    assert g.individuals == []
    assert g.trailer is None


def test_decode_accepts_bytes_and_text_streams() -> None:
    data = "0 @I1@ INDI\n1 NAME Åsa /Berg/\n"
    from_bytes = Decoder(io.BytesIO(data.encode("utf-8"))).decode()
    from_text = Decoder(io.StringIO(data)).decode()

    assert from_bytes.individuals[0].names[0].name == "Åsa /Berg/"
    assert from_text.individuals[0].names[0].name == "Åsa /Berg/"


def test_scan_error_propagates() -> None:
    with pytest.raises(GedcomSyntaxError):
        loads("0 HEAD\n1 CH#R UTF-8\n")


def test_truncated_file_raises_unexpected_eof() -> None:
    with pytest.raises(UnexpectedEndOfInput):
        load_file(mock_file_path("broken_eof.ged"))


def test_load_file_missing_raises() -> None:
    with pytest.raises(FileNotFoundError):
        load_file(mock_file_path("does_not_exist.ged"))


def test_level_popping_across_several_levels() -> None:
    g = loads(
        indi(
            "1 BIRT\n"
            "2 PLAC Springfield\n"
            "3 MAP\n"
            "4 LATI N39.8\n"
            "1 SEX F\n"
        )
    )
    person = g.individuals[0]
    assert person.sex == "F"
    assert person.events[0].place.latitude == "N39.8"
    assert person.user_defined == []


def test_stray_deep_line_at_root_is_skipped() -> None:
    g = loads("1 VERS 5.5\n0 @I1@ INDI\n0 TRLR\n")
    assert len(g.individuals) == 1
    assert g.user_defined == []


# ---------------------------------------------------------------------------
# Continuation
# ---------------------------------------------------------------------------


def test_cont_lines_join_with_newline() -> None:
    g = loads(indi("1 NOTE line 1\n2 CONT line 2\n2 CONT line 3\n"))
    assert g.individuals[0].notes[0].note == "line 1\nline 2\nline 3"


def test_conc_lines_join_without_separator() -> None:
    g = loads(indi("1 NOTE abc\n2 CONC def\n2 CONT \n2 CONC ghi\n"))
    assert g.individuals[0].notes[0].note == "abcdef\nghi"


def test_sample_note_with_conc_and_cont(sample) -> None:
    john = sample.individuals[0]
    assert john.notes[0].note == (
        "A note that is long enough to need a concatenation, and\na second line."
    )


def test_source_title_continuation() -> None:
    g = loads("0 @S1@ SOUR\n1 TITL County\n2 CONC  records\n2 CONT 1850\n0 TRLR\n")
    # A CONC value loses its leading space in the scanner.
    assert g.sources[0].title == "Countyrecords\n1850"


def test_malformed_note_line_break_is_folded() -> None:
    g = loads(indi("1 NOTE first part\nsecond part\n1 SEX M\n"))
    person = g.individuals[0]
    assert person.notes[0].note == "first part\nsecond part"
    assert person.sex == "M"


# ---------------------------------------------------------------------------
# Line endings
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("terminator", ["\n", "\r\n", "\r"], ids=["unix", "windows", "mac-classic"])
def test_line_endings_decode_identically(terminator: str) -> None:
    lines = ["0 @I1@ INDI", "1 NAME Ann /Lee/", "2 GIVN Ann", "0 TRLR"]
    g = loads(terminator.join(lines) + terminator)

    person = g.individuals[0]
    assert person.names[0].name == "Ann /Lee/"
    assert person.names[0].given == "Ann"
    assert g.trailer is not None


# ---------------------------------------------------------------------------
# Cross references
# ---------------------------------------------------------------------------


def test_forward_and_backward_references_share_instances(sample) -> None:
    by_xref = {i.xref: i for i in sample.individuals}
    fams = {f.xref: f for f in sample.families}
    john, mary, robert = by_xref["I1"], by_xref["I2"], by_xref["I3"]
    f1 = fams["F1"]

    # I1 points forward to F1 before F1 is defined.
    assert john.families[0].family is f1
    assert mary.families[0].family is f1
    assert robert.parents[0].family is f1

    # F1 points back at individuals defined earlier.
    assert f1.husband is john
    assert f1.wife is mary
    assert f1.children == [robert]

    # Forward family-of-birth reference from a BIRT event.
    assert john.events[0].child_in_family is fams["F2"]
    assert fams["F2"].children == [john]


def test_source_citations_share_source_record(sample) -> None:
    s1 = sample.sources[0]
    john = sample.individuals[0]
    marriage = sample.families[0].events[0]

    assert john.names[0].citations[0].source is s1
    assert marriage.citations[0].source is s1


def test_media_and_repository_references(sample) -> None:
    john = sample.individuals[0]
    m1 = sample.media[0]
    r1 = sample.repositories[0]

    assert john.media == [m1]
    assert sample.sources[0].repository.repository is r1


def test_header_submitter_is_the_submitter_record(sample) -> None:
    assert sample.header.submitter is sample.submitters[0]
    assert sample.submitters[0].name == "Ada Archivist"


def test_reference_without_definition_still_resolves() -> None:
    g = loads(indi("1 FAMS @F9@\n"))
    link = g.individuals[0].families[0]
    assert link.family.xref == "F9"
    assert g.families == []


def test_repeated_xref_in_one_file_is_one_record() -> None:
    g = loads(
        "0 @I1@ INDI\n1 FAMS @F1@\n"
        "0 @I2@ INDI\n1 FAMS @F1@\n"
        "0 @F1@ FAM\n1 HUSB @I1@\n1 WIFE @I2@\n"
    )
    first = g.individuals[0].families[0].family
    second = g.individuals[1].families[0].family
    assert first is second is g.families[0]


# ---------------------------------------------------------------------------
# Header and records
# ---------------------------------------------------------------------------


def test_header_fields(sample) -> None:
    h = sample.header
    system = h.source_system

    assert system.xref == "FAMILY_TREE"
    assert system.version == "3.2"
    assert system.product_name == "Family Tree Builder"
    assert system.business_name == "Example Software Ltd"
    assert system.address.address[0].full == "12 Harbour Road\nPortsmouth"
    assert system.address.address[0].city == "Portsmouth"
    assert system.address.address[0].country == "England"
    assert system.address.phone == ["+44 20 7946 0000"]
    assert system.address.www == ["https://example.org"]
    assert system.source_name == "Parish Records"
    assert system.source_date == "1 JAN 1998"
    assert system.source_copyright == "Copyright 1998"

    assert h.destination == "ANSTFILE"
    assert h.date == "2 OCT 2023"
    assert h.time == "14:02:11"
    assert h.filename == "sample.ged"
    assert h.copyright == "Public domain"
    assert h.language == "English"
    assert h.note == "This file exercises\nthe decoder."


def test_individual_fields(sample) -> None:
    john = sample.individuals[0]
    name = john.names[0]

    assert name.name == 'John "Jack" /Smith/'
    assert (name.given, name.surname, name.nickname) == ("John", "Smith", "Jack")
    assert name.citations[0].page == "p. 12"

    birth = john.events[0]
    assert birth.tag == "BIRT"
    assert birth.date == "1 JAN 1900"
    assert birth.place.name == "Springfield, Illinois"
    assert (birth.place.latitude, birth.place.longitude) == ("N39.8", "W89.6")

    occupation = john.attributes[0]
    assert (occupation.tag, occupation.value, occupation.date) == ("OCCU", "Blacksmith", "1925")

    assert john.associations[0].xref == "I3"
    assert john.associations[0].relation == "Godfather"
    assert john.change.date == "5 MAY 2020"
    assert john.change.time == "10:00:00"


def test_inline_source_citation_keeps_text(sample) -> None:
    mary = sample.individuals[1]
    citation = mary.citations[0]

    assert citation.source.xref == ""
    assert citation.source.title == "Parish register of St Mary\npage 4"
    assert citation.page == "entry 17"
    assert citation.source not in sample.sources


def test_family_fields(sample) -> None:
    marriage = sample.families[0].events[0]
    assert marriage.tag == "MARR"
    assert marriage.date == "10 JUN 1925"
    citation = marriage.citations[0]
    assert citation.page == "p. 40"
    assert citation.data.date == "1925"
    assert citation.data.text == ["Married by the Rev. Brown"]


def test_source_repository_and_media_fields(sample) -> None:
    src = sample.sources[0]
    assert src.title == "County records"
    assert src.originator == "County Clerk"
    assert src.repository.call_numbers[0].call_number == "123.45"
    assert src.repository.call_numbers[0].media_type == "Book"
    assert src.data.events[0].kind == "BIRT, MARR"
    assert src.data.events[0].date == "FROM 1900 TO 1950"
    assert src.data.events[0].place == "Springfield"

    repo = sample.repositories[0]
    assert repo.name == "County Archive"
    assert repo.address.address[0].full == "Main Street"
    assert repo.address.address[0].city == "Springfield"
    assert repo.address.phone == ["555-0100"]

    media_file = sample.media[0].files[0]
    assert media_file.name == "photo.jpg"
    assert media_file.format == "jpeg"
    assert media_file.format_type == "photo"
    assert media_file.title == "Portrait of John"


def test_submitter_fields(sample) -> None:
    subm = sample.submitters[0]
    assert subm.address.address[0].full == "1 Record Lane"
    assert subm.address.address[0].city == "Leeds"
    assert subm.address.email == ["ada@example.org"]
    assert subm.languages == ["English"]


def test_submission_record_and_header_pointer() -> None:
    g = loads(
        "0 HEAD\n1 SUBN @N1@\n"
        "0 @N1@ SUBN\n1 FAMF TempleReady\n1 ORDI Y\n"
        "0 TRLR\n"
    )
    assert g.submission is g.header.submission
    assert g.submission.xref == "N1"
    assert [(t.tag, t.value) for t in g.submission.user_defined] == [
        ("FAMF", "TempleReady"),
        ("ORDI", "Y"),
    ]


def test_media_record_gedcom_55_layout() -> None:
    g = loads("0 @M1@ OBJE\n1 FORM bmp\n1 TITL Old photo\n1 _FILE a.bmp\n")
    m = g.media[0]
    assert len(m.files) == 1
    assert m.files[0].format == "bmp"
    assert m.files[0].title == "Old photo"
    assert m.user_defined[0].tag == "_FILE"


def test_media_record_with_several_files() -> None:
    g = loads(
        "0 @M1@ OBJE\n"
        "1 FILE a.jpg\n"
        "2 FORM jpg\n"
        "1 FILE b.jpg\n"
        "2 FORM jpg\n"
        "2 TITL Back\n"
        "0 TRLR\n"
    )
    files = g.media[0].files
    assert [(f.name, f.format) for f in files] == [("a.jpg", "jpg"), ("b.jpg", "jpg")]
    assert files[0].title == ""
    assert files[1].title == "Back"


def test_bare_gedc_is_remembered() -> None:
    g = loads("0 HEAD\n1 GEDC\n0 TRLR\n")
    assert g.header.has_gedc
    assert g.header.version == ""


def test_unknown_children_of_header_fields_are_kept_per_field() -> None:
    g = loads(
        "0 HEAD\n"
        "1 DATE 1 JAN 2000\n"
        "2 _X foo\n"
        "1 CHAR UTF-8\n"
        "2 _C utf\n"
        "1 NOTE hello\n"
        "2 _Y bar\n"
        "0 TRLR\n"
    )
    h = g.header
    assert h.user_defined == []
    assert [(t.tag, t.value) for t in h.field_user_defined["date"]] == [("_X", "foo")]
    assert [t.tag for t in h.field_user_defined["character_set"]] == ["_C"]
    assert [t.tag for t in h.field_user_defined["note"]] == ["_Y"]


def test_unknown_children_of_citation_text_are_indexed() -> None:
    g = loads(
        indi(
            "1 SOUR @S1@\n"
            "2 DATA\n"
            "3 TEXT first\n"
            "3 TEXT second\n"
            "4 _Q quoted\n"
        )
    )
    data = g.individuals[0].citations[0].data
    assert data.text == ["first", "second"]
    assert list(data.field_user_defined) == ["text[1]"]
    assert data.field_user_defined["text[1]"][0].tag == "_Q"


def test_event_address_uses_shared_routine() -> None:
    g = loads(
        indi(
            "1 RESI\n"
            "2 ADDR 5 Elm St\n"
            "3 CONC reet\n"
            "3 CONT Apt 2\n"
            "3 ADR1 5 Elm Street\n"
            "3 STAE IL\n"
            "3 POST 62701\n"
            "2 URL https://a.example\n"
            "2 WWW https://b.example\n"
            "2 FAX 555\n"
        )
    )
    event = g.individuals[0].attributes[0]
    detail = event.address.address[0]
    assert detail.full == "5 Elm Street\nApt 2"
    assert detail.line1 == "5 Elm Street"
    assert detail.state == "IL"
    assert detail.postal_code == "62701"
    assert event.address.www == ["https://a.example", "https://b.example"]
    assert event.address.fax == ["555"]


# ---------------------------------------------------------------------------
# Special cases
# ---------------------------------------------------------------------------


def test_adop_famc_records_adopting_parent(sample) -> None:
    robert = sample.individuals[2]
    adoption = robert.events[0]

    assert adoption.tag == "ADOP"
    assert adoption.child_in_family is sample.families[0]
    assert adoption.adopted_by_parent == "BOTH"


def test_adop_subtag_outside_adoption_is_user_defined() -> None:
    g = loads(indi("1 BIRT\n2 FAMC @F1@\n3 ADOP BOTH\n"))
    birth = g.individuals[0].events[0]

    assert birth.child_in_family.xref == "F1"
    assert birth.adopted_by_parent == ""
    assert birth.user_defined == []
    assert [t.tag for t in birth.field_user_defined["child_in_family"]] == ["ADOP"]


@pytest.mark.parametrize("event_tag", ["BIRT", "CHR"])
def test_birth_events_accept_famc(event_tag: str) -> None:
    g = loads(indi(f"1 {event_tag}\n2 FAMC @F1@\n"))
    event = g.individuals[0].events[0]
    assert event.child_in_family.xref == "F1"
    assert g.individuals[0].parents == []


def test_famc_under_other_events_is_preserved() -> None:
    g = loads(indi("1 DEAT\n2 FAMC @F1@\n"))
    event = g.individuals[0].events[0]
    assert event.child_in_family is None
    assert (event.user_defined[0].tag, event.user_defined[0].value) == ("FAMC", "@F1@")


def test_alia_text_is_an_alternate_name(sample) -> None:
    john = sample.individuals[0]
    assert [n.name for n in john.names] == ['John "Jack" /Smith/', "Johnny Smith"]


def test_alia_pointer_is_preserved_as_user_defined() -> None:
    g = loads(indi("1 NAME A /B/\n1 ALIA @I2@\n"))
    person = g.individuals[0]
    assert len(person.names) == 1
    assert (person.user_defined[0].tag, person.user_defined[0].value) == ("ALIA", "@I2@")


def test_publication_facts_fold_ancestry_date_and_place(sample) -> None:
    assert sample.sources[0].publication_facts == (
        "Ancestry.com Operations, Inc., 2010, Provo, UT, USA"
    )


# ---------------------------------------------------------------------------
# Unknown tags
# ---------------------------------------------------------------------------


def test_unknown_tag_preserved_with_children() -> None:
    g = loads(
        "0 HEAD\n"
        "1 SOUR ANCESTRY\n"
        "2 _TREE The Tree Name\n"
        "3 RIN The Tree Identifier\n"
        "0 TRLR\n"
    )
    tree = g.header.source_system.user_defined[0]
    assert tree.tag == "_TREE"
    assert tree.value == "The Tree Name"
    assert len(tree.user_defined) == 1
    assert tree.user_defined[0].tag == "RIN"
    assert tree.user_defined[0].value == "The Tree Identifier"
    assert tree.user_defined[0].user_defined == []


def test_unknown_top_level_record_keeps_xref(sample) -> None:
    note = sample.user_defined[0]
    assert (note.xref, note.tag, note.value) == ("N1", "NOTE", "Shared note text")
    assert (note.user_defined[0].tag, note.user_defined[0].value) == ("CONT", "continued")


def test_unknown_tags_in_records(sample) -> None:
    john = sample.individuals[0]
    assert [(t.tag, t.value) for t in john.user_defined] == [("_MILT", "Army")]
    assert john.user_defined[0].user_defined[0].tag == "DATE"
    assert sample.families[0].user_defined[0].tag == "_UID"
    assert sample.header.user_defined[0].tag == "_TREE"


def test_unknown_child_of_text_field_stays_with_the_field() -> None:
    g = loads("0 @S1@ SOUR\n1 TITL County records\n2 _TYPE ledger\n0 TRLR\n")
    src = g.sources[0]
    assert src.title == "County records"
    assert src.user_defined == []
    assert [(t.tag, t.value) for t in src.field_user_defined["title"]] == [("_TYPE", "ledger")]


def test_unhandled_tags_are_logged() -> None:
    logger, handler = make_tag_logger()
    data = indi("1 _MILT Army\n2 DATE 1918\n1 SEX M\n")

    decoder = Decoder(io.BytesIO(data.encode("utf-8")))
    decoder.log_unhandled_tags(logger)
    decoder.decode()

    # Only the unrecognised tag is reported, not its preserved children.
    assert len(handler.messages) == 1
    assert "tag=_MILT" in handler.messages[0]
    assert "line 3" in handler.messages[0]


def test_tag_logger_does_not_change_output() -> None:
    logger, _ = make_tag_logger()
    data = indi("1 _MILT Army\n1 SEX M\n")

    quiet = loads(data)
    logged = loads(data, tag_logger=logger)

    assert [t.tag for t in quiet.individuals[0].user_defined] == [
        t.tag for t in logged.individuals[0].user_defined
    ]
    assert quiet.individuals[0].sex == logged.individuals[0].sex
