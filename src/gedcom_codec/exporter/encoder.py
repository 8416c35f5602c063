# src/gedcom_codec/exporter/encoder.py

"""
GEDCOM encoder.

Walks a ``Gedcom`` record graph and writes it back out as GEDCOM lines:

    HEAD, INDI..., FAM..., OBJE..., REPO..., SOUR..., SUBM..., SUBN,
    top-level user-defined records, TRLR

Text values are split on "\\n" into CONT lines and long segments are wrapped
into CONC lines of at most ``MAX_VALUE_LENGTH`` characters. Pointers to shared
records are written as ``@XREF@``.

Every line is buffered; nothing reaches the sink unless the whole graph
encodes, so a GedcomEncodeError never leaves a half-written file behind.

Output is UTF-8. Lone surrogates left by the decoder for bytes that were not
UTF-8 are written back as the original bytes.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Any, List, Optional, Union

from gedcom_codec.core.exceptions import GedcomEncodeError
from gedcom_codec.logging import get_logger
from gedcom_codec.registry.entities import (
    AddressDetail,
    AddressRecord,
    AssociationRecord,
    ChangeRecord,
    CitationRecord,
    DataRecord,
    EventRecord,
    FamilyLinkRecord,
    FamilyRecord,
    FileRecord,
    Gedcom,
    Header,
    IndividualRecord,
    MediaRecord,
    NameRecord,
    NoteRecord,
    PlaceRecord,
    RepositoryRecord,
    SourceRecord,
    SubmissionRecord,
    SubmitterRecord,
    SystemRecord,
    UserDefinedTag,
    UserReferenceRecord,
    VariantNameRecord,
    VariantPlaceNameRecord,
)

log = get_logger(__name__)

# Longest value written on one line; GEDCOM allows 255 characters per line
# including level, tag and delimiters.
MAX_VALUE_LENGTH = 246


def split_text(value: str, limit: int = MAX_VALUE_LENGTH) -> List[str]:
    """
    Cut one line of text into CONC-sized segments.

    The decoder drops leading spaces from a value, so a cut is moved left
    until the next segment starts with a non-space. A run of spaces longer
    than ``limit`` is cut at ``limit``.
    """
    segments: List[str] = []
    while len(value) > limit:
        cut = limit
        while cut > 0 and value[cut] == " ":
            cut -= 1
        if cut == 0:
            cut = limit
        segments.append(value[:cut])
        value = value[cut:]
    segments.append(value)
    return segments


def is_binary_stream(stream: Any) -> bool:
    """
    Guess whether ``stream.write`` expects bytes.

    io classes answer directly. Other objects are judged by a ``mode``
    string, then by an ``encoding`` attribute (text). Anything else is
    treated as binary.
    """
    if isinstance(stream, io.TextIOBase):
        return False
    if isinstance(stream, (io.RawIOBase, io.BufferedIOBase)):
        return True
    mode = getattr(stream, "mode", None)
    if isinstance(mode, str):
        return "b" in mode
    return getattr(stream, "encoding", None) is None


class Encoder:
    """
    Writes a record graph to a text or binary stream.

    Usage:
        with open("out.ged", "wb") as f:
            Encoder(f).encode(gedcom)

    Whether the sink takes ``str`` or ``bytes`` is worked out from the stream
    (see ``is_binary_stream``); pass ``binary=`` to override.
    """

    def __init__(self, stream: Any, *, binary: Optional[bool] = None) -> None:
        self._stream = stream
        self._binary = is_binary_stream(stream) if binary is None else binary
        self._lines: List[str] = []

    # ------------------------------------------------------------------ #
    # Driver
    # ------------------------------------------------------------------ #

    def encode(self, g: Gedcom) -> None:
        """
        Encode ``g`` and write it to the stream.

        Raises:
            GedcomEncodeError: if a record or pointer lacks its identity.
                Nothing is written in that case.
        """
        self._lines = []

        self._header(g.header)
        for indi in g.individuals:
            self._individual(indi)
        for fam in g.families:
            self._family(fam)
        for media in g.media:
            self._media(0, media)
        for repo in g.repositories:
            self._repository(repo)
        for src in g.sources:
            self._source(src)
        for subm in g.submitters:
            self._submitter(0, subm)
        self._submission(g.submission)
        self._user_defined_list(0, g.user_defined)
        if g.trailer is not None:
            self.tag(0, "TRLR")

        payload = "".join(line + "\n" for line in self._lines)
        self._write(payload)

        log.debug(
            "Encoded %d lines (INDI=%d, FAM=%d, SOUR=%d, REPO=%d, OBJE=%d, SUBM=%d)",
            len(self._lines),
            len(g.individuals),
            len(g.families),
            len(g.sources),
            len(g.repositories),
            len(g.media),
            len(g.submitters),
        )
        self._lines = []

    def _write(self, payload: str) -> None:
        if self._binary:
            self._stream.write(payload.encode("utf-8", errors="surrogateescape"))
        else:
            self._stream.write(payload)
        flush = getattr(self._stream, "flush", None)
        if callable(flush):
            flush()

    # ------------------------------------------------------------------ #
    # Line primitives
    # ------------------------------------------------------------------ #

    def tag(self, level: int, tag: str, value: str = "") -> None:
        if value:
            self._lines.append(f"{level} {tag} {value}")
        else:
            self._lines.append(f"{level} {tag}")

    def maybe_tag(self, level: int, tag: str, value: str) -> None:
        if value:
            self.tag(level, tag, value)

    def tag_with_id(self, level: int, tag: str, xref: str, value: str = "") -> None:
        if not xref:
            raise GedcomEncodeError(f"tag {tag} missing id", tag=tag)
        line = f"{level} @{xref}@ {tag}"
        self._lines.append(f"{line} {value}" if value else line)

    def tag_with_pointer(self, level: int, tag: str, xref: str) -> None:
        if not xref:
            raise GedcomEncodeError(f"tag {tag} missing pointer xref", tag=tag)
        self._lines.append(f"{level} {tag} @{xref}@")

    def tag_with_text(self, level: int, tag: str, value: str) -> None:
        """Write ``value`` on ``tag`` with CONT/CONC lines at ``level + 1``."""
        first, *rest = value.split("\n")
        self._text_one_line(level, tag, first)
        for segment in rest:
            self._text_one_line(level + 1, "CONT", segment)

    def maybe_tag_with_text(self, level: int, tag: str, value: str) -> None:
        if value:
            self.tag_with_text(level, tag, value)

    def _text_one_line(self, level: int, tag: str, value: str) -> None:
        head, *tail = split_text(value)
        self.tag(level, tag, head)
        for segment in tail:
            self.tag(level + 1, "CONC", segment)

    def _field_extras(self, level: int, owner: Any, key: str) -> None:
        """Write the unknown children kept for one field of ``owner``."""
        self._user_defined_list(level, owner.field_user_defined.get(key, []))

    def _text_field(self, level: int, tag: str, owner: Any, attr: str) -> None:
        value = getattr(owner, attr)
        if value or attr in owner.field_user_defined:
            self.tag_with_text(level, tag, value)
            self._field_extras(level + 1, owner, attr)

    # ------------------------------------------------------------------ #
    # Header / trailer
    # ------------------------------------------------------------------ #

    def _header(self, h: Optional[Header]) -> None:
        if h is None:
            return
        extras = h.field_user_defined
        self.tag(0, "HEAD")
        if h.character_set or h.character_set_version or "character_set" in extras:
            self.tag(1, "CHAR", h.character_set)
            self.maybe_tag(2, "VERS", h.character_set_version)
            self._field_extras(2, h, "character_set")
        self._source_system(1, h.source_system)
        self.maybe_tag(1, "DEST", h.destination)
        if h.date or h.time or "date" in extras:
            self.tag(1, "DATE", h.date)
            self.maybe_tag(2, "TIME", h.time)
            self._field_extras(2, h, "date")
        if h.submitter is not None:
            self.tag_with_pointer(1, "SUBM", h.submitter.xref)
        if h.submission is not None:
            self.tag_with_pointer(1, "SUBN", h.submission.xref)
        self.maybe_tag(1, "FILE", h.filename)
        self.maybe_tag(1, "COPR", h.copyright)
        if h.has_gedc or h.version or h.form or "gedc" in extras:
            self.tag(1, "GEDC")
            self.maybe_tag(2, "VERS", h.version)
            self.maybe_tag(2, "FORM", h.form)
            self._field_extras(2, h, "gedc")
        self.maybe_tag(1, "LANG", h.language)
        self._text_field(1, "NOTE", h, "note")
        self._user_defined_list(1, h.user_defined)

    def _source_system(self, level: int, s: SystemRecord) -> None:
        if not (
            s.xref
            or s.version
            or s.product_name
            or s.business_name
            or not s.address.is_empty()
            or s.source_name
            or s.source_date
            or s.source_copyright
            or s.field_user_defined
            or s.user_defined
        ):
            return
        extras = s.field_user_defined
        self.tag(level, "SOUR", s.xref)
        self.maybe_tag(level + 1, "VERS", s.version)
        self.maybe_tag(level + 1, "NAME", s.product_name)
        if s.business_name or not s.address.is_empty() or "business_name" in extras:
            self.tag(level + 1, "CORP", s.business_name)
            self._address(level + 2, s.address)
            self._field_extras(level + 2, s, "business_name")
        if (
            s.source_name
            or s.source_date
            or s.source_copyright
            or "source_name" in extras
            or "source_copyright" in extras
        ):
            self.tag(level + 1, "DATA", s.source_name)
            self.maybe_tag(level + 2, "DATE", s.source_date)
            self._text_field(level + 2, "COPR", s, "source_copyright")
            self._field_extras(level + 2, s, "source_name")
        self._user_defined_list(level + 1, s.user_defined)

    # ------------------------------------------------------------------ #
    # Shared substructures
    # ------------------------------------------------------------------ #

    def _user_defined_list(self, level: int, tags: List[UserDefinedTag]) -> None:
        for ud in tags:
            self._user_defined(level, ud)

    def _user_defined(self, level: int, ud: UserDefinedTag) -> None:
        if ud.xref:
            self.tag_with_id(level, ud.tag, ud.xref, ud.value)
        else:
            self.tag(level, ud.tag, ud.value)
        self._user_defined_list(level + 1, ud.user_defined)

    def _address(self, level: int, a: Optional[AddressRecord]) -> None:
        if a is None:
            return
        for detail in a.address:
            self._address_detail(level, detail)
        for v in a.phone:
            self.maybe_tag_with_text(level, "PHON", v)
        for v in a.email:
            self.maybe_tag_with_text(level, "EMAIL", v)
        for v in a.fax:
            self.maybe_tag_with_text(level, "FAX", v)
        for v in a.www:
            self.maybe_tag_with_text(level, "WWW", v)

    def _address_detail(self, level: int, a: AddressDetail) -> None:
        self.tag_with_text(level, "ADDR", a.full)
        self.maybe_tag_with_text(level + 1, "ADR1", a.line1)
        self.maybe_tag_with_text(level + 1, "ADR2", a.line2)
        self.maybe_tag_with_text(level + 1, "ADR3", a.line3)
        self.maybe_tag_with_text(level + 1, "CITY", a.city)
        self.maybe_tag_with_text(level + 1, "STAE", a.state)
        self.maybe_tag_with_text(level + 1, "POST", a.postal_code)
        self.maybe_tag_with_text(level + 1, "CTRY", a.country)
        self._user_defined_list(level + 1, a.user_defined)

    def _place(self, level: int, p: PlaceRecord) -> None:
        if p.is_empty():
            return
        self.tag(level, "PLAC", p.name)
        for variant in p.phonetic:
            self._variant_place(level + 1, "FONE", variant)
        for variant in p.romanized:
            self._variant_place(level + 1, "ROMN", variant)
        if p.latitude or p.longitude or "map" in p.field_user_defined:
            self.tag(level + 1, "MAP")
            self.maybe_tag(level + 2, "LATI", p.latitude)
            self.maybe_tag(level + 2, "LONG", p.longitude)
            self._field_extras(level + 2, p, "map")
        self._note_list(level + 1, p.notes)
        self._citation_list(level + 1, p.citations)
        self._user_defined_list(level + 1, p.user_defined)

    def _variant_place(self, level: int, tag: str, v: VariantPlaceNameRecord) -> None:
        self.tag(level, tag, v.name)
        self.maybe_tag(level + 1, "TYPE", v.type)
        self._user_defined_list(level + 1, v.user_defined)

    def _change(self, level: int, c: Optional[ChangeRecord]) -> None:
        if c is None or not (c.date or c.time or c.notes or c.field_user_defined or c.user_defined):
            return
        self.tag(level, "CHAN")
        if c.date or c.time or "date" in c.field_user_defined:
            self.tag(level + 1, "DATE", c.date)
            self.maybe_tag(level + 2, "TIME", c.time)
            self._field_extras(level + 2, c, "date")
        self._note_list(level + 1, c.notes)
        self._user_defined_list(level + 1, c.user_defined)

    def _note_list(self, level: int, notes: List[NoteRecord]) -> None:
        for note in notes:
            self._note(level, note)

    def _note(self, level: int, n: NoteRecord) -> None:
        self.tag_with_text(level, "NOTE", n.note)
        self._citation_list(level + 1, n.citations)
        self._user_defined_list(level + 1, n.user_defined)

    def _citation_list(self, level: int, citations: List[CitationRecord]) -> None:
        for citation in citations:
            self._citation(level, citation)

    def _citation(self, level: int, c: CitationRecord) -> None:
        if c.source is None:
            raise GedcomEncodeError("citation source missing", tag="SOUR")
        if c.source.xref:
            self.tag_with_pointer(level, "SOUR", c.source.xref)
        else:
            self.tag_with_text(level, "SOUR", c.source.title)
        self.maybe_tag_with_text(level + 1, "PAGE", c.page)
        self.maybe_tag_with_text(level + 1, "QUAY", c.quay)
        if not c.data.is_empty():
            self._data(level + 1, c.data)
        self._note_list(level + 1, c.notes)
        self._media_ref_list(level + 1, c.media)
        self._user_defined_list(level + 1, c.user_defined)

    def _data(self, level: int, d: DataRecord) -> None:
        self.tag(level, "DATA")
        self.maybe_tag(level + 1, "DATE", d.date)
        for i, text in enumerate(d.text):
            self.tag_with_text(level + 1, "TEXT", text)
            self._field_extras(level + 2, d, f"text[{i}]")
        self._user_defined_list(level + 1, d.user_defined)

    def _user_reference_list(self, level: int, refs: List[UserReferenceRecord]) -> None:
        for ref in refs:
            self.maybe_tag_with_text(level, "REFN", ref.number)
            self.maybe_tag_with_text(level + 1, "TYPE", ref.type)
            self._user_defined_list(level + 1, ref.user_defined)

    def _file(self, level: int, f: FileRecord) -> None:
        # An unnamed file is the GEDCOM 5.5 layout: FORM/TITL directly under OBJE.
        sub = level
        if f.name:
            self.tag_with_text(level, "FILE", f.name)
            sub = level + 1
        if f.format or f.format_type:
            self.tag(sub, "FORM", f.format)
            self.maybe_tag_with_text(sub + 1, "TYPE", f.format_type)
        self._text_field(sub, "TITL", f, "title")
        self._user_defined_list(sub, f.user_defined)

    def _media_ref_list(self, level: int, media: List[MediaRecord]) -> None:
        for m in media:
            if m.xref:
                self.tag_with_pointer(level, "OBJE", m.xref)
            else:
                self.tag(level, "OBJE")
                self._media_body(level, m)

    def _family_ref(self, level: int, tag: str, fam: Optional[FamilyRecord]) -> None:
        if fam is None:
            raise GedcomEncodeError(f"family missing for {tag}", tag=tag)
        if not fam.xref:
            raise GedcomEncodeError(f"family missing xref for {tag}", tag=tag)
        self.tag_with_pointer(level, tag, fam.xref)

    def _individual_ref(self, level: int, tag: str, indi: Optional[IndividualRecord]) -> None:
        if indi is None:
            return
        if not indi.xref:
            raise GedcomEncodeError(f"individual missing xref for {tag}", tag=tag)
        self.tag_with_pointer(level, tag, indi.xref)

    # ------------------------------------------------------------------ #
    # Individuals and families
    # ------------------------------------------------------------------ #

    def _individual(self, r: IndividualRecord) -> None:
        self.tag_with_id(0, "INDI", r.xref)
        for name in r.names:
            self._name(1, name)
        self.maybe_tag_with_text(1, "SEX", r.sex)
        self._event_list(1, r.events)
        self._event_list(1, r.attributes)
        for link in r.parents:
            self._family_link(1, "FAMC", link)
        for link in r.families:
            self._family_link(1, "FAMS", link)
        for subm in r.submitters:
            self.tag_with_pointer(1, "SUBM", subm.xref)
        for assoc in r.associations:
            self._association(1, assoc)
        self.maybe_tag_with_text(1, "RFN", r.permanent_record_file_number)
        self.maybe_tag_with_text(1, "AFN", r.ancestral_file_number)
        self._user_reference_list(1, r.user_references)
        self.maybe_tag_with_text(1, "RIN", r.automated_record_id)
        self._change(1, r.change)
        self._note_list(1, r.notes)
        self._citation_list(1, r.citations)
        self._media_ref_list(1, r.media)
        self._user_defined_list(1, r.user_defined)

    def _name(self, level: int, n: NameRecord) -> None:
        self.tag_with_text(level, "NAME", n.name)
        self._name_pieces(level + 1, n)
        for variant in n.phonetic:
            self._variant_name(level + 1, "FONE", variant)
        for variant in n.romanized:
            self._variant_name(level + 1, "ROMN", variant)
        self._citation_list(level + 1, n.citations)
        self._note_list(level + 1, n.notes)
        self._user_defined_list(level + 1, n.user_defined)

    def _variant_name(self, level: int, tag: str, v: VariantNameRecord) -> None:
        self.tag_with_text(level, tag, v.name)
        self._name_pieces(level + 1, v)
        self._citation_list(level + 1, v.citations)
        self._note_list(level + 1, v.notes)
        self._user_defined_list(level + 1, v.user_defined)

    def _name_pieces(self, level: int, n: Union[NameRecord, VariantNameRecord]) -> None:
        self.maybe_tag_with_text(level, "TYPE", n.type)
        self.maybe_tag_with_text(level, "NPFX", n.prefix)
        self.maybe_tag_with_text(level, "GIVN", n.given)
        self.maybe_tag_with_text(level, "NICK", n.nickname)
        self.maybe_tag_with_text(level, "SPFX", n.surname_prefix)
        self.maybe_tag_with_text(level, "SURN", n.surname)
        self.maybe_tag_with_text(level, "NSFX", n.suffix)

    def _event_list(self, level: int, events: List[EventRecord]) -> None:
        for event in events:
            self._event(level, event)

    def _event(self, level: int, e: Optional[EventRecord]) -> None:
        if e is None:
            raise GedcomEncodeError("event not specified")
        self.tag(level, e.tag, e.value)
        self.maybe_tag_with_text(level + 1, "TYPE", e.type)
        self.maybe_tag_with_text(level + 1, "DATE", e.date)
        self._address(level + 1, e.address)
        self._place(level + 1, e.place)
        self.maybe_tag(level + 1, "AGE", e.age)
        self.maybe_tag(level + 1, "AGNC", e.responsible_agency)
        self.maybe_tag(level + 1, "RELI", e.religious_affiliation)
        self.maybe_tag(level + 1, "CAUS", e.cause)
        self.maybe_tag(level + 1, "RESN", e.restriction_notice)
        if e.child_in_family is not None:
            self._family_ref(level + 1, "FAMC", e.child_in_family)
            if e.tag == "ADOP":
                self.maybe_tag(level + 2, "ADOP", e.adopted_by_parent)
            self._field_extras(level + 2, e, "child_in_family")
        self._note_list(level + 1, e.notes)
        self._citation_list(level + 1, e.citations)
        self._media_ref_list(level + 1, e.media)
        self._user_defined_list(level + 1, e.user_defined)

    def _family_link(self, level: int, tag: str, link: FamilyLinkRecord) -> None:
        self._family_ref(level, tag, link.family)
        self.maybe_tag_with_text(level + 1, "PEDI", link.type)
        self._note_list(level + 1, link.notes)
        self._user_defined_list(level + 1, link.user_defined)

    def _association(self, level: int, a: AssociationRecord) -> None:
        self.tag_with_pointer(level, "ASSO", a.xref)
        self.maybe_tag_with_text(level + 1, "RELA", a.relation)
        self._citation_list(level + 1, a.citations)
        self._note_list(level + 1, a.notes)
        self._user_defined_list(level + 1, a.user_defined)

    def _family(self, r: FamilyRecord) -> None:
        self.tag_with_id(0, "FAM", r.xref)
        self._individual_ref(1, "HUSB", r.husband)
        self._individual_ref(1, "WIFE", r.wife)
        for child in r.children:
            self._individual_ref(1, "CHIL", child)
        self._event_list(1, r.events)
        self.maybe_tag(1, "NCHI", r.number_of_children)
        self._user_reference_list(1, r.user_references)
        self.maybe_tag_with_text(1, "RIN", r.automated_record_id)
        self._change(1, r.change)
        self._note_list(1, r.notes)
        self._citation_list(1, r.citations)
        self._media_ref_list(1, r.media)
        self._user_defined_list(1, r.user_defined)

    # ------------------------------------------------------------------ #
    # Other records
    # ------------------------------------------------------------------ #

    def _media(self, level: int, r: MediaRecord) -> None:
        self.tag_with_id(level, "OBJE", r.xref)
        self._media_body(level, r)

    def _media_body(self, level: int, r: MediaRecord) -> None:
        for f in r.files:
            self._file(level + 1, f)
        self._user_reference_list(level + 1, r.user_references)
        self.maybe_tag_with_text(level + 1, "RIN", r.automated_record_id)
        self._change(level + 1, r.change)
        self._note_list(level + 1, r.notes)
        self._citation_list(level + 1, r.citations)
        self._user_defined_list(level + 1, r.user_defined)

    def _repository(self, r: RepositoryRecord) -> None:
        self.tag_with_id(0, "REPO", r.xref)
        self.maybe_tag(1, "NAME", r.name)
        self._address(1, r.address)
        self._note_list(1, r.notes)
        self._user_reference_list(1, r.user_references)
        self.maybe_tag_with_text(1, "RIN", r.automated_record_id)
        self._change(1, r.change)
        self._user_defined_list(1, r.user_defined)

    def _source(self, r: SourceRecord) -> None:
        self.tag_with_id(0, "SOUR", r.xref)
        self._text_field(1, "TITL", r, "title")
        if r.data is not None:
            self.tag(1, "DATA")
            for event in r.data.events:
                self.tag(2, "EVEN", event.kind)
                self.maybe_tag(3, "DATE", event.date)
                self.maybe_tag(3, "PLAC", event.place)
                self._user_defined_list(3, event.user_defined)
            self._user_defined_list(2, r.data.user_defined)
        self._text_field(1, "AUTH", r, "originator")
        self.maybe_tag_with_text(1, "ABBR", r.filed_by)
        self._text_field(1, "PUBL", r, "publication_facts")
        self._text_field(1, "TEXT", r, "text")

        if r.repository is not None:
            repo = r.repository.repository
            if repo is not None and repo.xref:
                self.tag_with_pointer(1, "REPO", repo.xref)
            else:
                self.tag(1, "REPO")
            self._note_list(2, r.repository.notes)
            for caln in r.repository.call_numbers:
                self.tag(2, "CALN", caln.call_number)
                self.maybe_tag(3, "MEDI", caln.media_type)
                self._user_defined_list(3, caln.user_defined)
            self._user_defined_list(2, r.repository.user_defined)

        self._user_reference_list(1, r.user_references)
        self.maybe_tag_with_text(1, "RIN", r.automated_record_id)
        self._change(1, r.change)
        self._note_list(1, r.notes)
        self._media_ref_list(1, r.media)
        self._user_defined_list(1, r.user_defined)

    def _submitter(self, level: int, r: SubmitterRecord) -> None:
        self.tag_with_id(level, "SUBM", r.xref)
        self.maybe_tag_with_text(level + 1, "NAME", r.name)
        self._address(level + 1, r.address)
        self._media_ref_list(level + 1, r.media)
        for lang in r.languages:
            self.maybe_tag_with_text(level + 1, "LANG", lang)
        self.maybe_tag_with_text(level + 1, "RFN", r.submitter_record_file_id)
        self.maybe_tag_with_text(level + 1, "RIN", r.automated_record_id)
        self._note_list(level + 1, r.notes)
        self._change(level + 1, r.change)
        self._user_defined_list(level + 1, r.user_defined)

    def _submission(self, r: Optional[SubmissionRecord]) -> None:
        if r is None:
            return
        # GEDCOM 5.5 allows an unidentified submission record.
        if r.xref:
            self.tag_with_id(0, "SUBN", r.xref)
        else:
            self.tag(0, "SUBN")
        self._user_defined_list(1, r.user_defined)


# ---------------------------------------------------------------------- #
# Module-level helpers
# ---------------------------------------------------------------------- #

def encode(g: Gedcom, stream: Any) -> None:
    """Encode ``g`` to an open text or binary stream."""
    Encoder(stream).encode(g)


def dumps(g: Gedcom) -> str:
    """Return ``g`` encoded as a GEDCOM string."""
    buf = io.StringIO()
    Encoder(buf).encode(g)
    return buf.getvalue()


def dump_file(g: Gedcom, path: Union[str, Path]) -> Path:
    """
    Encode ``g`` to ``path`` as UTF-8, creating parent directories.

    The file is only created once the graph has encoded successfully.
    """
    out_path = Path(path)
    text = dumps(g)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_bytes(text.encode("utf-8", errors="surrogateescape"))
    log.info(f"Wrote GEDCOM file: {out_path}")
    return out_path
