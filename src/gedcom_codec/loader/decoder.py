# src/gedcom_codec/loader/decoder.py

"""
Level-driven GEDCOM decoder.

The decoder keeps an explicit stack of ``Frame`` objects. Each frame names
the context it parses (``Context``), the record or substructure it mutates
and the level of the line that opened it. For every incoming line:

    1. Frames whose ``min_level`` is >= the line's level are popped, so one
       line can close several substructures at once (level 4 -> level 1).
    2. The frame left on top handles the tag. Recognised tags set a field or
       open a child substructure (pushing a new frame); pointer tags resolve
       through the ReferenceTable; anything else is kept as a UserDefinedTag.

Only the scanner can fail: once a line is well formed the decoder absorbs it.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from gedcom_codec.config import get_config
from gedcom_codec.logging import get_logger, get_unhandled_tags_logger
from gedcom_codec.loader.continuation import PublicationFacts, TextField
from gedcom_codec.loader.references import ReferenceTable, strip_pointer
from gedcom_codec.loader.tokenizer import Line, Scanner, Stream
from gedcom_codec.registry.entities import (
    AddressDetail,
    AddressRecord,
    AssociationRecord,
    ChangeRecord,
    CitationRecord,
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
    RepositoryRecord,
    SourceCallNumberRecord,
    SourceDataRecord,
    SourceEventRecord,
    SourceRecord,
    SourceRepositoryRecord,
    SubmissionRecord,
    SubmitterRecord,
    Trailer,
    UserDefinedTag,
    UserReferenceRecord,
    VariantNameRecord,
    VariantPlaceNameRecord,
)

log = get_logger(__name__)

INDIVIDUAL_EVENT_TAGS = frozenset({
    "BIRT", "CHR", "DEAT", "BURI", "CREM", "ADOP", "BAPM", "BARM", "BASM",
    "BLES", "CHRA", "CONF", "FCOM", "ORDN", "NATU", "EMIG", "IMMI", "CENS",
    "PROB", "WILL", "GRAD", "RETI", "EVEN",
})

INDIVIDUAL_ATTRIBUTE_TAGS = frozenset({
    "CAST", "DSCR", "EDUC", "IDNO", "NATI", "NCHI", "NMR", "OCCU", "PROP",
    "RELI", "RESI", "SSN", "TITL", "FACT",
})

FAMILY_EVENT_TAGS = frozenset({
    "ANUL", "CENS", "DIV", "DIVF", "ENGA", "MARR", "MARB", "MARC", "MARL",
    "MARS", "EVEN", "RESI",
})

# Events that may name the family the individual was born into.
BIRTH_FAMILY_EVENT_TAGS = frozenset({"BIRT", "CHR"})


class Context(Enum):
    ROOT = auto()
    HEADER = auto()
    HEADER_DATE = auto()
    HEADER_GEDC = auto()
    HEADER_CHAR = auto()
    SYSTEM = auto()
    SYSTEM_CORP = auto()
    SYSTEM_DATA = auto()
    INDIVIDUAL = auto()
    NAME = auto()
    VARIANT_NAME = auto()
    EVENT = auto()
    EVENT_FAMILY = auto()
    PLACE = auto()
    PLACE_MAP = auto()
    VARIANT_PLACE = auto()
    FAMILY_LINK = auto()
    ASSOCIATION = auto()
    FAMILY = auto()
    SOURCE = auto()
    SOURCE_DATA = auto()
    SOURCE_EVENT = auto()
    SOURCE_REPOSITORY = auto()
    CALL_NUMBER = auto()
    CITATION = auto()
    CITATION_DATA = auto()
    NOTE = auto()
    TEXT = auto()
    ADDRESS_DETAIL = auto()
    CHANGE = auto()
    CHANGE_DATE = auto()
    MEDIA = auto()
    MEDIA_FILE = auto()
    MEDIA_FILE_FORMAT = auto()
    USER_REFERENCE = auto()
    REPOSITORY = auto()
    SUBMITTER = auto()
    SUBMISSION = auto()
    USER_DEFINED = auto()


@dataclass
class Frame:
    """
    One open nesting level.

    Attributes:
        context: Which tag set applies to lines nested under this frame.
        target: Record, substructure or TextField the frame mutates.
        min_level: Level of the line that opened the frame; any line at this
            level or shallower closes it.
        tag: Tag of the opening line (events need it for FAMC/ADOP).
        field_owner: Set when the frame parses one field of a record rather
            than a substructure with its own ``user_defined`` list. Unknown
            children then go to ``field_owner.field_user_defined[field_key]``.
        field_key: Attribute name the field fills.
    """
    context: Context
    target: Any
    min_level: int
    tag: str = ""
    field_owner: Any = None
    field_key: str = ""


Handler = Callable[[Frame, Line], None]


class Decoder:
    """
    Reads one GEDCOM stream and builds its record graph.

    Usage:
        with open("family.ged", "rb") as f:
            gedcom = Decoder(f).decode()

    A decoder processes exactly one stream; create a new one per decode.
    """

    def __init__(
        self,
        stream: Stream,
        *,
        tag_logger: Optional[logging.Logger] = None,
        read_size: Optional[int] = None,
    ) -> None:
        cfg = get_config()
        self._stream = stream
        self._read_size = read_size
        self._tag_logger = tag_logger
        if self._tag_logger is None and cfg.log_unhandled_tags:
            self._tag_logger = get_unhandled_tags_logger()

        self._refs = ReferenceTable()
        self._stack: List[Frame] = []
        self._handlers: Dict[Context, Handler] = {
            Context.ROOT: self._root,
            Context.HEADER: self._header,
            Context.HEADER_DATE: self._header_date,
            Context.HEADER_GEDC: self._header_gedc,
            Context.HEADER_CHAR: self._header_char,
            Context.SYSTEM: self._system,
            Context.SYSTEM_CORP: self._system_corp,
            Context.SYSTEM_DATA: self._system_data,
            Context.INDIVIDUAL: self._individual,
            Context.NAME: self._name,
            Context.VARIANT_NAME: self._name,
            Context.EVENT: self._event,
            Context.EVENT_FAMILY: self._event_family,
            Context.PLACE: self._place,
            Context.PLACE_MAP: self._place_map,
            Context.VARIANT_PLACE: self._variant_place,
            Context.FAMILY_LINK: self._family_link,
            Context.ASSOCIATION: self._association,
            Context.FAMILY: self._family,
            Context.SOURCE: self._source,
            Context.SOURCE_DATA: self._source_data,
            Context.SOURCE_EVENT: self._source_event,
            Context.SOURCE_REPOSITORY: self._source_repository,
            Context.CALL_NUMBER: self._call_number,
            Context.CITATION: self._citation,
            Context.CITATION_DATA: self._citation_data,
            Context.NOTE: self._note,
            Context.TEXT: self._text,
            Context.ADDRESS_DETAIL: self._address_detail,
            Context.CHANGE: self._change,
            Context.CHANGE_DATE: self._change_date,
            Context.MEDIA: self._media,
            Context.MEDIA_FILE: self._media_file,
            Context.MEDIA_FILE_FORMAT: self._media_file_format,
            Context.USER_REFERENCE: self._user_reference,
            Context.REPOSITORY: self._repository,
            Context.SUBMITTER: self._submitter,
            Context.SUBMISSION: self._submission,
            Context.USER_DEFINED: self._user_defined,
        }

    def log_unhandled_tags(self, logger: Optional[logging.Logger]) -> None:
        """Report tags that are not recognised in their context to ``logger``."""
        self._tag_logger = logger

    @property
    def references(self) -> ReferenceTable:
        return self._refs

    # ------------------------------------------------------------------ #
    # Driver
    # ------------------------------------------------------------------ #

    def decode(self) -> Gedcom:
        """
        Decode the whole stream.

        Raises:
            GedcomSyntaxError: if the scanner rejects the input. No partial
                graph is returned in that case.
        """
        log.debug("Decoding GEDCOM stream")
        g = Gedcom()
        self._refs = ReferenceTable()
        self._stack = [Frame(Context.ROOT, g, -1)]

        count = 0
        for line in Scanner(self._stream, self._read_size):
            self._dispatch(line)
            count += 1

        self._stack = []
        log.debug(
            "Decoded %d lines (INDI=%d, FAM=%d, SOUR=%d, REPO=%d, OBJE=%d, SUBM=%d)",
            count,
            len(g.individuals),
            len(g.families),
            len(g.sources),
            len(g.repositories),
            len(g.media),
            len(g.submitters),
        )
        return g

    def _dispatch(self, line: Line) -> None:
        while len(self._stack) > 1 and line.level <= self._stack[-1].min_level:
            self._stack.pop()
        frame = self._stack[-1]
        self._handlers[frame.context](frame, line)

    def _push(
        self,
        context: Context,
        target: Any,
        line: Line,
        field_owner: Any = None,
        field_key: str = "",
    ) -> None:
        self._stack.append(Frame(context, target, line.level, line.tag, field_owner, field_key))

    # ------------------------------------------------------------------ #
    # Shared building blocks
    # ------------------------------------------------------------------ #

    def _unhandled(self, line: Line) -> None:
        if self._tag_logger is None:
            return
        self._tag_logger.info(
            "unhandled tag on line %d; level=%d; tag=%s; value=%s; xref=%s",
            line.lineno,
            line.level,
            line.tag,
            line.value,
            line.xref,
        )

    def _keep_user_defined(self, into: List[UserDefinedTag], line: Line) -> None:
        node = UserDefinedTag(tag=line.tag, value=line.value, xref=line.xref, level=line.level)
        into.append(node)
        self._push(Context.USER_DEFINED, node, line)

    def _unknown(self, frame: Frame, line: Line) -> None:
        self._unhandled(line)
        if frame.field_owner is not None:
            into = frame.field_owner.field_user_defined.setdefault(frame.field_key, [])
        else:
            into = frame.target.user_defined
        self._keep_user_defined(into, line)

    def _open_text(self, field: TextField, line: Line) -> None:
        field.set(line.value)
        self._push(Context.TEXT, field, line, field.owner, field.key)

    def _open_note(self, into: List[NoteRecord], line: Line) -> None:
        note = NoteRecord(note=line.value)
        into.append(note)
        self._push(Context.NOTE, note, line)

    def _open_citation(self, into: List[CitationRecord], line: Line) -> None:
        xref = strip_pointer(line.value)
        source = self._refs.get_or_create(SourceRecord, xref)
        if not xref:
            # Inline source: the citation text is all there is.
            source.title = line.value
        citation = CitationRecord(source=source)
        into.append(citation)
        self._push(Context.CITATION, citation, line)

    def _open_media(self, into: List[MediaRecord], line: Line) -> None:
        media = self._refs.get_or_create(MediaRecord, strip_pointer(line.value))
        into.append(media)
        self._push(Context.MEDIA, media, line)

    def _open_family_link(self, into: List[FamilyLinkRecord], line: Line) -> None:
        family = self._refs.get_or_create(FamilyRecord, strip_pointer(line.value))
        link = FamilyLinkRecord(family=family)
        into.append(link)
        self._push(Context.FAMILY_LINK, link, line)

    def _open_event(self, into: List[EventRecord], line: Line) -> None:
        event = EventRecord(tag=line.tag, value=line.value)
        into.append(event)
        self._push(Context.EVENT, event, line)

    def _open_user_reference(self, into: List[UserReferenceRecord], line: Line) -> None:
        ref = UserReferenceRecord(number=line.value)
        into.append(ref)
        self._push(Context.USER_REFERENCE, ref, line)

    def _address_tag(self, address: AddressRecord, line: Line) -> bool:
        """
        Shared ADDR / PHON / EMAIL / FAX / WWW handling.

        Used by the header's CORP block, repositories, submitters and events.
        Returns False when the tag is not an address tag.
        """
        tag = line.tag
        if tag == "ADDR":
            detail = AddressDetail(full=line.value)
            address.address.append(detail)
            self._push(Context.ADDRESS_DETAIL, detail, line)
        elif tag == "PHON":
            address.phone.append(line.value)
        elif tag == "EMAIL":
            address.email.append(line.value)
        elif tag == "FAX":
            address.fax.append(line.value)
        elif tag in ("WWW", "URL"):
            address.www.append(line.value)
        else:
            return False
        return True

    # ------------------------------------------------------------------ #
    # Records
    # ------------------------------------------------------------------ #

    def _root(self, frame: Frame, line: Line) -> None:
        g: Gedcom = frame.target
        if line.level != 0:
            log.warning(
                "Line %d: level %d %s outside of any record; skipped",
                line.lineno,
                line.level,
                line.tag,
            )
            return

        tag = line.tag
        if tag == "HEAD":
            g.header = Header()
            self._push(Context.HEADER, g.header, line)
        elif tag == "INDI":
            indi = self._refs.get_or_create(IndividualRecord, line.xref)
            g.individuals.append(indi)
            self._push(Context.INDIVIDUAL, indi, line)
        elif tag == "FAM":
            fam = self._refs.get_or_create(FamilyRecord, line.xref)
            g.families.append(fam)
            self._push(Context.FAMILY, fam, line)
        elif tag == "SOUR":
            src = self._refs.get_or_create(SourceRecord, line.xref)
            g.sources.append(src)
            self._push(Context.SOURCE, src, line)
        elif tag == "REPO":
            repo = self._refs.get_or_create(RepositoryRecord, line.xref)
            g.repositories.append(repo)
            self._push(Context.REPOSITORY, repo, line)
        elif tag == "OBJE":
            media = self._refs.get_or_create(MediaRecord, line.xref)
            g.media.append(media)
            self._push(Context.MEDIA, media, line)
        elif tag == "SUBM":
            subm = self._refs.get_or_create(SubmitterRecord, line.xref)
            g.submitters.append(subm)
            self._push(Context.SUBMITTER, subm, line)
        elif tag == "SUBN":
            subn = self._refs.get_or_create(SubmissionRecord, line.xref)
            g.submission = subn
            self._push(Context.SUBMISSION, subn, line)
        elif tag == "TRLR":
            g.trailer = Trailer()
        else:
            self._keep_user_defined(g.user_defined, line)

    def _header(self, frame: Frame, line: Line) -> None:
        h: Header = frame.target
        tag = line.tag
        if tag == "SOUR":
            h.source_system.xref = line.value
            self._push(Context.SYSTEM, h.source_system, line)
        elif tag == "DEST":
            h.destination = line.value
        elif tag == "DATE":
            h.date = line.value
            self._push(Context.HEADER_DATE, h, line, h, "date")
        elif tag == "FILE":
            h.filename = line.value
        elif tag == "COPR":
            h.copyright = line.value
        elif tag == "GEDC":
            h.has_gedc = True
            self._push(Context.HEADER_GEDC, h, line, h, "gedc")
        elif tag == "LANG":
            h.language = line.value
        elif tag == "NOTE":
            self._open_text(TextField(h, "note"), line)
        elif tag == "SUBM":
            h.submitter = self._refs.get_or_create(SubmitterRecord, strip_pointer(line.value))
        elif tag == "SUBN":
            h.submission = self._refs.get_or_create(SubmissionRecord, strip_pointer(line.value))
        elif tag == "CHAR":
            h.character_set = line.value
            self._push(Context.HEADER_CHAR, h, line, h, "character_set")
        else:
            self._unknown(frame, line)

    def _header_date(self, frame: Frame, line: Line) -> None:
        if line.tag == "TIME":
            frame.target.time = line.value
        else:
            self._unknown(frame, line)

    def _header_gedc(self, frame: Frame, line: Line) -> None:
        if line.tag == "VERS":
            frame.target.version = line.value
        elif line.tag == "FORM":
            frame.target.form = line.value
        else:
            self._unknown(frame, line)

    def _header_char(self, frame: Frame, line: Line) -> None:
        if line.tag == "VERS":
            frame.target.character_set_version = line.value
        else:
            self._unknown(frame, line)

    def _system(self, frame: Frame, line: Line) -> None:
        s = frame.target
        tag = line.tag
        if tag == "VERS":
            s.version = line.value
        elif tag == "NAME":
            s.product_name = line.value
        elif tag == "CORP":
            s.business_name = line.value
            self._push(Context.SYSTEM_CORP, s, line, s, "business_name")
        elif tag == "DATA":
            s.source_name = line.value
            self._push(Context.SYSTEM_DATA, s, line, s, "source_name")
        else:
            self._unknown(frame, line)

    def _system_corp(self, frame: Frame, line: Line) -> None:
        if not self._address_tag(frame.target.address, line):
            self._unknown(frame, line)

    def _system_data(self, frame: Frame, line: Line) -> None:
        s = frame.target
        if line.tag == "DATE":
            s.source_date = line.value
        elif line.tag == "COPR":
            self._open_text(TextField(s, "source_copyright"), line)
        else:
            self._unknown(frame, line)

    def _individual(self, frame: Frame, line: Line) -> None:
        i: IndividualRecord = frame.target
        tag = line.tag
        if tag == "NAME":
            name = NameRecord(name=line.value)
            i.names.append(name)
            self._push(Context.NAME, name, line)
        elif tag == "SEX":
            i.sex = line.value
        elif tag in INDIVIDUAL_EVENT_TAGS:
            self._open_event(i.events, line)
        elif tag in INDIVIDUAL_ATTRIBUTE_TAGS:
            self._open_event(i.attributes, line)
        elif tag == "FAMC":
            self._open_family_link(i.parents, line)
        elif tag == "FAMS":
            self._open_family_link(i.families, line)
        elif tag == "SUBM" and strip_pointer(line.value):
            i.submitters.append(
                self._refs.get_or_create(SubmitterRecord, strip_pointer(line.value))
            )
        elif tag == "ASSO" and strip_pointer(line.value):
            assoc = AssociationRecord(xref=strip_pointer(line.value))
            i.associations.append(assoc)
            self._push(Context.ASSOCIATION, assoc, line)
        elif tag == "ALIA" and line.value and not strip_pointer(line.value):
            # ALIA is broken in the wild (https://www.tamurajones.net/GEDCOMALIA.xhtml);
            # a plain-text ALIA is treated as another name.
            name = NameRecord(name=line.value)
            i.names.append(name)
            self._push(Context.NAME, name, line)
        elif tag == "RFN":
            i.permanent_record_file_number = line.value
        elif tag == "AFN":
            i.ancestral_file_number = line.value
        elif tag == "REFN":
            self._open_user_reference(i.user_references, line)
        elif tag == "RIN":
            i.automated_record_id = line.value
        elif tag == "CHAN":
            self._push(Context.CHANGE, i.change, line)
        elif tag == "NOTE":
            self._open_note(i.notes, line)
        elif tag == "SOUR":
            self._open_citation(i.citations, line)
        elif tag == "OBJE":
            self._open_media(i.media, line)
        else:
            self._unknown(frame, line)

    def _name(self, frame: Frame, line: Line) -> None:
        # Shared by NAME and its FONE / ROMN variants.
        n = frame.target
        tag = line.tag
        if tag == "TYPE":
            n.type = line.value
        elif tag == "NPFX":
            n.prefix = line.value
        elif tag == "GIVN":
            n.given = line.value
        elif tag == "NICK":
            n.nickname = line.value
        elif tag == "SPFX":
            n.surname_prefix = line.value
        elif tag == "SURN":
            n.surname = line.value
        elif tag == "NSFX":
            n.suffix = line.value
        elif tag in ("FONE", "ROMN") and frame.context is Context.NAME:
            variant = VariantNameRecord(name=line.value)
            (n.phonetic if tag == "FONE" else n.romanized).append(variant)
            self._push(Context.VARIANT_NAME, variant, line)
        elif tag == "SOUR":
            self._open_citation(n.citations, line)
        elif tag == "NOTE":
            self._open_note(n.notes, line)
        else:
            self._unknown(frame, line)

    def _event(self, frame: Frame, line: Line) -> None:
        e: EventRecord = frame.target
        tag = line.tag

        if tag == "FAMC" and (frame.tag in BIRTH_FAMILY_EVENT_TAGS or frame.tag == "ADOP"):
            e.child_in_family = self._refs.get_or_create(FamilyRecord, strip_pointer(line.value))
            self._push(Context.EVENT_FAMILY, e, line, e, "child_in_family")
            return

        if tag == "TYPE":
            e.type = line.value
        elif tag == "DATE":
            e.date = line.value
        elif tag == "PLAC":
            e.place.name = line.value
            self._push(Context.PLACE, e.place, line)
        elif tag == "AGE":
            e.age = line.value
        elif tag == "AGNC":
            e.responsible_agency = line.value
        elif tag == "RELI":
            e.religious_affiliation = line.value
        elif tag == "CAUS":
            e.cause = line.value
        elif tag == "RESN":
            e.restriction_notice = line.value
        elif tag == "NOTE":
            self._open_note(e.notes, line)
        elif tag == "SOUR":
            self._open_citation(e.citations, line)
        elif tag == "OBJE":
            self._open_media(e.media, line)
        elif not self._address_tag(e.address, line):
            self._unknown(frame, line)

    def _event_family(self, frame: Frame, line: Line) -> None:
        # Only an adoption names the adopting parent.
        if line.tag == "ADOP" and frame.target.tag == "ADOP":
            frame.target.adopted_by_parent = line.value
        else:
            self._unknown(frame, line)

    def _place(self, frame: Frame, line: Line) -> None:
        p = frame.target
        tag = line.tag
        if tag == "FONE":
            variant = VariantPlaceNameRecord(name=line.value)
            p.phonetic.append(variant)
            self._push(Context.VARIANT_PLACE, variant, line)
        elif tag == "ROMN":
            variant = VariantPlaceNameRecord(name=line.value)
            p.romanized.append(variant)
            self._push(Context.VARIANT_PLACE, variant, line)
        elif tag == "MAP":
            self._push(Context.PLACE_MAP, p, line, p, "map")
        elif tag == "SOUR":
            self._open_citation(p.citations, line)
        elif tag == "NOTE":
            self._open_note(p.notes, line)
        else:
            self._unknown(frame, line)

    def _place_map(self, frame: Frame, line: Line) -> None:
        if line.tag == "LATI":
            frame.target.latitude = line.value
        elif line.tag == "LONG":
            frame.target.longitude = line.value
        else:
            self._unknown(frame, line)

    def _variant_place(self, frame: Frame, line: Line) -> None:
        if line.tag == "TYPE":
            frame.target.type = line.value
        else:
            self._unknown(frame, line)

    def _family_link(self, frame: Frame, line: Line) -> None:
        link: FamilyLinkRecord = frame.target
        if line.tag == "PEDI":
            link.type = line.value
        elif line.tag == "NOTE":
            self._open_note(link.notes, line)
        else:
            self._unknown(frame, line)

    def _association(self, frame: Frame, line: Line) -> None:
        a: AssociationRecord = frame.target
        if line.tag == "RELA":
            a.relation = line.value
        elif line.tag == "SOUR":
            self._open_citation(a.citations, line)
        elif line.tag == "NOTE":
            self._open_note(a.notes, line)
        else:
            self._unknown(frame, line)

    def _family(self, frame: Frame, line: Line) -> None:
        # see https://www.tamurajones.net/MarriageInGEDCOM.xhtml
        f: FamilyRecord = frame.target
        tag = line.tag
        if tag == "HUSB":
            f.husband = self._refs.get_or_create(IndividualRecord, strip_pointer(line.value))
        elif tag == "WIFE":
            f.wife = self._refs.get_or_create(IndividualRecord, strip_pointer(line.value))
        elif tag == "CHIL":
            f.children.append(
                self._refs.get_or_create(IndividualRecord, strip_pointer(line.value))
            )
        elif tag in FAMILY_EVENT_TAGS:
            self._open_event(f.events, line)
        elif tag == "NCHI":
            f.number_of_children = line.value
        elif tag == "REFN":
            self._open_user_reference(f.user_references, line)
        elif tag == "RIN":
            f.automated_record_id = line.value
        elif tag == "CHAN":
            self._push(Context.CHANGE, f.change, line)
        elif tag == "NOTE":
            self._open_note(f.notes, line)
        elif tag == "SOUR":
            self._open_citation(f.citations, line)
        elif tag == "OBJE":
            self._open_media(f.media, line)
        else:
            self._unknown(frame, line)

    def _source(self, frame: Frame, line: Line) -> None:
        s: SourceRecord = frame.target
        tag = line.tag
        if tag == "DATA":
            if s.data is None:
                s.data = SourceDataRecord()
            self._push(Context.SOURCE_DATA, s.data, line)
        elif tag == "TITL":
            self._open_text(TextField(s, "title"), line)
        elif tag == "ABBR":
            s.filed_by = line.value
        elif tag == "AUTH":
            self._open_text(TextField(s, "originator"), line)
        elif tag == "PUBL":
            self._open_text(PublicationFacts(s, "publication_facts"), line)
        elif tag == "TEXT":
            self._open_text(TextField(s, "text"), line)
        elif tag == "REPO":
            repo = self._refs.get_or_create(RepositoryRecord, strip_pointer(line.value))
            s.repository = SourceRepositoryRecord(repository=repo)
            self._push(Context.SOURCE_REPOSITORY, s.repository, line)
        elif tag == "REFN":
            self._open_user_reference(s.user_references, line)
        elif tag == "RIN":
            s.automated_record_id = line.value
        elif tag == "CHAN":
            self._push(Context.CHANGE, s.change, line)
        elif tag == "NOTE":
            self._open_note(s.notes, line)
        elif tag == "OBJE":
            self._open_media(s.media, line)
        else:
            self._unknown(frame, line)

    def _source_data(self, frame: Frame, line: Line) -> None:
        if line.tag == "EVEN":
            event = SourceEventRecord(kind=line.value)
            frame.target.events.append(event)
            self._push(Context.SOURCE_EVENT, event, line)
        else:
            self._unknown(frame, line)

    def _source_event(self, frame: Frame, line: Line) -> None:
        if line.tag == "DATE":
            frame.target.date = line.value
        elif line.tag == "PLAC":
            frame.target.place = line.value
        else:
            self._unknown(frame, line)

    def _source_repository(self, frame: Frame, line: Line) -> None:
        r: SourceRepositoryRecord = frame.target
        if line.tag == "NOTE":
            self._open_note(r.notes, line)
        elif line.tag == "CALN":
            caln = SourceCallNumberRecord(call_number=line.value)
            r.call_numbers.append(caln)
            self._push(Context.CALL_NUMBER, caln, line)
        else:
            self._unknown(frame, line)

    def _call_number(self, frame: Frame, line: Line) -> None:
        if line.tag == "MEDI":
            frame.target.media_type = line.value
        else:
            self._unknown(frame, line)

    def _citation(self, frame: Frame, line: Line) -> None:
        c: CitationRecord = frame.target
        tag = line.tag
        if tag == "PAGE":
            c.page = line.value
        elif tag == "QUAY":
            c.quay = line.value
        elif tag == "NOTE":
            self._open_note(c.notes, line)
        elif tag == "DATA":
            self._push(Context.CITATION_DATA, c.data, line)
        elif tag == "OBJE":
            self._open_media(c.media, line)
        elif tag in ("CONT", "CONC") and c.source is not None and not c.source.xref:
            TextField(c.source, "title").extend(tag, line.value)
        else:
            self._unknown(frame, line)

    def _citation_data(self, frame: Frame, line: Line) -> None:
        d = frame.target
        if line.tag == "DATE":
            d.date = line.value
        elif line.tag == "TEXT":
            d.text.append(line.value)
            self._open_text(TextField(d, "text", len(d.text) - 1), line)
        else:
            self._unknown(frame, line)

    def _note(self, frame: Frame, line: Line) -> None:
        n: NoteRecord = frame.target
        if line.tag == "CONT":
            n.note = n.note + "\n" + line.value
        elif line.tag == "CONC":
            n.note = n.note + line.value
        elif line.tag == "SOUR":
            self._open_citation(n.citations, line)
        else:
            self._unknown(frame, line)

    def _text(self, frame: Frame, line: Line) -> None:
        if not frame.target.extend(line.tag, line.value):
            self._unknown(frame, line)

    def _address_detail(self, frame: Frame, line: Line) -> None:
        a: AddressDetail = frame.target
        tag = line.tag
        # CONC is accepted as well even though the standard only names CONT.
        if tag == "CONT":
            a.full = a.full + "\n" + line.value
        elif tag == "CONC":
            a.full = a.full + line.value
        elif tag == "ADR1":
            a.line1 = line.value
        elif tag == "ADR2":
            a.line2 = line.value
        elif tag == "ADR3":
            a.line3 = line.value
        elif tag == "CITY":
            a.city = line.value
        elif tag == "STAE":
            a.state = line.value
        elif tag == "POST":
            a.postal_code = line.value
        elif tag == "CTRY":
            a.country = line.value
        else:
            self._unknown(frame, line)

    def _change(self, frame: Frame, line: Line) -> None:
        c: ChangeRecord = frame.target
        if line.tag == "DATE":
            c.date = line.value
            self._push(Context.CHANGE_DATE, c, line, c, "date")
        elif line.tag == "NOTE":
            self._open_note(c.notes, line)
        else:
            self._unknown(frame, line)

    def _change_date(self, frame: Frame, line: Line) -> None:
        if line.tag == "TIME":
            frame.target.time = line.value
        else:
            self._unknown(frame, line)

    def _media(self, frame: Frame, line: Line) -> None:
        m: MediaRecord = frame.target
        tag = line.tag
        if tag == "FILE":  # 5.5.1, one FILE per file
            f = self._current_file(m)
            if f.name:
                f = FileRecord()
                m.files.append(f)
            f.name = line.value
            self._push(Context.MEDIA_FILE, f, line)
        elif tag == "FORM":  # 5.5
            f = self._current_file(m)
            f.format = line.value
            self._push(Context.MEDIA_FILE_FORMAT, f, line)
        elif tag == "TITL":  # 5.5
            f = self._current_file(m)
            self._open_text(TextField(f, "title"), line)
        elif tag == "RIN":
            m.automated_record_id = line.value
        elif tag == "REFN":
            self._open_user_reference(m.user_references, line)
        elif tag == "NOTE":
            self._open_note(m.notes, line)
        elif tag == "SOUR":
            self._open_citation(m.citations, line)
        elif tag == "CHAN":
            self._push(Context.CHANGE, m.change, line)
        else:
            self._unknown(frame, line)

    @staticmethod
    def _current_file(m: MediaRecord) -> FileRecord:
        if not m.files:
            m.files.append(FileRecord())
        return m.files[-1]

    def _media_file(self, frame: Frame, line: Line) -> None:
        f: FileRecord = frame.target
        if line.tag == "FORM":
            f.format = line.value
            self._push(Context.MEDIA_FILE_FORMAT, f, line)
        elif line.tag == "TITL":
            self._open_text(TextField(f, "title"), line)
        else:
            self._unknown(frame, line)

    def _media_file_format(self, frame: Frame, line: Line) -> None:
        if line.tag == "TYPE":
            frame.target.format_type = line.value
        else:
            self._unknown(frame, line)

    def _user_reference(self, frame: Frame, line: Line) -> None:
        if line.tag == "TYPE":
            frame.target.type = line.value
        else:
            self._unknown(frame, line)

    def _repository(self, frame: Frame, line: Line) -> None:
        r: RepositoryRecord = frame.target
        tag = line.tag
        if tag == "NAME":
            r.name = line.value
        elif tag == "NOTE":
            self._open_note(r.notes, line)
        elif tag == "RIN":
            r.automated_record_id = line.value
        elif tag == "REFN":
            self._open_user_reference(r.user_references, line)
        elif tag == "CHAN":
            self._push(Context.CHANGE, r.change, line)
        elif not self._address_tag(r.address, line):
            self._unknown(frame, line)

    def _submitter(self, frame: Frame, line: Line) -> None:
        s: SubmitterRecord = frame.target
        tag = line.tag
        if tag == "NAME":
            s.name = line.value
        elif tag in ("ADDR", "PHON", "EMAIL", "FAX", "WWW", "URL"):
            if s.address is None:
                s.address = AddressRecord()
            self._address_tag(s.address, line)
        elif tag == "OBJE":
            self._open_media(s.media, line)
        elif tag == "LANG":
            s.languages.append(line.value)
        elif tag == "RFN":
            s.submitter_record_file_id = line.value
        elif tag == "RIN":
            s.automated_record_id = line.value
        elif tag == "NOTE":
            self._open_note(s.notes, line)
        elif tag == "CHAN":
            if s.change is None:
                s.change = ChangeRecord()
            self._push(Context.CHANGE, s.change, line)
        else:
            self._unknown(frame, line)

    def _submission(self, frame: Frame, line: Line) -> None:
        # Submission details are kept verbatim.
        self._keep_user_defined(frame.target.user_defined, line)

    def _user_defined(self, frame: Frame, line: Line) -> None:
        self._keep_user_defined(frame.target.user_defined, line)


# ---------------------------------------------------------------------- #
# Module-level helpers
# ---------------------------------------------------------------------- #

def decode(stream: Stream, *, tag_logger: Optional[logging.Logger] = None) -> Gedcom:
    """Decode a binary or text stream into a Gedcom record graph."""
    return Decoder(stream, tag_logger=tag_logger).decode()


def loads(data: Union[str, bytes], *, tag_logger: Optional[logging.Logger] = None) -> Gedcom:
    """Decode GEDCOM held in memory (str or bytes)."""
    raw = data.encode("utf-8", errors="surrogateescape") if isinstance(data, str) else data
    return decode(io.BytesIO(raw), tag_logger=tag_logger)


def load_file(
    path: Union[str, Path],
    *,
    tag_logger: Optional[logging.Logger] = None,
) -> Gedcom:
    """
    Decode a GEDCOM file from disk.

    Raises:
        FileNotFoundError: if `path` does not exist.
        GedcomSyntaxError: if the file cannot be scanned.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise FileNotFoundError(f"GEDCOM file not found: {file_path}")

    log.info(f"Decoding GEDCOM file: {file_path}")
    with file_path.open("rb") as f:
        return decode(f, tag_logger=tag_logger)
