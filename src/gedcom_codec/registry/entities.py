from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional


# -----------------------------
# Generic / lossless capture
# -----------------------------

@dataclass(slots=True)
class UserDefinedTag:
    """
    Lossless capture of a tag that was not recognised in its context.

    Covers vendor extensions (``_TREE``, ``_MYOWNTAG``) as well as standard
    tags that appear somewhere the decoder does not model them. Nested lines
    are kept as nested UserDefinedTag values so that nothing is lost on a
    decode/encode round trip.

    Records whose fields can carry their own substructure (a header DATE, a
    source TITL, a place MAP, ...) keep the unknown children of that field in
    ``field_user_defined``, keyed by the attribute name the field fills
    (``"date"``, ``"title"``, ``"map"``, ``"text[0]"``). The encoder writes
    them one level below the field.
    """
    tag: str
    value: str = ""
    xref: str = ""
    level: int = 0
    user_defined: List["UserDefinedTag"] = field(default_factory=list)


@dataclass(slots=True)
class UserReferenceRecord:
    number: str = ""
    type: str = ""
    user_defined: List[UserDefinedTag] = field(default_factory=list)


@dataclass(slots=True)
class NoteRecord:
    note: str = ""
    citations: List["CitationRecord"] = field(default_factory=list)
    user_defined: List[UserDefinedTag] = field(default_factory=list)


@dataclass(slots=True)
class ChangeRecord:
    date: str = ""
    time: str = ""
    notes: List[NoteRecord] = field(default_factory=list)
    field_user_defined: Dict[str, List[UserDefinedTag]] = field(default_factory=dict)
    user_defined: List[UserDefinedTag] = field(default_factory=list)


# -----------------------------
# Addresses and places
# -----------------------------

@dataclass(slots=True)
class AddressDetail:
    full: str = ""
    line1: str = ""
    line2: str = ""
    line3: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = ""
    user_defined: List[UserDefinedTag] = field(default_factory=list)


@dataclass(slots=True)
class AddressRecord:
    """ADDR structures plus the contact tags that travel with them."""
    address: List[AddressDetail] = field(default_factory=list)
    phone: List[str] = field(default_factory=list)
    email: List[str] = field(default_factory=list)
    fax: List[str] = field(default_factory=list)
    www: List[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.address or self.phone or self.email or self.fax or self.www)


@dataclass(slots=True)
class VariantPlaceNameRecord:
    name: str = ""
    type: str = ""
    user_defined: List[UserDefinedTag] = field(default_factory=list)


@dataclass(slots=True)
class PlaceRecord:
    name: str = ""
    phonetic: List[VariantPlaceNameRecord] = field(default_factory=list)
    romanized: List[VariantPlaceNameRecord] = field(default_factory=list)
    latitude: str = ""
    longitude: str = ""
    citations: List["CitationRecord"] = field(default_factory=list)
    notes: List[NoteRecord] = field(default_factory=list)
    field_user_defined: Dict[str, List[UserDefinedTag]] = field(default_factory=dict)
    user_defined: List[UserDefinedTag] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (
            self.name
            or self.phonetic
            or self.romanized
            or self.latitude
            or self.longitude
            or self.citations
            or self.notes
            or self.field_user_defined
            or self.user_defined
        )


# -----------------------------
# Citations and media
# -----------------------------

@dataclass(slots=True)
class DataRecord:
    date: str = ""
    text: List[str] = field(default_factory=list)
    field_user_defined: Dict[str, List[UserDefinedTag]] = field(default_factory=dict)
    user_defined: List[UserDefinedTag] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.date or self.text or self.field_user_defined or self.user_defined)


@dataclass(slots=True)
class CitationRecord:
    """
    A SOUR substructure.

    ``source`` is the shared SourceRecord for pointer citations
    (``2 SOUR @S1@``). For inline citations (``2 SOUR Parish register``) it is
    an anonymous SourceRecord whose title holds the citation text.
    """
    source: Optional["SourceRecord"] = None
    page: str = ""
    data: DataRecord = field(default_factory=DataRecord)
    quay: str = ""
    media: List["MediaRecord"] = field(default_factory=list)
    notes: List[NoteRecord] = field(default_factory=list)
    user_defined: List[UserDefinedTag] = field(default_factory=list)


@dataclass(slots=True)
class FileRecord:
    name: str = ""
    format: str = ""
    format_type: str = ""
    title: str = ""
    field_user_defined: Dict[str, List[UserDefinedTag]] = field(default_factory=dict)
    user_defined: List[UserDefinedTag] = field(default_factory=list)


# -----------------------------
# Names, events, links
# -----------------------------

@dataclass(slots=True)
class VariantNameRecord:
    """FONE / ROMN variation of a personal name (GEDCOM 5.5.1)."""
    name: str = ""
    type: str = ""
    prefix: str = ""
    given: str = ""
    nickname: str = ""
    surname_prefix: str = ""
    surname: str = ""
    suffix: str = ""
    citations: List[CitationRecord] = field(default_factory=list)
    notes: List[NoteRecord] = field(default_factory=list)
    user_defined: List[UserDefinedTag] = field(default_factory=list)


@dataclass(slots=True)
class NameRecord:
    name: str = ""
    type: str = ""
    prefix: str = ""
    given: str = ""
    nickname: str = ""
    surname_prefix: str = ""
    surname: str = ""
    suffix: str = ""
    phonetic: List[VariantNameRecord] = field(default_factory=list)
    romanized: List[VariantNameRecord] = field(default_factory=list)
    citations: List[CitationRecord] = field(default_factory=list)
    notes: List[NoteRecord] = field(default_factory=list)
    user_defined: List[UserDefinedTag] = field(default_factory=list)


@dataclass(slots=True)
class EventRecord:
    """
    Individual event, individual attribute or family event.

    ``tag`` is the GEDCOM tag the event was read from (BIRT, OCCU, MARR, ...)
    and ``value`` the text on that line (attributes carry their descriptor
    there, events usually carry ``Y`` or nothing).
    """
    tag: str
    value: str = ""
    type: str = ""
    date: str = ""
    place: PlaceRecord = field(default_factory=PlaceRecord)
    address: AddressRecord = field(default_factory=AddressRecord)
    age: str = ""
    responsible_agency: str = ""
    religious_affiliation: str = ""
    cause: str = ""
    restriction_notice: str = ""
    child_in_family: Optional["FamilyRecord"] = None
    adopted_by_parent: str = ""
    citations: List[CitationRecord] = field(default_factory=list)
    media: List["MediaRecord"] = field(default_factory=list)
    notes: List[NoteRecord] = field(default_factory=list)
    field_user_defined: Dict[str, List[UserDefinedTag]] = field(default_factory=dict)
    user_defined: List[UserDefinedTag] = field(default_factory=list)


@dataclass(slots=True)
class FamilyLinkRecord:
    """FAMC / FAMS link from an individual to a family."""
    family: Optional["FamilyRecord"] = None
    type: str = ""
    notes: List[NoteRecord] = field(default_factory=list)
    user_defined: List[UserDefinedTag] = field(default_factory=list)


@dataclass(slots=True)
class AssociationRecord:
    xref: str = ""
    relation: str = ""
    citations: List[CitationRecord] = field(default_factory=list)
    notes: List[NoteRecord] = field(default_factory=list)
    user_defined: List[UserDefinedTag] = field(default_factory=list)


# -----------------------------
# Source substructures
# -----------------------------

@dataclass(slots=True)
class SourceEventRecord:
    kind: str = ""
    date: str = ""
    place: str = ""
    user_defined: List[UserDefinedTag] = field(default_factory=list)


@dataclass(slots=True)
class SourceDataRecord:
    events: List[SourceEventRecord] = field(default_factory=list)
    user_defined: List[UserDefinedTag] = field(default_factory=list)


@dataclass(slots=True)
class SourceCallNumberRecord:
    call_number: str = ""
    media_type: str = ""
    user_defined: List[UserDefinedTag] = field(default_factory=list)


@dataclass(slots=True)
class SourceRepositoryRecord:
    repository: Optional["RepositoryRecord"] = None
    notes: List[NoteRecord] = field(default_factory=list)
    call_numbers: List[SourceCallNumberRecord] = field(default_factory=list)
    user_defined: List[UserDefinedTag] = field(default_factory=list)


# -----------------------------
# Pointable records
# -----------------------------
#
# Records that can be the target of an @XREF@ pointer compare by identity
# (eq=False): the decoder hands out one shared instance per xref, and the
# individual <-> family links make the graph cyclic.

@dataclass(slots=True, eq=False)
class IndividualRecord:
    xref: str = ""
    names: List[NameRecord] = field(default_factory=list)
    sex: str = ""
    events: List[EventRecord] = field(default_factory=list)
    attributes: List[EventRecord] = field(default_factory=list)
    parents: List[FamilyLinkRecord] = field(default_factory=list)
    families: List[FamilyLinkRecord] = field(default_factory=list)
    submitters: List["SubmitterRecord"] = field(default_factory=list)
    associations: List[AssociationRecord] = field(default_factory=list)
    permanent_record_file_number: str = ""
    ancestral_file_number: str = ""
    user_references: List[UserReferenceRecord] = field(default_factory=list)
    automated_record_id: str = ""
    change: ChangeRecord = field(default_factory=ChangeRecord)
    notes: List[NoteRecord] = field(default_factory=list)
    citations: List[CitationRecord] = field(default_factory=list)
    media: List["MediaRecord"] = field(default_factory=list)
    user_defined: List[UserDefinedTag] = field(default_factory=list)


@dataclass(slots=True, eq=False)
class FamilyRecord:
    xref: str = ""
    husband: Optional[IndividualRecord] = None
    wife: Optional[IndividualRecord] = None
    children: List[IndividualRecord] = field(default_factory=list)
    events: List[EventRecord] = field(default_factory=list)
    number_of_children: str = ""
    user_references: List[UserReferenceRecord] = field(default_factory=list)
    automated_record_id: str = ""
    change: ChangeRecord = field(default_factory=ChangeRecord)
    notes: List[NoteRecord] = field(default_factory=list)
    citations: List[CitationRecord] = field(default_factory=list)
    media: List["MediaRecord"] = field(default_factory=list)
    user_defined: List[UserDefinedTag] = field(default_factory=list)


@dataclass(slots=True, eq=False)
class MediaRecord:
    xref: str = ""
    files: List[FileRecord] = field(default_factory=list)
    user_references: List[UserReferenceRecord] = field(default_factory=list)
    automated_record_id: str = ""
    change: ChangeRecord = field(default_factory=ChangeRecord)
    notes: List[NoteRecord] = field(default_factory=list)
    citations: List[CitationRecord] = field(default_factory=list)
    user_defined: List[UserDefinedTag] = field(default_factory=list)


@dataclass(slots=True, eq=False)
class RepositoryRecord:
    xref: str = ""
    name: str = ""
    address: AddressRecord = field(default_factory=AddressRecord)
    notes: List[NoteRecord] = field(default_factory=list)
    user_references: List[UserReferenceRecord] = field(default_factory=list)
    automated_record_id: str = ""
    change: ChangeRecord = field(default_factory=ChangeRecord)
    user_defined: List[UserDefinedTag] = field(default_factory=list)


@dataclass(slots=True, eq=False)
class SourceRecord:
    xref: str = ""
    title: str = ""
    data: Optional[SourceDataRecord] = None
    originator: str = ""
    filed_by: str = ""
    publication_facts: str = ""
    text: str = ""
    repository: Optional[SourceRepositoryRecord] = None
    user_references: List[UserReferenceRecord] = field(default_factory=list)
    automated_record_id: str = ""
    change: ChangeRecord = field(default_factory=ChangeRecord)
    notes: List[NoteRecord] = field(default_factory=list)
    media: List[MediaRecord] = field(default_factory=list)
    field_user_defined: Dict[str, List[UserDefinedTag]] = field(default_factory=dict)
    user_defined: List[UserDefinedTag] = field(default_factory=list)


@dataclass(slots=True, eq=False)
class SubmitterRecord:
    xref: str = ""
    name: str = ""
    address: Optional[AddressRecord] = None
    media: List[MediaRecord] = field(default_factory=list)
    languages: List[str] = field(default_factory=list)
    submitter_record_file_id: str = ""
    automated_record_id: str = ""
    notes: List[NoteRecord] = field(default_factory=list)
    change: Optional[ChangeRecord] = None
    user_defined: List[UserDefinedTag] = field(default_factory=list)


@dataclass(slots=True, eq=False)
class SubmissionRecord:
    xref: str = ""
    user_defined: List[UserDefinedTag] = field(default_factory=list)


# -----------------------------
# Header / trailer / file
# -----------------------------

@dataclass(slots=True)
class SystemRecord:
    """HEAD.SOUR: the system that produced the file."""
    xref: str = ""
    version: str = ""
    product_name: str = ""
    business_name: str = ""
    address: AddressRecord = field(default_factory=AddressRecord)
    source_name: str = ""
    source_date: str = ""
    source_copyright: str = ""
    field_user_defined: Dict[str, List[UserDefinedTag]] = field(default_factory=dict)
    user_defined: List[UserDefinedTag] = field(default_factory=list)


@dataclass(slots=True)
class Header:
    source_system: SystemRecord = field(default_factory=SystemRecord)
    destination: str = ""
    date: str = ""
    time: str = ""
    submitter: Optional[SubmitterRecord] = None
    submission: Optional[SubmissionRecord] = None
    filename: str = ""
    copyright: str = ""
    version: str = ""
    form: str = ""
    character_set: str = ""
    has_gedc: bool = False
    character_set_version: str = ""
    language: str = ""
    note: str = ""
    field_user_defined: Dict[str, List[UserDefinedTag]] = field(default_factory=dict)
    user_defined: List[UserDefinedTag] = field(default_factory=list)


@dataclass(slots=True)
class Trailer:
    pass


@dataclass(slots=True, eq=False)
class Gedcom:
    """
    The record graph for one GEDCOM file.

    Top-level lists keep the order in which records were defined in the
    file; pointers between records are shared object references.
    """
    header: Optional[Header] = None
    submission: Optional[SubmissionRecord] = None
    individuals: List[IndividualRecord] = field(default_factory=list)
    families: List[FamilyRecord] = field(default_factory=list)
    media: List[MediaRecord] = field(default_factory=list)
    repositories: List[RepositoryRecord] = field(default_factory=list)
    sources: List[SourceRecord] = field(default_factory=list)
    submitters: List[SubmitterRecord] = field(default_factory=list)
    user_defined: List[UserDefinedTag] = field(default_factory=list)
    trailer: Optional[Trailer] = None
