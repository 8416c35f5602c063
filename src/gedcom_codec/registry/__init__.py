"""
Record graph produced by the decoder and consumed by the encoder.
"""

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
    SourceCallNumberRecord,
    SourceDataRecord,
    SourceEventRecord,
    SourceRecord,
    SourceRepositoryRecord,
    SubmissionRecord,
    SubmitterRecord,
    SystemRecord,
    Trailer,
    UserDefinedTag,
    UserReferenceRecord,
    VariantNameRecord,
    VariantPlaceNameRecord,
)

__all__ = [
    "AddressDetail",
    "AddressRecord",
    "AssociationRecord",
    "ChangeRecord",
    "CitationRecord",
    "DataRecord",
    "EventRecord",
    "FamilyLinkRecord",
    "FamilyRecord",
    "FileRecord",
    "Gedcom",
    "Header",
    "IndividualRecord",
    "MediaRecord",
    "NameRecord",
    "NoteRecord",
    "PlaceRecord",
    "RepositoryRecord",
    "SourceCallNumberRecord",
    "SourceDataRecord",
    "SourceEventRecord",
    "SourceRecord",
    "SourceRepositoryRecord",
    "SubmissionRecord",
    "SubmitterRecord",
    "SystemRecord",
    "Trailer",
    "UserDefinedTag",
    "UserReferenceRecord",
    "VariantNameRecord",
    "VariantPlaceNameRecord",
]
