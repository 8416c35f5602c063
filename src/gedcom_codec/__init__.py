"""
gedcom_codec: read and write GEDCOM files.

    from gedcom_codec import load_file, dumps

    g = load_file("family.ged")
    print(dumps(g))
"""

from gedcom_codec.core.exceptions import (
    GedcomEncodeError,
    GedcomError,
    GedcomSyntaxError,
    UnexpectedEndOfInput,
)
from gedcom_codec.exporter.encoder import Encoder, dump_file, dumps, encode
from gedcom_codec.loader.decoder import Decoder, decode, load_file, loads
from gedcom_codec.normalization.names import ParsedName, split_personal_name
from gedcom_codec.registry.entities import Gedcom

__version__ = "0.1.0"

__all__ = [
    "Decoder",
    "Encoder",
    "Gedcom",
    "GedcomEncodeError",
    "GedcomError",
    "GedcomSyntaxError",
    "ParsedName",
    "UnexpectedEndOfInput",
    "decode",
    "dump_file",
    "dumps",
    "encode",
    "load_file",
    "loads",
    "split_personal_name",
]
