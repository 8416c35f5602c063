"""
Exporter package.

Re-exports the GEDCOM encoder and the JSON view used by the CLI.
"""

from __future__ import annotations

from .encoder import (
    MAX_VALUE_LENGTH,
    Encoder,
    dump_file,
    dumps,
    encode,
    is_binary_stream,
    split_text,
)
from .json_exporter import export_graph_json, graph_to_dict, serialize_graph_to_json_string

__all__ = [
    "MAX_VALUE_LENGTH",
    "Encoder",
    "dump_file",
    "dumps",
    "encode",
    "export_graph_json",
    "graph_to_dict",
    "is_binary_stream",
    "serialize_graph_to_json_string",
    "split_text",
]
