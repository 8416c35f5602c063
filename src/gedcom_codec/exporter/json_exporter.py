"""
json_exporter.py
Structured JSON view of a decoded Gedcom record graph.

This exporter:
- Converts dataclasses to dictionaries keyed by field name (NOT strings)
- Writes each pointable record (INDI, FAM, OBJE, REPO, SOUR, SUBM, SUBN) once,
  in its top-level list
- Replaces nested references to those records with "@XREF@" strings, which
  keeps the cyclic individual <-> family graph serializable
"""

from __future__ import annotations

import json
from dataclasses import fields, is_dataclass
from pathlib import Path
from typing import Any, Dict

from gedcom_codec.logging import get_logger
from gedcom_codec.registry.entities import (
    FamilyRecord,
    Gedcom,
    IndividualRecord,
    MediaRecord,
    RepositoryRecord,
    SourceRecord,
    SubmissionRecord,
    SubmitterRecord,
)

log = get_logger(__name__)

POINTABLE_TYPES = (
    IndividualRecord,
    FamilyRecord,
    MediaRecord,
    RepositoryRecord,
    SourceRecord,
    SubmitterRecord,
    SubmissionRecord,
)


def _to_json_compatible(obj: Any, *, nested: bool = True) -> Any:
    """
    Recursively convert objects into JSON-compatible structures.

    Rules:
    - Primitives pass through
    - Pointable records below the top level -> "@XREF@" (anonymous ones inline)
    - dataclasses -> dict (recursively)
    - list / tuple -> list (recursively)
    - dict -> dict with its values converted (per-field extensions)
    - Anything else -> str(obj)
    """
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj

    if nested and isinstance(obj, POINTABLE_TYPES) and obj.xref:
        return f"@{obj.xref}@"

    if is_dataclass(obj):
        return {f.name: _to_json_compatible(getattr(obj, f.name)) for f in fields(obj)}

    if isinstance(obj, (list, tuple)):
        return [_to_json_compatible(v) for v in obj]

    if isinstance(obj, dict):
        return {str(k): _to_json_compatible(v) for k, v in obj.items()}

    return str(obj)


def graph_to_dict(g: Gedcom) -> Dict[str, Any]:
    """
    Convert a decoded graph into a JSON-safe dict.
    """

    def records(items: Any) -> Any:
        return [_to_json_compatible(r, nested=False) for r in items]

    return {
        "header": _to_json_compatible(g.header),
        "submission": (
            _to_json_compatible(g.submission, nested=False)
            if g.submission is not None
            else None
        ),
        "individuals": records(g.individuals),
        "families": records(g.families),
        "media": records(g.media),
        "repositories": records(g.repositories),
        "sources": records(g.sources),
        "submitters": records(g.submitters),
        "user_defined": records(g.user_defined),
        "trailer": g.trailer is not None,
    }


def serialize_graph_to_json_string(g: Gedcom, indent: int | None = 2) -> str:
    if indent is None:
        return json.dumps(graph_to_dict(g), separators=(",", ":"), ensure_ascii=False)
    return json.dumps(graph_to_dict(g), indent=indent, ensure_ascii=False)


def export_graph_json(g: Gedcom, output_path: str | Path, indent: int | None = 2) -> None:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    log.info(
        "Exporting GEDCOM JSON to: %s "
        "(INDI=%d, FAM=%d, SOUR=%d, REPO=%d, OBJE=%d)",
        output_path,
        len(g.individuals),
        len(g.families),
        len(g.sources),
        len(g.repositories),
        len(g.media),
    )

    json_str = serialize_graph_to_json_string(g, indent=indent)

    with output_path.open("w", encoding="utf-8", errors="surrogateescape") as f:
        f.write(json_str)

    size_bytes = output_path.stat().st_size
    log.info("JSON export complete. size=%d bytes", size_bytes)
