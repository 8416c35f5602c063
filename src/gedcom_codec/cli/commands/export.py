from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from gedcom_codec.cli.utils import load_gedcom
from gedcom_codec.exporter.json_exporter import (
    export_graph_json,
    serialize_graph_to_json_string,
)

console = Console()


def export_command(
    gedcom: Path = typer.Argument(..., exists=True, readable=True),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Write JSON to this file instead of stdout",
    ),
    indent: Optional[int] = typer.Option(
        None,
        "--indent",
        min=0,
        help="Indent nested JSON by this many spaces (compact when omitted)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable rich logging",
    ),
):
    """
    Dump the decoded record graph as JSON. Shared records appear as "@XREF@".
    """
    g = load_gedcom(gedcom, verbose=verbose)

    if out:
        export_graph_json(g, out, indent=indent)
        if verbose:
            console.log(f"Wrote {out}")
    else:
        payload = serialize_graph_to_json_string(g, indent=indent)
        typer.echo(payload.encode("utf-8", errors="surrogateescape"))
