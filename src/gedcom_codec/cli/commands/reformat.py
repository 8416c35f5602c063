from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from gedcom_codec.cli.utils import load_gedcom
from gedcom_codec.core.exceptions import GedcomEncodeError
from gedcom_codec.exporter.encoder import dump_file, dumps
from gedcom_codec.logging import get_logger

console = Console()
log = get_logger(__name__)


def reformat_command(
    gedcom: Path = typer.Argument(..., exists=True, readable=True),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Write output to file instead of stdout",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable rich logging",
    ),
    log_unhandled: bool = typer.Option(
        False,
        "--log-unhandled",
        help="Log tags the decoder keeps as user-defined",
    ),
):
    """
    Decode a GEDCOM file and write it back out in canonical form.
    """
    g = load_gedcom(gedcom, verbose=verbose, log_unhandled=log_unhandled)

    try:
        if out:
            dump_file(g, out)
        else:
            typer.echo(dumps(g).encode("utf-8", errors="surrogateescape"), nl=False)
    except GedcomEncodeError as exc:
        log.error(f"Failed to encode {gedcom}: {exc}")
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    if verbose:
        console.log("Reformat complete")
