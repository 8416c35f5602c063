from __future__ import annotations

import time
from pathlib import Path

import typer
from rich.console import Console

from gedcom_codec.core.exceptions import GedcomError
from gedcom_codec.loader.decoder import Decoder
from gedcom_codec.logging import get_logger, get_unhandled_tags_logger
from gedcom_codec.registry.entities import Gedcom

console = Console()
log = get_logger(__name__)


def load_gedcom(path: Path, *, verbose: bool = False, log_unhandled: bool = False) -> Gedcom:
    """
    Decode a GEDCOM file for a CLI command.

    Decode errors are logged and turned into a non-zero exit.
    """
    if not path.exists():
        raise FileNotFoundError(path)

    t0 = time.perf_counter()

    tag_logger = get_unhandled_tags_logger() if log_unhandled else None
    try:
        with path.open("rb") as f:
            g = Decoder(f, tag_logger=tag_logger).decode()
    except GedcomError as exc:
        log.error(f"Failed to decode {path}: {exc}")
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    elapsed = time.perf_counter() - t0

    if verbose:
        console.log(f"Loaded GEDCOM in {elapsed:.2f}s")

    return g
