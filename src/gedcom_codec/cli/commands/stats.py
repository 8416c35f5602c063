from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from gedcom_codec.cli.utils import load_gedcom

console = Console()


def stats_command(
    gedcom: Path = typer.Argument(..., exists=True, readable=True),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable rich logging",
    ),
):
    """
    Show record counts for a GEDCOM file.
    """
    g = load_gedcom(gedcom, verbose=verbose)

    table = Table(title="GEDCOM Statistics")
    table.add_column("Record", style="bold")
    table.add_column("Count", justify="right")

    table.add_row("Individuals", str(len(g.individuals)))
    table.add_row("Families", str(len(g.families)))
    table.add_row("Sources", str(len(g.sources)))
    table.add_row("Repositories", str(len(g.repositories)))
    table.add_row("Media Objects", str(len(g.media)))
    table.add_row("Submitters", str(len(g.submitters)))
    table.add_row("User-defined", str(len(g.user_defined)))

    console.print(table)
