from __future__ import annotations

import typer
from rich.console import Console

from gedcom_codec.cli.commands.export import export_command
from gedcom_codec.cli.commands.reformat import reformat_command
from gedcom_codec.cli.commands.stats import stats_command

app = typer.Typer(
    name="gedcom",
    help="GEDCOM decoder, encoder, and inspector",
    add_completion=False,
)

console = Console()

app.command("stats")(stats_command)
app.command("reformat")(reformat_command)
app.command("export")(export_command)


def main():
    app()


if __name__ == "__main__":
    main()
