"""
Validate command - check checksums and parameter ranges of a K4 dump.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple

import typer
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from cli.display.tables import display_checksums
from cli.loader import load_dump
from k4manager.formats.k4.reader import Dump, verify_checksums

console = Console()
app = typer.Typer()


@dataclass
class ValidationResult:
    """Result of validating a K4 dump."""

    filepath: str
    checksums: List[Tuple[str, bool]] = field(default_factory=list)
    range_errors: List[str] = field(default_factory=list)

    @property
    def bad_checksums(self) -> List[str]:
        return [label for label, valid in self.checksums if not valid]

    @property
    def valid(self) -> bool:
        return not self.bad_checksums


def validate_dump(dump: Dump, filepath: str) -> ValidationResult:
    """Check every block checksum and every parameter range of a dump."""
    result = ValidationResult(filepath=filepath)
    result.checksums = verify_checksums(dump.kind, dump.payload)

    models = dump.model if isinstance(dump.model, list) else [dump.model]
    for model in models:
        result.range_errors.extend(model.validate())

    return result


def display_validation(result: ValidationResult, show_all: bool = False) -> None:
    """Display validation result with Rich formatting."""
    if result.valid:
        status = "[bold green]VALID[/bold green]"
        border = "green"
    else:
        status = "[bold red]INVALID[/bold red]"
        border = "red"

    console.print(
        Panel(
            f"[bold]File:[/bold] {result.filepath}\n"
            f"[bold]Status:[/bold] {status}\n\n"
            f"Blocks: {len(result.checksums)}  "
            f"Bad checksums: [red]{len(result.bad_checksums)}[/red]  "
            f"Out of range: [yellow]{len(result.range_errors)}[/yellow]",
            title="[bold]Validation Result[/bold]",
            border_style=border,
        )
    )

    display_checksums(result.checksums, show_all=show_all)

    if result.range_errors:
        table = Table(title="Out of Range Values", box=box.SIMPLE, show_header=False)
        table.add_column("", width=70)
        for message in result.range_errors:
            table.add_row(f"[yellow]WARN[/yellow] {message}")
        console.print(table)


@app.command()
def validate(
    file: Path = typer.Argument(..., help="K4 .syx file to validate"),
    show_all: bool = typer.Option(False, "--all", "-a", help="List every block, not only bad ones"),
    strict: bool = typer.Option(False, "--strict", "-s", help="Treat out-of-range values as errors"),
) -> None:
    """
    Validate the checksums and parameter ranges of a K4 dump.

    Exits with status 1 if any block checksum is wrong (or, with
    --strict, if any parameter is out of range).

    Examples:

        k4 validate A401.SYX

        k4 validate A401.SYX --all --strict
    """
    dump = load_dump(file)
    result = validate_dump(dump, str(file))
    display_validation(result, show_all=show_all)

    if not result.valid or (strict and result.range_errors):
        raise typer.Exit(1)
