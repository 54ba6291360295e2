"""
Single command - display a single patch.
"""

from pathlib import Path

import typer
from rich.console import Console

from cli.display.tables import display_single
from cli.loader import load_dump, parse_patch_number, patches_in
from k4manager.formats.k4.sysex_parser import DumpKind
from k4manager.models.bank import Bank

console = Console()
app = typer.Typer()


@app.command()
def single(
    file: Path = typer.Argument(..., help="K4 .syx file"),
    patch: str = typer.Argument("A-1", help="Patch slot (A-1 to D-16) or number (1-64)"),
) -> None:
    """
    Show all parameters of a single patch.

    Examples:

        k4 single A401.SYX A-1

        k4 single A401.SYX 17
    """
    dump = load_dump(file)
    number = parse_patch_number(patch)

    singles = patches_in(dump, "singles", DumpKind.BLOCK_SINGLE, DumpKind.ONE_SINGLE)
    if number not in singles:
        console.print(f"[red]Error: No single patch {Bank.patch_name_for(number)} in {file}[/red]")
        raise typer.Exit(1)

    display_single(singles[number], Bank.patch_name_for(number))
