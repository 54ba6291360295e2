"""
Multi command - display a multi patch.
"""

from pathlib import Path

import typer
from rich.console import Console

from cli.display.tables import display_multi
from cli.loader import load_dump, parse_patch_number, patches_in
from k4manager.formats.k4.sysex_parser import DumpKind
from k4manager.models.bank import Bank

console = Console()
app = typer.Typer()


@app.command()
def multi(
    file: Path = typer.Argument(..., help="K4 .syx file"),
    patch: str = typer.Argument("A-1", help="Patch slot (A-1 to D-16) or number (1-64)"),
) -> None:
    """
    Show a multi patch and its eight sections.

    Examples:

        k4 multi A401.SYX D-16
    """
    dump = load_dump(file)
    number = parse_patch_number(patch)

    multis = patches_in(dump, "multis", DumpKind.BLOCK_MULTI, DumpKind.ONE_MULTI)
    if number not in multis:
        console.print(f"[red]Error: No multi patch {Bank.patch_name_for(number)} in {file}[/red]")
        raise typer.Exit(1)

    display_multi(multis[number], Bank.patch_name_for(number))
