"""
Effect command - display an effect patch.
"""

from pathlib import Path

import typer
from rich.console import Console

from cli.display.tables import display_effect
from cli.loader import load_dump, parse_patch_number, patches_in
from k4manager.constants import EFFECT_PATCH_COUNT
from k4manager.formats.k4.sysex_parser import DumpKind

console = Console()
app = typer.Typer()


@app.command()
def effect(
    file: Path = typer.Argument(..., help="K4 .syx file"),
    patch: str = typer.Argument("1", help="Effect patch number (1-32)"),
) -> None:
    """
    Show an effect patch and its submix settings.

    Examples:

        k4 effect A401.SYX 1
    """
    dump = load_dump(file)
    number = parse_patch_number(patch, EFFECT_PATCH_COUNT)

    effects = patches_in(dump, "effects", DumpKind.BLOCK_EFFECT, DumpKind.ONE_EFFECT)
    if number not in effects:
        console.print(f"[red]Error: No effect patch {number + 1} in {file}[/red]")
        raise typer.Exit(1)

    display_effect(effects[number], number)
