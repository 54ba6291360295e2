"""
Drum command - display the drum kit.
"""

from pathlib import Path

import typer
from rich.console import Console

from cli.display.tables import display_drum
from cli.loader import load_dump
from k4manager.formats.k4.sysex_parser import DumpKind

console = Console()
app = typer.Typer()


@app.command()
def drum(
    file: Path = typer.Argument(..., help="K4 .syx file"),
) -> None:
    """
    Show the drum common settings and all 61 drum notes.

    Examples:

        k4 drum A401.SYX
    """
    dump = load_dump(file)

    if dump.kind == DumpKind.ALL:
        display_drum(dump.model.drum)
    elif dump.kind == DumpKind.DRUM:
        display_drum(dump.model)
    else:
        console.print(f"[red]Error: {file} holds no drum data[/red]")
        raise typer.Exit(1)
