"""
Info command - display dump header and patch overview.
"""

from pathlib import Path

import typer
from rich.console import Console

from cli.display.tables import display_dump_info, display_patch_names
from cli.loader import load_dump

console = Console()
app = typer.Typer()


@app.command()
def info(
    file: Path = typer.Argument(..., help="K4 .syx file to analyze"),
) -> None:
    """
    Show what a K4 SysEx file contains.

    Displays the dump kind, channel, memory area and checksum status,
    and lists patch names for bank and block dumps.

    Examples:

        k4 info A401.SYX
    """
    dump = load_dump(file)
    display_dump_info(dump, str(file))
    display_patch_names(dump)
