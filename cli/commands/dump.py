"""
Dump command - annotated hex dump of a K4 SysEx file.
"""

from pathlib import Path
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from cli.display.hex_view import checksum_positions, display_hex_dump
from cli.loader import load_dump
from k4manager.constants import FRAMED_HEADER_SIZE
from k4manager.formats.k4.reader import block_layout

console = Console()
app = typer.Typer()


@app.command()
def dump(
    file: Path = typer.Argument(..., help="K4 .syx file"),
    offset: int = typer.Option(0, "--offset", "-o", help="Start offset in the file"),
    lines: int = typer.Option(32, "--lines", "-n", help="Number of lines to show"),
    block: Optional[str] = typer.Option(
        None, "--block", "-b", help="Show only the block with this label, e.g. 'single A-1'"
    ),
) -> None:
    """
    Show a hex dump of a K4 SysEx file with checksum bytes highlighted.

    Offsets are file offsets; the payload starts after the 8-byte header.

    Examples:

        k4 dump A401.SYX

        k4 dump A401.SYX --block "multi D-16"
    """
    k4_dump = load_dump(file)

    with open(file, "rb") as f:
        data = f.read()

    blocks = list(block_layout(k4_dump.kind))
    highlight = checksum_positions(blocks, base=FRAMED_HEADER_SIZE)

    if block is not None:
        matches = [b for b in blocks if b[0].lower() == block.lower()]
        if not matches:
            console.print(f"[red]Error: No block named '{block}' in {file}[/red]")
            raise typer.Exit(1)
        label, start, length = matches[0]
        offset = FRAMED_HEADER_SIZE + start
        data_view = data[offset : offset + length]
        display_hex_dump(
            data_view,
            title=f"{label} ({length} bytes)",
            start_offset=offset,
            max_lines=lines,
            highlight=highlight,
        )
        return

    display_hex_dump(
        data[offset:],
        title=f"{file.name} ({len(data)} bytes)",
        start_offset=offset,
        max_lines=lines,
        highlight=highlight,
    )

    table = Table(title="Blocks", box=box.SIMPLE, show_header=True, header_style="dim")
    table.add_column("Block", width=20)
    table.add_column("Offset", width=14)
    table.add_column("Size", width=6)

    visible_end = offset + lines * 16
    for label, start, length in blocks:
        file_start = FRAMED_HEADER_SIZE + start
        if file_start + length <= offset or file_start >= visible_end:
            continue
        table.add_row(label, f"0x{file_start:04X}-0x{file_start + length - 1:04X}", str(length))

    console.print(table)
