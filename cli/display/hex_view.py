"""
Hex dump display utilities.
"""

from typing import Iterable, Optional, Set, Tuple

from rich.console import Console
from rich.panel import Panel

console = Console()


def checksum_positions(blocks: Iterable[Tuple[str, int, int]], base: int = 0) -> Set[int]:
    """Get the offsets of the checksum bytes of a block layout."""
    return {base + start + length - 1 for _, start, length in blocks}


def display_hex_dump(
    data: bytes,
    title: str = "Hex Dump",
    start_offset: int = 0,
    bytes_per_line: int = 16,
    max_lines: int = 32,
    highlight: Optional[Set[int]] = None,
) -> None:
    """
    Display formatted hex dump with Rich.

    Args:
        data: Bytes to show
        title: Panel title
        start_offset: Address of the first byte
        bytes_per_line: Bytes per line
        max_lines: Maximum number of lines shown
        highlight: Absolute offsets to highlight (checksum bytes)
    """
    highlight = highlight or set()

    lines = []
    end = min(len(data), max_lines * bytes_per_line)

    for offset in range(0, end, bytes_per_line):
        chunk = data[offset : offset + bytes_per_line]
        addr = start_offset + offset

        hex_parts = []
        for i, b in enumerate(chunk):
            if i == 8:
                hex_parts.append(" ")
            if addr + i in highlight:
                hex_parts.append(f"[bold yellow]{b:02X}[/bold yellow]")
            elif b in (0xF0, 0xF7):
                hex_parts.append(f"[magenta]{b:02X}[/magenta]")
            else:
                hex_parts.append(f"{b:02X}")
        padding = "   " * (bytes_per_line - len(chunk))
        hex_str = " ".join(hex_parts) + padding

        ascii_str = "".join(chr(b) if 32 <= b < 127 else "." for b in chunk)
        ascii_str = ascii_str.replace("[", "\\[")

        lines.append(f"[dim]{addr:06X}[/dim]  {hex_str}  [cyan]{ascii_str}[/cyan]")

    if len(data) > end:
        remaining = len(data) - end
        lines.append(f"[dim]... {remaining} more bytes ...[/dim]")

    content = "\n".join(lines)
    console.print(Panel(content, title=title, border_style="blue", expand=False))
