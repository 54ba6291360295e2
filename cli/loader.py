"""
Shared helpers for loading K4 dumps in CLI commands.
"""

from pathlib import Path
from typing import Dict, List

import typer
from rich.console import Console

from k4manager.errors import ParseError
from k4manager.formats.k4.reader import Dump, K4Reader
from k4manager.formats.k4.sysex_parser import DumpKind
from k4manager.models.bank import Bank

console = Console()


def load_dump(file: Path) -> Dump:
    """Read a .syx file or exit with an error message."""
    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    try:
        return K4Reader.read(file)
    except ParseError as e:
        console.print(f"[red]Error reading {file}: {e}[/red]")
        raise typer.Exit(1)


def parse_patch_number(text: str, count: int = 64) -> int:
    """
    Parse a patch number given as a slot name ('A-1') or a 1-based number.

    Effect patches have no slot names; they are numbered 1-32.
    """
    try:
        if "-" in text:
            number = Bank.patch_number_for(text)
        else:
            number = int(text) - 1
    except ValueError:
        console.print(f"[red]Error: Invalid patch number: {text}[/red]")
        raise typer.Exit(1)

    if not 0 <= number < count:
        console.print(f"[red]Error: Patch number out of range: {text}[/red]")
        raise typer.Exit(1)
    return number


def patches_in(dump: Dump, attribute: str, block_kind: DumpKind, one_kind: DumpKind) -> Dict[int, object]:
    """
    Collect the patches of one type held by a dump, keyed by patch number.

    Args:
        dump: Parsed dump
        attribute: Bank attribute holding the patches ('singles', 'multis', 'effects')
        block_kind: Block dump kind for this patch type
        one_kind: One-patch dump kind for this patch type
    """
    if dump.kind == DumpKind.ALL:
        patches: List = getattr(dump.model, attribute)
        return dict(enumerate(patches))
    if dump.kind == block_kind:
        return dict(enumerate(dump.model))
    if dump.kind == one_kind:
        return {dump.number: dump.model}
    return {}
