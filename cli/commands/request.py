"""
Request command - write a dump request message to a file.
"""

from pathlib import Path

import typer
from rich.console import Console

from cli.loader import parse_patch_number
from k4manager.constants import EFFECT_PATCH_COUNT
from k4manager.formats.k4.sysex_parser import DumpKind, dump_request
from k4manager.models.types import Locality
from k4manager.utils.validation import ValidationError, validate_channel

console = Console()
app = typer.Typer()

KIND_NAMES = {
    "all": DumpKind.ALL,
    "single": DumpKind.ONE_SINGLE,
    "multi": DumpKind.ONE_MULTI,
    "drum": DumpKind.DRUM,
    "effect": DumpKind.ONE_EFFECT,
    "singles": DumpKind.BLOCK_SINGLE,
    "multis": DumpKind.BLOCK_MULTI,
    "effects": DumpKind.BLOCK_EFFECT,
}


@app.command()
def request(
    kind: str = typer.Argument(..., help="all, single, multi, drum, effect, singles, multis, effects"),
    output: Path = typer.Argument(..., help="Output .syx file"),
    patch: str = typer.Option("1", "--patch", "-p", help="Patch slot or number for one-patch requests"),
    channel: int = typer.Option(1, "--channel", "-c", help="MIDI channel (1-16)"),
    external: bool = typer.Option(False, "--external", "-e", help="Request from the RAM card"),
) -> None:
    """
    Write a K4 dump request message to a .syx file.

    Send the file to the instrument with any SysEx tool to make it
    answer with the requested dump.

    Examples:

        k4 request all request_all.syx

        k4 request single req.syx --patch B-3 --channel 2
    """
    dump_kind = KIND_NAMES.get(kind.lower())
    if dump_kind is None:
        console.print(f"[red]Error: Unknown dump kind: {kind}[/red]")
        raise typer.Exit(1)

    try:
        validate_channel(channel)
    except ValidationError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    count = EFFECT_PATCH_COUNT if dump_kind == DumpKind.ONE_EFFECT else 64
    number = parse_patch_number(patch, count)
    locality = Locality.EXTERNAL if external else Locality.INTERNAL

    message = dump_request(channel, dump_kind, locality, number)

    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "wb") as f:
        f.write(message)

    console.print(f"[green]Wrote {dump_kind.display_name} request to {output}[/green]")
    console.print(f"[dim]{message.hex(' ').upper()}[/dim]")
