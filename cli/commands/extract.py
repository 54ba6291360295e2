"""
Extract command - write one patch of a dump as a one-patch .syx file.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from cli.loader import load_dump, parse_patch_number, patches_in
from k4manager.constants import EFFECT_PATCH_COUNT
from k4manager.formats.k4.sysex_parser import DumpKind
from k4manager.formats.k4.writer import K4Writer
from k4manager.models.types import Locality
from k4manager.utils.validation import ValidationError

console = Console()
app = typer.Typer()

PATCH_TYPES = {
    "single": ("singles", DumpKind.BLOCK_SINGLE, DumpKind.ONE_SINGLE),
    "multi": ("multis", DumpKind.BLOCK_MULTI, DumpKind.ONE_MULTI),
    "effect": ("effects", DumpKind.BLOCK_EFFECT, DumpKind.ONE_EFFECT),
}


@app.command()
def extract(
    file: Path = typer.Argument(..., help="K4 .syx file to extract from"),
    patch_type: str = typer.Argument(..., help="single, multi, effect or drum"),
    patch: str = typer.Argument(..., help="Patch slot or number (ignored for drum)"),
    output: Path = typer.Argument(..., help="Output .syx file"),
    to: Optional[str] = typer.Option(None, "--to", "-t", help="Destination slot (default: same slot)"),
    channel: int = typer.Option(1, "--channel", "-c", help="MIDI channel (1-16)"),
    external: bool = typer.Option(False, "--external", "-e", help="Address the RAM card"),
) -> None:
    """
    Extract one patch and write it as a one-patch dump.

    Examples:

        k4 extract A401.SYX single A-1 lead.syx

        k4 extract A401.SYX multi D-16 split.syx --to A-1 --channel 2
    """
    dump = load_dump(file)
    patch_type = patch_type.lower()
    locality = Locality.EXTERNAL if external else Locality.INTERNAL

    if patch_type == "drum":
        if dump.kind == DumpKind.ALL:
            model = dump.model.drum
        elif dump.kind == DumpKind.DRUM:
            model = dump.model
        else:
            console.print(f"[red]Error: {file} holds no drum data[/red]")
            raise typer.Exit(1)
        destination = 0
    elif patch_type in PATCH_TYPES:
        attribute, block_kind, one_kind = PATCH_TYPES[patch_type]
        count = EFFECT_PATCH_COUNT if patch_type == "effect" else 64
        number = parse_patch_number(patch, count)
        patches = patches_in(dump, attribute, block_kind, one_kind)
        if number not in patches:
            console.print(f"[red]Error: No {patch_type} patch {patch} in {file}[/red]")
            raise typer.Exit(1)
        model = patches[number]
        destination = parse_patch_number(to, count) if to else number
    else:
        console.print(f"[red]Error: Unknown patch type: {patch_type}[/red]")
        raise typer.Exit(1)

    try:
        K4Writer.write(model, output, channel=channel, locality=locality, number=destination)
    except ValidationError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Wrote {patch_type} to {output}[/green]")
