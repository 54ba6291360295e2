"""
Rich table displays for K4 patch data.

Provides formatted output for dumps, single, multi, drum and effect patches.
"""

from typing import List, Optional, Tuple

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from cli.display.formatters import depth_bar, format_signed, on_off, pan_to_string, value_bar
from k4manager.formats.k4.reader import Dump
from k4manager.formats.k4.sysex_parser import DumpKind
from k4manager.models.bank import Bank
from k4manager.models.drum import Drum
from k4manager.models.effect import EffectPatch
from k4manager.models.multi import MultiPatch
from k4manager.models.single import SinglePatch
from k4manager.models.types import Submix

console = Console()


def display_dump_info(dump: Dump, filepath: str) -> None:
    """Display the header, kind and checksum status of a dump."""
    if dump.checksums_valid:
        status = "[green]All checksums OK[/green]"
    else:
        status = f"[red]{len(dump.bad_checksums)} bad checksums[/red]"

    number = ""
    if dump.number is not None:
        if dump.kind == DumpKind.ONE_EFFECT:
            number = f" {dump.number + 1}"
        else:
            number = f" {Bank.patch_name_for(dump.number)}"

    content = f"""[bold]File:[/bold] {filepath}
[bold]Dump:[/bold] {dump.kind.display_name}{number} ({dump.locality.display_name})
[bold]Channel:[/bold] {dump.header.channel}
[bold]Function:[/bold] {dump.header.function.display_name} (0x{int(dump.header.function):02X})
[bold]Substatus:[/bold] 0x{dump.header.substatus1:02X} 0x{dump.header.substatus2:02X}
[bold]Payload:[/bold] {len(dump.payload)} bytes
[bold]Status:[/bold] {status}"""

    console.print(
        Panel(
            content,
            title="[bold blue]K4 Dump Info[/bold blue]",
            border_style="blue",
            expand=False,
        )
    )


def display_patch_names(dump: Dump) -> None:
    """Display the names of all patches in a bank or block dump."""
    singles: List[SinglePatch] = []
    multis: List[MultiPatch] = []

    if dump.kind == DumpKind.ALL:
        singles = dump.model.singles
        multis = dump.model.multis
    elif dump.kind == DumpKind.BLOCK_SINGLE:
        singles = dump.model
    elif dump.kind == DumpKind.BLOCK_MULTI:
        multis = dump.model

    rows = max(len(singles), len(multis))
    if rows == 0:
        return

    table = Table(title="Patches", box=box.ROUNDED, show_header=True, header_style="bold magenta")
    table.add_column("Slot", style="dim", width=5)
    if singles:
        table.add_column("Single", style="cyan", width=12)
    if multis:
        table.add_column("Multi", style="green", width=12)

    for i in range(rows):
        row = [Bank.patch_name_for(i)]
        if singles:
            row.append(singles[i].name)
        if multis:
            row.append(multis[i].name)
        table.add_row(*row)

    console.print(table)


def display_single(patch: SinglePatch, slot: Optional[str] = None) -> None:
    """Display a single patch with its sources, amplifiers and filters."""
    title = f"Single {slot}: {patch.name}" if slot else f"Single: {patch.name}"

    common = f"""[bold]Volume:[/bold] {value_bar(patch.volume)}
[bold]Effect:[/bold] {patch.effect}   [bold]Submix:[/bold] {patch.submix.display_name}
[bold]Source Mode:[/bold] {patch.source_mode.display_name}   [bold]Poly Mode:[/bold] {patch.polyphony_mode.display_name}
[bold]AM 1>2:[/bold] {on_off(patch.am12)}   [bold]AM 3>4:[/bold] {on_off(patch.am34)}
[bold]Sources:[/bold] {patch.active_source_string}
[bold]Bender Range:[/bold] {patch.bender_range}   [bold]Press Freq:[/bold] {format_signed(patch.pressure_frequency)}
[bold]Wheel:[/bold] {patch.wheel_assign.display_name} {format_signed(patch.wheel_depth)}
[bold]Vibrato:[/bold] {patch.vibrato.shape.display_name} speed {patch.vibrato.speed} depth {format_signed(patch.vibrato.depth)} prs {format_signed(patch.vibrato.pressure_depth)}
[bold]LFO:[/bold] {patch.lfo.shape.display_name} speed {patch.lfo.speed} delay {patch.lfo.delay} depth {format_signed(patch.lfo.depth)} prs {format_signed(patch.lfo.pressure_depth)}
[bold]Auto Bend:[/bold] time {patch.auto_bend.time} depth {format_signed(patch.auto_bend.depth)} KS {format_signed(patch.auto_bend.key_scaling_time)} vel {format_signed(patch.auto_bend.velocity_depth)}"""

    console.print(
        Panel(common, title=f"[bold blue]{title}[/bold blue]", border_style="blue", expand=False)
    )

    source_table = Table(title="Sources", box=box.ROUNDED, show_header=True, header_style="bold cyan")
    source_table.add_column("Parameter", style="cyan", width=14)
    for i, active in enumerate(patch.active_sources, 1):
        source_table.add_column(f"S{i}" if active else f"[dim]S{i}[/dim]", width=10)

    def source_row(label: str, values: List[str]) -> None:
        source_table.add_row(label, *values)

    source_row("Wave", [str(s.wave_number) for s in patch.sources])
    source_row("Delay", [str(s.delay) for s in patch.sources])
    source_row("Coarse", [format_signed(s.coarse) for s in patch.sources])
    source_row("Fine", [format_signed(s.fine) for s in patch.sources])
    source_row("Key Track", [on_off(s.key_track) for s in patch.sources])
    source_row("Fixed Key", [s.fixed_key_name for s in patch.sources])
    source_row("KS Curve", [s.key_scaling_curve.display_name for s in patch.sources])
    source_row("Vel Curve", [s.velocity_curve.display_name for s in patch.sources])
    source_row("Prs>Freq", [on_off(s.pressure_frequency) for s in patch.sources])
    source_row("Vibrato", [on_off(s.vibrato) for s in patch.sources])
    console.print(source_table)

    amp_table = Table(title="Amplifiers", box=box.ROUNDED, show_header=True, header_style="bold green")
    amp_table.add_column("Parameter", style="green", width=14)
    for i in range(len(patch.amplifiers)):
        amp_table.add_column(f"DCA{i + 1}", width=10)

    amps = patch.amplifiers
    amp_table.add_row("Level", *[str(a.level) for a in amps])
    amp_table.add_row(
        "Envelope",
        *[
            f"{a.envelope.attack}/{a.envelope.decay}/{a.envelope.sustain}/{a.envelope.release}"
            for a in amps
        ],
    )
    amp_table.add_row("Vel Depth", *[format_signed(a.level_modulation.velocity_depth) for a in amps])
    amp_table.add_row("Prs Depth", *[format_signed(a.level_modulation.pressure_depth) for a in amps])
    amp_table.add_row("KS Depth", *[format_signed(a.level_modulation.key_scaling_depth) for a in amps])
    amp_table.add_row("Atk Vel", *[format_signed(a.time_modulation.attack_velocity) for a in amps])
    amp_table.add_row("Rel Vel", *[format_signed(a.time_modulation.release_velocity) for a in amps])
    amp_table.add_row("KS Time", *[format_signed(a.time_modulation.key_scaling) for a in amps])
    console.print(amp_table)

    filter_table = Table(title="Filters", box=box.ROUNDED, show_header=True, header_style="bold yellow")
    filter_table.add_column("Parameter", style="yellow", width=14)
    for i in range(len(patch.filters)):
        filter_table.add_column(f"DCF{i + 1}", width=22)

    filters = patch.filters
    filter_table.add_row("Cutoff", *[value_bar(f.cutoff) for f in filters])
    filter_table.add_row("Resonance", *[str(f.resonance) for f in filters])
    filter_table.add_row("LFO", *[on_off(f.lfo_modulates_cutoff) for f in filters])
    filter_table.add_row("Env Depth", *[depth_bar(f.envelope_depth) for f in filters])
    filter_table.add_row("Env Vel", *[depth_bar(f.envelope_velocity_depth) for f in filters])
    filter_table.add_row(
        "Envelope",
        *[
            f"{f.envelope.attack}/{f.envelope.decay}/{format_signed(f.envelope.sustain)}/{f.envelope.release}"
            for f in filters
        ],
    )
    filter_table.add_row("Vel Depth", *[format_signed(f.cutoff_modulation.velocity_depth) for f in filters])
    filter_table.add_row("Prs Depth", *[format_signed(f.cutoff_modulation.pressure_depth) for f in filters])
    filter_table.add_row("KS Depth", *[format_signed(f.cutoff_modulation.key_scaling_depth) for f in filters])
    console.print(filter_table)


def display_multi(patch: MultiPatch, slot: Optional[str] = None) -> None:
    """Display a multi patch and its sections."""
    title = f"Multi {slot}: {patch.name}" if slot else f"Multi: {patch.name}"
    console.print(
        Panel(
            f"[bold]Volume:[/bold] {value_bar(patch.volume)}\n[bold]Effect:[/bold] {patch.effect}",
            title=f"[bold blue]{title}[/bold blue]",
            border_style="blue",
            expand=False,
        )
    )

    table = Table(title="Sections", box=box.ROUNDED, show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", width=3)
    table.add_column("Single", style="cyan", width=6)
    table.add_column("Zone", width=12)
    table.add_column("Ch", width=3)
    table.add_column("Vel Sw", width=6)
    table.add_column("Mode", width=5)
    table.add_column("Out", width=3)
    table.add_column("Level", width=4)
    table.add_column("Trans", width=5)
    table.add_column("Tune", width=5)
    table.add_column("Status", width=8)

    for i, section in enumerate(patch.sections, 1):
        status = "[dim]Muted[/dim]" if section.muted else "[green]On[/green]"
        table.add_row(
            str(i),
            Bank.patch_name_for(section.single_patch_number),
            section.zone_name,
            str(section.channel),
            section.velocity_switch.display_name,
            section.play_mode.display_name,
            section.submix.display_name,
            str(section.level),
            format_signed(section.transpose),
            format_signed(section.tune),
            status,
        )

    console.print(table)


def display_drum(drum: Drum) -> None:
    """Display the drum common settings and every note."""
    common = drum.common
    console.print(
        Panel(
            f"[bold]Channel:[/bold] {common.channel}\n"
            f"[bold]Volume:[/bold] {value_bar(common.volume)}\n"
            f"[bold]Velocity Depth:[/bold] {format_signed(common.velocity_depth)}",
            title="[bold blue]Drum[/bold blue]",
            border_style="blue",
            expand=False,
        )
    )

    table = Table(title="Notes", box=box.ROUNDED, show_header=True, header_style="bold cyan")
    table.add_column("Key", style="cyan", width=4)
    table.add_column("Out", width=3)
    table.add_column("S1 Wave", width=7)
    table.add_column("Decay", width=5)
    table.add_column("Tune", width=5)
    table.add_column("Level", width=5)
    table.add_column("S2 Wave", width=7)
    table.add_column("Decay", width=5)
    table.add_column("Tune", width=5)
    table.add_column("Level", width=5)

    for i, note in enumerate(drum.notes):
        s1 = note.source1
        s2 = note.source2
        table.add_row(
            Drum.note_name_for(i),
            note.submix.display_name,
            str(s1.wave_number),
            str(s1.decay),
            format_signed(s1.tune),
            str(s1.level),
            str(s2.wave_number),
            str(s2.decay),
            format_signed(s2.tune),
            str(s2.level),
        )

    console.print(table)


def display_effect(patch: EffectPatch, number: Optional[int] = None) -> None:
    """Display an effect patch and its submix settings."""
    title = f"Effect {number + 1}" if number is not None else "Effect"
    console.print(
        Panel(
            f"[bold]Type:[/bold] {patch.effect_type.value}: {patch.effect_type.display_name}\n"
            f"[bold]Parameters:[/bold] {patch.param1} / {patch.param2} / {patch.param3}",
            title=f"[bold blue]{title}[/bold blue]",
            border_style="blue",
            expand=False,
        )
    )

    table = Table(title="Submixes", box=box.SIMPLE, show_header=True, header_style="bold yellow")
    table.add_column("Out", width=4)
    table.add_column("Pan", width=4)
    table.add_column("Send 1", width=16)
    table.add_column("Send 2", width=16)

    for channel, settings in zip(Submix, patch.submixes):
        table.add_row(
            channel.display_name,
            pan_to_string(settings.pan),
            value_bar(settings.send1),
            value_bar(settings.send2),
        )

    console.print(table)


def display_checksums(results: List[Tuple[str, bool]], show_all: bool = False) -> None:
    """Display per-block checksum results."""
    table = Table(title="Checksums", box=box.ROUNDED, show_header=True, header_style="bold cyan")
    table.add_column("Block", style="cyan", width=20)
    table.add_column("Status", width=10)

    for label, valid in results:
        if valid and not show_all:
            continue
        table.add_row(label, "[green]OK[/green]" if valid else "[red]BAD[/red]")

    if table.row_count:
        console.print(table)
