"""
K4Manager - Inspect and edit Kawai K4/K4r SysEx patch dumps.

A CLI tool for reading, validating and extracting K4 patch data.
"""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from cli.commands.info import info
from cli.commands.single import single
from cli.commands.multi import multi
from cli.commands.drum import drum
from cli.commands.effect import effect
from cli.commands.validate import validate
from cli.commands.dump import dump
from cli.commands.extract import extract
from cli.commands.request import request
from k4manager import __version__

console = Console()

# Main app
app = typer.Typer(
    name="k4",
    help="Inspect and edit Kawai K4/K4r SysEx patch dumps.",
    add_completion=False,
    rich_markup_mode="rich",
)

# Add commands directly
app.command(name="info")(info)
app.command(name="single")(single)
app.command(name="multi")(multi)
app.command(name="drum")(drum)
app.command(name="effect")(effect)
app.command(name="validate")(validate)
app.command(name="dump")(dump)
app.command(name="extract")(extract)
app.command(name="request")(request)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]k4manager[/bold] version {__version__}")
    console.print("[dim]Codec for Kawai K4/K4r System Exclusive patch data[/dim]")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version_flag: bool = typer.Option(False, "--version", "-V", help="Show version"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug log messages"),
) -> None:
    """
    K4Manager - Inspect and edit Kawai K4/K4r patch dumps.

    [bold]Quick Start:[/bold]

        k4 info A401.SYX             # Dump kind and patch names
        k4 single A401.SYX A-1       # Single patch details
        k4 multi A401.SYX D-16       # Multi patch sections

    [bold]Analysis Commands:[/bold]

        k4 drum A401.SYX             # Drum kit
        k4 effect A401.SYX 1         # Effect patch
        k4 dump A401.SYX             # Hex dump with checksums highlighted
        k4 validate A401.SYX         # Checksums and value ranges

    [bold]Utility Commands:[/bold]

        k4 extract A401.SYX single A-1 lead.syx   # One-patch dump
        k4 request all req.syx                     # Dump request message

    Use --help with any command for more details.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )

    if version_flag:
        version()
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
