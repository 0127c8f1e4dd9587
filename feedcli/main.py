#!/usr/bin/env python3
"""
feedcodec CLI - Canonical Message Codec tools

Main entrypoint for the feedcodec command-line tool.
"""

import typer
from rich.console import Console
from rich.table import Table

from feedcli.commands import keys, message
from feedcodec.logging_config import setup_logging

# Initialize Typer app
app = typer.Typer(
    name="feedcodec",
    help="Canonical encoding and signature tools for feed messages",
    add_completion=False,
)

# Console for rich output
console = Console()

# Add command groups
app.add_typer(keys.app, name="keys", help="Ed25519 keys, signing and verification")

# Add standalone commands
app.command("canonicalize")(message.canonicalize_command)
app.command("normalize")(message.normalize_command)
app.command("length")(message.length_command)


@app.callback()
def configure():
    """Configure logging from FEEDCODEC_LOG_LEVEL / FEEDCODEC_LOG_FORMAT."""
    setup_logging()


@app.command()
def version():
    """Show version information."""
    from feedcli import __version__
    from feedcodec import __version__ as codec_version

    table = Table(show_header=False, box=None)
    table.add_row("[bold]feedcodec CLI[/bold]", f"v{__version__}")
    table.add_row("Codec", f"v{codec_version}")
    table.add_row("Format", "2-space indent, raw UTF-8")

    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
