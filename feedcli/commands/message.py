"""
Message commands: canonicalize, normalize, length
"""

import json
import typer
from rich.console import Console
from rich.table import Table

from feedcodec.core import CanonicalizationError, encode, encoded_len, parse
from feedcodec.logging_config import get_logger
from feedcodec.message import canonicalize, normalize

from ._io import read_input

console = Console()


def _fail(message: str, json_output: bool) -> None:
    if json_output:
        print(json.dumps({"error": message}))
    else:
        console.print(f"[red]Error:[/red] {message}", soft_wrap=True)
    raise typer.Exit(2)


def canonicalize_command(
    path: str = typer.Argument(..., help="Message file ('-' for stdin)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Print the signed payload and the detached signature of a message.

    Examples:
        feedcodec canonicalize msg.json
        cat msg.json | feedcodec canonicalize - --json
    """
    logger = get_logger(__name__, trace_id=path)
    try:
        payload, signature = canonicalize(read_input(path))
    except FileNotFoundError:
        _fail(f"Message file not found: {path}", json_output)
    except (CanonicalizationError, OSError) as e:
        logger.info(f"Rejected message: {e}")
        _fail(str(e), json_output)

    if json_output:
        print(json.dumps({
            "payload": payload.decode("utf-8"),
            "signature": signature,
            "length": len(payload),
        }, ensure_ascii=False))
    else:
        typer.echo(payload)
        console.print(f"\n[bold]Signature:[/bold] {signature}", soft_wrap=True)


def normalize_command(
    path: str = typer.Argument(..., help="File ('-' for stdin)"),
):
    """
    Rewrite legacy unicode escapes in a file as raw UTF-8 (written to stdout).

    Examples:
        feedcodec normalize archived.json > repaired.json
    """
    try:
        data = read_input(path)
    except OSError as e:
        _fail(str(e), False)
    typer.echo(normalize(data), nl=False)


def length_command(
    path: str = typer.Argument(..., help="Message file ('-' for stdin)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Compare the preallocation estimate with the real canonical length.

    Examples:
        feedcodec length msg.json
    """
    try:
        value = parse(read_input(path))
    except (CanonicalizationError, OSError) as e:
        _fail(str(e), json_output)

    estimate = encoded_len(value)
    actual = len(encode(value))

    if json_output:
        print(json.dumps({"estimate": estimate, "actual": actual}))
        return

    table = Table(show_header=False, box=None)
    table.add_row("[bold]Estimate[/bold]", str(estimate))
    table.add_row("[bold]Canonical[/bold]", str(actual))
    console.print(table)
