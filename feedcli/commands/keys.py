"""
Signature commands: keygen, sign, verify
"""

import json
import typer
from typing import Optional
from rich.console import Console
from rich.table import Table

from feedcodec.core import CanonicalizationError, parse
from feedcodec.core.errors import SignatureFormatError
from feedcodec.logging_config import get_logger
from feedcodec.verify import (
    SigningKey,
    VerifyingKey,
    ensure_keypair,
    get_default_key_path,
    sign_message,
    verify_message,
)

from ._io import read_input

app = typer.Typer()
console = Console()


@app.command()
def keygen(
    key_path: Optional[str] = typer.Option(
        None,
        "--key",
        "-k",
        help="Where to write the Ed25519 private key PEM (default: $FEEDCODEC_KEY_PATH or ~/.feedcodec/keys/secret_ed25519)",
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Create a signing key pair (kept if it already exists) and print its feed ref.

    Examples:
        feedcodec keys keygen
        feedcodec keys keygen --key ./alice.pem
    """
    try:
        private_path, public_path = ensure_keypair(key_path)
        ref = SigningKey.load_from_file(private_path).feed_ref()
    except (OSError, ValueError) as e:
        if json_output:
            print(json.dumps({"error": str(e)}))
        else:
            console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    if json_output:
        print(json.dumps({"feed": ref, "key": private_path, "public_key": public_path}))
        return

    table = Table(show_header=False, box=None)
    table.add_row("[bold]Feed[/bold]", ref)
    table.add_row("Private key", private_path)
    table.add_row("Public key", public_path)
    console.print(table)


@app.command()
def sign(
    path: str = typer.Argument(..., help="Unsigned message file ('-' for stdin)"),
    key_path: Optional[str] = typer.Option(
        None,
        "--key",
        "-k",
        help="Path to signing key (Ed25519 private key PEM)",
    ),
):
    """
    Sign a message and print its canonical encoding with the signature field.

    Examples:
        feedcodec keys sign draft.json --key ./alice.pem > signed.json
    """
    logger = get_logger(__name__, trace_id=path)
    key_file = key_path or str(get_default_key_path())
    try:
        signing_key = SigningKey.load_from_file(key_file)
        signed = sign_message(parse(read_input(path)), signing_key)
    except FileNotFoundError as e:
        console.print(f"[red]Error: file not found:[/red] {e.filename}")
        raise typer.Exit(2)
    except (CanonicalizationError, OSError, TypeError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    logger.info(f"Signed message as {signing_key.feed_ref()}")
    typer.echo(signed)


@app.command()
def verify(
    path: str = typer.Argument(..., help="Signed message file ('-' for stdin)"),
    author: Optional[str] = typer.Option(
        None,
        "--author",
        "-a",
        help="Feed ref to verify against (default: the message's author field)",
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Verify a signed message.

    Exit code 0 when valid, 1 when the signature does not verify, 2 on errors.

    Examples:
        feedcodec keys verify signed.json
        feedcodec keys verify signed.json --author @...=.ed25519 --json
    """
    logger = get_logger(__name__, trace_id=path)
    try:
        raw = read_input(path)
        key = VerifyingKey.from_feed_ref(author) if author else None
    except FileNotFoundError:
        if json_output:
            print(json.dumps({"error": "Message file not found", "path": path}))
        else:
            console.print(f"[red]Error: Message file not found:[/red] {path}")
        raise typer.Exit(2)
    except (OSError, SignatureFormatError, ValueError) as e:
        if json_output:
            print(json.dumps({"error": str(e)}))
        else:
            console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    result = verify_message(raw, key)
    logger.info(f"Verification finished: valid={result.valid}")

    if json_output:
        print(json.dumps({
            "valid": result.valid,
            "signature_valid": result.signature_valid,
            "author": result.author,
            "error": result.error,
        }))
    elif result.valid:
        console.print(f"[green]✓ Valid signature[/green] by {result.author}", soft_wrap=True)
    else:
        console.print(f"[red]✗ Verification failed:[/red] {result.error}", soft_wrap=True)

    raise typer.Exit(0 if result.valid else 1)

