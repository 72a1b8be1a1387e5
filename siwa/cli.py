"""Command line interface for generating Sign in with Apple client secrets."""

import json
import sys
from pathlib import Path
from typing import NoReturn

import typer

from siwa.core.logging import configure_logging
from siwa.core.settings import SecretSettings
from siwa.crypto.errors import SecretError
from siwa.crypto.inspector import decode_token
from siwa.crypto.keys import generate_ec_keypair
from siwa.crypto.types import DecodedToken
from siwa.secret.service import generate_client_secret, preview_expiration
from siwa.secret.types import LifetimePreset, SecretRequest

app = typer.Typer(help="Generate and inspect Sign in with Apple client secrets")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG"),
) -> None:
    """siwa CLI entry point."""
    settings = SecretSettings()
    configure_logging(
        level="DEBUG" if verbose else settings.log_level,
        json_output=settings.log_json,
    )


def _fail(exc: SecretError) -> NoReturn:
    typer.secho(f"{exc.kind}: {exc.message}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _read_key(key_file: Path | None) -> str:
    if key_file is not None:
        return key_file.read_text(encoding="utf-8")
    if sys.stdin.isatty():
        typer.echo("Paste the private key, then press Ctrl-D:", err=True)
    return sys.stdin.read()


def _print_decoded(decoded: DecodedToken) -> None:
    typer.echo("Header:")
    typer.echo(json.dumps(decoded.header, indent=2))
    typer.echo("Claims:")
    typer.echo(json.dumps(decoded.claims, indent=2))
    typer.echo(f"Issued at: {decoded.issued_at}")
    typer.echo(f"Expires at: {decoded.expires_at}")


@app.command("generate")
def generate(
    key_id: str = typer.Option(..., "--key-id", help="10-character Key ID"),
    team_id: str = typer.Option(..., "--team-id", help="Apple Developer Team ID"),
    client_id: str = typer.Option(..., "--client-id", help="Services ID"),
    key_file: Path | None = typer.Option(
        None, "--key-file", exists=True, dir_okay=False, help=".p8 file (default: stdin)"
    ),
    lifetime: str | None = typer.Option(
        None, "--lifetime", help="Lifetime in seconds"
    ),
    preset: LifetimePreset | None = typer.Option(
        None, "--preset", help="Use a preset lifetime instead of --lifetime"
    ),
    audience: str | None = typer.Option(
        None, "--audience", help="Override the aud claim ('none' omits it)"
    ),
    show_decoded: bool = typer.Option(
        False, "--decode", help="Also print the decoded header and claims"
    ),
) -> None:
    """
    Sign a client secret with an Apple PKCS#8 private key.

    Example:
        siwa generate --key-id ABC1234567 --team-id TEAM123456 \\
            --client-id com.example.app.web --key-file AuthKey_ABC1234567.p8
    """
    if lifetime is not None and preset is not None:
        typer.secho("Use either --lifetime or --preset", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)

    settings = SecretSettings()
    if audience is not None:
        settings = SecretSettings(audience=audience)
    if preset is not None:
        requested: int | str = preset.seconds
    elif lifetime is not None:
        requested = lifetime
    else:
        requested = settings.default_lifetime

    request = SecretRequest(
        key_id=key_id,
        team_id=team_id,
        client_id=client_id,
        private_key=_read_key(key_file),
        lifetime=requested,
    )
    try:
        token = generate_client_secret(request, settings)
        decoded = decode_token(token) if show_decoded else None
    except SecretError as exc:
        _fail(exc)

    if decoded is not None:
        _print_decoded(decoded)
    typer.echo(token)


@app.command("decode")
def decode(token: str = typer.Argument(..., help="Compact JWT to inspect")) -> None:
    """Show a token's header and claims. The signature is NOT verified."""
    try:
        decoded = decode_token(token)
    except SecretError as exc:
        _fail(exc)
    _print_decoded(decoded)


@app.command("presets")
def presets() -> None:
    """List preset lifetimes and when a token signed now would expire."""
    for preset in LifetimePreset:
        expires = preview_expiration(preset.seconds)
        typer.echo(f"{preset.value}: {preset.seconds}s (expires {expires})")


@app.command("keygen")
def keygen(
    key_id: str = typer.Option("TESTKEY001", "--key-id", help="Key ID to report"),
) -> None:
    """Print a throwaway P-256 keypair for local testing only."""
    keypair = generate_ec_keypair(key_id)
    typer.echo(f"Key ID: {keypair.kid}")
    typer.echo(keypair.private_key_pem.rstrip())
    typer.echo(keypair.public_key_pem.rstrip())
