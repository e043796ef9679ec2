"""Flask CLI commands for managing the RS256 signing key pair."""

from __future__ import annotations

from pathlib import Path

import click
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

PRIVATE_KEY_FILENAME = "private_key.pem"
PUBLIC_KEY_FILENAME = "public_key.pem"


def generate_key_pair(bits: int = 2048) -> tuple[bytes, bytes]:
    """Return ``(private_pem, public_pem)`` for a fresh RSA key."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=bits)
    private_pem = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    public_pem = key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return private_pem, public_pem


@click.group("keys")
def keys_cli() -> None:
    """Signing key management."""


@keys_cli.command("generate")
@click.option(
    "--out-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("instance/keys"),
    show_default=True,
    help="Directory receiving private_key.pem and public_key.pem.",
)
@click.option("--bits", type=click.IntRange(min=2048), default=2048, show_default=True)
@click.option("--force", is_flag=True, help="Overwrite an existing key pair.")
def generate_command(out_dir: Path, bits: int, force: bool) -> None:
    """Write a new RSA key pair for token signing."""
    private_path = out_dir / PRIVATE_KEY_FILENAME
    public_path = out_dir / PUBLIC_KEY_FILENAME
    if not force and (private_path.exists() or public_path.exists()):
        raise click.ClickException(f"Key files already exist in {out_dir}; use --force.")

    private_pem, public_pem = generate_key_pair(bits)
    out_dir.mkdir(parents=True, exist_ok=True)
    private_path.write_bytes(private_pem)
    private_path.chmod(0o600)
    public_path.write_bytes(public_pem)
    click.echo(f"Wrote {private_path} and {public_path}")
