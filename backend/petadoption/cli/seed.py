"""Flask CLI commands for idempotent reference-data seeding."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import click
from flask.cli import with_appcontext
from sqlalchemy import select
from sqlalchemy.orm import Session

from petadoption.core.extensions import db
from petadoption.models.pet import PetType

LOGGER = logging.getLogger(__name__)

DEFAULT_PET_TYPES: tuple[str, ...] = ("Dog", "Cat", "Rabbit", "Bird")


def seed_pet_types(session: Session, names: Iterable[str]) -> dict[str, int]:
    """Insert missing pet types by name and commit.

    Returns ``{"created": n, "existing": m}``; blank names are skipped.
    """
    wanted = list(dict.fromkeys(n.strip() for n in names if n and n.strip()))
    existing = set(
        session.execute(select(PetType.name).where(PetType.name.in_(wanted))).scalars()
    )
    created = 0
    for name in wanted:
        if name in existing:
            LOGGER.debug("Pet type already present: %s", name)
            continue
        session.add(PetType(name=name))
        created += 1
    session.commit()
    return {"created": created, "existing": len(existing)}


def _echo_summary(summary: dict[str, dict[str, int]]) -> None:
    """Pretty-print a tabular summary of seed results."""
    click.echo("Seed summary:")
    width = max(len(name) for name in summary)
    for table, counters in sorted(summary.items()):
        created = counters.get("created", 0)
        existing = counters.get("existing", 0)
        click.echo(f"  {table.ljust(width)}  created={created:>2}  existing={existing:>2}")


@click.group("seed")
@click.option("--verbose", is_flag=True, help="Enable verbose logging for seeding.")
def seed_cli(verbose: bool) -> None:
    """Collection of database seeding commands."""
    LOGGER.setLevel(logging.DEBUG if verbose else logging.INFO)


@seed_cli.command("pet-types")
@click.argument("names", nargs=-1)
@with_appcontext
def pet_types_command(names: tuple[str, ...]) -> None:
    """Insert the given pet types (defaults: Dog, Cat, Rabbit, Bird)."""
    try:
        counters = seed_pet_types(db.session, names or DEFAULT_PET_TYPES)
    except Exception as exc:  # pragma: no cover - CLI safeguard
        db.session.rollback()
        raise click.ClickException(f"Seeding failed: {exc}") from exc
    _echo_summary({"pet_types": counters})
