# comments in English; reST docstrings strict
from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

ROLE_PREFIX = "ROLE_"
ADMIN_ROLE = "ROLE_ADMIN"
USER_ROLE = "ROLE_USER"


def strip_role_prefix(role: str) -> str:
    """Return ``role`` without a leading ``ROLE_``."""
    return role[len(ROLE_PREFIX) :] if role.startswith(ROLE_PREFIX) else role


def with_role_prefix(role: str) -> str:
    """Return ``role`` with exactly one leading ``ROLE_``."""
    return role if role.startswith(ROLE_PREFIX) else f"{ROLE_PREFIX}{role}"


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated identity reconstructed from a verified token.

    :param username: Token subject.
    :type username: str
    :param roles: Authorization roles in prefixed form (``ROLE_ADMIN``).
    :type roles: frozenset[str]
    """

    username: str
    roles: frozenset[str]

    @classmethod
    def of(cls, username: str, roles: Iterable[str]) -> Principal:
        return cls(username=username, roles=frozenset(with_role_prefix(r) for r in roles))

    def has_role(self, role: str) -> bool:
        return with_role_prefix(role) in self.roles

    @property
    def is_admin(self) -> bool:
        return ADMIN_ROLE in self.roles


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """
    Typed view over a decoded JWT payload.

    :param subject: ``sub`` claim (username); may be blank on malformed tokens.
    :type subject: str | None
    :param roles: ``roles`` claim as issued (``None`` when absent).
    :type roles: tuple[str, ...] | None
    :param issuer: ``iss`` claim.
    :type issuer: str | None
    :param issued_at: ``iat`` claim.
    :type issued_at: datetime | None
    :param expires_at: ``exp`` claim; ``None`` when the token never expires.
    :type expires_at: datetime | None
    :param token_type: flask-jwt-extended ``type`` claim (``access``/``refresh``).
    :type token_type: str | None
    """

    subject: str | None
    roles: tuple[str, ...] | None
    issuer: str | None = None
    issued_at: datetime | None = None
    expires_at: datetime | None = None
    token_type: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> TokenClaims:
        raw_roles = payload.get("roles")
        roles = (
            tuple(str(r) for r in raw_roles) if isinstance(raw_roles, list | tuple) else None
        )
        sub = payload.get("sub")
        return cls(
            subject=str(sub) if sub is not None else None,
            roles=roles,
            issuer=payload.get("iss"),
            issued_at=_ts(payload.get("iat")),
            expires_at=_ts(payload.get("exp")),
            token_type=payload.get("type"),
        )

    def to_principal(self) -> Principal:
        return Principal.of(self.subject or "", self.roles or ())


def _ts(value: Any) -> datetime | None:
    if value is None:
        return None
    return datetime.fromtimestamp(int(value), tz=UTC)
