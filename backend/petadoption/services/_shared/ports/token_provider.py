from __future__ import annotations

from datetime import timedelta
from typing import Any, Protocol


class TokenProvider(Protocol):
    """
    Port for signing and decoding JWTs.

    Adapters translate library failures into the service taxonomy:
    ``decode`` raises :class:`~petadoption.services._shared.errors.TokenExpiredError`
    for expired tokens and
    :class:`~petadoption.services._shared.errors.InvalidTokenError` for any
    other verification failure.
    """

    def create_access_token(
        self,
        *,
        identity: str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta | None = None,
    ) -> str: ...

    def create_refresh_token(
        self,
        *,
        identity: str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta | None = None,
    ) -> str: ...

    def decode(self, token: str) -> dict[str, Any]: ...
