"""Authentication helpers for tests."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import timedelta

from petadoption.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from petadoption.models.user import ROLE_USER
from petadoption.services.auth.tokens import TokenService, normalize_access_roles


def issue_token(username: str, roles: Iterable[str] = (ROLE_USER,)) -> str:
    """Sign a regular one-hour access token for ``username``.

    Parameters
    ----------
    username:
        Subject to encode in the token.
    roles:
        Roles in prefixed form; the access token stores them unprefixed.

    Returns
    -------
    str
        Encoded JWT string.
    """

    return TokenService(token_provider=JWTTokenProvider()).issue_access_token(username, roles)


def issue_refresh(username: str, roles: Iterable[str] = (ROLE_USER,)) -> str:
    """Sign a refresh token for ``username``."""

    return TokenService(token_provider=JWTTokenProvider()).issue_refresh_token(username, roles)


def expired_token(username: str, roles: Iterable[str] = (ROLE_USER,), *, refresh: bool = False) -> str:
    """Return an already expired JWT for ``username``.

    Parameters
    ----------
    username:
        Subject to encode in the token.
    roles:
        Roles to embed.
    refresh:
        Build a refresh token instead of an access token.

    Returns
    -------
    str
        Encoded JWT string that expired one second ago.
    """

    provider = JWTTokenProvider()
    if refresh:
        return provider.create_refresh_token(
            identity=username,
            additional_claims={"roles": list(roles)},
            expires_delta=timedelta(seconds=-1),
        )
    return provider.create_access_token(
        identity=username,
        additional_claims={"roles": normalize_access_roles(roles)},
        expires_delta=timedelta(seconds=-1),
    )
