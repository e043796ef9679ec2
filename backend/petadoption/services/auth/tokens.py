# petadoption/services/auth/tokens.py
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from typing import Any

from petadoption.services._shared.errors import (
    InvalidTokenError,
    ServiceError,
    TokenExpiredError,
    TokenIssueError,
)
from petadoption.services._shared.ports.token_provider import TokenProvider
from petadoption.services._shared.principal import Principal, TokenClaims, strip_role_prefix
from petadoption.services.auth.dto import AuthTokenConfig

logger = logging.getLogger(__name__)

# flask-jwt-extended ``type`` claim values
ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


def normalize_access_roles(roles: Iterable[str]) -> list[str]:
    """Strip ``ROLE_`` and drop duplicates, keeping first-seen order."""
    seen: dict[str, None] = {}
    for role in roles:
        seen.setdefault(strip_role_prefix(role), None)
    return list(seen)


class TokenService:
    """
    Issue, verify and refresh RS256-signed bearer tokens.

    Claim layout (both token kinds): ``iss="self"``, ``iat``, ``exp``,
    ``sub=<username>`` and ``roles``. Access tokens carry roles without the
    ``ROLE_`` prefix; refresh tokens carry them exactly as given. The
    authorization layer re-applies the prefix when building a
    :class:`Principal`, so both shapes map to the same role set.
    """

    def __init__(
        self,
        *,
        token_provider: TokenProvider,
        token_cfg: AuthTokenConfig | None = None,
    ) -> None:
        """
        :param token_provider: Adapter for signing/decoding JWTs.
        :param token_cfg: Access/refresh expiry configuration.
        """
        self.tokens = token_provider
        self.cfg = token_cfg or AuthTokenConfig()

    # ------------------------------------------------------------------ #
    # Issuance
    # ------------------------------------------------------------------ #

    def issue_access_token(self, username: str, roles: Iterable[str]) -> str:
        """
        Sign a one-hour access token for ``username``.

        :raises TokenIssueError: If signing fails for any reason.
        """
        claims = {"roles": normalize_access_roles(roles)}
        try:
            return self.tokens.create_access_token(
                identity=username,
                additional_claims=claims,
                expires_delta=self.cfg.access_expires,
            )
        except Exception as exc:
            logger.error("Access token signing failed", extra={"username": username}, exc_info=True)
            raise TokenIssueError() from exc

    def issue_refresh_token(self, username: str, roles: Iterable[str]) -> str:
        """
        Sign a seven-day refresh token; roles are stored unmodified.

        :raises TokenIssueError: If signing fails for any reason.
        """
        claims = {"roles": list(roles)}
        try:
            return self.tokens.create_refresh_token(
                identity=username,
                additional_claims=claims,
                expires_delta=self.cfg.refresh_expires,
            )
        except Exception as exc:
            logger.error("Refresh token signing failed", extra={"username": username}, exc_info=True)
            raise TokenIssueError() from exc

    # ------------------------------------------------------------------ #
    # Refresh
    # ------------------------------------------------------------------ #

    def refresh_access_token(self, refresh_token: str) -> str:
        """
        Exchange a valid refresh token for a new access token.

        :raises TokenExpiredError: If the token is past its expiry.
        :raises InvalidTokenError: If the signature, issuer, subject, expiry,
            roles or token type check fails.
        :raises TokenIssueError: On any other failure, including signing.
        """
        try:
            claims = TokenClaims.from_payload(self.tokens.decode(refresh_token))
        except ServiceError:
            raise
        except Exception as exc:
            logger.error("Refresh token could not be read", exc_info=True)
            raise TokenIssueError() from exc

        self._check_subject_and_lifetime(claims)
        if not claims.roles:
            raise InvalidTokenError("Refresh token carries no roles")
        if claims.token_type != REFRESH_TOKEN_TYPE:
            raise InvalidTokenError("Wrong token type: refresh token required")

        access = self.issue_access_token(claims.subject or "", claims.roles)
        logger.info("Access token refreshed", extra={"username": claims.subject})
        return access

    # ------------------------------------------------------------------ #
    # Verification
    # ------------------------------------------------------------------ #

    def verify(self, token: str, *, token_type: str = ACCESS_TOKEN_TYPE) -> Principal:
        """
        Verify ``token`` and rebuild the caller's :class:`Principal`.

        :raises TokenExpiredError: If the token is past its expiry.
        :raises InvalidTokenError: On any other verification failure.
        """
        claims = TokenClaims.from_payload(self.tokens.decode(token))
        self._check_subject_and_lifetime(claims)
        if claims.token_type != token_type:
            raise InvalidTokenError(f"Wrong token type: {token_type} token required")
        return claims.to_principal()

    @staticmethod
    def principal_from_claims(payload: Mapping[str, Any]) -> Principal:
        """Map an already verified JWT payload onto a :class:`Principal`."""
        return TokenClaims.from_payload(payload).to_principal()

    @staticmethod
    def _check_subject_and_lifetime(claims: TokenClaims) -> None:
        if not claims.subject or not claims.subject.strip():
            raise InvalidTokenError("Token subject is missing")
        if claims.expires_at is None:
            raise InvalidTokenError("Token expiry is missing")
        if claims.expires_at <= datetime.now(UTC):
            raise TokenExpiredError("Token has expired")
