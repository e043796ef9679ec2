"""Shared API helpers for authentication, service wiring and responses."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from datetime import timedelta
from typing import Any, TypeVar, cast

from flask import Response, current_app, g, jsonify, request
from flask_jwt_extended import get_jwt, verify_jwt_in_request
from marshmallow import Schema

from petadoption.core.errors import Forbidden
from petadoption.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from petadoption.services._shared.principal import Principal
from petadoption.services.auth.dto import AuthTokenConfig
from petadoption.services.auth.service import AuthService
from petadoption.services.auth.tokens import TokenService

F = TypeVar("F", bound=Callable[..., Any])


# --------------------------------------------------------------------------- #
# Service wiring
# --------------------------------------------------------------------------- #


def token_service() -> TokenService:
    """Build a :class:`TokenService` from the current app's TTL settings."""
    cfg = current_app.config
    token_cfg = AuthTokenConfig(
        access_expires=timedelta(seconds=int(cfg.get("ACCESS_TOKEN_TTL_SECONDS", 3600))),
        refresh_expires=timedelta(seconds=int(cfg.get("REFRESH_TOKEN_TTL_SECONDS", 604800))),
    )
    return TokenService(token_provider=JWTTokenProvider(), token_cfg=token_cfg)


def auth_service() -> AuthService:
    """Build an :class:`AuthService` holding the configured ``ADMIN_KEY``."""
    return AuthService(
        token_service=token_service(),
        admin_key=current_app.config.get("ADMIN_KEY"),
    )


# --------------------------------------------------------------------------- #
# Authentication / authorization
# --------------------------------------------------------------------------- #


def require_auth(func: F) -> F:
    """Ensure the request carries a valid access token and expose its principal.

    Missing, malformed, expired or refresh-typed tokens are answered by the
    flask-jwt-extended loaders with a 401 problem.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        verify_jwt_in_request(optional=False)
        g.principal = TokenService.principal_from_claims(get_jwt() or {})
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def require_role(role: str) -> Callable[[F], F]:
    """Ensure the verified principal holds ``role`` (``ADMIN`` or ``ROLE_ADMIN``)."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            if not current_principal().has_role(role):
                raise Forbidden()
            return func(*args, **kwargs)

        return require_auth(wrapper)  # type: ignore[return-value]

    return decorator


def current_principal() -> Principal:
    """Return the principal stored by :func:`require_auth` for this request."""
    principal = g.get("principal")
    if principal is None:
        raise RuntimeError("current_principal() used outside an authenticated route")
    return cast(Principal, principal)


# --------------------------------------------------------------------------- #
# Request / response helpers
# --------------------------------------------------------------------------- #


def load_body(schema: Schema) -> Any:
    """Validate the JSON body with ``schema`` (absent/invalid JSON loads as ``{}``)."""
    return schema.load(request.get_json(silent=True) or {})


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""
    response = jsonify(payload)
    response.status_code = status
    return response


def no_content() -> Response:
    return current_app.response_class(status=204)


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
