"""Refresh-token exchange endpoint."""

from __future__ import annotations

from flask import Blueprint

from petadoption.api.deps import json_response, load_body, timing, token_service
from petadoption.schemas import AccessTokenSchema, RefreshSchema

bp = Blueprint("token", __name__)

refresh_schema = RefreshSchema()
access_token_schema = AccessTokenSchema()


@bp.post("/refresh")
@timing
def refresh():
    """Exchange a refresh token for a new access token.

    A missing or blank token answers 400, an invalid or expired one 403.
    """

    data = load_body(refresh_schema)
    access = token_service().refresh_access_token(data["refresh_token"])
    return json_response(access_token_schema.dump({"access_token": access}))
