"""Registration and login endpoints."""

from __future__ import annotations

from flask import Blueprint

from petadoption.api.deps import auth_service, json_response, load_body, timing
from petadoption.schemas import (
    LoginSchema,
    RegisteredUserSchema,
    RegisterSchema,
    TokenPairSchema,
)
from petadoption.services.auth.dto import LoginIn, RegisterIn

bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
registered_schema = RegisteredUserSchema()
token_pair_schema = TokenPairSchema()


@bp.post("/register")
@timing
def register():
    """Create an account; ``adminKey`` matching the server secret grants admin."""

    data = load_body(register_schema)
    user = auth_service().register(RegisterIn(**data))
    return json_response(registered_schema.dump(user), status=201)


@bp.post("/login")
@timing
def login():
    """Authenticate credentials and issue an access/refresh token pair."""

    data = load_body(login_schema)
    pair = auth_service().login(LoginIn(**data))
    return json_response(token_pair_schema.dump(pair))
