"""User management endpoints."""

from __future__ import annotations

from flask import Blueprint

from petadoption.api.deps import (
    current_principal,
    json_response,
    load_body,
    no_content,
    require_auth,
    require_role,
    timing,
)
from petadoption.schemas import UserSchema, UserUpdateSchema
from petadoption.services.users import UserService

bp = Blueprint("users", __name__)

user_schema = UserSchema()
user_list_schema = UserSchema(many=True)
user_update_schema = UserUpdateSchema()


@bp.get("")
@require_role("ADMIN")
@timing
def list_users():
    """Return every registered account."""

    return json_response(user_list_schema.dump(UserService().list_users()))


@bp.get("/<int:user_id>")
@require_role("ADMIN")
@timing
def get_user(user_id: int):
    return json_response(user_schema.dump(UserService().get_user(user_id)))


@bp.put("/<int:user_id>")
@require_auth
@timing
def update_user(user_id: int):
    """Update name, email and phone; allowed for the account holder or an admin."""

    dto = load_body(user_update_schema)
    user = UserService().update_profile(user_id, dto, current_principal())
    return json_response(user_schema.dump(user))


@bp.delete("/<int:user_id>")
@require_role("ADMIN")
@timing
def delete_user(user_id: int):
    UserService().delete_user(user_id)
    return no_content()
