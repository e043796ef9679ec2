"""User resource schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, fields, post_load, validate

from petadoption.services.users.dto import UserProfileUpdateIn


class UserUpdateSchema(Schema):
    """Profile payload for ``PUT /users/{id}``; other keys are ignored."""

    class Meta:
        unknown = EXCLUDE

    name = fields.String(load_default=None, validate=validate.Length(max=100))
    email = fields.String(load_default=None, validate=validate.Length(max=254))
    phone = fields.String(load_default=None, validate=validate.Length(max=32))

    @post_load
    def to_dto(self, data: dict[str, Any], **_: Any) -> UserProfileUpdateIn:
        return UserProfileUpdateIn(**data)


class UserSchema(Schema):
    """Public representation of a user entity."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    name = fields.String(required=True)
    email = fields.String(required=True)
    phone = fields.String(required=True)
    roles = fields.List(fields.String(), required=True)
