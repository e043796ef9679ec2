"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from .common import require_non_blank


class RegisterSchema(Schema):
    """Input payload for account registration.

    Business rules (blank fields, email syntax, duplicates) are enforced by
    the auth service so they report the same messages on every entry point.
    """

    username = fields.String(required=True, validate=validate.Length(max=50))
    password = fields.String(required=True, validate=validate.Length(max=128))
    name = fields.String(load_default=None, validate=validate.Length(max=100))
    email = fields.String(load_default=None, validate=validate.Length(max=254))
    phone = fields.String(load_default=None, validate=validate.Length(max=32))
    admin_key = fields.String(data_key="adminKey", load_default=None, allow_none=True)


class LoginSchema(Schema):
    """Input payload for authenticating a user."""

    username = fields.String(required=True)
    password = fields.String(required=True)


class RefreshSchema(Schema):
    """Input payload for exchanging a refresh token."""

    refresh_token = fields.String(
        data_key="refreshToken",
        required=True,
        validate=require_non_blank("Refresh token must not be empty"),
    )


class RegisteredUserSchema(Schema):
    """Response payload for a created account."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    roles = fields.List(fields.String(), required=True)


class TokenPairSchema(Schema):
    """Response payload for a successful login."""

    access_token = fields.String(data_key="accessToken", required=True)
    refresh_token = fields.String(data_key="refreshToken", required=True)


class AccessTokenSchema(Schema):
    """Response payload for a successful refresh."""

    access_token = fields.String(data_key="accessToken", required=True)
