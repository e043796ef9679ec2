"""Common Marshmallow schemas shared across resources."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, ValidationError, fields


class IdRefSchema(Schema):
    """Reference to another resource by id (``{"id": 1}``); extra keys ignored."""

    class Meta:
        unknown = EXCLUDE

    id = fields.Integer(load_default=None, allow_none=True, strict=True)


def ref_id(data: dict[str, Any], key: str) -> int | None:
    """Return ``data[key]["id"]`` or ``None`` when the reference is absent."""
    ref = data.get(key)
    return ref.get("id") if ref else None


def require_non_blank(message: str):
    """Build a validator rejecting strings that are empty after trimming."""

    def _validate(value: str) -> None:
        if not value or not value.strip():
            raise ValidationError(message)

    return _validate
