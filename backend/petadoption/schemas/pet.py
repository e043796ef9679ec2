"""Pet catalog schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, fields, post_load, validate

from petadoption.services.pets.dto import PetTypeCreateIn, PetWriteIn

from .common import IdRefSchema, ref_id


class PetWriteSchema(Schema):
    """Payload for creating or replacing a pet (``type`` is ``{"id": ..}``)."""

    class Meta:
        unknown = EXCLUDE

    name = fields.String(required=True, validate=validate.Length(max=100))
    age = fields.Integer(required=True, strict=True)
    location = fields.String(required=True, validate=validate.Length(max=120))
    status = fields.String(load_default=None, allow_none=True)
    type = fields.Nested(IdRefSchema, required=True)

    @post_load
    def to_dto(self, data: dict[str, Any], **_: Any) -> PetWriteIn:
        return PetWriteIn(
            name=data["name"],
            age=data["age"],
            type_id=ref_id(data, "type"),
            location=data["location"],
            status=data.get("status"),
        )


class PetTypeSchema(Schema):
    """Pet type representation; ``id`` is output-only."""

    id = fields.Integer(dump_only=True)
    name = fields.String(required=True, validate=validate.Length(min=1, max=50))

    @post_load
    def to_dto(self, data: dict[str, Any], **_: Any) -> PetTypeCreateIn:
        return PetTypeCreateIn(name=data["name"])


class PetSchema(Schema):
    """Public representation of a pet."""

    id = fields.Integer(required=True)
    name = fields.String(required=True)
    age = fields.Integer(required=True)
    status = fields.String(required=True)
    location = fields.String(required=True)
    type = fields.Nested(PetTypeSchema, required=True)
