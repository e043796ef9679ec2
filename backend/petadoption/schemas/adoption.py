"""Adoption resource schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, fields, post_load

from petadoption.services.adoptions.dto import AdoptionWriteIn

from .common import IdRefSchema, ref_id


class AdoptionWriteSchema(Schema):
    """Payload for ``POST /adoption`` and ``PUT /adoption/{id}``.

    Missing references load as ``None`` so the workflow can answer with the
    field-specific validation error (``user``, ``pet``, ``status``).
    """

    class Meta:
        unknown = EXCLUDE

    user = fields.Nested(IdRefSchema, load_default=None, allow_none=True)
    pet = fields.Nested(IdRefSchema, load_default=None, allow_none=True)
    status = fields.String(load_default=None, allow_none=True)
    adoption_date = fields.DateTime(data_key="adoptionDate", load_default=None, allow_none=True)

    @post_load
    def to_dto(self, data: dict[str, Any], **_: Any) -> AdoptionWriteIn:
        return AdoptionWriteIn(
            user_id=ref_id(data, "user"),
            pet_id=ref_id(data, "pet"),
            status=data.get("status"),
            adoption_date=data.get("adoption_date"),
        )


class AdoptionPetSchema(Schema):
    id = fields.Integer(required=True)
    name = fields.String(required=True)
    status = fields.String(required=True)


class AdoptionUserSchema(Schema):
    id = fields.Integer(required=True)
    username = fields.String(required=True)


class AdoptionSchema(Schema):
    """Public representation of an adoption."""

    id = fields.Integer(required=True)
    pet = fields.Nested(AdoptionPetSchema, required=True)
    user = fields.Nested(AdoptionUserSchema, required=True)
    adoption_date = fields.DateTime(data_key="adoptionDate", required=True)
    status = fields.String(required=True)
