"""Pet type taxonomy endpoints."""

from __future__ import annotations

from flask import Blueprint

from petadoption.api.deps import json_response, load_body, require_auth, require_role, timing
from petadoption.schemas import PetTypeSchema
from petadoption.services.pets import PetService

bp = Blueprint("pet_types", __name__)

pet_type_schema = PetTypeSchema()
pet_type_list_schema = PetTypeSchema(many=True)


@bp.get("")
@require_auth
@timing
def list_pet_types():
    return json_response(pet_type_list_schema.dump(PetService().list_types()))


@bp.post("")
@require_role("ADMIN")
@timing
def create_pet_type():
    dto = load_body(pet_type_schema)
    pet_type = PetService().create_type(dto)
    return json_response(pet_type_schema.dump(pet_type), status=201)
