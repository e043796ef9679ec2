"""Pet catalog endpoints."""

from __future__ import annotations

from flask import Blueprint

from petadoption.api.deps import (
    json_response,
    load_body,
    no_content,
    require_auth,
    require_role,
    timing,
)
from petadoption.schemas import PetSchema, PetWriteSchema
from petadoption.services.pets import PetService

bp = Blueprint("pets", __name__)

pet_schema = PetSchema()
pet_list_schema = PetSchema(many=True)
pet_write_schema = PetWriteSchema()


@bp.get("")
@require_auth
@timing
def list_available_pets():
    """Return pets that can still be adopted."""

    return json_response(pet_list_schema.dump(PetService().list_available()))


@bp.post("")
@require_role("ADMIN")
@timing
def create_pet():
    dto = load_body(pet_write_schema)
    pet = PetService().create(dto)
    return json_response(pet_schema.dump(pet), status=201)


@bp.get("/<int:pet_id>")
@require_role("ADMIN")
@timing
def get_pet(pet_id: int):
    return json_response(pet_schema.dump(PetService().get(pet_id)))


@bp.put("/<int:pet_id>")
@require_role("ADMIN")
@timing
def update_pet(pet_id: int):
    dto = load_body(pet_write_schema)
    pet = PetService().update(pet_id, dto)
    return json_response(pet_schema.dump(pet))


@bp.delete("/<int:pet_id>")
@require_role("ADMIN")
@timing
def delete_pet(pet_id: int):
    """Delete a pet and its adoptions."""

    PetService().delete(pet_id)
    return no_content()
