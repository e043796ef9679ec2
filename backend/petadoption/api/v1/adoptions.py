"""Adoption workflow endpoints."""

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
from petadoption.core.errors import Forbidden
from petadoption.schemas import AdoptionSchema, AdoptionWriteSchema
from petadoption.services.adoptions import AdoptionAccessEvaluator, AdoptionService

bp = Blueprint("adoptions", __name__)

adoption_schema = AdoptionSchema()
adoption_list_schema = AdoptionSchema(many=True)
adoption_write_schema = AdoptionWriteSchema()


@bp.post("")
@require_auth
@timing
def create_adoption():
    """File an adoption request; non-admins may only file for themselves."""

    dto = load_body(adoption_write_schema)
    adoption = AdoptionService().create(dto, principal=current_principal())
    return json_response(adoption_schema.dump(adoption), status=201)


@bp.get("")
@require_role("ADMIN")
@timing
def list_adoptions():
    """Return every adoption."""

    adoptions = AdoptionService().list_all()
    return json_response(adoption_list_schema.dump(adoptions))


@bp.get("/<int:adoption_id>")
@require_auth
@timing
def get_adoption(adoption_id: int):
    """Return one adoption to its owner or an administrator."""

    adoption = AdoptionService().get(adoption_id, current_principal())
    return json_response(adoption_schema.dump(adoption))


@bp.put("/<int:adoption_id>")
@require_auth
@timing
def update_adoption(adoption_id: int):
    """Overwrite an adoption (inserting it under ``adoption_id`` when absent)."""

    principal = current_principal()
    if not AdoptionAccessEvaluator().can_access(adoption_id, principal):
        raise Forbidden()
    dto = load_body(adoption_write_schema)
    adoption = AdoptionService().update(adoption_id, dto, principal=principal)
    return json_response(adoption_schema.dump(adoption))


@bp.delete("/<int:adoption_id>")
@require_role("ADMIN")
@timing
def delete_adoption(adoption_id: int):
    AdoptionService().delete(adoption_id)
    return no_content()


@bp.post("/<int:adoption_id>/approve")
@require_role("ADMIN")
@timing
def approve_adoption(adoption_id: int):
    """Approve the adoption and mark its pet adopted."""

    adoption = AdoptionService().approve(adoption_id)
    return json_response(adoption_schema.dump(adoption))


@bp.post("/<int:adoption_id>/reject")
@require_role("ADMIN")
@timing
def reject_adoption(adoption_id: int):
    """Reject the adoption and release its pet."""

    adoption = AdoptionService().reject(adoption_id)
    return json_response(adoption_schema.dump(adoption))
