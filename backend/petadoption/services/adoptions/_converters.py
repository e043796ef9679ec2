from __future__ import annotations

from petadoption.models.adoption import Adoption
from petadoption.models.pet import Pet
from petadoption.models.user import User

from .dto import AdoptionOut, PetRefOut, UserRefOut


def _status_value(status: object) -> str:
    return str(getattr(status, "value", status))


def pet_to_ref(row: Pet) -> PetRefOut:
    return PetRefOut(id=row.id, name=row.name, status=_status_value(row.status))


def user_to_ref(row: User) -> UserRefOut:
    return UserRefOut(id=row.id, username=row.username)


def adoption_to_out(row: Adoption) -> AdoptionOut:
    return AdoptionOut(
        id=row.id,
        pet=pet_to_ref(row.pet),
        user=user_to_ref(row.user),
        adoption_date=row.adoption_date,
        status=row.status,
    )
