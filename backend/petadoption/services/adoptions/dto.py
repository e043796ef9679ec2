# petadoption/services/adoptions/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

# ------------------------------ Input DTOs ------------------------------- #


@dataclass(frozen=True, slots=True)
class AdoptionWriteIn:
    """
    Payload for creating or updating an adoption.

    ``None`` ids are allowed here so the service can report them with the
    precise field-level validation error.

    :param user_id: Owner of the adoption.
    :type user_id: int | None
    :param pet_id: Referenced pet.
    :type pet_id: int | None
    :param status: Free-form status label (``PENDING``, ``APPROVED`` ...).
    :type status: str | None
    :param adoption_date: Optional creation timestamp; stamped when omitted.
        Ignored on update.
    :type adoption_date: datetime | None
    """

    user_id: int | None
    pet_id: int | None
    status: str | None
    adoption_date: datetime | None = None


# ------------------------------ Output DTOs ------------------------------ #


@dataclass(frozen=True, slots=True)
class PetRefOut:
    """Pet summary embedded in an adoption."""

    id: int
    name: str
    status: str


@dataclass(frozen=True, slots=True)
class UserRefOut:
    """Owner summary embedded in an adoption (never exposes credentials)."""

    id: int
    username: str


@dataclass(frozen=True, slots=True)
class AdoptionOut:
    """
    Public projection of an Adoption.

    :param id: Primary key.
    :type id: int
    :param pet: Referenced pet.
    :type pet: PetRefOut
    :param user: Owning user.
    :type user: UserRefOut
    :param adoption_date: Creation timestamp.
    :type adoption_date: datetime
    :param status: Current status label.
    :type status: str
    """

    id: int
    pet: PetRefOut
    user: UserRefOut
    adoption_date: datetime
    status: str
