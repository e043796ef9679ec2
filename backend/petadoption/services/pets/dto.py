# petadoption/services/pets/dto.py
from __future__ import annotations

from dataclasses import dataclass

# ------------------------------ Input DTOs ------------------------------- #


@dataclass(frozen=True, slots=True)
class PetWriteIn:
    """
    Payload for creating or replacing a pet.

    :param name: Display name.
    :type name: str
    :param age: Age in years (``>= 0``).
    :type age: int
    :param type_id: Referenced pet type.
    :type type_id: int
    :param location: Shelter location.
    :type location: str
    :param status: ``PetStatus`` name; ``None`` means ``AVAILABLE`` on create.
    :type status: str | None
    """

    name: str
    age: int
    type_id: int
    location: str
    status: str | None = None


@dataclass(frozen=True, slots=True)
class PetTypeCreateIn:
    name: str


# ------------------------------ Output DTOs ------------------------------ #


@dataclass(frozen=True, slots=True)
class PetTypeOut:
    id: int
    name: str


@dataclass(frozen=True, slots=True)
class PetOut:
    """
    Public projection of a Pet.

    :param id: Primary key.
    :type id: int
    :param name: Display name.
    :type name: str
    :param age: Age in years.
    :type age: int
    :param status: ``PetStatus`` value.
    :type status: str
    :param location: Shelter location.
    :type location: str
    :param type: Pet type.
    :type type: PetTypeOut
    """

    id: int
    name: str
    age: int
    status: str
    location: str
    type: PetTypeOut
