# petadoption/services/pets/service.py
from __future__ import annotations

import logging

from petadoption.models.pet import Pet, PetStatus, PetType
from petadoption.repositories.pet import PetRepository, PetTypeRepository
from petadoption.services._shared.base import BaseService
from petadoption.services._shared.errors import (
    ConflictError,
    PetNotFound,
    PetTypeNotFound,
    ValidationError,
)
from petadoption.services.pets.dto import PetOut, PetTypeCreateIn, PetTypeOut, PetWriteIn

logger = logging.getLogger(__name__)


def pet_type_to_out(row: PetType) -> PetTypeOut:
    return PetTypeOut(id=row.id, name=row.name)


def pet_to_out(row: Pet) -> PetOut:
    return PetOut(
        id=row.id,
        name=row.name,
        age=row.age,
        status=PetStatus(row.status).value,
        location=row.location,
        type=pet_type_to_out(row.type),
    )


def _parse_status(raw: str | None) -> PetStatus | None:
    if raw is None:
        return None
    try:
        return PetStatus(raw.strip().upper())
    except ValueError as exc:
        raise ValidationError("status", f"Unknown pet status: {raw}") from exc


class PetService(BaseService):
    """Pet catalog maintained by administrators, browsed by everyone."""

    # ------------------------------------------------------------------ #
    # Pets
    # ------------------------------------------------------------------ #

    def create(self, dto: PetWriteIn) -> PetOut:
        """
        List a new pet. New pets always start ``AVAILABLE``.

        :raises ValidationError: Blank name/location, negative age, or a
            status other than ``AVAILABLE``.
        :raises PetTypeNotFound: Unknown ``type_id``.
        """
        self._validate(dto)
        status = _parse_status(dto.status) or PetStatus.AVAILABLE
        if status is not PetStatus.AVAILABLE:
            raise ValidationError("status", "Pet is not available for adoption")

        with self.rw_uow() as uow:
            pet_type = self._resolve_type(uow.pet_types, dto.type_id)
            repo: PetRepository = uow.pets
            pet = repo.model(
                name=dto.name,
                age=dto.age,
                location=dto.location,
                status=status,
                type=pet_type,
            )
            repo.add(pet)
            logger.info("Pet created", extra={"pet_id": pet.id})
            return pet_to_out(pet)

    def list_available(self) -> list[PetOut]:
        with self.ro_uow() as uow:
            rows = uow.pets.list_available()
            return [pet_to_out(p) for p in rows]

    def get(self, pet_id: int) -> PetOut:
        """:raises PetNotFound: If ``pet_id`` does not exist."""
        with self.ro_uow() as uow:
            pet = uow.pets.get(pet_id)
            if pet is None:
                logger.warning("Pet not found", extra={"pet_id": pet_id})
                raise PetNotFound(pet_id)
            return pet_to_out(pet)

    def update(self, pet_id: int, dto: PetWriteIn) -> PetOut:
        """
        Replace every editable field of a pet.

        ``status`` is kept when omitted. Concurrent writers on the same pet
        surface as ``StaleDataError`` from the version counter.
        """
        self._validate(dto)
        status = _parse_status(dto.status)

        with self.rw_uow() as uow:
            repo: PetRepository = uow.pets
            pet = repo.get_for_update(pet_id)
            if pet is None:
                raise PetNotFound(pet_id)
            pet_type = self._resolve_type(uow.pet_types, dto.type_id)

            fields: dict[str, object] = {
                "name": dto.name,
                "age": dto.age,
                "location": dto.location,
                "type": pet_type,
            }
            if status is not None:
                fields["status"] = status
            repo.assign_updates(pet, fields)
            logger.info("Pet updated", extra={"pet_id": pet_id, "status": pet.status.value})
            return pet_to_out(pet)

    def delete(self, pet_id: int) -> None:
        """Delete a pet together with every adoption that references it."""
        with self.rw_uow() as uow:
            repo: PetRepository = uow.pets
            pet = repo.get(pet_id)
            if pet is None:
                raise PetNotFound(pet_id)
            repo.delete(pet)
            logger.info("Pet deleted", extra={"pet_id": pet_id})

    @staticmethod
    def _validate(dto: PetWriteIn) -> None:
        if not dto.name or not dto.name.strip():
            raise ValidationError("name", "Pet name must not be null or empty")
        if dto.age is None or dto.age < 0:
            raise ValidationError("age", "Pet age must not be less than 0")
        if not dto.location or not dto.location.strip():
            raise ValidationError("location", "Location must not be null or empty")
        if dto.type_id is None or dto.type_id < 0:
            raise ValidationError("type", "Pet type ID must not be null or negative")

    @staticmethod
    def _resolve_type(repo: PetTypeRepository, type_id: int) -> PetType:
        pet_type = repo.get(type_id)
        if pet_type is None:
            raise PetTypeNotFound(type_id)
        return pet_type

    # ------------------------------------------------------------------ #
    # Pet types
    # ------------------------------------------------------------------ #

    def list_types(self) -> list[PetTypeOut]:
        with self.ro_uow() as uow:
            return [pet_type_to_out(t) for t in uow.pet_types.list(sort=["name"])]

    def create_type(self, dto: PetTypeCreateIn) -> PetTypeOut:
        """:raises ConflictError: If a type with the same name exists."""
        if not dto.name or not dto.name.strip():
            raise ValidationError("name", "Pet type name must not be null or empty")

        with self.rw_uow() as uow:
            repo: PetTypeRepository = uow.pet_types
            if repo.get_by_name(dto.name) is not None:
                raise ConflictError("Pet type", "name already exists")
            pet_type = repo.add(repo.model(name=dto.name))
            logger.info("Pet type created: %s", pet_type.name)
            return pet_type_to_out(pet_type)
