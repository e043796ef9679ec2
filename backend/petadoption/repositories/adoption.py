"""Adoption repository with owner-aware lookups."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.orm import joinedload

from petadoption.models.adoption import Adoption, AdoptionStatus
from petadoption.repositories.base import BaseRepository


class AdoptionRepository(BaseRepository[Adoption]):
    """Persistence-only repository for :class:`Adoption`.

    Generic reads eager-load both the owning user and the pet because every
    caller either authorizes against the owner or serializes the pet.
    """

    model = Adoption

    def _default_eagerload(self, stmt: Select[Any]) -> Select[Any]:
        return stmt.options(
            joinedload(Adoption.user, innerjoin=True),
            joinedload(Adoption.pet, innerjoin=True),
        )

    def _sortable_fields(self):
        return {"id": Adoption.id, "adoption_date": Adoption.adoption_date}

    def _filterable_fields(self):
        return {"status": Adoption.status, "pet_id": Adoption.pet_id, "user_id": Adoption.user_id}

    def _updatable_fields(self):
        return {"pet", "user", "status"}

    def get_with_user(self, adoption_id: int) -> Adoption | None:
        """Fetch an adoption with only its owner joined (authorization path)."""
        stmt = (
            select(Adoption)
            .options(joinedload(Adoption.user, innerjoin=True))
            .where(Adoption.id == adoption_id)
        )
        return self.session.execute(stmt).scalars().first()

    def get_owner_username(self, adoption_id: int) -> str | None:
        adoption = self.get_with_user(adoption_id)
        return adoption.owner_username if adoption is not None else None

    def list_by_pet(self, pet_id: int) -> list[Adoption]:
        return self.list(filters={"pet_id": pet_id})

    def count_approved_for_pet(self, pet_id: int, *, exclude_id: int | None = None) -> int:
        """Count APPROVED adoptions holding ``pet_id``, optionally ignoring one row."""
        stmt = (
            select(func.count())
            .select_from(Adoption)
            .where(
                Adoption.pet_id == pet_id,
                Adoption.status == AdoptionStatus.APPROVED.value,
            )
        )
        if exclude_id is not None:
            stmt = stmt.where(Adoption.id != exclude_id)
        return int(self.session.execute(stmt).scalar_one())
