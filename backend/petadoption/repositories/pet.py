"""Pet catalog repositories."""

from __future__ import annotations

from sqlalchemy import select

from petadoption.models.pet import Pet, PetStatus, PetType
from petadoption.repositories.base import BaseRepository


class PetTypeRepository(BaseRepository[PetType]):
    model = PetType

    def _sortable_fields(self):
        return {"name": PetType.name}

    def get_by_name(self, name: str) -> PetType | None:
        stmt = select(PetType).where(PetType.name == name.strip())
        return self.session.execute(stmt).scalars().first()


class PetRepository(BaseRepository[Pet]):
    """Persistence-only repository for :class:`Pet`."""

    model = Pet

    def _sortable_fields(self):
        return {"id": Pet.id, "name": Pet.name, "age": Pet.age}

    def _filterable_fields(self):
        return {"status": Pet.status, "type_id": Pet.type_id}

    def _updatable_fields(self):
        return {"name", "age", "status", "location", "type"}

    def list_available(self) -> list[Pet]:
        return self.list(filters={"status": PetStatus.AVAILABLE}, sort=["name"])
