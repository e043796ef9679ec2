"""Repository layer: persistence-only access to the domain aggregates."""

from petadoption.repositories.adoption import AdoptionRepository
from petadoption.repositories.base import BaseRepository
from petadoption.repositories.pet import PetRepository, PetTypeRepository
from petadoption.repositories.user import UserRepository

__all__ = [
    "AdoptionRepository",
    "BaseRepository",
    "PetRepository",
    "PetTypeRepository",
    "UserRepository",
]
