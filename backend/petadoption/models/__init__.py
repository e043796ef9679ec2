from petadoption.models.adoption import Adoption, AdoptionStatus
from petadoption.models.pet import Pet, PetStatus, PetType
from petadoption.models.user import ROLE_ADMIN, ROLE_USER, User, UserRole

__all__ = [
    "Adoption",
    "AdoptionStatus",
    "Pet",
    "PetStatus",
    "PetType",
    "ROLE_ADMIN",
    "ROLE_USER",
    "User",
    "UserRole",
]
