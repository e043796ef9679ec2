"""Adoption workflow services and DTOs."""

from __future__ import annotations

from .access import AdoptionAccessEvaluator
from .dto import AdoptionOut, AdoptionWriteIn, PetRefOut, UserRefOut
from .service import AdoptionService

__all__ = [
    "AdoptionAccessEvaluator",
    "AdoptionService",
    # DTOs
    "AdoptionOut",
    "AdoptionWriteIn",
    "PetRefOut",
    "UserRefOut",
]
