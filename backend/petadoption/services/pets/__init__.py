"""Pet catalog service and DTOs."""

from __future__ import annotations

from .dto import PetOut, PetTypeCreateIn, PetTypeOut, PetWriteIn
from .service import PetService

__all__ = ["PetOut", "PetService", "PetTypeCreateIn", "PetTypeOut", "PetWriteIn"]
