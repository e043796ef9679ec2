"""Service layer public API.

Callers import from :mod:`petadoption.services` without knowing the internal
package layout.

Re-exports
----------
- Base primitives: :class:`BaseService`, :class:`Principal`
- Token and auth services: :class:`TokenService`, :class:`AuthService`
- Workflow: :class:`AdoptionService`, :class:`AdoptionAccessEvaluator`
- Catalog and accounts: :class:`PetService`, :class:`UserService`
"""

from __future__ import annotations

from ._shared.base import BaseService
from ._shared.principal import Principal, TokenClaims
from .adoptions import AdoptionAccessEvaluator, AdoptionService
from .auth.service import AuthService
from .auth.tokens import TokenService
from .pets import PetService
from .users import UserService

__all__ = [
    "AdoptionAccessEvaluator",
    "AdoptionService",
    "AuthService",
    "BaseService",
    "PetService",
    "Principal",
    "TokenClaims",
    "TokenService",
    "UserService",
]
