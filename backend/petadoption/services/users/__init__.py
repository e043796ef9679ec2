"""User management service and DTOs."""

from __future__ import annotations

from .dto import UserOut, UserProfileUpdateIn
from .service import UserService

__all__ = ["UserOut", "UserProfileUpdateIn", "UserService"]
