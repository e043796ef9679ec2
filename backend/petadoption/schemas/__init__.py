"""Convenience exports for application schemas."""

from __future__ import annotations

from .adoption import AdoptionSchema, AdoptionWriteSchema
from .auth import (
    AccessTokenSchema,
    LoginSchema,
    RefreshSchema,
    RegisteredUserSchema,
    RegisterSchema,
    TokenPairSchema,
)
from .common import IdRefSchema
from .pet import PetSchema, PetTypeSchema, PetWriteSchema
from .user import UserSchema, UserUpdateSchema

__all__ = [
    "AccessTokenSchema",
    "AdoptionSchema",
    "AdoptionWriteSchema",
    "IdRefSchema",
    "LoginSchema",
    "PetSchema",
    "PetTypeSchema",
    "PetWriteSchema",
    "RefreshSchema",
    "RegisterSchema",
    "RegisteredUserSchema",
    "TokenPairSchema",
    "UserSchema",
    "UserUpdateSchema",
]
