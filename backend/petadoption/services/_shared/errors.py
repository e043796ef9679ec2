"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask, HTTP or
SQLAlchemy. They are the stable contract between repositories, domain models
and application services; ``petadoption/core/errors.py`` translates them into
RFC 7807 responses at the HTTP boundary.
"""

from __future__ import annotations

from dataclasses import dataclass

# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from repositories or domain logic.
    """


# --------------------------------------------------------------------------- #
# Not found
# --------------------------------------------------------------------------- #


@dataclass(slots=True, eq=False)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "Adoption").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found with id: {self.key}"


class UserNotFound(NotFoundError):
    def __init__(self, key: str | int) -> None:
        super().__init__("User", key)


class PetNotFound(NotFoundError):
    def __init__(self, key: str | int) -> None:
        super().__init__("Pet", key)


class PetTypeNotFound(NotFoundError):
    def __init__(self, key: str | int) -> None:
        super().__init__("Pet type", key)


class AdoptionNotFound(NotFoundError):
    def __init__(self, key: str | int) -> None:
        super().__init__("Adoption", key)


# --------------------------------------------------------------------------- #
# Validation
# --------------------------------------------------------------------------- #


@dataclass(slots=True, eq=False)
class ValidationError(ServiceError):
    """
    Raised when a single input field violates a business rule.

    :param field: Public name of the offending field (e.g., ``"status"``).
    :type field: str
    :param message: Human-readable explanation.
    :type message: str
    """

    field: str
    message: str

    def __str__(self) -> str:
        return self.message


class UserIdInvalid(ValidationError):
    def __init__(self, message: str = "User ID must be a non-negative value") -> None:
        super().__init__("user", message)


class PetIdInvalid(ValidationError):
    def __init__(self, message: str = "Pet ID must be a non-negative value") -> None:
        super().__init__("pet", message)


class AdoptionStatusInvalid(ValidationError):
    def __init__(self, message: str = "Adoption status cannot be empty") -> None:
        super().__init__("status", message)


# --------------------------------------------------------------------------- #
# Conflicts
# --------------------------------------------------------------------------- #


@dataclass(slots=True, eq=False)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


class AdoptionConflict(ConflictError):
    """Raised when a state transition would break pet/adoption consistency."""

    def __init__(self, detail: str) -> None:
        super().__init__("Adoption", detail)


# --------------------------------------------------------------------------- #
# Authentication / authorization
# --------------------------------------------------------------------------- #


class AuthorizationError(ServiceError):
    """Raised when the principal may not act on the requested resource."""

    def __init__(self, message: str = "You are not authorized") -> None:
        super().__init__(message)


AccessDenied = AuthorizationError


class AuthenticationError(ServiceError):
    """Raised when credentials are wrong or the account cannot sign in."""


class InvalidTokenError(ServiceError):
    """Raised when a bearer token fails signature, issuer or claim checks."""


class TokenExpiredError(InvalidTokenError):
    """Raised when a bearer token is past its ``exp`` claim."""


class TokenIssueError(ServiceError):
    """Raised when signing a token fails; never carries internal detail."""

    def __init__(self, message: str = "Internal error generating token") -> None:
        super().__init__(message)
