# petadoption/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for account registration.

    :param username: Desired login name.
    :type username: str
    :param password: Raw password (hashed before storage).
    :type password: str
    :param name: Display name.
    :type name: str
    :param email: Contact email.
    :type email: str
    :param phone: Contact phone.
    :type phone: str
    :param admin_key: Optional secret that elevates the account to admin.
    :type admin_key: str | None
    """

    username: str
    password: str
    name: str
    email: str
    phone: str
    admin_key: str | None = None


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param username: Login name.
    :type username: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    username: str
    password: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class RegisteredUserOut:
    """
    Output DTO for a freshly registered account.

    :param id: Assigned identifier.
    :type id: int
    :param username: Login name.
    :type username: str
    :param roles: Granted roles (prefixed form).
    :type roles: tuple[str, ...]
    """

    id: int
    username: str
    roles: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    """

    access_token: str
    refresh_token: str


# ------------------------------ Config DTO -------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """
    Token emission configuration.

    :param access_expires: Access token lifetime.
    :type access_expires: timedelta
    :param refresh_expires: Refresh token lifetime.
    :type refresh_expires: timedelta
    """

    access_expires: timedelta = timedelta(hours=1)
    refresh_expires: timedelta = timedelta(days=7)
