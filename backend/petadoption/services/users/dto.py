# petadoption/services/users/dto.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UserProfileUpdateIn:
    """
    Profile fields a user may change. Username, password and roles are
    not editable through this DTO.

    :param name: Display name.
    :type name: str | None
    :param email: Contact email.
    :type email: str | None
    :param phone: Contact phone.
    :type phone: str | None
    """

    name: str | None
    email: str | None
    phone: str | None


@dataclass(frozen=True, slots=True)
class UserOut:
    """
    Public projection of a User.

    :param id: Primary key.
    :type id: int
    :param username: Login name.
    :type username: str
    :param name: Display name.
    :type name: str
    :param email: Contact email.
    :type email: str
    :param phone: Contact phone.
    :type phone: str
    :param roles: Granted roles, sorted, prefixed form.
    :type roles: tuple[str, ...]
    """

    id: int
    username: str
    name: str
    email: str
    phone: str
    roles: tuple[str, ...]
