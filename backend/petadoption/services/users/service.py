# petadoption/services/users/service.py
from __future__ import annotations

import logging

from petadoption.models.user import EMAIL_RE, User
from petadoption.repositories.user import UserRepository
from petadoption.services._shared.base import BaseService
from petadoption.services._shared.errors import UserNotFound, ValidationError
from petadoption.services._shared.principal import Principal
from petadoption.services.users.dto import UserOut, UserProfileUpdateIn

logger = logging.getLogger(__name__)


def user_to_out(row: User) -> UserOut:
    return UserOut(
        id=row.id,
        username=row.username,
        name=row.name,
        email=row.email,
        phone=row.phone,
        roles=tuple(sorted(row.roles)),
    )


class UserService(BaseService):
    """Account administration and self-service profile edits."""

    def list_users(self) -> list[UserOut]:
        with self.ro_uow() as uow:
            rows = uow.users.list(sort=["id"])
            logger.info("Listed users", extra={"count": len(rows)})
            return [user_to_out(u) for u in rows]

    def get_user(self, user_id: int) -> UserOut:
        """:raises UserNotFound: If ``user_id`` does not exist."""
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                logger.warning("User not found", extra={"user_id": user_id})
                raise UserNotFound(user_id)
            return user_to_out(user)

    def update_profile(
        self, user_id: int, dto: UserProfileUpdateIn, principal: Principal
    ) -> UserOut:
        """
        Replace name, email and phone of an account.

        :raises UserNotFound: Unknown account.
        :raises AuthorizationError: ``principal`` is neither the account
            holder nor an administrator.
        :raises ValidationError: Blank/invalid field or email already used.
        """
        self._validate_profile(dto)

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get_for_update(user_id)
            if user is None:
                raise UserNotFound(user_id)
            self.ensure_admin_or_owner(
                principal, user.username, msg="Cannot modify another user's profile"
            )
            if repo.email_taken(dto.email or "", exclude_id=user.id):
                raise ValidationError("email", "Email already exists")

            repo.assign_updates(user, {"name": dto.name, "email": dto.email, "phone": dto.phone})
            logger.info("User profile updated", extra={"user_id": user.id})
            return user_to_out(user)

    def delete_user(self, user_id: int) -> None:
        """Delete an account and, by cascade, its adoptions."""
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get(user_id)
            if user is None:
                logger.warning("User not found for deletion", extra={"user_id": user_id})
                raise UserNotFound(user_id)
            repo.delete(user)
            logger.info("User deleted", extra={"user_id": user_id})

    @staticmethod
    def _validate_profile(dto: UserProfileUpdateIn) -> None:
        if not dto.name or not dto.name.strip():
            raise ValidationError("name", "Name must not be null or empty")
        if not dto.email or not EMAIL_RE.match(dto.email.strip()):
            raise ValidationError("email", "Email is invalid")
        if not dto.phone or not dto.phone.strip():
            raise ValidationError("phone", "Phone must not be null or empty")
