# petadoption/services/auth/service.py
from __future__ import annotations

import logging

from petadoption.core.security import secrets_match
from petadoption.models.user import EMAIL_RE, ROLE_ADMIN, ROLE_USER
from petadoption.repositories.user import UserRepository
from petadoption.services._shared.base import BaseService
from petadoption.services._shared.errors import AuthenticationError, ValidationError
from petadoption.services.auth.dto import LoginIn, RegisteredUserOut, RegisterIn, TokenPairOut
from petadoption.services.auth.tokens import TokenService

logger = logging.getLogger(__name__)


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


class AuthService(BaseService):
    """
    Account registration and credential login.

    Token signing is delegated to :class:`TokenService`; this service only
    decides *who* gets a token and with which roles.
    """

    def __init__(self, *, token_service: TokenService, admin_key: str | None = None) -> None:
        """
        :param token_service: Issues the access/refresh pair on login.
        :param admin_key: Server-side secret that elevates a registration to
            ``ROLE_ADMIN``. When empty, nobody can register as admin.
        """
        super().__init__()
        self.token_service = token_service
        self._admin_key = admin_key or ""

    # ------------------------------------------------------------------ #
    # Registration
    # ------------------------------------------------------------------ #

    def register(self, dto: RegisterIn) -> RegisteredUserOut:
        """
        Create an account with exactly one role.

        :raises ValidationError: On a missing/invalid field or when the
            username or email is already in use.
        """
        self._validate_registration(dto)
        role = ROLE_ADMIN if self._is_admin_key(dto.admin_key) else ROLE_USER

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            if repo.username_taken(dto.username):
                raise ValidationError("username", "Username already exists")
            if repo.email_taken(dto.email):
                raise ValidationError("email", "Email already exists")

            user = repo.model(
                username=dto.username.strip(),
                email=dto.email,
                name=dto.name,
                phone=dto.phone,
            )
            user.password = dto.password
            user.grant_role(role)
            repo.add(user)
            out = RegisteredUserOut(id=user.id, username=user.username, roles=(role,))

        logger.info("User registered", extra={"user_id": out.id, "username": out.username})
        return out

    def _is_admin_key(self, provided: str | None) -> bool:
        return secrets_match(provided, self._admin_key)

    @staticmethod
    def _validate_registration(dto: RegisterIn) -> None:
        if _blank(dto.username):
            raise ValidationError("username", "Username must not be null or empty")
        if not dto.password:
            raise ValidationError("password", "Password must not be null or empty")
        if _blank(dto.name):
            raise ValidationError("name", "Name must not be null or empty")
        if _blank(dto.email) or not EMAIL_RE.match(dto.email.strip()):
            raise ValidationError("email", "Email is invalid")
        if _blank(dto.phone):
            raise ValidationError("phone", "Phone must not be null or empty")

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> TokenPairOut:
        """
        Verify credentials and issue a fresh token pair.

        :raises AuthenticationError: Unknown user, wrong password, or an
            account without roles.
        :raises TokenIssueError: If signing fails.
        """
        with self.ro_uow() as uow:
            user = uow.users.get_by_username(dto.username or "")
            if user is None or not user.verify_password(dto.password):
                logger.warning("Login rejected", extra={"username": dto.username})
                raise AuthenticationError("Invalid username or password")
            roles = sorted(user.roles)
            username = user.username

        if not roles:
            raise AuthenticationError("User has no roles assigned")

        pair = TokenPairOut(
            access_token=self.token_service.issue_access_token(username, roles),
            refresh_token=self.token_service.issue_refresh_token(username, roles),
        )
        logger.info("User authenticated", extra={"username": username})
        return pair
