# petadoption/services/_shared/base.py
from __future__ import annotations

from petadoption.services._shared.errors import AuthorizationError
from petadoption.services._shared.policies.common import is_admin_or_owner
from petadoption.services._shared.principal import Principal
from petadoption.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Offer the shared owner-or-admin guard.
    * Keep services thin, orchestration-only, no web/ORM leakage.

    Notes
    -----
    - Services never touch the global session; they always use a Unit of Work.
    - Service errors are translated to HTTP by ``petadoption.core.errors``.
    """

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """Create a read-write Unit of Work (commit on success, rollback on error)."""
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        """Create a read-only Unit of Work."""
        return SQLAlchemyReadOnlyUnitOfWork()

    def ensure_admin_or_owner(
        self, principal: Principal, owner_username: str | None, *, msg: str | None = None
    ) -> None:
        """
        Ensure ``principal`` is an administrator or the resource owner.

        :raises AuthorizationError: If neither holds.
        """
        if not is_admin_or_owner(principal, owner_username):
            raise AuthorizationError(msg) if msg else AuthorizationError()
