from __future__ import annotations

import logging

from petadoption.repositories.adoption import AdoptionRepository
from petadoption.services._shared.base import BaseService
from petadoption.services._shared.policies.common import is_admin_or_owner
from petadoption.services._shared.principal import Principal

logger = logging.getLogger(__name__)


class AdoptionAccessEvaluator(BaseService):
    """Decide whether a principal may read or mutate an adoption."""

    @staticmethod
    def permits(principal: Principal, owner_username: str | None) -> bool:
        """Pure predicate: admin, or the principal owns the adoption."""
        return is_admin_or_owner(principal, owner_username)

    def can_access(self, adoption_id: int, principal: Principal) -> bool:
        """
        Store-backed check used before routing to the workflow.

        Administrators pass without a lookup. Anyone else needs the adoption
        to exist and be theirs; a missing adoption denies access.
        """
        if principal.is_admin:
            return True

        with self.ro_uow() as uow:
            repo: AdoptionRepository = uow.adoptions
            owner = repo.get_owner_username(adoption_id)

        allowed = owner is not None and self.permits(principal, owner)
        if not allowed:
            logger.info(
                "Adoption access denied",
                extra={"adoption_id": adoption_id, "username": principal.username},
            )
        return allowed
