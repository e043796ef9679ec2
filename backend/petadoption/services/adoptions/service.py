from __future__ import annotations

import logging
from datetime import UTC, datetime

from petadoption.models.adoption import Adoption, AdoptionStatus
from petadoption.models.pet import Pet, PetStatus
from petadoption.models.user import User
from petadoption.repositories.adoption import AdoptionRepository
from petadoption.repositories.pet import PetRepository
from petadoption.services._shared.base import BaseService
from petadoption.services._shared.errors import (
    AccessDenied,
    AdoptionConflict,
    AdoptionNotFound,
    AdoptionStatusInvalid,
    PetIdInvalid,
    PetNotFound,
    UserIdInvalid,
    UserNotFound,
)
from petadoption.services._shared.principal import Principal
from petadoption.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork

from ._converters import adoption_to_out
from .access import AdoptionAccessEvaluator
from .dto import AdoptionOut, AdoptionWriteIn

logger = logging.getLogger(__name__)


class AdoptionService(BaseService):
    """
    Adoption workflow: request, review and decision.

    State rules
    -----------
    - ``approve`` sets the adoption to ``APPROVED`` and its pet to ``ADOPTED``.
    - ``reject`` sets the adoption to ``REJECTED`` and releases the pet.
    - Both writes share one read-write Unit of Work with the adoption and pet
      rows locked, so they commit or roll back together.
    - A pet is held by at most one ``APPROVED`` adoption.
    - ``APPROVED`` and ``REJECTED`` are final with respect to each other;
      repeating the same decision is a no-op that re-syncs the pet.
    """

    def __init__(self, *, access: AdoptionAccessEvaluator | None = None) -> None:
        super().__init__()
        self.access = access or AdoptionAccessEvaluator()

    # ------------------------------------------------------------------ #
    # Validation
    # ------------------------------------------------------------------ #

    @staticmethod
    def validate(dto: AdoptionWriteIn) -> None:
        """
        Field checks shared by create and update, in reporting order.

        :raises UserIdInvalid: Missing or negative user id.
        :raises PetIdInvalid: Missing or negative pet id.
        :raises AdoptionStatusInvalid: Missing or blank status.
        """
        if dto.user_id is None or dto.user_id < 0:
            raise UserIdInvalid(f"User ID {dto.user_id} must not be null or negative")
        if dto.pet_id is None or dto.pet_id < 0:
            raise PetIdInvalid("Pet ID must not be null or negative")
        if dto.status is None or not dto.status.strip():
            raise AdoptionStatusInvalid("Status must not be null or empty")

    @staticmethod
    def _resolve(uow: SQLAlchemyUnitOfWork, dto: AdoptionWriteIn) -> tuple[User, Pet]:
        user = uow.users.get(dto.user_id)
        if user is None:
            raise UserNotFound(dto.user_id or 0)
        pet = uow.pets.get(dto.pet_id)
        if pet is None:
            raise PetNotFound(dto.pet_id or 0)
        return user, pet

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #

    def create(self, dto: AdoptionWriteIn, *, principal: Principal | None = None) -> AdoptionOut:
        """
        Record a new adoption request.

        The status is stored exactly as supplied; nothing defaults it to
        ``PENDING``. When ``principal`` is given and is not an administrator,
        the request must be for the principal's own account.

        :raises AccessDenied: A non-admin files a request for someone else.
        """
        self.validate(dto)

        with self.rw_uow() as uow:
            user, pet = self._resolve(uow, dto)
            if principal is not None and not self.access.permits(principal, user.username):
                raise AccessDenied("Cannot create adoptions for another user")

            repo: AdoptionRepository = uow.adoptions
            adoption = repo.model(
                user=user,
                pet=pet,
                status=dto.status,
                adoption_date=dto.adoption_date or datetime.now(UTC),
            )
            repo.add(adoption)
            logger.info(
                "Adoption created",
                extra={"adoption_id": adoption.id, "pet_id": pet.id, "user_id": user.id},
            )
            return adoption_to_out(adoption)

    def update(
        self, adoption_id: int, dto: AdoptionWriteIn, *, principal: Principal | None = None
    ) -> AdoptionOut:
        """
        Overwrite pet, user and status of an adoption.

        When no adoption exists under ``adoption_id`` a new one is inserted
        with that id. The adoption date of an existing row is never touched.
        Decisions are not writable here: a status cannot move into or out of
        ``APPROVED``/``REJECTED``, and a decided adoption keeps its pet.

        :raises AccessDenied: A non-admin assigns the adoption to someone else.
        :raises AdoptionConflict: The write would change a decision.
        """
        self.validate(dto)

        with self.rw_uow() as uow:
            user, pet = self._resolve(uow, dto)
            if principal is not None and not self.access.permits(principal, user.username):
                raise AccessDenied("Cannot assign adoptions to another user")

            repo: AdoptionRepository = uow.adoptions
            adoption = repo.get_for_update(adoption_id)
            self._ensure_decision_untouched(adoption_id, adoption, dto, pet)

            if adoption is None:
                adoption = repo.model(
                    id=adoption_id,
                    user=user,
                    pet=pet,
                    status=dto.status,
                    adoption_date=dto.adoption_date or datetime.now(UTC),
                )
                repo.add(adoption)
                logger.info(
                    "Adoption created on update",
                    extra={"adoption_id": adoption_id, "pet_id": pet.id, "user_id": user.id},
                )
            else:
                repo.assign_updates(adoption, {"pet": pet, "user": user, "status": dto.status})
                logger.info(
                    "Adoption updated",
                    extra={"adoption_id": adoption_id, "status": adoption.status},
                )
            return adoption_to_out(adoption)

    @staticmethod
    def _ensure_decision_untouched(
        adoption_id: int, adoption: Adoption | None, dto: AdoptionWriteIn, pet: Pet
    ) -> None:
        terminal = AdoptionStatus.terminal()
        current = adoption.status if adoption is not None else None
        requested = (dto.status or "").strip().upper()
        if requested not in terminal and current not in terminal:
            return
        if requested != current:
            logger.warning(
                "Decision change rejected on update",
                extra={"adoption_id": adoption_id, "status": dto.status},
            )
            raise AdoptionConflict(f"adoption {adoption_id} can only be decided through approve or reject")
        if adoption is not None and adoption.pet_id != pet.id:
            raise AdoptionConflict(f"adoption {adoption_id} is already {current}")

    def delete(self, adoption_id: int) -> None:
        """:raises AdoptionNotFound: If ``adoption_id`` does not exist."""
        with self.rw_uow() as uow:
            repo: AdoptionRepository = uow.adoptions
            adoption = repo.get(adoption_id)
            if adoption is None:
                logger.warning("Adoption not found for deletion", extra={"adoption_id": adoption_id})
                raise AdoptionNotFound(adoption_id)
            repo.delete(adoption)
            logger.info("Adoption deleted", extra={"adoption_id": adoption_id})

    def approve(self, adoption_id: int) -> AdoptionOut:
        """
        Approve an adoption and mark its pet ``ADOPTED``.

        :raises AdoptionNotFound: Unknown adoption.
        :raises AdoptionConflict: The adoption was rejected, or another
            approved adoption already holds the pet.
        """
        return self._decide(adoption_id, AdoptionStatus.APPROVED)

    def reject(self, adoption_id: int) -> AdoptionOut:
        """
        Reject an adoption and release its pet back to ``AVAILABLE``.

        :raises AdoptionNotFound: Unknown adoption.
        :raises AdoptionConflict: The adoption was already approved.
        """
        return self._decide(adoption_id, AdoptionStatus.REJECTED)

    def _decide(self, adoption_id: int, decision: AdoptionStatus) -> AdoptionOut:
        with self.rw_uow() as uow:
            adoptions: AdoptionRepository = uow.adoptions
            pets: PetRepository = uow.pets

            adoption = adoptions.get_for_update(adoption_id)
            if adoption is None:
                logger.warning("Adoption not found", extra={"adoption_id": adoption_id})
                raise AdoptionNotFound(adoption_id)

            current = adoption.status
            if current in AdoptionStatus.terminal() and current != decision.value:
                raise AdoptionConflict(f"adoption {adoption_id} is already {current}")

            pet = pets.get_for_update(adoption.pet_id)
            if pet is None:
                raise PetNotFound(adoption.pet_id)

            held_elsewhere = adoptions.count_approved_for_pet(pet.id, exclude_id=adoption.id) > 0
            if decision is AdoptionStatus.APPROVED:
                if held_elsewhere:
                    raise AdoptionConflict(f"pet {pet.id} is already adopted")
                pet.status = PetStatus.ADOPTED
            elif not held_elsewhere:
                pet.status = PetStatus.AVAILABLE

            adoption.status = decision.value
            adoptions.flush()
            logger.info(
                "Adoption decided",
                extra={"adoption_id": adoption_id, "pet_id": pet.id, "status": decision.value},
            )
            return adoption_to_out(adoption)

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def get(self, adoption_id: int, principal: Principal) -> AdoptionOut:
        """
        Fetch an adoption visible to ``principal``.

        Existence is checked before ownership, so an unknown id reports
        :class:`AdoptionNotFound` even to non-owners.

        :raises AdoptionNotFound: Unknown adoption.
        :raises AccessDenied: ``principal`` is neither owner nor admin.
        """
        with self.ro_uow() as uow:
            adoption = uow.adoptions.get(adoption_id)
            if adoption is None:
                logger.warning("Adoption not found", extra={"adoption_id": adoption_id})
                raise AdoptionNotFound(adoption_id)
            self.ensure_admin_or_owner(principal, adoption.owner_username)
            return adoption_to_out(adoption)

    def list_all(self) -> list[AdoptionOut]:
        with self.ro_uow() as uow:
            rows = uow.adoptions.list(sort=["id"])
            logger.info("Listed adoptions", extra={"count": len(rows)})
            return [adoption_to_out(row) for row in rows]
