"""Unit tests for the adoption workflow."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from petadoption.models.adoption import Adoption
from petadoption.models.pet import Pet, PetStatus
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
from petadoption.services.adoptions import AdoptionService, AdoptionWriteIn
from tests.factories.adoption import AdoptionFactory
from tests.factories.pet import PetFactory
from tests.factories.user import UserFactory

ADMIN = Principal.of("root", ["ADMIN"])


@pytest.fixture()
def service() -> AdoptionService:
    return AdoptionService()


def _pet_status(session, pet_id: int) -> PetStatus:
    session.expire_all()
    return session.get(Pet, pet_id).status


class TestCreate:
    def test_owner_creates_own_adoption(self, service, session):
        alice = UserFactory(username="alice")
        pet = PetFactory(name="Rex")

        out = service.create(
            AdoptionWriteIn(user_id=alice.id, pet_id=pet.id, status="PENDING"),
            principal=Principal.of("alice", ["USER"]),
        )

        assert out.id is not None
        assert out.status == "PENDING"
        assert out.user.username == "alice"
        assert out.pet.name == "Rex"
        assert out.adoption_date is not None
        assert session.get(Adoption, out.id) is not None

    def test_status_is_stored_verbatim(self, service, session):
        user, pet = UserFactory(), PetFactory()
        out = service.create(AdoptionWriteIn(user_id=user.id, pet_id=pet.id, status="ON_HOLD"))
        assert out.status == "ON_HOLD"

    def test_explicit_adoption_date_kept(self, service, session):
        user, pet = UserFactory(), PetFactory()
        when = datetime(2024, 3, 1, 9, 30, tzinfo=UTC)
        out = service.create(
            AdoptionWriteIn(user_id=user.id, pet_id=pet.id, status="PENDING", adoption_date=when)
        )
        assert out.adoption_date == when

    @pytest.mark.parametrize(
        "dto, error",
        [
            (AdoptionWriteIn(user_id=None, pet_id=1, status="PENDING"), UserIdInvalid),
            (AdoptionWriteIn(user_id=-1, pet_id=1, status="PENDING"), UserIdInvalid),
            (AdoptionWriteIn(user_id=1, pet_id=None, status="PENDING"), PetIdInvalid),
            (AdoptionWriteIn(user_id=1, pet_id=-3, status="PENDING"), PetIdInvalid),
            (AdoptionWriteIn(user_id=1, pet_id=1, status=None), AdoptionStatusInvalid),
            (AdoptionWriteIn(user_id=1, pet_id=1, status="   "), AdoptionStatusInvalid),
        ],
    )
    def test_field_validation(self, service, session, dto, error):
        with pytest.raises(error):
            service.create(dto)
        assert session.query(Adoption).count() == 0

    def test_validation_reports_user_before_pet(self, service):
        with pytest.raises(UserIdInvalid) as exc:
            service.create(AdoptionWriteIn(user_id=None, pet_id=None, status=""))
        assert exc.value.field == "user"

    def test_unknown_references(self, service, session):
        user, pet = UserFactory(), PetFactory()

        with pytest.raises(UserNotFound):
            service.create(AdoptionWriteIn(user_id=user.id + 100, pet_id=pet.id, status="PENDING"))
        with pytest.raises(PetNotFound):
            service.create(AdoptionWriteIn(user_id=user.id, pet_id=pet.id + 100, status="PENDING"))

    def test_non_admin_cannot_file_for_someone_else(self, service, session):
        bob = UserFactory(username="bob")
        pet = PetFactory()

        with pytest.raises(AccessDenied):
            service.create(
                AdoptionWriteIn(user_id=bob.id, pet_id=pet.id, status="PENDING"),
                principal=Principal.of("alice", ["USER"]),
            )
        assert session.query(Adoption).count() == 0

    def test_admin_files_for_anyone(self, service, session):
        bob = UserFactory(username="bob")
        out = service.create(
            AdoptionWriteIn(user_id=bob.id, pet_id=PetFactory().id, status="PENDING"),
            principal=ADMIN,
        )
        assert out.user.username == "bob"


class TestGetAndList:
    def test_owner_reads_own(self, service, session):
        adoption = AdoptionFactory(user__username="alice")
        out = service.get(adoption.id, Principal.of("alice", ["USER"]))
        assert out.id == adoption.id

    def test_stranger_denied(self, service, session):
        adoption = AdoptionFactory(user__username="alice")
        with pytest.raises(AccessDenied):
            service.get(adoption.id, Principal.of("mallory", ["USER"]))

    def test_missing_reported_before_ownership(self, service, session):
        with pytest.raises(AdoptionNotFound, match="Adoption not found with id: 404"):
            service.get(404, Principal.of("mallory", ["USER"]))

    def test_list_all(self, service, session):
        first, second = AdoptionFactory(), AdoptionFactory()
        assert [a.id for a in service.list_all()] == [first.id, second.id]


class TestUpdate:
    def test_overwrites_pet_user_and_status(self, service, session):
        adoption = AdoptionFactory()
        original_date = adoption.adoption_date
        other_user, other_pet = UserFactory(), PetFactory()

        out = service.update(
            adoption.id,
            AdoptionWriteIn(
                user_id=other_user.id,
                pet_id=other_pet.id,
                status="ON_HOLD",
                adoption_date=datetime(2000, 1, 1, tzinfo=UTC),
            ),
        )

        assert out.user.id == other_user.id
        assert out.pet.id == other_pet.id
        assert out.status == "ON_HOLD"
        assert out.adoption_date == original_date

    def test_inserts_when_missing(self, service, session):
        user, pet = UserFactory(), PetFactory()

        out = service.update(77, AdoptionWriteIn(user_id=user.id, pet_id=pet.id, status="PENDING"))
        assert out.id == 77
        assert session.get(Adoption, 77) is not None

    @pytest.mark.parametrize("status", ["APPROVED", "REJECTED", "approved"])
    def test_cannot_decide_through_update(self, service, session, status):
        pet = PetFactory()
        adoption = AdoptionFactory(pet=pet)

        with pytest.raises(AdoptionConflict, match="approve or reject"):
            service.update(
                adoption.id, AdoptionWriteIn(user_id=adoption.user_id, pet_id=pet.id, status=status)
            )

        session.expire_all()
        assert session.get(Adoption, adoption.id).status == "PENDING"
        assert _pet_status(session, pet.id) is PetStatus.AVAILABLE

    def test_cannot_insert_decided(self, service, session):
        user, pet = UserFactory(), PetFactory()
        with pytest.raises(AdoptionConflict):
            service.update(78, AdoptionWriteIn(user_id=user.id, pet_id=pet.id, status="APPROVED"))
        assert session.get(Adoption, 78) is None

    def test_cannot_reopen_decided(self, service, session):
        adoption = AdoptionFactory()
        service.approve(adoption.id)

        with pytest.raises(AdoptionConflict):
            service.update(
                adoption.id,
                AdoptionWriteIn(user_id=adoption.user_id, pet_id=adoption.pet_id, status="PENDING"),
            )
        assert _pet_status(session, adoption.pet_id) is PetStatus.ADOPTED

    def test_decided_adoption_keeps_its_pet(self, service, session):
        adoption = AdoptionFactory()
        service.approve(adoption.id)

        with pytest.raises(AdoptionConflict, match="already APPROVED"):
            service.update(
                adoption.id,
                AdoptionWriteIn(user_id=adoption.user_id, pet_id=PetFactory().id, status="APPROVED"),
            )

    def test_decided_adoption_other_fields_editable(self, service, session):
        adoption = AdoptionFactory()
        service.approve(adoption.id)
        other = UserFactory()

        out = service.update(
            adoption.id,
            AdoptionWriteIn(user_id=other.id, pet_id=adoption.pet_id, status="APPROVED"),
        )
        assert out.user.id == other.id
        assert out.status == "APPROVED"

    def test_owner_cannot_reassign(self, service, session):
        alice, bob = UserFactory(username="alice"), UserFactory(username="bob")
        adoption = AdoptionFactory(user=alice)

        with pytest.raises(AccessDenied):
            service.update(
                adoption.id,
                AdoptionWriteIn(user_id=bob.id, pet_id=adoption.pet_id, status="PENDING"),
                principal=Principal.of("alice", ["USER"]),
            )
        session.expire_all()
        assert session.get(Adoption, adoption.id).user_id == alice.id

    def test_admin_may_reassign(self, service, session):
        adoption = AdoptionFactory()
        bob = UserFactory(username="bob")

        out = service.update(
            adoption.id,
            AdoptionWriteIn(user_id=bob.id, pet_id=adoption.pet_id, status="PENDING"),
            principal=ADMIN,
        )
        assert out.user.username == "bob"

    def test_validation_precedes_lookup(self, service, session):
        adoption = AdoptionFactory()
        with pytest.raises(AdoptionStatusInvalid):
            service.update(
                adoption.id, AdoptionWriteIn(user_id=adoption.user_id, pet_id=adoption.pet_id, status="")
            )


class TestDelete:
    def test_delete(self, service, session):
        adoption = AdoptionFactory()
        pet_id = adoption.pet_id

        service.delete(adoption.id)
        assert session.get(Adoption, adoption.id) is None
        assert session.get(Pet, pet_id) is not None

    def test_delete_missing(self, service, session):
        with pytest.raises(AdoptionNotFound):
            service.delete(999)


class TestDecisions:
    def test_approve_marks_pet_adopted(self, service, session):
        adoption = AdoptionFactory()

        out = service.approve(adoption.id)
        assert out.status == "APPROVED"
        assert out.pet.status == "ADOPTED"
        assert _pet_status(session, adoption.pet_id) is PetStatus.ADOPTED

    def test_reject_releases_pet(self, service, session):
        adoption = AdoptionFactory(pet__status=PetStatus.DISABLED)

        out = service.reject(adoption.id)
        assert out.status == "REJECTED"
        assert _pet_status(session, adoption.pet_id) is PetStatus.AVAILABLE

    def test_second_approval_for_same_pet_conflicts(self, service, session):
        pet = PetFactory()
        first = AdoptionFactory(pet=pet)
        second = AdoptionFactory(pet=pet)
        service.approve(first.id)

        with pytest.raises(AdoptionConflict, match="already adopted"):
            service.approve(second.id)

        session.expire_all()
        assert session.get(Adoption, second.id).status == "PENDING"
        assert _pet_status(session, pet.id) is PetStatus.ADOPTED

    def test_rejecting_competitor_keeps_pet_adopted(self, service, session):
        pet = PetFactory()
        winner = AdoptionFactory(pet=pet)
        loser = AdoptionFactory(pet=pet)
        service.approve(winner.id)

        service.reject(loser.id)
        assert _pet_status(session, pet.id) is PetStatus.ADOPTED

    @pytest.mark.parametrize("first, then", [("approve", "reject"), ("reject", "approve")])
    def test_terminal_states_do_not_flip(self, service, session, first, then):
        adoption = AdoptionFactory()
        getattr(service, first)(adoption.id)
        before = _pet_status(session, adoption.pet_id)

        with pytest.raises(AdoptionConflict):
            getattr(service, then)(adoption.id)
        assert _pet_status(session, adoption.pet_id) is before

    def test_repeating_a_decision_resyncs_pet(self, service, session):
        adoption = AdoptionFactory()
        service.approve(adoption.id)
        pet = session.get(Pet, adoption.pet_id)
        pet.status = PetStatus.AVAILABLE
        session.commit()

        out = service.approve(adoption.id)
        assert out.status == "APPROVED"
        assert _pet_status(session, adoption.pet_id) is PetStatus.ADOPTED

    def test_unknown_adoption(self, service, session):
        with pytest.raises(AdoptionNotFound):
            service.approve(31337)
        with pytest.raises(AdoptionNotFound):
            service.reject(31337)

    def test_failed_pet_write_rolls_back_adoption(self, service, session, monkeypatch):
        adoption = AdoptionFactory()

        def _boom(*args, **kwargs):
            raise RuntimeError("storage failure")

        monkeypatch.setattr("petadoption.repositories.base.BaseRepository.flush", _boom)
        with pytest.raises(RuntimeError):
            service.approve(adoption.id)
        monkeypatch.undo()

        session.expire_all()
        assert session.get(Adoption, adoption.id).status == "PENDING"
        assert _pet_status(session, adoption.pet_id) is PetStatus.AVAILABLE
