"""Tests for the Adoption model."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from petadoption.models.adoption import Adoption, AdoptionStatus
from tests.factories.adoption import AdoptionFactory


class TestAdoption:
    def test_status_accepts_enum_and_free_text(self):
        a = Adoption(status=AdoptionStatus.APPROVED)
        assert a.status == "APPROVED"
        a.status = " ON_HOLD "
        assert a.status == "ON_HOLD"

    @pytest.mark.parametrize("value", ["", "   ", None])
    def test_blank_status_rejected(self, value):
        with pytest.raises(ValueError):
            Adoption(status=value)

    def test_adoption_date_is_write_once(self, session):
        adoption = AdoptionFactory()
        with pytest.raises(ValueError):
            adoption.adoption_date = adoption.adoption_date + timedelta(days=1)

    def test_adoption_date_assignable_before_persisting(self):
        a = Adoption(adoption_date=datetime(2024, 1, 1, tzinfo=UTC))
        a.adoption_date = datetime(2024, 2, 1, tzinfo=UTC)
        assert a.adoption_date.month == 2

    def test_owner_username(self, session):
        adoption = AdoptionFactory(user__username="carol")
        assert adoption.owner_username == "carol"
        assert Adoption().owner_username is None

    def test_terminal_statuses(self):
        assert AdoptionStatus.terminal() == {"APPROVED", "REJECTED"}

    def test_pet_delete_cascades_to_adoptions(self, session):
        adoption = AdoptionFactory()
        adoption_id = adoption.id
        session.delete(adoption.pet)
        session.commit()
        assert session.get(Adoption, adoption_id) is None
