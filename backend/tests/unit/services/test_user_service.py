"""Unit tests for account administration."""

from __future__ import annotations

import pytest

from petadoption.models.adoption import Adoption
from petadoption.models.user import ROLE_ADMIN, ROLE_USER
from petadoption.services._shared.errors import (
    AuthorizationError,
    UserNotFound,
    ValidationError,
)
from petadoption.services._shared.principal import Principal
from petadoption.services.users import UserProfileUpdateIn, UserService
from tests.factories.adoption import AdoptionFactory
from tests.factories.user import AdminFactory, UserFactory


@pytest.fixture()
def service() -> UserService:
    return UserService()


def _profile(**overrides) -> UserProfileUpdateIn:
    fields = {"name": "Alice Liddell", "email": "alice@wonder.land", "phone": "555-0199"}
    fields.update(overrides)
    return UserProfileUpdateIn(**fields)


class TestQueries:
    def test_list_users(self, service, session):
        AdminFactory(username="root")
        UserFactory(username="alice")

        users = service.list_users()
        assert [u.username for u in users] == ["root", "alice"]
        assert users[0].roles == (ROLE_ADMIN,)
        assert users[1].roles == (ROLE_USER,)

    def test_get_user(self, service, session):
        u = UserFactory()
        assert service.get_user(u.id).email == u.email
        with pytest.raises(UserNotFound):
            service.get_user(u.id + 10)


class TestUpdateProfile:
    def test_self_update(self, service, session):
        u = UserFactory(username="alice")

        out = service.update_profile(u.id, _profile(email="Alice@Wonder.Land"), Principal.of("alice", ["USER"]))
        assert out.name == "Alice Liddell"
        assert out.email == "alice@wonder.land"
        assert out.username == "alice"

    def test_admin_updates_anyone(self, service, session):
        u = UserFactory()
        out = service.update_profile(u.id, _profile(), Principal.of("root", ["ADMIN"]))
        assert out.phone == "555-0199"

    def test_other_user_denied(self, service, session):
        u = UserFactory(username="alice")
        with pytest.raises(AuthorizationError):
            service.update_profile(u.id, _profile(), Principal.of("bob", ["USER"]))

    def test_email_already_used(self, service, session):
        UserFactory(email="taken@example.com")
        u = UserFactory(username="alice")

        with pytest.raises(ValidationError) as exc:
            service.update_profile(u.id, _profile(email="taken@example.com"), Principal.of("alice", ["USER"]))
        assert exc.value.field == "email"

    def test_keeping_own_email_is_fine(self, service, session):
        u = UserFactory(username="alice", email="alice@example.com")
        out = service.update_profile(u.id, _profile(email="alice@example.com"), Principal.of("alice", ["USER"]))
        assert out.email == "alice@example.com"

    @pytest.mark.parametrize("field, value", [("name", ""), ("email", "bad"), ("phone", None)])
    def test_field_validation(self, service, session, field, value):
        u = UserFactory(username="alice")
        with pytest.raises(ValidationError) as exc:
            service.update_profile(u.id, _profile(**{field: value}), Principal.of("alice", ["USER"]))
        assert exc.value.field == field

    def test_missing_user(self, service, session):
        with pytest.raises(UserNotFound):
            service.update_profile(404, _profile(), Principal.of("root", ["ADMIN"]))


class TestDelete:
    def test_delete_cascades_adoptions(self, service, session):
        adoption = AdoptionFactory()
        adoption_id = adoption.id

        service.delete_user(adoption.user_id)
        session.expire_all()
        assert session.get(Adoption, adoption_id) is None

    def test_delete_missing(self, service, session):
        with pytest.raises(UserNotFound):
            service.delete_user(404)
