"""Unit tests for UserRepository."""

import pytest

from petadoption.repositories.user import UserRepository
from tests.factories.user import UserFactory


class TestUserRepository:
    """Ensure ``UserRepository`` performs core persistence operations."""

    @pytest.fixture()
    def repo(self):
        return UserRepository()

    def test_create_and_get_user(self, repo, session):
        """Create a user and fetch it by username and email."""
        u = UserFactory(email="alice@example.com", username="alice")

        fetched = repo.get_by_username(" alice ")
        assert fetched is not None
        assert fetched.id == u.id
        assert repo.get_by_email("ALICE@example.com").id == u.id
        assert repo.get_by_username("nobody") is None

    def test_username_and_email_taken(self, repo, session):
        u = UserFactory(username="bob", email="bob@example.com")

        assert repo.username_taken("bob")
        assert not repo.username_taken("bobby")
        assert repo.email_taken("Bob@Example.com")
        assert not repo.email_taken("bob@example.com", exclude_id=u.id)
        assert not repo.email_taken("nonexistent@example.com")

    def test_safe_update_fields(self, repo, session):
        """Assign whitelisted profile fields and reject anything else."""
        u = UserFactory()

        updated = repo.assign_updates(u, {"name": "New Name", "phone": "123"})
        assert updated.name == "New Name"
        assert updated.phone == "123"

        with pytest.raises(ValueError):
            repo.assign_updates(u, {"password_hash": "x"})
        with pytest.raises(ValueError):
            repo.assign_updates(u, {"username": "other"})

    def test_list_sorted(self, repo, session):
        UserFactory(username="zed")
        UserFactory(username="amy")

        names = [u.username for u in repo.list(sort=["username"])]
        assert names.index("amy") < names.index("zed")
        ids = [u.id for u in repo.list(sort=["-id"])]
        assert ids == sorted(ids, reverse=True)
