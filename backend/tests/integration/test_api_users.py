"""Integration tests for user management endpoints."""

from __future__ import annotations

from tests.factories.user import UserFactory
from tests.helpers.assertions import assert_problem
from tests.helpers.http import api

PROFILE = {"name": "Alice L.", "email": "alice.l@example.com", "phone": "555-0111"}


class TestUsers:
    def test_admin_lists(self, client, user, admin_headers) -> None:
        resp = client.get(api("users"), headers=admin_headers)
        assert resp.status_code == 200
        usernames = {u["username"] for u in resp.get_json()}
        assert usernames == {"alice", "root"}
        assert all("password" not in u and "password_hash" not in u for u in resp.get_json())

    def test_user_cannot_list(self, client, user_headers) -> None:
        assert_problem(client.get(api("users"), headers=user_headers), 403)

    def test_admin_gets_one(self, client, user, admin_headers) -> None:
        resp = client.get(api(f"users/{user.id}"), headers=admin_headers)
        assert resp.get_json()["roles"] == ["ROLE_USER"]
        assert_problem(client.get(api("users/9999"), headers=admin_headers), 404)

    def test_self_update(self, client, user, user_headers) -> None:
        resp = client.put(api(f"users/{user.id}"), json=PROFILE, headers=user_headers)
        assert resp.status_code == 200
        assert resp.get_json()["email"] == "alice.l@example.com"

    def test_update_other_forbidden(self, client, user_headers) -> None:
        other = UserFactory()
        assert_problem(client.put(api(f"users/{other.id}"), json=PROFILE, headers=user_headers), 403)

    def test_update_invalid_email(self, client, user, user_headers) -> None:
        resp = client.put(api(f"users/{user.id}"), json={**PROFILE, "email": "bad"}, headers=user_headers)
        assert assert_problem(resp, 400)["field"] == "email"

    def test_admin_deletes(self, client, admin_headers) -> None:
        other = UserFactory()
        assert client.delete(api(f"users/{other.id}"), headers=admin_headers).status_code == 204
        assert_problem(client.delete(api(f"users/{other.id}"), headers=admin_headers), 404)
