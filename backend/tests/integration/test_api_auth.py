"""Integration tests for authentication endpoints."""

from __future__ import annotations

from tests.helpers.http import assert_problem


class TestAuthAPI:
    def test_dummy_login_returns_role_token(self, client) -> None:
        resp = client.post("/api/v1/dummyLogin", json={"role": "moderator"})

        assert resp.status_code == 200
        data = resp.get_json()["data"]
        assert data["role"] == "moderator"
        assert data["token"]

    def test_dummy_login_rejects_unknown_role(self, client) -> None:
        resp = client.post("/api/v1/dummyLogin", json={"role": "admin"})

        assert_problem(resp, 400, "invalid_role")

    def test_dummy_login_requires_role(self, client) -> None:
        resp = client.post("/api/v1/dummyLogin", json={})

        body = assert_problem(resp, 400, "validation_error")
        assert "role" in body["details"]["errors"]

    def test_register_and_login(self, client) -> None:
        """A user can register then obtain a JWT by logging in."""

        payload = {"email": "user@example.com", "password": "secret123", "role": "employee"}

        resp = client.post("/api/v1/register", json=payload)
        assert resp.status_code == 201
        created = resp.get_json()["data"]
        assert created["email"] == "user@example.com"
        assert "password" not in created

        resp = client.post(
            "/api/v1/login", json={"email": payload["email"], "password": payload["password"]}
        )
        assert resp.status_code == 200
        assert resp.get_json()["data"]["role"] == "employee"

    def test_register_duplicate_email_conflicts(self, client) -> None:
        payload = {"email": "dup@example.com", "password": "secret123", "role": "employee"}
        client.post("/api/v1/register", json=payload)

        resp = client.post("/api/v1/register", json=payload)

        assert_problem(resp, 409, "conflict")

    def test_register_short_password(self, client) -> None:
        payload = {"email": "a@example.com", "password": "123", "role": "employee"}

        resp = client.post("/api/v1/register", json=payload)

        assert_problem(resp, 400, "validation_error")

    def test_login_with_wrong_password(self, client) -> None:
        client.post(
            "/api/v1/register",
            json={"email": "b@example.com", "password": "secret123", "role": "moderator"},
        )

        resp = client.post("/api/v1/login", json={"email": "b@example.com", "password": "nope12"})

        assert_problem(resp, 401, "invalid_credentials")
