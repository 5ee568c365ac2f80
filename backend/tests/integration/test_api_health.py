"""Integration tests for cross-cutting HTTP behaviour."""

from __future__ import annotations

from tests.helpers.http import assert_problem


class TestHealthAndErrors:
    def test_health_reports_database(self, client) -> None:
        resp = client.get("/api/v1/health")

        assert resp.status_code == 200
        assert resp.get_json()["db"] == "ok"

    def test_request_id_is_echoed(self, client) -> None:
        resp = client.get("/api/v1/health", headers={"X-Request-ID": "req-123"})

        assert resp.headers["X-Request-ID"] == "req-123"

    def test_each_request_gets_its_own_request_id(self, client) -> None:
        first = client.get("/api/v1/health", headers={"X-Request-ID": "req-1"})
        second = client.get("/api/v1/health", headers={"X-Request-ID": "req-2"})
        third = client.get("/api/v1/health")

        assert first.headers["X-Request-ID"] == "req-1"
        assert second.headers["X-Request-ID"] == "req-2"
        assert third.headers["X-Request-ID"] not in {"req-1", "req-2"}

    def test_unknown_route_is_a_problem(self, client) -> None:
        body = assert_problem(client.get("/api/v1/nope"), 404, "not_found")

        assert body["request_id"]
