"""HTTP helper utilities for tests."""

from __future__ import annotations

from urllib.parse import urlencode


def build_url(path: str, **query: str | int | None) -> str:
    """Build a URL with encoded query parameters, skipping ``None`` values."""

    qs = urlencode({k: v for k, v in query.items() if v is not None})
    return f"{path}?{qs}" if qs else path


def assert_problem(resp, status: int, code: str) -> dict:
    """Assert ``resp`` is a problem+json document with ``status`` and ``code``."""

    assert resp.status_code == status, resp.get_json()
    assert resp.mimetype == "application/problem+json"
    body = resp.get_json()
    assert body["status"] == status
    assert body["code"] == code
    return body
