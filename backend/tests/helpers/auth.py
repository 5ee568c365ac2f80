"""Authentication helpers for tests."""

from __future__ import annotations

from datetime import timedelta

from flask_jwt_extended import create_access_token


def issue_token(
    role: str, identity: str = "test-user", expires_delta: timedelta | None = None
) -> str:
    """Generate a JWT carrying ``role`` directly, bypassing the HTTP layer.

    Parameters
    ----------
    role:
        Role claim to embed.
    identity:
        Subject identifier to encode in the token.
    expires_delta:
        Optional expiry delta. If ``None``, the default expiry is used.
    """

    return create_access_token(
        identity=identity, additional_claims={"role": role}, expires_delta=expires_delta
    )


def dummy_login(client, role: str) -> dict[str, str]:
    """Obtain a token through ``/dummyLogin`` and return bearer headers."""

    resp = client.post("/api/v1/dummyLogin", json={"role": role})
    assert resp.status_code == 200, resp.get_json()
    token = resp.get_json()["data"]["token"]
    return {"Authorization": f"Bearer {token}"}
