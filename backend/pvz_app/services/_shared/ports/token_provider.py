from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any, Protocol


class TokenProvider(Protocol):
    """Port for issuing and decoding role-bearing access tokens."""

    def create_access_token(
        self,
        *,
        identity: str,
        role: str,
        expires_delta: timedelta | None = None,
    ) -> str: ...

    def decode(self, token: str) -> dict[str, Any]: ...


class StubTokenProvider(TokenProvider):
    """Deterministic token provider used in unit tests."""

    def __init__(self) -> None:
        self._now = datetime.now(tz=UTC)
        self._seq = 0
        self._issued: dict[str, dict[str, Any]] = {}

    def create_access_token(
        self,
        *,
        identity: str,
        role: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        self._seq += 1
        token = f"access.{identity}.{self._seq}"
        self._issued[token] = {
            "sub": identity,
            "role": role,
            "type": "access",
            "exp": int((self._now + (expires_delta or timedelta(hours=24))).timestamp()),
        }
        return token

    def decode(self, token: str) -> dict[str, Any]:
        return self._issued[token]
