# pvz_app/infra/jwt/flask_jwt_token_provider.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, cast

from flask_jwt_extended import create_access_token as _create_access
from flask_jwt_extended import decode_token as _decode

from pvz_app.services._shared.ports import TokenProvider

ROLE_CLAIM = "role"


@dataclass(slots=True)
class JWTTokenProvider(TokenProvider):
    """
    Adapter for Flask-JWT-Extended.

    The role travels as an additional ``role`` claim; the subject is always a
    string as required by PyJWT.

    .. note::
       Requires an active Flask app context with proper JWT settings.
    """

    def create_access_token(
        self,
        *,
        identity: str,
        role: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        return cast(
            str,
            _create_access(
                identity=str(identity),
                additional_claims={ROLE_CLAIM: role},
                expires_delta=expires_delta,
            ),
        )

    def decode(self, token: str) -> dict[str, Any]:
        return cast(dict[str, Any], _decode(token))
