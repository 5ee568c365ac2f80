"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar
from uuid import UUID

from flask import Response, current_app, jsonify, request
from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request

from pvz_app.core.errors import APIError, Forbidden
from pvz_app.core.logger import ensure_request_id
from pvz_app.infra.jwt.flask_jwt_token_provider import ROLE_CLAIM
from pvz_app.services._shared.base import ServiceContext

F = TypeVar("F", bound=Callable[..., Any])


def require_role(*roles: str) -> Callable[[F], F]:
    """Ensure the verified JWT carries one of ``roles`` in its ``role`` claim."""

    allowed = frozenset(roles)

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            verify_jwt_in_request(optional=False)
            claims = get_jwt() or {}
            if claims.get(ROLE_CLAIM) not in allowed:
                raise Forbidden("Insufficient role")
            return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


def current_context() -> ServiceContext:
    """Build a :class:`ServiceContext` from the verified JWT of the request."""

    claims = get_jwt() or {}
    return ServiceContext(
        actor_id=get_jwt_identity(),
        role=claims.get(ROLE_CLAIM),
        request_id=ensure_request_id(),
    )


def parse_uuid(raw: str, *, field: str = "id") -> UUID:
    """Parse a path segment as UUID, rejecting malformed values with 400."""

    try:
        return UUID(str(raw))
    except ValueError as exc:
        raise APIError(
            f"Invalid {field}: {raw!r}",
            status_code=400,
            code="validation_error",
            details={"field": field},
        ) from exc


def json_body() -> dict[str, Any]:
    """Return the JSON request body, or an empty mapping when absent."""

    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
