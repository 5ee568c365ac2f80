"""Transport mapping from service error kinds to HTTP problems.

The services raise :class:`~pvz_app.services._shared.errors.ServiceError`
subclasses tagged with an :class:`~pvz_app.services._shared.errors.ErrorKind`.
This module is the only place where a kind acquires an HTTP status.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any

from pvz_app.core.errors import APIError
from pvz_app.services._shared.errors import (
    ConflictError,
    ErrorKind,
    NotFoundError,
    ServiceError,
)

# kind -> (status, code, client-safe message)
SERVICE_ERROR_STATUS: dict[ErrorKind, tuple[HTTPStatus, str, str]] = {
    ErrorKind.VALIDATION: (HTTPStatus.BAD_REQUEST, "validation_error", "Invalid request"),
    ErrorKind.INVALID_CITY: (
        HTTPStatus.BAD_REQUEST,
        "invalid_city",
        "City is not supported",
    ),
    ErrorKind.INVALID_PRODUCT_TYPE: (
        HTTPStatus.BAD_REQUEST,
        "invalid_product_type",
        "Product type is not supported",
    ),
    ErrorKind.INVALID_ROLE: (HTTPStatus.BAD_REQUEST, "invalid_role", "Role is not supported"),
    ErrorKind.NOT_FOUND: (HTTPStatus.NOT_FOUND, "not_found", "Resource not found"),
    ErrorKind.ACTIVE_RECEPTION_EXISTS: (
        HTTPStatus.BAD_REQUEST,
        "active_reception_exists",
        "Pickup point already has an open reception",
    ),
    ErrorKind.NO_ACTIVE_RECEPTION: (
        HTTPStatus.BAD_REQUEST,
        "no_active_reception",
        "Pickup point has no open reception",
    ),
    ErrorKind.RECEPTION_ALREADY_CLOSED: (
        HTTPStatus.BAD_REQUEST,
        "reception_already_closed",
        "Reception is already closed",
    ),
    ErrorKind.RECEPTION_CANNOT_BE_MODIFIED: (
        HTTPStatus.BAD_REQUEST,
        "reception_cannot_be_modified",
        "Reception is closed and cannot be modified",
    ),
    ErrorKind.NO_PRODUCTS_TO_DELETE: (
        HTTPStatus.BAD_REQUEST,
        "no_products_to_delete",
        "Reception has no products to delete",
    ),
    ErrorKind.CONFLICT: (HTTPStatus.CONFLICT, "conflict", "Resource already exists"),
    ErrorKind.INVALID_CREDENTIALS: (
        HTTPStatus.UNAUTHORIZED,
        "invalid_credentials",
        "Invalid credentials",
    ),
    ErrorKind.STORAGE_FAILURE: (
        HTTPStatus.SERVICE_UNAVAILABLE,
        "storage_failure",
        "Storage is temporarily unavailable",
    ),
}


def _details(exc: ServiceError) -> dict[str, Any]:
    """Return the client-safe structured fields of a service error."""
    if isinstance(exc, NotFoundError):
        return {"entity": exc.entity, "key": str(exc.key)}
    if isinstance(exc, ConflictError):
        return {"entity": exc.entity, "reason": exc.detail}
    return {}


def to_api_error(exc: ServiceError) -> APIError:
    """
    Translate a service error into an :class:`APIError`.

    Storage failures keep the generic message; every other kind carries the
    error's own text, which never includes driver output.

    :param exc: Error raised by a service.
    :type exc: ServiceError
    :returns: API error ready to be rendered as problem+json.
    :rtype: APIError
    """
    status, code, fallback = SERVICE_ERROR_STATUS.get(
        exc.kind, (HTTPStatus.BAD_REQUEST, "bad_request", "Invalid request")
    )
    if exc.kind is ErrorKind.STORAGE_FAILURE:
        message = fallback
    else:
        message = str(exc) or fallback
    details = _details(exc)
    details["kind"] = exc.kind.value
    return APIError(message, status_code=status, code=code, details=details)
