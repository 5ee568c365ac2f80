"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never depend on Flask or HTTP.
They form a closed set: every error carries an :class:`ErrorKind` tag, and the
kind is the only thing callers need to branch on.

The translation to HTTP statuses lives in the transport layer
(:mod:`pvz_app.api.errors`), never here.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import ClassVar
from uuid import UUID

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, *markers: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    PostgreSQL reports the constraint name in the message while SQLite only
    reports the offending ``table.column``; callers pass every marker that
    identifies the constraint on the supported dialects.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    markers : str
        Constraint names or ``table.column`` tokens to look for.

    Returns
    -------
    bool
        True if the IntegrityError matches any of the markers.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    return any(marker.lower() in message for marker in markers)


class ErrorKind(str, enum.Enum):
    """Closed enumeration of failure kinds surfaced by the services."""

    VALIDATION = "validation"
    INVALID_CITY = "invalid_city"
    INVALID_PRODUCT_TYPE = "invalid_product_type"
    INVALID_ROLE = "invalid_role"
    NOT_FOUND = "not_found"
    ACTIVE_RECEPTION_EXISTS = "active_reception_exists"
    NO_ACTIVE_RECEPTION = "no_active_reception"
    RECEPTION_ALREADY_CLOSED = "reception_already_closed"
    RECEPTION_CANNOT_BE_MODIFIED = "reception_cannot_be_modified"
    NO_PRODUCTS_TO_DELETE = "no_products_to_delete"
    CONFLICT = "conflict"
    INVALID_CREDENTIALS = "invalid_credentials"
    STORAGE_FAILURE = "storage_failure"


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from repositories or domain logic.
    - ``kind`` is stable: the same input against the same state always
      yields the same kind.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.VALIDATION


class ValidationError(ServiceError):
    """Raised when an input value is malformed (e.g. password too short)."""

    kind = ErrorKind.VALIDATION


# --------------------------------------------------------------------------- #
# Enumeration validation
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class InvalidCityError(ServiceError):
    """Raised when a city is outside the supported set."""

    kind = ErrorKind.INVALID_CITY

    city: str

    def __str__(self) -> str:
        return f"Unsupported city: {self.city!r}"


@dataclass(slots=True)
class InvalidProductTypeError(ServiceError):
    """Raised when a product type is outside the supported set."""

    kind = ErrorKind.INVALID_PRODUCT_TYPE

    product_type: str

    def __str__(self) -> str:
        return f"Unsupported product type: {self.product_type!r}"


@dataclass(slots=True)
class InvalidRoleError(ServiceError):
    """Raised when a role is neither ``employee`` nor ``moderator``."""

    kind = ErrorKind.INVALID_ROLE

    role: str

    def __str__(self) -> str:
        return f"Unsupported role: {self.role!r}"


# --------------------------------------------------------------------------- #
# Lookup / storage signals
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "PickupPoint").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int | UUID
    """

    kind = ErrorKind.NOT_FOUND

    entity: str
    key: str | int | UUID

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when an insert collides with a uniqueness constraint.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    :param constraint: Name of the violated constraint when it is known.
    :type constraint: str | None
    """

    kind = ErrorKind.CONFLICT

    entity: str
    detail: str
    constraint: str | None = None

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


class StorageError(ServiceError):
    """Raised for database failures that carry no business meaning."""

    kind = ErrorKind.STORAGE_FAILURE

    def __init__(self, message: str = "Storage failure") -> None:
        super().__init__(message)


class CommitFailedError(StorageError):
    """Raised when the final COMMIT of a unit of work is rejected."""

    def __init__(self, message: str = "Failed to commit transaction") -> None:
        super().__init__(message)


# --------------------------------------------------------------------------- #
# Reception lifecycle / product protocol
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class ActiveReceptionExistsError(ServiceError):
    """Raised when a pickup point already has an open reception."""

    kind = ErrorKind.ACTIVE_RECEPTION_EXISTS

    pvz_id: UUID

    def __str__(self) -> str:
        return f"Pickup point {self.pvz_id} already has an open reception"


@dataclass(slots=True)
class NoActiveReceptionError(ServiceError):
    """Raised when a pickup point has never had a reception to act on."""

    kind = ErrorKind.NO_ACTIVE_RECEPTION

    pvz_id: UUID

    def __str__(self) -> str:
        return f"Pickup point {self.pvz_id} has no open reception"


@dataclass(slots=True)
class ReceptionAlreadyClosedError(ServiceError):
    """Raised when closing a reception that is already closed."""

    kind = ErrorKind.RECEPTION_ALREADY_CLOSED

    reception_id: UUID

    def __str__(self) -> str:
        return f"Reception {self.reception_id} is already closed"


@dataclass(slots=True)
class ReceptionCannotBeModifiedError(ServiceError):
    """Raised when products are added to or removed from a closed reception."""

    kind = ErrorKind.RECEPTION_CANNOT_BE_MODIFIED

    reception_id: UUID

    def __str__(self) -> str:
        return f"Reception {self.reception_id} is closed and cannot be modified"


@dataclass(slots=True)
class NoProductsToDeleteError(ServiceError):
    """Raised when deleting the last product of an empty reception."""

    kind = ErrorKind.NO_PRODUCTS_TO_DELETE

    reception_id: UUID

    def __str__(self) -> str:
        return f"Reception {self.reception_id} has no products to delete"


# --------------------------------------------------------------------------- #
# Identity
# --------------------------------------------------------------------------- #


class InvalidCredentialsError(ServiceError):
    """Raised when an email/password pair does not match a user."""

    kind = ErrorKind.INVALID_CREDENTIALS

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)
