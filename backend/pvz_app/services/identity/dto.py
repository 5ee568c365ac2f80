"""
DTOs for IdentityService.

Data Transfer Objects (DTOs) isolate the service layer from ORM models,
ensuring clear input/output contracts and type safety.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from pvz_app.models.user import User

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserRegisterIn:
    """
    Input DTO for user registration.

    :param email: Login email (normalized to lowercase).
    :type email: str
    :param password: Raw password to be hashed by the model.
    :type password: str
    :param role: ``employee`` or ``moderator``.
    :type role: str
    """

    email: str
    password: str
    role: str


@dataclass(frozen=True, slots=True)
class UserAuthIn:
    """
    Input DTO for authentication.

    :param email: Login email.
    :type email: str
    :param password: Raw password.
    :type password: str
    """

    email: str
    password: str


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """
    Public-safe user representation (no password hash).

    :param id: User identifier.
    :param email: Login email.
    :param role: Role name.
    """

    id: UUID
    email: str
    role: str

    @classmethod
    def from_model(cls, user: User) -> UserPublicOut:
        return cls(id=user.id, email=user.email, role=user.role)


@dataclass(frozen=True, slots=True)
class TokenOut:
    """
    Issued access token.

    :param access_token: Signed token carrying the ``role`` claim.
    :param role: Role encoded in the token.
    """

    access_token: str
    role: str
