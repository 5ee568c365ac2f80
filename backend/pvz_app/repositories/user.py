"""User repository for persistence and lookup by email."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pvz_app.models.user import EMAIL_CONSTRAINT, User
from pvz_app.repositories.base import BaseRepository
from pvz_app.services._shared.errors import violates

_EMAIL_MARKERS = (EMAIL_CONSTRAINT, "users.email")


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It never handles tokens; only DB-level user management.
    """

    model = User

    def _conflict_detail(self, exc: IntegrityError) -> tuple[str, str | None]:
        if violates(exc, *_EMAIL_MARKERS):
            return "email already in use", EMAIL_CONSTRAINT
        return super()._conflict_detail(exc)

    def get_by_email(self, session: Session, email: str) -> User | None:
        """Fetch a user by email (case-insensitive).

        :param session: Execution context.
        :param email: Email address to normalise and search.
        :type email: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = select(User).where(User.email == email.lower().strip())
        return session.execute(stmt).scalars().first()

    def exists_by_email(self, session: Session, email: str) -> bool:
        """Return ``True`` when a user with the provided email exists."""
        stmt = select(User.id).where(User.email == email.lower().strip())
        return bool(session.execute(stmt).first())
