"""
SQLAlchemy implementation of UnitOfWork for Flask.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TypeVar

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, scoped_session

from pvz_app.core.extensions import db
from pvz_app.repositories import (
    BoundRepository,
    PickupPointRepository,
    ProductRepository,
    ReceptionRepository,
    UserRepository,
)
from pvz_app.services._shared.errors import CommitFailedError
from pvz_app.uow.base import UnitOfWork

T = TypeVar("T")

log = logging.getLogger(__name__)

# Stateless; shared by every unit of work
_pickup_points = PickupPointRepository()
_receptions = ReceptionRepository()
_products = ProductRepository()
_users = UserRepository()

_ISOLATION_DIALECTS = frozenset({"postgresql", "mysql", "mariadb"})


class SQLAlchemyRepositoryContainer:
    """Provide repositories bound to one SQLAlchemy session."""

    def __init__(self, *, session: Session) -> None:
        self.session = session
        self.pickup_points: BoundRepository[PickupPointRepository] = _pickup_points.bind(session)
        self.receptions: BoundRepository[ReceptionRepository] = _receptions.bind(session)
        self.products: BoundRepository[ProductRepository] = _products.bind(session)
        self.users: BoundRepository[UserRepository] = _users.bind(session)


class SQLAlchemyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    SQLAlchemy-backed UoW, by default on the Flask-scoped session.

    Parameters
    ----------
    session:
        Session to run on. Defaults to ``db.session``.
    isolation_level:
        Level requested when this unit starts the transaction. Applied with
        ``SET TRANSACTION ISOLATION LEVEL`` on PostgreSQL and MySQL; SQLite
        keeps its own (serializable) behaviour. ``None`` leaves the default.
    statement_timeout_ms:
        PostgreSQL-only deadline applied with ``SET LOCAL statement_timeout``;
        a cancelled statement fails the unit, which then rolls back.

    Notes
    -----
    ``__exit__`` runs for every exit path (exceptions, ``KeyboardInterrupt``,
    ``SystemExit``, generator close). Anything but a clean exit rolls back
    and lets the original exception continue unchanged. A failing COMMIT is
    rolled back and raised as :class:`CommitFailedError`.
    """

    def __init__(
        self,
        session: Session | None = None,
        *,
        isolation_level: str | None = "READ COMMITTED",
        statement_timeout_ms: int | None = None,
    ) -> None:
        super().__init__(session=session if session is not None else db.session)
        self.isolation_level = isolation_level
        self.statement_timeout_ms = statement_timeout_ms
        self._started_at = 0.0

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        self._started_at = time.perf_counter()
        owns_transaction = not self._current_session().in_transaction()
        if owns_transaction:
            self._configure_transaction()
        log.debug(
            "uow.begin",
            extra={"isolation_level": self.isolation_level if owns_transaction else None},
        )
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            try:
                self.commit()
            except SQLAlchemyError as commit_exc:
                self.rollback()
                raise CommitFailedError() from commit_exc
            except BaseException:
                self.rollback()
                raise
            log.debug("uow.commit", extra={"elapsed_ms": self._elapsed_ms()})
        else:
            self.rollback()
            log.debug(
                "uow.rollback",
                extra={"elapsed_ms": self._elapsed_ms(), "error_kind": exc_type.__name__},
            )

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

    # ------------------------------------------------------------------ #

    def _current_session(self) -> Session:
        """Return the concrete session behind a scoped-session registry."""
        if isinstance(self.session, scoped_session):
            return self.session()
        return self.session

    def _configure_transaction(self) -> None:
        """Issue per-transaction settings as the first statements of the unit."""
        dialect = self.session.get_bind().dialect.name
        if dialect not in _ISOLATION_DIALECTS:
            return
        if self.isolation_level:
            self.session.execute(text(f"SET TRANSACTION ISOLATION LEVEL {self.isolation_level}"))
        if self.statement_timeout_ms and dialect == "postgresql":
            self.session.execute(
                text("SELECT set_config('statement_timeout', :value, true)"),
                {"value": f"{int(self.statement_timeout_ms)}ms"},
            )

    def _elapsed_ms(self) -> float:
        return round((time.perf_counter() - self._started_at) * 1000, 2)


def run_in_transaction(
    work: Callable[[SQLAlchemyUnitOfWork], T],
    *,
    session: Session | None = None,
    isolation_level: str | None = "READ COMMITTED",
    statement_timeout_ms: int | None = None,
) -> T:
    """Run ``work`` inside one transaction and return its result.

    Commits when ``work`` returns; rolls back and re-raises whatever it
    raised otherwise. Nothing is kept between calls.

    :param work: Callable receiving the unit of work (session + bound repositories).
    :type work: Callable[[SQLAlchemyUnitOfWork], T]
    :param session: Session to run on; defaults to the Flask-scoped session.
    :param isolation_level: Isolation requested for the transaction.
    :param statement_timeout_ms: Optional per-transaction statement deadline.
    :returns: Whatever ``work`` returned.
    :raises CommitFailedError: If the final COMMIT fails.
    """
    uow = SQLAlchemyUnitOfWork(
        session,
        isolation_level=isolation_level,
        statement_timeout_ms=statement_timeout_ms,
    )
    with uow:
        return work(uow)
