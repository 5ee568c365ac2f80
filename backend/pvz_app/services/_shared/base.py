# pvz_app/services/_shared/base.py
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, TypeVar

from flask import current_app, has_app_context
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pvz_app.core.extensions import db
from pvz_app.repositories.base import Pagination
from pvz_app.services._shared.errors import ConflictError, ServiceError, StorageError
from pvz_app.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork

T = TypeVar("T")

log = logging.getLogger(__name__)


@dataclass(slots=True)
class ServiceContext:
    """
    Carry cross-cutting request-scoped data (auth, request ids).

    :param actor_id: Authenticated identity (token subject).
    :param role: Role claim of the caller.
    :param request_id: Correlation id for logging/tracing.
    """

    actor_id: str | None = None
    role: str | None = None
    request_id: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run units of work and ambient reads.
    * Translate raw storage failures into :class:`StorageError`.
    * Offer shared validation helpers (pagination/sorting).
    * Keep services thin, orchestration-only, no web/ORM leakage.

    Notes
    -----
    - Mutations always run through :meth:`run_in_transaction`.
    - Read-only listings use the ambient session through :meth:`reading`.
    - No retries: storage failures are reported once, as a generic kind.
    """

    # ---- Configuration defaults (override per subclass if needed) ----
    DEFAULT_WRITE_ISOLATION = "READ COMMITTED"
    DEFAULT_PAGE_LIMIT = 10
    MAX_PAGE_LIMIT = 30

    # Constraint names whose violation is a business conflict for this service
    business_constraints: frozenset[str] = frozenset()

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        """
        Initialize the base service.

        :param ctx: Optional request-scoped context (auth, tracing).
        :type ctx: ServiceContext | None
        """
        self.ctx = ctx or ServiceContext()

    # -------------------------- Settings ------------------------------------

    def _setting(self, key: str, default: Any) -> Any:
        if has_app_context():
            value = current_app.config.get(key)
            if value is not None:
                return value
        return default

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: UoW on the Flask-scoped session with configured isolation/timeout.
        :rtype: SQLAlchemyUnitOfWork
        """
        return SQLAlchemyUnitOfWork(
            isolation_level=self._setting("DB_ISOLATION_LEVEL", self.DEFAULT_WRITE_ISOLATION),
            statement_timeout_ms=self._setting("DB_STATEMENT_TIMEOUT_MS", None),
        )

    def run_in_transaction(self, work: Callable[[SQLAlchemyUnitOfWork], T]) -> T:
        """
        Run ``work`` in one unit of work and return its result.

        Service errors and non-storage faults propagate unchanged after the
        rollback. Raw SQLAlchemy errors, and constraint conflicts outside
        :attr:`business_constraints`, surface as :class:`StorageError`.

        :param work: Callable receiving the unit of work.
        :type work: Callable[[SQLAlchemyUnitOfWork], T]
        :returns: Result of ``work``.
        :raises StorageError: On database failures with no business meaning.
        """
        try:
            with self.rw_uow() as uow:
                return work(uow)
        except ConflictError as exc:
            if exc.constraint in self.business_constraints:
                raise
            log.error(
                "storage.constraint_violation",
                exc_info=True,
                extra={"error_kind": exc.constraint or type(exc).__name__},
            )
            raise StorageError() from exc
        except ServiceError:
            raise
        except SQLAlchemyError as exc:
            log.error("storage.failure", exc_info=True, extra={"error_kind": type(exc).__name__})
            raise StorageError() from exc

    @contextmanager
    def reading(self) -> Iterator[Session]:
        """
        Yield the ambient session for read-only queries.

        :returns: Context manager yielding ``db.session``.
        :raises StorageError: On database failures.
        """
        try:
            yield db.session
        except SQLAlchemyError as exc:
            log.error("storage.failure", exc_info=True, extra={"error_kind": type(exc).__name__})
            raise StorageError() from exc

    # ----------------------- Validation utilities ---------------------------

    def ensure_pagination(
        self, *, page: int, limit: int | None, sort: Iterable[str] | None = None
    ) -> Pagination:
        """
        Build a Pagination value object with basic clamping.

        :param page: 1-based page number.
        :type page: int
        :param limit: Page size; ``None`` uses the configured default.
        :type limit: int | None
        :param sort: Sort tokens like ["-registration_date", "city"].
        :type sort: Iterable[str] | None
        :returns: Pagination instance.
        :rtype: Pagination
        """
        default_limit = int(self._setting("PVZ_PAGE_DEFAULT_LIMIT", self.DEFAULT_PAGE_LIMIT))
        max_limit = int(self._setting("PVZ_PAGE_MAX_LIMIT", self.MAX_PAGE_LIMIT))
        page = max(1, int(page))
        limit = default_limit if limit is None else int(limit)
        limit = min(max(1, limit), max_limit)
        return Pagination(page=page, limit=limit, sort=list(sort or []))

    def _log_extra(self, **fields: Any) -> dict[str, Any]:
        return {k: str(v) if v is not None else None for k, v in fields.items()}
