"""Generic repository base and query utilities for SQLAlchemy 2.x.

This module centralizes persistence-only concerns shared by all repositories:
- Strongly-typed pagination and sorting helpers.
- Safe sorting with a whitelist mapping (prevents SQL injection).
- Deterministic pagination (adds primary-key tiebreaker).
- Total counting over the same filter predicate as the page.
- No business logic, no commit/rollback: units of work own transactions.

Design decisions
----------------
* Every repository method receives the execution context (a SQLAlchemy
  ``Session``) as its first argument. Repositories hold no session of their
  own, so a call can never silently run on the wrong transaction.
* :meth:`BaseRepository.bind` returns a :class:`BoundRepository` view that
  pre-applies one session; units of work expose such views so services can
  compose several calls without repeating the session.
* Repositories never cache entities between calls.
* Insert-time ``IntegrityError`` is mapped to
  :class:`~pvz_app.services._shared.errors.ConflictError`.
"""

from __future__ import annotations

import functools
import inspect
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import InstrumentedAttribute, Session

from pvz_app.services._shared.errors import ConflictError

E = TypeVar("E")  # SQLAlchemy mapped entity type
R = TypeVar("R", bound="BaseRepository[Any]")


# ------------------------------- Pagination ----------------------------------


@dataclass(slots=True)
class Pagination:
    """Pagination input parameters.

    :param page: 1-based page number (validated to be ``>= 1``).
    :type page: int
    :param limit: Page size (validated to be ``>= 1``).
    :type limit: int
    :param sort: Public sort tokens (e.g., ``["-registration_date", "city"]``).
    :type sort: list[str]
    """

    page: int
    limit: int
    sort: list[str]


@dataclass(slots=True)
class Page(Generic[E]):
    """Result page with metadata.

    :param items: Listed entities in the current page.
    :type items: Sequence[E]
    :param total: Total item count for the query, independent of the slice.
    :type total: int
    :param page: 1-based current page number.
    :type page: int
    :param limit: Page size.
    :type limit: int
    """

    items: Sequence[E]
    total: int
    page: int
    limit: int


# ----------------------------- Sorting utilities -----------------------------


def parse_sort_tokens(raw: Iterable[str]) -> list[tuple[str, bool]]:
    """Parse public sort tokens into ``(field, is_desc)`` tuples.

    :param raw: Public tokens like ``["-registration_date", "city"]``.
    :type raw: Iterable[str]
    :returns: List of ``(field_name, is_desc)`` tokens.
    :rtype: list[tuple[str, bool]]
    """
    parsed: list[tuple[str, bool]] = []
    for token in raw:
        is_desc = token.startswith("-")
        field = token[1:] if is_desc else token
        field = field.strip()
        if field:
            parsed.append((field, is_desc))
    return parsed


def _apply_sorting(
    stmt: Select[Any],
    sortable_fields: Mapping[str, InstrumentedAttribute[Any]],
    tokens: Iterable[str],
    *,
    default: Sequence[Any] = (),
    pk_attr: InstrumentedAttribute[Any] | None,
) -> Select[Any]:
    """Apply safe ``ORDER BY`` clauses based on a whitelist mapping.

    Unknown sort tokens are ignored silently. When no token applies the
    ``default`` ordering is used. The model's primary key is always appended
    as a final ascending tiebreaker to stabilize pagination.

    :param stmt: Base selectable.
    :type stmt: :class:`sqlalchemy.sql.Select`
    :param sortable_fields: Public field → SQLAlchemy attribute mapping.
    :type sortable_fields: Mapping[str, InstrumentedAttribute]
    :param tokens: Public sort tokens (e.g., ``["-registration_date"]``).
    :type tokens: Iterable[str]
    :param default: Ordering clauses used when no token matched.
    :param pk_attr: Primary-key attribute used as a tiebreaker.
    :type pk_attr: InstrumentedAttribute | None
    :returns: Modified select with ``ORDER BY`` clauses.
    :rtype: :class:`sqlalchemy.sql.Select`
    """
    orders: list[Any] = []
    for field, is_desc in parse_sort_tokens(tokens):
        col = sortable_fields.get(field)
        if isinstance(col, InstrumentedAttribute):
            orders.append(col.desc() if is_desc else col.asc())

    if not orders:
        orders = list(default)
    if orders:
        stmt = stmt.order_by(*orders)

    if pk_attr is not None:
        stmt = stmt.order_by(pk_attr.asc())

    return stmt


# --------------------------- Pagination execution ----------------------------


def paginate_select(
    session: Session,
    stmt: Select[Any],
    *,
    page: int,
    limit: int,
    with_total: bool = True,
) -> tuple[list[Any], int]:
    """Execute a select with pagination and an optional total count.

    The total is a ``COUNT(*)`` over the same filtered statement with its
    ``ORDER BY`` stripped; it never derives from the page length.

    :param session: Active SQLAlchemy session.
    :type session: :class:`sqlalchemy.orm.Session`
    :param stmt: Base select to paginate (already filtered/sorted).
    :type stmt: :class:`sqlalchemy.sql.Select`
    :param page: 1-based page number (will be clamped to ``>= 1``).
    :type page: int
    :param limit: Page size (will be clamped to ``>= 1``).
    :type limit: int
    :param with_total: Whether to compute the total row count.
    :type with_total: bool
    :returns: Tuple of ``(items, total)`` where ``total`` is 0 when ``with_total=False``.
    :rtype: tuple[list[Any], int]
    """
    page = max(int(page), 1)
    limit = max(int(limit), 1)

    total = 0
    if with_total:
        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        total = int(session.execute(count_stmt).scalar_one())

    offset = (page - 1) * limit
    sliced = stmt.limit(limit).offset(offset)
    items = list(session.execute(sliced).scalars().all())
    return items, total


# ------------------------------ Base repository ------------------------------


class BaseRepository(Generic[E]):
    """Generic, persistence-only repository for a single aggregate.

    Subclasses MUST define:

    * ``model``: the SQLAlchemy mapped class.

    Subclasses MAY override:

    * ``_sortable_fields`` to expose safe sort keys.
    * ``_default_eagerload`` to attach eager-loading options.
    * ``_conflict_detail`` to describe integrity failures.

    This class NEVER:

    * opens/commits/rolls back transactions,
    * implements business rules or cross-aggregate coordination.
    """

    #: SQLAlchemy mapped model (must be set by subclasses)
    model: type[E]

    # ------------------------------ Binding ----------------------------------

    def bind(self: R, session: Session) -> BoundRepository[R]:
        """Return a view of this repository fixed to ``session``.

        :param session: Session of the current unit of work (or the ambient one).
        :type session: :class:`sqlalchemy.orm.Session`
        :returns: Bound view exposing the same methods minus the session argument.
        :rtype: BoundRepository
        """
        return BoundRepository(self, session)

    # ------------------------------ Extensibility ----------------------------

    def _default_eagerload(self, stmt: Select[Any]) -> Select[Any]:
        """Attach eager-loading options to generic get/list operations.

        :param stmt: Base select.
        :type stmt: :class:`sqlalchemy.sql.Select`
        :returns: Potentially modified select with eager options.
        :rtype: :class:`sqlalchemy.sql.Select`
        """
        return stmt

    def _pk_attr(self) -> InstrumentedAttribute[Any] | None:
        """Return the model's primary-key attribute (``model.id``) if available."""
        return getattr(self.model, "id", None)

    def _sortable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        """Whitelist mapping of public sort keys to model attributes.

        :returns: Public key → ORM attribute mapping.
        :rtype: Mapping[str, InstrumentedAttribute]
        """
        return {}

    def _conflict_detail(self, exc: IntegrityError) -> tuple[str, str | None]:
        """Describe an insert-time integrity failure.

        :param exc: Error raised by the flush.
        :type exc: IntegrityError
        :returns: ``(detail, constraint_name)``; the name is ``None`` when unknown.
        :rtype: tuple[str, str | None]
        """
        return "duplicate or invalid reference", None

    # --------------------------------- CRUD ----------------------------------

    def add(self, session: Session, instance: E) -> E:
        """Stage a new entity and flush so constraint violations surface here.

        :param session: Execution context.
        :type session: :class:`sqlalchemy.orm.Session`
        :param instance: New entity instance with its id/timestamps assigned.
        :type instance: E
        :returns: The same instance after ``flush()``.
        :rtype: E
        :raises ConflictError: If the insert violates a uniqueness or FK constraint.
        """
        session.add(instance)
        try:
            session.flush()
        except IntegrityError as exc:
            detail, constraint = self._conflict_detail(exc)
            raise ConflictError(self.model.__name__, detail, constraint) from exc
        return instance

    def get(self, session: Session, entity_id: Any) -> E | None:
        """Retrieve a single entity by primary key.

        :param session: Execution context.
        :type session: :class:`sqlalchemy.orm.Session`
        :param entity_id: Primary-key value.
        :type entity_id: Any
        :returns: Entity or ``None`` (the not-found signal).
        :rtype: E | None
        :raises RuntimeError: If no PK attribute can be detected.
        """
        pk_attr = self._pk_attr()
        if pk_attr is None:
            raise RuntimeError("BaseRepository.get requires a detectable PK attribute.")
        stmt = self._default_eagerload(select(self.model).where(pk_attr == entity_id))
        result = session.execute(stmt).scalars().first()
        return cast(E | None, result)

    def exists(self, session: Session, entity_id: Any) -> bool:
        """Return ``True`` when a row with ``entity_id`` exists."""
        pk_attr = self._pk_attr()
        if pk_attr is None:
            raise RuntimeError("BaseRepository.exists requires a detectable PK attribute.")
        stmt = select(pk_attr).where(pk_attr == entity_id).limit(1)
        return session.execute(stmt).first() is not None

    def delete(self, session: Session, instance: E) -> None:
        """Delete an entity and flush."""
        session.delete(instance)
        session.flush()

    # ------------------------------- Listing ---------------------------------

    def paginate_statement(
        self,
        session: Session,
        stmt: Select[Any],
        pagination: Pagination,
        *,
        default_order: Sequence[Any] = (),
        with_total: bool = True,
    ) -> Page[E]:
        """Sort and paginate a prepared statement for this model.

        :param session: Execution context.
        :param stmt: Filtered select over ``model``.
        :param pagination: Page, limit and sort tokens.
        :param default_order: Ordering used when no sort token applies.
        :param with_total: Whether to compute the total row count.
        :returns: Page of entities.
        :rtype: Page[E]
        """
        stmt = _apply_sorting(
            stmt,
            self._sortable_fields(),
            pagination.sort,
            default=default_order,
            pk_attr=self._pk_attr(),
        )
        items, total = paginate_select(
            session,
            stmt,
            page=pagination.page,
            limit=pagination.limit,
            with_total=with_total,
        )
        return Page(
            items=cast(list[E], items),
            total=total,
            page=max(pagination.page, 1),
            limit=max(pagination.limit, 1),
        )


class BoundRepository(Generic[R]):
    """A repository with its execution context pre-applied.

    Attribute access is forwarded to the wrapped repository; public methods
    are returned with the bound session as their first argument.
    """

    __slots__ = ("_repository", "_session")

    def __init__(self, repository: R, session: Session) -> None:
        self._repository = repository
        self._session = session

    @property
    def session(self) -> Session:
        return self._session

    @property
    def repository(self) -> R:
        return self._repository

    def __getattr__(self, name: str) -> Any:
        attr = getattr(self._repository, name)
        if name.startswith("_") or name == "bind" or not inspect.ismethod(attr):
            return attr
        return functools.partial(attr, self._session)

    def __repr__(self) -> str:
        return f"<Bound {self._repository.__class__.__name__} session={id(self._session):#x}>"
