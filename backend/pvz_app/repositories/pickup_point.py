"""Repository for the PickupPoint aggregate."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from sqlalchemy import Select, and_, exists, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from pvz_app.models.pickup_point import PickupPoint
from pvz_app.models.reception import Reception
from pvz_app.repositories.base import BaseRepository, Page, Pagination


def reception_window(date_from: datetime | None, date_to: datetime | None) -> list[Any]:
    """Build the ``Reception.date_time`` range predicate (inclusive bounds).

    :param date_from: Lower bound or ``None``.
    :param date_to: Upper bound or ``None``.
    :returns: List of SQL clauses; empty when both bounds are ``None``.
    :rtype: list
    """
    clauses: list[Any] = []
    if date_from is not None:
        clauses.append(Reception.date_time >= date_from)
    if date_to is not None:
        clauses.append(Reception.date_time <= date_to)
    return clauses


class PickupPointRepository(BaseRepository[PickupPoint]):
    """Persistence for pickup points and their paginated catalog."""

    model = PickupPoint

    def _sortable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {
            "registration_date": PickupPoint.registration_date,
            "city": PickupPoint.city,
        }

    def _filtered(self, date_from: datetime | None, date_to: datetime | None) -> Select[Any]:
        stmt = select(PickupPoint)
        window = reception_window(date_from, date_to)
        if window:
            has_reception = exists().where(
                and_(Reception.pvz_id == PickupPoint.id, *window)
            )
            stmt = stmt.where(has_reception)
        return stmt

    def paginate(
        self,
        session: Session,
        pagination: Pagination,
        *,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
    ) -> Page[PickupPoint]:
        """List pickup points, optionally only those with receptions in a date window.

        :param session: Execution context.
        :type session: :class:`sqlalchemy.orm.Session`
        :param pagination: Page, limit and sort tokens.
        :type pagination: Pagination
        :param date_from: Keep points with a reception at or after this instant.
        :type date_from: datetime | None
        :param date_to: Keep points with a reception at or before this instant.
        :type date_to: datetime | None
        :returns: Page whose ``total`` counts every match of the filter.
        :rtype: Page[PickupPoint]
        """
        return self.paginate_statement(
            session,
            self._filtered(date_from, date_to),
            pagination,
            default_order=(PickupPoint.registration_date.asc(),),
        )
