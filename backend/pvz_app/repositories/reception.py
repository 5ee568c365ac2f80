"""Repository for the Reception aggregate."""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pvz_app.models.reception import OPEN_RECEPTION_INDEX, Reception, ReceptionStatus
from pvz_app.repositories.base import BaseRepository
from pvz_app.repositories.pickup_point import reception_window
from pvz_app.services._shared.errors import NotFoundError, violates

# SQLite reports the column instead of the index name
_OPEN_RECEPTION_MARKERS = (OPEN_RECEPTION_INDEX, "receptions.pvz_id")


class ReceptionRepository(BaseRepository[Reception]):
    """Persistence for receptions.

    The repository answers state questions ("which reception is open?") and
    performs the guarded close; deciding what a missing or closed reception
    means is left to the services.
    """

    model = Reception

    def _conflict_detail(self, exc: IntegrityError) -> tuple[str, str | None]:
        if violates(exc, *_OPEN_RECEPTION_MARKERS):
            return "pickup point already has an open reception", OPEN_RECEPTION_INDEX
        return super()._conflict_detail(exc)

    # ---------------------------- Lookups ----------------------------

    def get_open_for_pvz(
        self, session: Session, pvz_id: uuid.UUID, *, for_update: bool = False
    ) -> Reception | None:
        """Return the OPEN reception of a pickup point.

        :param session: Execution context.
        :type session: :class:`sqlalchemy.orm.Session`
        :param pvz_id: Pickup point id.
        :type pvz_id: uuid.UUID
        :param for_update: Lock the row (``SELECT ... FOR UPDATE``) when supported.
        :type for_update: bool
        :returns: The open reception or ``None`` when the point has none.
        :rtype: Reception | None
        """
        stmt = (
            select(Reception)
            .where(
                Reception.pvz_id == pvz_id,
                Reception.status == ReceptionStatus.OPEN.value,
            )
            .order_by(Reception.date_time.desc())
            .limit(1)
        )
        if for_update:
            stmt = stmt.with_for_update()
        return session.execute(stmt).scalars().first()

    def get_latest_for_pvz(self, session: Session, pvz_id: uuid.UUID) -> Reception | None:
        """Return the most recent reception of a pickup point, whatever its status."""
        stmt = (
            select(Reception)
            .where(Reception.pvz_id == pvz_id)
            .order_by(Reception.date_time.desc(), Reception.id.desc())
            .limit(1)
        )
        return session.execute(stmt).scalars().first()

    def list_for_pvzs(
        self,
        session: Session,
        pvz_ids: Sequence[uuid.UUID],
        *,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
    ) -> list[Reception]:
        """Bulk-load receptions for several pickup points, oldest first.

        :param session: Execution context.
        :param pvz_ids: Pickup point ids collected from a listing page.
        :param date_from: Optional inclusive lower bound on ``date_time``.
        :param date_to: Optional inclusive upper bound on ``date_time``.
        :returns: Receptions ordered by ``(pvz_id, date_time)``.
        :rtype: list[Reception]
        """
        if not pvz_ids:
            return []
        stmt = (
            select(Reception)
            .where(Reception.pvz_id.in_(pvz_ids), *reception_window(date_from, date_to))
            .order_by(Reception.pvz_id, Reception.date_time, Reception.id)
        )
        return list(session.execute(stmt).scalars().all())

    # ---------------------------- Transitions ----------------------------

    def close(self, session: Session, reception_id: uuid.UUID) -> bool:
        """Close a reception with a conditional UPDATE.

        Only a row still ``in_progress`` is changed, so a concurrent closer
        that committed first leaves this call with zero affected rows.

        :param session: Execution context.
        :type session: :class:`sqlalchemy.orm.Session`
        :param reception_id: Reception to close.
        :type reception_id: uuid.UUID
        :returns: ``True`` when this call closed it, ``False`` if it was already closed.
        :rtype: bool
        :raises NotFoundError: If no reception has this id.
        """
        stmt = (
            update(Reception)
            .where(
                Reception.id == reception_id,
                Reception.status == ReceptionStatus.OPEN.value,
            )
            .values(status=ReceptionStatus.CLOSED.value)
            .execution_options(synchronize_session="fetch")
        )
        result = session.execute(stmt)
        if result.rowcount == 1:
            return True
        if not self.exists(session, reception_id):
            raise NotFoundError("Reception", reception_id)
        return False
