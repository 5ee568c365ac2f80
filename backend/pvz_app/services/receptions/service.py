"""
ReceptionService
================

Application service for the reception lifecycle of a pickup point.

Responsibilities
----------------
- Open a reception when the pickup point has none open.
- Close the open reception and return it with its final product list.
- Read receptions by id, the open one, or the latest one of a pickup point.

Notes
-----
- ``OPEN -> CLOSED`` is the only transition; closing is terminal.
- "At most one open reception per pickup point" holds twice: the read guard
  inside the unit of work, and the partial unique index behind it for two
  writers that both passed the guard.
- The close is a conditional UPDATE, so a concurrent closer is detected by
  the affected row count rather than by a second read.
"""

from __future__ import annotations

import logging
from uuid import UUID

from pvz_app.models.reception import OPEN_RECEPTION_INDEX, Reception
from pvz_app.repositories.product import ProductRepository
from pvz_app.repositories.reception import ReceptionRepository
from pvz_app.services._shared.base import BaseService
from pvz_app.services._shared.errors import (
    ActiveReceptionExistsError,
    ConflictError,
    NoActiveReceptionError,
    NotFoundError,
    ReceptionAlreadyClosedError,
)
from pvz_app.services.products.dto import ProductOut
from pvz_app.services.receptions.dto import ReceptionOut, ReceptionWithProductsOut
from pvz_app.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork

log = logging.getLogger(__name__)


class ReceptionService(BaseService):
    """
    Service enforcing the open/closed state machine of receptions.
    """

    receptions = ReceptionRepository()
    products = ProductRepository()

    # ------------------------------------------------------------------ #
    # Create
    # ------------------------------------------------------------------ #

    def create_reception(self, pvz_id: UUID) -> ReceptionOut:
        """
        Open a new reception for a pickup point.

        :param pvz_id: Pickup point id.
        :type pvz_id: UUID
        :returns: The new reception in ``in_progress`` status.
        :rtype: ReceptionOut
        :raises NotFoundError: If the pickup point does not exist.
        :raises ActiveReceptionExistsError: If it already has an open reception.
        """

        def work(uow: SQLAlchemyUnitOfWork) -> ReceptionOut:
            if not uow.pickup_points.exists(pvz_id):
                raise NotFoundError("PickupPoint", pvz_id)
            if uow.receptions.get_open_for_pvz(pvz_id) is not None:
                raise ActiveReceptionExistsError(pvz_id)

            reception = Reception.open_for(pvz_id)
            try:
                uow.receptions.add(reception)
            except ConflictError as exc:
                if exc.constraint == OPEN_RECEPTION_INDEX:
                    raise ActiveReceptionExistsError(pvz_id) from exc
                raise
            return ReceptionOut.from_model(reception)

        try:
            created = self.run_in_transaction(work)
        except ActiveReceptionExistsError:
            log.warning("reception.create.rejected", extra=self._log_extra(pvz_id=pvz_id))
            raise
        log.info(
            "reception.created",
            extra=self._log_extra(pvz_id=pvz_id, reception_id=created.id),
        )
        return created

    # ------------------------------------------------------------------ #
    # Close
    # ------------------------------------------------------------------ #

    def close_last_reception(self, pvz_id: UUID) -> ReceptionWithProductsOut:
        """
        Close the open reception of a pickup point.

        :param pvz_id: Pickup point id.
        :type pvz_id: UUID
        :returns: The closed reception with its products, oldest first.
        :rtype: ReceptionWithProductsOut
        :raises NoActiveReceptionError: If the pickup point never had a reception.
        :raises ReceptionAlreadyClosedError: If its latest reception is already
            closed, including when a concurrent caller closed it first.
        """

        def work(uow: SQLAlchemyUnitOfWork) -> ReceptionWithProductsOut:
            reception = uow.receptions.get_open_for_pvz(pvz_id)
            if reception is None:
                latest = uow.receptions.get_latest_for_pvz(pvz_id)
                if latest is None:
                    raise NoActiveReceptionError(pvz_id)
                raise ReceptionAlreadyClosedError(latest.id)

            # Guards against a concurrent closer, not the normal path
            if not uow.receptions.close(reception.id):
                raise ReceptionAlreadyClosedError(reception.id)

            closed = uow.receptions.get(reception.id)
            if closed is None:  # pragma: no cover - row vanished inside our own transaction
                raise NotFoundError("Reception", reception.id)
            products = uow.products.list_for_reception(closed.id)
            return ReceptionWithProductsOut(
                reception=ReceptionOut.from_model(closed),
                products=[ProductOut.from_model(p) for p in products],
            )

        result = self.run_in_transaction(work)
        log.info(
            "reception.closed",
            extra=self._log_extra(pvz_id=pvz_id, reception_id=result.reception.id),
        )
        return result

    # ------------------------------------------------------------------ #
    # Retrieval
    # ------------------------------------------------------------------ #

    def get_reception(self, reception_id: UUID) -> ReceptionWithProductsOut:
        """
        Retrieve a reception with its products.

        :raises NotFoundError: If the reception does not exist.
        """
        with self.reading() as session:
            reception = self.receptions.get(session, reception_id)
            if reception is None:
                raise NotFoundError("Reception", reception_id)
            products = self.products.list_for_reception(session, reception.id)
            return ReceptionWithProductsOut(
                reception=ReceptionOut.from_model(reception),
                products=[ProductOut.from_model(p) for p in products],
            )

    def get_open_reception(self, pvz_id: UUID) -> ReceptionOut:
        """
        Retrieve the open reception of a pickup point.

        :raises NoActiveReceptionError: If none is open.
        """
        with self.reading() as session:
            reception = self.receptions.get_open_for_pvz(session, pvz_id)
            if reception is None:
                raise NoActiveReceptionError(pvz_id)
            return ReceptionOut.from_model(reception)

    def get_last_reception(self, pvz_id: UUID) -> ReceptionOut:
        """
        Retrieve the most recent reception of a pickup point, open or closed.

        :raises NotFoundError: If the pickup point has no receptions.
        """
        with self.reading() as session:
            reception = self.receptions.get_latest_for_pvz(session, pvz_id)
            if reception is None:
                raise NotFoundError("Reception", f"latest@{pvz_id}")
            return ReceptionOut.from_model(reception)
