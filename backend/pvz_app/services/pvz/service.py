"""
PVZService
==========

Catalog service for pickup points.

Responsibilities
----------------
- Register pickup points in a supported city.
- Paginate pickup points, optionally only those with receptions in a date window.
- Build the nested read model (pickup point -> receptions -> products).

Notes
-----
- Listing reads the ambient session directly; no unit of work, no caching.
- The nested read model costs three queries per page whatever its size:
  the page itself, receptions for the page's pickup points, and products
  for those receptions.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from uuid import UUID

from pvz_app.models.pickup_point import City, PickupPoint
from pvz_app.repositories.pickup_point import PickupPointRepository
from pvz_app.repositories.product import ProductRepository
from pvz_app.repositories.reception import ReceptionRepository
from pvz_app.services._shared.base import BaseService
from pvz_app.services._shared.dto import PageMeta
from pvz_app.services._shared.errors import InvalidCityError, NotFoundError
from pvz_app.services.products.dto import ProductOut
from pvz_app.services.pvz.dto import (
    PVZCreateIn,
    PVZListIn,
    PVZOut,
    PVZPageOut,
    PVZWithReceptionsOut,
    PVZWithReceptionsPageOut,
)
from pvz_app.services.receptions.dto import ReceptionOut, ReceptionWithProductsOut
from pvz_app.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork

log = logging.getLogger(__name__)


class PVZService(BaseService):
    """
    Service orchestrating creation and listing of pickup points.
    """

    pickup_points = PickupPointRepository()
    receptions = ReceptionRepository()
    products = ProductRepository()

    # ------------------------------------------------------------------ #
    # Create
    # ------------------------------------------------------------------ #

    def create_pvz(self, dto: PVZCreateIn) -> PVZOut:
        """
        Register a pickup point.

        :param dto: Creation DTO.
        :type dto: PVZCreateIn
        :returns: The stored pickup point.
        :rtype: PVZOut
        :raises InvalidCityError: If the city is not supported.
        """
        if not City.is_valid(dto.city):
            raise InvalidCityError(dto.city)

        def work(uow: SQLAlchemyUnitOfWork) -> PVZOut:
            pvz = uow.pickup_points.add(PickupPoint.register(dto.city))
            return PVZOut.from_model(pvz)

        created = self.run_in_transaction(work)
        log.info("pvz.created", extra=self._log_extra(pvz_id=created.id))
        return created

    # ------------------------------------------------------------------ #
    # Retrieval
    # ------------------------------------------------------------------ #

    def get_pvz(self, pvz_id: UUID) -> PVZOut:
        """
        Retrieve a pickup point by id.

        :raises NotFoundError: If it does not exist.
        """
        with self.reading() as session:
            pvz = self.pickup_points.get(session, pvz_id)
            if pvz is None:
                raise NotFoundError("PickupPoint", pvz_id)
            return PVZOut.from_model(pvz)

    # ------------------------------------------------------------------ #
    # Listing
    # ------------------------------------------------------------------ #

    def list_pvz(self, dto: PVZListIn) -> PVZPageOut:
        """
        Paginate pickup points.

        :param dto: Pagination and optional reception date window.
        :type dto: PVZListIn
        :returns: Page of pickup points with a total over the whole filter.
        :rtype: PVZPageOut
        """
        pagination = self.ensure_pagination(
            page=dto.pagination.page, limit=dto.pagination.limit, sort=dto.pagination.sort
        )
        with self.reading() as session:
            page = self.pickup_points.paginate(
                session, pagination, date_from=dto.date_from, date_to=dto.date_to
            )
            items = [PVZOut.from_model(p) for p in page.items]
        return PVZPageOut(
            items=items,
            meta=PageMeta.build(page=page.page, limit=page.limit, total=page.total),
        )

    def list_pvz_with_receptions(self, dto: PVZListIn) -> PVZWithReceptionsPageOut:
        """
        Paginate pickup points with their receptions and products.

        Receptions follow the same date window as the pickup point filter and
        are ordered oldest first, as are each reception's products.

        :param dto: Pagination and optional reception date window.
        :type dto: PVZListIn
        :returns: Page of the nested read model.
        :rtype: PVZWithReceptionsPageOut
        """
        pagination = self.ensure_pagination(
            page=dto.pagination.page, limit=dto.pagination.limit, sort=dto.pagination.sort
        )
        with self.reading() as session:
            page = self.pickup_points.paginate(
                session, pagination, date_from=dto.date_from, date_to=dto.date_to
            )
            pvz_ids = [p.id for p in page.items]
            receptions = self.receptions.list_for_pvzs(
                session, pvz_ids, date_from=dto.date_from, date_to=dto.date_to
            )
            products = self.products.list_for_receptions(session, [r.id for r in receptions])

            products_by_reception: dict[UUID, list[ProductOut]] = defaultdict(list)
            for product in products:
                products_by_reception[product.reception_id].append(ProductOut.from_model(product))

            receptions_by_pvz: dict[UUID, list[ReceptionWithProductsOut]] = defaultdict(list)
            for reception in receptions:
                receptions_by_pvz[reception.pvz_id].append(
                    ReceptionWithProductsOut(
                        reception=ReceptionOut.from_model(reception),
                        products=products_by_reception.get(reception.id, []),
                    )
                )

            items = [
                PVZWithReceptionsOut(
                    pvz=PVZOut.from_model(p),
                    receptions=receptions_by_pvz.get(p.id, []),
                )
                for p in page.items
            ]
        return PVZWithReceptionsPageOut(
            items=items,
            meta=PageMeta.build(page=page.page, limit=page.limit, total=page.total),
        )
