"""
ProductService
==============

Application service for products of a pickup point's open reception.

Responsibilities
----------------
- Append a product to the open reception.
- Remove the most recently added product (LIFO).
- Read products by id or by reception.

Notes
-----
- The product type is validated before any unit of work opens; an invalid
  type never touches storage.
- The open reception is read with a row lock, so a concurrent close waits
  for the append or removal to finish (on engines with row locks).
"""

from __future__ import annotations

import logging
from uuid import UUID

from pvz_app.models.product import Product, ProductType
from pvz_app.repositories.product import ProductRepository
from pvz_app.services._shared.base import BaseService
from pvz_app.services._shared.errors import (
    InvalidProductTypeError,
    NoProductsToDeleteError,
    NotFoundError,
)
from pvz_app.services._shared.policies.reception_state import require_modifiable_reception
from pvz_app.services.products.dto import ProductAddIn, ProductOut
from pvz_app.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork

log = logging.getLogger(__name__)


class ProductService(BaseService):
    """
    Service enforcing "products only change in an open reception" and LIFO removal.
    """

    products = ProductRepository()

    # ------------------------------------------------------------------ #
    # Append
    # ------------------------------------------------------------------ #

    def add_product(self, dto: ProductAddIn) -> ProductOut:
        """
        Register a product in the open reception of a pickup point.

        :param dto: Product type and pickup point.
        :type dto: ProductAddIn
        :returns: The stored product.
        :rtype: ProductOut
        :raises InvalidProductTypeError: If the type is not supported.
        :raises NoActiveReceptionError: If the pickup point never had a reception.
        :raises ReceptionCannotBeModifiedError: If its latest reception is closed.
        """
        if not ProductType.is_valid(dto.product_type):
            raise InvalidProductTypeError(dto.product_type)

        def work(uow: SQLAlchemyUnitOfWork) -> ProductOut:
            reception = require_modifiable_reception(uow, dto.pvz_id)
            product = Product.register(dto.product_type, reception.id)
            uow.products.append(product)
            return ProductOut.from_model(product)

        created = self.run_in_transaction(work)
        log.info(
            "product.added",
            extra=self._log_extra(
                pvz_id=dto.pvz_id, reception_id=created.reception_id, product_id=created.id
            ),
        )
        return created

    # ------------------------------------------------------------------ #
    # Remove (LIFO)
    # ------------------------------------------------------------------ #

    def delete_last_product(self, pvz_id: UUID) -> ProductOut:
        """
        Remove the most recently added product of the open reception.

        :param pvz_id: Pickup point id.
        :type pvz_id: UUID
        :returns: The product that was removed.
        :rtype: ProductOut
        :raises NoActiveReceptionError: If the pickup point never had a reception.
        :raises ReceptionCannotBeModifiedError: If its latest reception is closed.
        :raises NoProductsToDeleteError: If the open reception is empty.
        """

        def work(uow: SQLAlchemyUnitOfWork) -> ProductOut:
            reception = require_modifiable_reception(uow, pvz_id)
            if not uow.products.list_for_reception(reception.id):
                raise NoProductsToDeleteError(reception.id)
            removed = uow.products.delete_last_for_reception(reception.id)
            if removed is None:  # pragma: no cover - emptied between the two reads
                raise NoProductsToDeleteError(reception.id)
            return ProductOut.from_model(removed)

        removed = self.run_in_transaction(work)
        log.info(
            "product.deleted",
            extra=self._log_extra(
                pvz_id=pvz_id, reception_id=removed.reception_id, product_id=removed.id
            ),
        )
        return removed

    # ------------------------------------------------------------------ #
    # Retrieval
    # ------------------------------------------------------------------ #

    def get_product(self, product_id: UUID) -> ProductOut:
        """
        Retrieve a product by id.

        :raises NotFoundError: If the product does not exist.
        """
        with self.reading() as session:
            product = self.products.get(session, product_id)
            if product is None:
                raise NotFoundError("Product", product_id)
            return ProductOut.from_model(product)

    def list_products(self, reception_id: UUID) -> list[ProductOut]:
        """Return the products of a reception, oldest first."""
        with self.reading() as session:
            return [
                ProductOut.from_model(p)
                for p in self.products.list_for_reception(session, reception_id)
            ]
