"""
DTOs for ProductService.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from pvz_app.models.product import Product


@dataclass(frozen=True, slots=True)
class ProductAddIn:
    """
    Register a product in the open reception of a pickup point.

    :param product_type: Product type; validated by the service.
    :type product_type: str
    :param pvz_id: Pickup point whose open reception receives the product.
    :type pvz_id: UUID
    """

    product_type: str
    pvz_id: UUID


@dataclass(frozen=True, slots=True)
class ProductOut:
    """
    Product as exposed to callers.

    :param id: Identifier.
    :param date_time: Registration timestamp (UTC).
    :param type: Product type.
    :param reception_id: Owning reception.
    """

    id: UUID
    date_time: datetime
    type: str
    reception_id: UUID

    @classmethod
    def from_model(cls, product: Product) -> ProductOut:
        return cls(
            id=product.id,
            date_time=product.date_time,
            type=product.type,
            reception_id=product.reception_id,
        )
