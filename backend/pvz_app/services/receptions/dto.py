"""
DTOs for ReceptionService.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from pvz_app.models.reception import Reception
from pvz_app.services.products.dto import ProductOut


@dataclass(frozen=True, slots=True)
class ReceptionOut:
    """
    Reception as exposed to callers.

    :param id: Identifier.
    :param date_time: Opening timestamp (UTC).
    :param pvz_id: Owning pickup point.
    :param status: ``"in_progress"`` or ``"close"``.
    """

    id: UUID
    date_time: datetime
    pvz_id: UUID
    status: str

    @classmethod
    def from_model(cls, reception: Reception) -> ReceptionOut:
        return cls(
            id=reception.id,
            date_time=reception.date_time,
            pvz_id=reception.pvz_id,
            status=reception.status,
        )


@dataclass(frozen=True, slots=True)
class ReceptionWithProductsOut:
    """Reception plus its products, oldest first."""

    reception: ReceptionOut
    products: Sequence[ProductOut]
