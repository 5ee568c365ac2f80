"""Product model: an item registered within a reception."""

from __future__ import annotations

import enum
import uuid
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Enum, ForeignKey, Index, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pvz_app.core.extensions import db

from .base import PKMixin, ReprMixin, UTCDateTime, new_id, utcnow

if TYPE_CHECKING:
    from .reception import Reception


class ProductType(str, enum.Enum):
    """Kinds of products accepted at a pickup point."""

    ELECTRONICS = "электроника"
    CLOTHES = "одежда"
    SHOES = "обувь"

    @classmethod
    def values(cls) -> tuple[str, ...]:
        return tuple(member.value for member in cls)

    @classmethod
    def is_valid(cls, value: object) -> bool:
        return isinstance(value, str) and value in cls.values()


ProductTypeType = Enum(*ProductType.values(), name="product_type")

POSITION_CONSTRAINT = "uq_products_reception_position"


class Product(PKMixin, ReprMixin, db.Model):
    """
    Item appended to the tail of an open reception.

    ``position`` is a per-reception insertion counter. It breaks ties between
    products sharing the same ``date_time`` so "most recent" is deterministic.

    Fields
    ------
    date_time : datetime
        Registration timestamp (UTC).
    type : str
        One of :class:`ProductType` values.
    reception_id : uuid.UUID
        Owning reception.
    position : int
        1-based insertion order within the reception.
    """

    __tablename__ = "products"

    date_time: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    type: Mapped[str] = mapped_column(ProductTypeType, nullable=False)
    reception_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("receptions.id", ondelete="CASCADE"), nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)

    reception: Mapped[Reception] = relationship(back_populates="products")

    __table_args__ = (
        UniqueConstraint("reception_id", "position", name=POSITION_CONSTRAINT),
        Index("ix_products_reception_id_date_time", "reception_id", "date_time"),
    )

    @classmethod
    def register(
        cls,
        product_type: str,
        reception_id: uuid.UUID,
        *,
        id_factory: Callable[[], uuid.UUID] = new_id,
        clock: Callable[[], datetime] = utcnow,
    ) -> Product:
        """
        Build a new product for ``reception_id``; the repository assigns ``position``.

        :param product_type: Validated product type.
        :type product_type: str
        :param reception_id: Owning reception id.
        :type reception_id: uuid.UUID
        :returns: Transient product.
        :rtype: Product
        """
        return cls(
            id=id_factory(),
            date_time=clock(),
            type=product_type,
            reception_id=reception_id,
        )
