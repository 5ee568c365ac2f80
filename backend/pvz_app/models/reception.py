"""Reception model: an intake session of a pickup point."""

from __future__ import annotations

import enum
import uuid
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Enum, ForeignKey, Index, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pvz_app.core.extensions import db

from .base import PKMixin, ReprMixin, UTCDateTime, new_id, utcnow

if TYPE_CHECKING:
    from .pickup_point import PickupPoint
    from .product import Product


class ReceptionStatus(str, enum.Enum):
    """Lifecycle states. ``CLOSED`` is terminal."""

    OPEN = "in_progress"
    CLOSED = "close"


ReceptionStatusType = Enum(*(s.value for s in ReceptionStatus), name="reception_status")

# Partial unique index: at most one open reception per pickup point
OPEN_RECEPTION_INDEX = "uq_receptions_open_per_pvz"
_OPEN_PREDICATE = text(f"status = '{ReceptionStatus.OPEN.value}'")


class Reception(PKMixin, ReprMixin, db.Model):
    """
    Intake session for a pickup point.

    Transitions ``OPEN -> CLOSED`` exactly once. Closing is done by the
    repository through a conditional UPDATE, never by mutating ``status``
    on a loaded instance.

    Fields
    ------
    date_time : datetime
        Opening timestamp (UTC).
    pvz_id : uuid.UUID
        Owning pickup point.
    status : str
        One of :class:`ReceptionStatus` values.
    """

    __tablename__ = "receptions"

    date_time: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    pvz_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("pickup_points.id", ondelete="CASCADE"), nullable=False
    )
    status: Mapped[str] = mapped_column(
        ReceptionStatusType, nullable=False, default=ReceptionStatus.OPEN.value
    )

    pickup_point: Mapped[PickupPoint] = relationship(back_populates="receptions")
    products: Mapped[list[Product]] = relationship(
        back_populates="reception",
        order_by="Product.position",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("ix_receptions_pvz_id_date_time", "pvz_id", "date_time"),
        Index(
            OPEN_RECEPTION_INDEX,
            "pvz_id",
            unique=True,
            postgresql_where=_OPEN_PREDICATE,
            sqlite_where=_OPEN_PREDICATE,
        ),
    )

    @property
    def is_open(self) -> bool:
        return self.status == ReceptionStatus.OPEN.value

    @classmethod
    def open_for(
        cls,
        pvz_id: uuid.UUID,
        *,
        id_factory: Callable[[], uuid.UUID] = new_id,
        clock: Callable[[], datetime] = utcnow,
    ) -> Reception:
        """
        Build a new OPEN reception for ``pvz_id`` (not yet persisted).

        :param pvz_id: Owning pickup point id.
        :type pvz_id: uuid.UUID
        :returns: Transient reception in ``OPEN`` state.
        :rtype: Reception
        """
        return cls(
            id=id_factory(),
            date_time=clock(),
            pvz_id=pvz_id,
            status=ReceptionStatus.OPEN.value,
        )
