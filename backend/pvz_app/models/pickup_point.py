"""Pickup point (PVZ) model."""

from __future__ import annotations

import enum
import uuid
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Enum, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pvz_app.core.extensions import db

from .base import PKMixin, ReprMixin, UTCDateTime, new_id, utcnow

if TYPE_CHECKING:
    from .reception import Reception


class City(str, enum.Enum):
    """Cities where pickup points can be registered."""

    MOSCOW = "Москва"
    SAINT_PETERSBURG = "Санкт-Петербург"
    KAZAN = "Казань"

    @classmethod
    def values(cls) -> tuple[str, ...]:
        return tuple(member.value for member in cls)

    @classmethod
    def is_valid(cls, value: object) -> bool:
        return isinstance(value, str) and value in cls.values()


# --- Column type ---
CityType = Enum(*City.values(), name="pvz_city")


class PickupPoint(PKMixin, ReprMixin, db.Model):
    """
    A physical location where receptions are opened.

    Immutable after creation: only the append-only set of receptions grows.

    Fields
    ------
    registration_date : datetime
        Creation timestamp (UTC).
    city : str
        One of :class:`City`.
    """

    __tablename__ = "pickup_points"

    registration_date: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    city: Mapped[str] = mapped_column(CityType, nullable=False)

    receptions: Mapped[list[Reception]] = relationship(
        back_populates="pickup_point",
        order_by="Reception.date_time",
        passive_deletes=True,
    )

    __table_args__ = (Index("ix_pickup_points_registration_date", "registration_date"),)

    @classmethod
    def register(
        cls,
        city: str,
        *,
        id_factory: Callable[[], uuid.UUID] = new_id,
        clock: Callable[[], datetime] = utcnow,
    ) -> PickupPoint:
        """
        Build a new, not yet persisted pickup point.

        :param city: Validated city name.
        :type city: str
        :param id_factory: Identity generator.
        :param clock: Timestamp source.
        :returns: Transient entity with id and registration date assigned.
        :rtype: PickupPoint
        """
        return cls(id=id_factory(), registration_date=clock(), city=city)
