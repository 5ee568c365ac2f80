"""
DTOs for PVZService.

Contracts between the API and the catalog service: pickup point creation,
paginated listing, and the nested read model (pickup point -> receptions ->
products) used for reporting.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from pvz_app.models.pickup_point import PickupPoint
from pvz_app.services._shared.dto import PageMeta, PaginationIn
from pvz_app.services.receptions.dto import ReceptionWithProductsOut

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class PVZCreateIn:
    """
    Register a pickup point.

    :param city: City name; must be one of :class:`~pvz_app.models.City`.
    :type city: str
    """

    city: str


@dataclass(frozen=True, slots=True)
class PVZListIn:
    """
    Listing filter.

    :param pagination: Page, limit and sort tokens.
    :type pagination: PaginationIn
    :param date_from: Keep pickup points with a reception at or after this instant.
    :type date_from: datetime | None
    :param date_to: Keep pickup points with a reception at or before this instant.
    :type date_to: datetime | None
    """

    pagination: PaginationIn = field(default_factory=PaginationIn)
    date_from: datetime | None = None
    date_to: datetime | None = None


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class PVZOut:
    """
    Pickup point as exposed to callers.

    :param id: Identifier.
    :param registration_date: Creation timestamp (UTC).
    :param city: City name.
    """

    id: UUID
    registration_date: datetime
    city: str

    @classmethod
    def from_model(cls, pvz: PickupPoint) -> PVZOut:
        return cls(id=pvz.id, registration_date=pvz.registration_date, city=pvz.city)


@dataclass(frozen=True, slots=True)
class PVZPageOut:
    """A page of pickup points."""

    items: Sequence[PVZOut]
    meta: PageMeta


@dataclass(frozen=True, slots=True)
class PVZWithReceptionsOut:
    """Pickup point with its receptions, each carrying its products oldest first."""

    pvz: PVZOut
    receptions: Sequence[ReceptionWithProductsOut]


@dataclass(frozen=True, slots=True)
class PVZWithReceptionsPageOut:
    """A page of the nested read model."""

    items: Sequence[PVZWithReceptionsOut]
    meta: PageMeta
