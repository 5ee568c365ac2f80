"""Persistence repositories (one per aggregate)."""

from pvz_app.repositories.base import BaseRepository, BoundRepository, Page, Pagination
from pvz_app.repositories.pickup_point import PickupPointRepository
from pvz_app.repositories.product import ProductRepository
from pvz_app.repositories.reception import ReceptionRepository
from pvz_app.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "BoundRepository",
    "Page",
    "Pagination",
    "PickupPointRepository",
    "ProductRepository",
    "ReceptionRepository",
    "UserRepository",
]
