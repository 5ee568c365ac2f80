"""Repository for the Product aggregate (append at tail, remove from tail)."""

from __future__ import annotations

import uuid
from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pvz_app.models.product import POSITION_CONSTRAINT, Product
from pvz_app.repositories.base import BaseRepository
from pvz_app.services._shared.errors import violates

_POSITION_MARKERS = (POSITION_CONSTRAINT, "products.reception_id, products.position")

# Newest first; ``position`` breaks timestamp ties
_NEWEST_FIRST = (Product.date_time.desc(), Product.position.desc())
_OLDEST_FIRST = (Product.date_time.asc(), Product.position.asc())


class ProductRepository(BaseRepository[Product]):
    """Persistence for products of a reception."""

    model = Product

    def _conflict_detail(self, exc: IntegrityError) -> tuple[str, str | None]:
        if violates(exc, *_POSITION_MARKERS):
            return "concurrent append to the same reception", POSITION_CONSTRAINT
        return super()._conflict_detail(exc)

    def next_position(self, session: Session, reception_id: uuid.UUID) -> int:
        """Return the insertion counter the next product of a reception gets."""
        stmt = select(func.coalesce(func.max(Product.position), 0)).where(
            Product.reception_id == reception_id
        )
        return int(session.execute(stmt).scalar_one()) + 1

    def append(self, session: Session, product: Product) -> Product:
        """Insert ``product`` at the tail of its reception.

        :param session: Execution context.
        :type session: :class:`sqlalchemy.orm.Session`
        :param product: Transient product with id, timestamp and reception set.
        :type product: Product
        :returns: The persisted product with ``position`` assigned.
        :rtype: Product
        :raises ConflictError: If another transaction took the same position.
        """
        product.position = self.next_position(session, product.reception_id)
        return self.add(session, product)

    def list_for_reception(self, session: Session, reception_id: uuid.UUID) -> list[Product]:
        """Return the products of a reception, oldest first."""
        stmt = (
            select(Product)
            .where(Product.reception_id == reception_id)
            .order_by(*_OLDEST_FIRST)
        )
        return list(session.execute(stmt).scalars().all())

    def list_for_receptions(
        self, session: Session, reception_ids: Sequence[uuid.UUID]
    ) -> list[Product]:
        """Bulk-load products for several receptions, oldest first per reception."""
        if not reception_ids:
            return []
        stmt = (
            select(Product)
            .where(Product.reception_id.in_(reception_ids))
            .order_by(Product.reception_id, *_OLDEST_FIRST)
        )
        return list(session.execute(stmt).scalars().all())

    def get_last_for_reception(
        self, session: Session, reception_id: uuid.UUID
    ) -> Product | None:
        """Return the most recently created product of a reception, if any."""
        stmt = (
            select(Product)
            .where(Product.reception_id == reception_id)
            .order_by(*_NEWEST_FIRST)
            .limit(1)
        )
        return session.execute(stmt).scalars().first()

    def delete_last_for_reception(
        self, session: Session, reception_id: uuid.UUID
    ) -> Product | None:
        """Delete the most recently created product of a reception.

        :param session: Execution context.
        :type session: :class:`sqlalchemy.orm.Session`
        :param reception_id: Owning reception.
        :type reception_id: uuid.UUID
        :returns: The deleted product, or ``None`` when there was nothing to delete.
        :rtype: Product | None
        """
        last = self.get_last_for_reception(session, reception_id)
        if last is None:
            return None
        self.delete(session, last)
        return last
