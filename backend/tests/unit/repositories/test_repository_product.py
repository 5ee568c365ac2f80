"""Unit tests for ProductRepository (tail append / tail removal)."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from pvz_app.models.product import Product
from pvz_app.repositories.product import ProductRepository
from tests.factories.reception import ReceptionFactory

FROZEN = datetime(2025, 4, 10, 12, 0, tzinfo=UTC)


class TestProductRepository:
    @pytest.fixture()
    def repo(self) -> ProductRepository:
        return ProductRepository()

    def _append(self, repo, session, reception, product_type="электроника", at=FROZEN):
        return repo.append(session, Product.register(product_type, reception.id, clock=lambda: at))

    def test_append_assigns_increasing_positions(self, repo, session):
        reception = ReceptionFactory()

        first = self._append(repo, session, reception)
        second = self._append(repo, session, reception, "одежда")

        assert (first.position, second.position) == (1, 2)
        assert repo.next_position(session, reception.id) == 3

    def test_positions_are_per_reception(self, repo, session):
        r1, r2 = ReceptionFactory(), ReceptionFactory()
        self._append(repo, session, r1)

        assert self._append(repo, session, r2).position == 1

    def test_last_product_breaks_timestamp_ties_by_position(self, repo, session):
        """
        GIVEN three products sharing one timestamp
        WHEN asking for the last one
        THEN the most recently appended product is returned.
        """
        reception = ReceptionFactory()
        self._append(repo, session, reception)
        self._append(repo, session, reception)
        third = self._append(repo, session, reception, "обувь")

        assert repo.get_last_for_reception(session, reception.id).id == third.id

    def test_delete_last_for_reception_removes_the_tail(self, repo, session):
        reception = ReceptionFactory()
        p1 = self._append(repo, session, reception)
        p2 = self._append(repo, session, reception)

        removed = repo.delete_last_for_reception(session, reception.id)

        assert removed.id == p2.id
        assert [p.id for p in repo.list_for_reception(session, reception.id)] == [p1.id]

    def test_delete_last_for_empty_reception_returns_none(self, repo, session):
        reception = ReceptionFactory()

        assert repo.delete_last_for_reception(session, reception.id) is None

    def test_list_for_receptions_groups_oldest_first(self, repo, session):
        r1, r2 = ReceptionFactory(), ReceptionFactory()
        a = self._append(repo, session, r1)
        b = self._append(repo, session, r1)
        c = self._append(repo, session, r2)

        products = repo.list_for_receptions(session, [r1.id, r2.id])

        by_reception = {}
        for p in products:
            by_reception.setdefault(p.reception_id, []).append(p.id)
        assert by_reception == {r1.id: [a.id, b.id], r2.id: [c.id]}
        assert repo.list_for_receptions(session, []) == []
