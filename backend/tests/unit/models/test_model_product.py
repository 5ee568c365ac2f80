"""Tests for the Product model."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from pvz_app.models.product import Product, ProductType
from tests.factories.product import ProductFactory
from tests.factories.reception import ReceptionFactory


class TestProduct:
    def test_supported_types(self):
        assert ProductType.values() == ("электроника", "одежда", "обувь")
        assert not ProductType.is_valid("мебель")

    def test_register_leaves_position_to_the_repository(self):
        reception = ReceptionFactory.build()

        product = Product.register("обувь", reception.id)

        assert product.reception_id == reception.id
        assert product.type == "обувь"
        assert product.position is None

    def test_position_is_unique_per_reception(self, session):
        reception = ReceptionFactory()
        ProductFactory(reception=reception, position=1)
        duplicate = Product.register("одежда", reception.id)
        duplicate.position = 1
        session.add(duplicate)

        with pytest.raises(IntegrityError):
            session.flush()
        session.rollback()

    def test_products_relationship_keeps_insertion_order(self, session):
        reception = ReceptionFactory()
        first = ProductFactory(reception=reception, position=1)
        second = ProductFactory(reception=reception, position=2)
        session.expire_all()

        assert [p.id for p in reception.products] == [first.id, second.id]
