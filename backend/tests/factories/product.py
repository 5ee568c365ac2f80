"""Factory Boy definition for :class:`pvz_app.models.Product`."""

from __future__ import annotations

import factory

from pvz_app.models.base import new_id, utcnow
from pvz_app.models.product import Product, ProductType
from tests.factories import BaseFactory
from tests.factories.reception import ReceptionFactory


class ProductFactory(BaseFactory):
    """Build persisted :class:`Product` instances.

    ``position`` follows the factory sequence, so products built for the same
    reception keep their creation order.
    """

    class Meta:
        model = Product

    id = factory.LazyFunction(new_id)
    reception = factory.SubFactory(ReceptionFactory)
    reception_id = factory.SelfAttribute("reception.id")
    date_time = factory.LazyFunction(utcnow)
    type = factory.Iterator([t.value for t in ProductType])
    position = factory.Sequence(lambda n: n + 1)
