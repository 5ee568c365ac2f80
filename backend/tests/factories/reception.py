"""Factory Boy definition for :class:`pvz_app.models.Reception`."""

from __future__ import annotations

import factory

from pvz_app.models.base import new_id, utcnow
from pvz_app.models.reception import Reception, ReceptionStatus
from tests.factories import BaseFactory
from tests.factories.pickup_point import PickupPointFactory


class ReceptionFactory(BaseFactory):
    """Build persisted :class:`Reception` instances, open by default."""

    class Meta:
        model = Reception

    id = factory.LazyFunction(new_id)
    pickup_point = factory.SubFactory(PickupPointFactory)
    pvz_id = factory.SelfAttribute("pickup_point.id")
    date_time = factory.LazyFunction(utcnow)
    status = ReceptionStatus.OPEN.value

    class Params:
        closed = factory.Trait(status=ReceptionStatus.CLOSED.value)
