"""Unit tests for BoundRepository views."""

from __future__ import annotations

from pvz_app.models.pickup_point import PickupPoint
from pvz_app.repositories.base import BoundRepository
from pvz_app.repositories.pickup_point import PickupPointRepository
from tests.factories.pickup_point import PickupPointFactory


class TestBoundRepository:
    def test_bound_methods_receive_the_session(self, session):
        repo = PickupPointRepository()
        pvz = PickupPointFactory()

        bound = repo.bind(session)

        assert isinstance(bound, BoundRepository)
        assert bound.session is session
        assert bound.repository is repo
        assert bound.get(pvz.id).id == pvz.id
        assert bound.exists(pvz.id)

    def test_plain_attributes_pass_through(self, session):
        bound = PickupPointRepository().bind(session)

        assert bound.model is PickupPoint
        assert "registration_date" in bound._sortable_fields()
