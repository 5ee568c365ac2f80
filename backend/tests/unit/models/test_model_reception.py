"""Tests for the Reception model and its storage constraints."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from pvz_app.models.reception import Reception, ReceptionStatus
from tests.factories.pickup_point import PickupPointFactory
from tests.factories.reception import ReceptionFactory


class TestReception:
    def test_status_wire_values(self):
        assert ReceptionStatus.OPEN.value == "in_progress"
        assert ReceptionStatus.CLOSED.value == "close"

    def test_open_for_builds_an_open_reception(self):
        pvz = PickupPointFactory.build()

        reception = Reception.open_for(pvz.id)

        assert reception.pvz_id == pvz.id
        assert reception.is_open
        assert reception.date_time.tzinfo is not None

    def test_second_open_reception_violates_unique_index(self, session):
        """
        GIVEN a pickup point with an open reception
        WHEN another open reception is inserted for it directly
        THEN the partial unique index rejects the row.
        """
        existing = ReceptionFactory()
        session.add(Reception.open_for(existing.pvz_id))

        with pytest.raises(IntegrityError):
            session.flush()
        session.rollback()

    def test_closed_receptions_do_not_count_against_the_index(self, session):
        pvz = PickupPointFactory()
        ReceptionFactory(pickup_point=pvz, closed=True)
        ReceptionFactory(pickup_point=pvz, closed=True)

        session.add(Reception.open_for(pvz.id))
        session.flush()

        assert len(session.query(Reception).filter_by(pvz_id=pvz.id).all()) == 3
