"""Unit tests for the ``run_in_transaction`` helper."""

from __future__ import annotations

import pytest

from pvz_app.models import PickupPoint
from pvz_app.uow import run_in_transaction


class TestRunInTransaction:
    def test_returns_the_work_result_and_commits(self, db, session):
        def work(uow):
            pvz = uow.pickup_points.add(PickupPoint.register("Санкт-Петербург"))
            return pvz.id

        pvz_id = run_in_transaction(work)

        assert db.session.get(PickupPoint, pvz_id) is not None

    def test_reraises_and_rolls_back(self, db, session):
        created = []

        def work(uow):
            pvz = uow.pickup_points.add(PickupPoint.register("Москва"))
            created.append(pvz.id)
            raise LookupError("nope")

        with pytest.raises(LookupError):
            run_in_transaction(work)

        assert db.session.get(PickupPoint, created[0]) is None

    def test_each_call_is_independent(self, db, session):
        def work(uow):
            return uow.pickup_points.add(PickupPoint.register("Казань")).id

        first, second = run_in_transaction(work), run_in_transaction(work)

        assert first != second
        stored = db.session.query(PickupPoint).filter(PickupPoint.id.in_([first, second]))
        assert stored.count() == 2
