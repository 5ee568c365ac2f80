"""Unit tests for ReceptionRepository."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

import pytest

from pvz_app.models.reception import OPEN_RECEPTION_INDEX, Reception, ReceptionStatus
from pvz_app.repositories.reception import ReceptionRepository
from pvz_app.services._shared.errors import ConflictError, NotFoundError
from tests.factories.pickup_point import PickupPointFactory
from tests.factories.reception import ReceptionFactory


def _dt(day: int) -> datetime:
    return datetime(2025, 4, day, 9, 0, tzinfo=UTC)


class TestReceptionRepository:
    @pytest.fixture()
    def repo(self) -> ReceptionRepository:
        return ReceptionRepository()

    def test_get_open_for_pvz_ignores_closed_receptions(self, repo, session):
        pvz = PickupPointFactory()
        ReceptionFactory(pickup_point=pvz, date_time=_dt(1), closed=True)
        open_one = ReceptionFactory(pickup_point=pvz, date_time=_dt(2))

        assert repo.get_open_for_pvz(session, pvz.id).id == open_one.id
        assert repo.get_open_for_pvz(session, pvz.id, for_update=True).id == open_one.id

    def test_get_open_for_pvz_returns_none_without_open_reception(self, repo, session):
        pvz = PickupPointFactory()
        ReceptionFactory(pickup_point=pvz, closed=True)

        assert repo.get_open_for_pvz(session, pvz.id) is None

    def test_get_latest_for_pvz_is_status_agnostic(self, repo, session):
        pvz = PickupPointFactory()
        ReceptionFactory(pickup_point=pvz, date_time=_dt(1), closed=True)
        latest = ReceptionFactory(pickup_point=pvz, date_time=_dt(3), closed=True)

        assert repo.get_latest_for_pvz(session, pvz.id).id == latest.id
        assert repo.get_latest_for_pvz(session, PickupPointFactory().id) is None

    def test_add_second_open_reception_raises_conflict_on_index(self, repo, session):
        """
        GIVEN an open reception
        WHEN a second open reception is added for the same pickup point
        THEN ConflictError carries the open-reception index name.
        """
        existing = ReceptionFactory()

        with pytest.raises(ConflictError) as excinfo:
            repo.add(session, Reception.open_for(existing.pvz_id))
        session.rollback()

        assert excinfo.value.constraint == OPEN_RECEPTION_INDEX

    def test_close_is_conditional(self, repo, session):
        reception = ReceptionFactory()

        assert repo.close(session, reception.id) is True
        assert reception.status == ReceptionStatus.CLOSED.value
        assert repo.close(session, reception.id) is False

    def test_close_unknown_reception_raises_not_found(self, repo, session):
        with pytest.raises(NotFoundError):
            repo.close(session, uuid.uuid4())

    def test_list_for_pvzs_filters_by_window_and_orders_oldest_first(self, repo, session):
        first_pvz, second_pvz = PickupPointFactory(), PickupPointFactory()
        a = ReceptionFactory(pickup_point=first_pvz, date_time=_dt(2), closed=True)
        b = ReceptionFactory(pickup_point=first_pvz, date_time=_dt(6))
        ReceptionFactory(pickup_point=second_pvz, date_time=_dt(20))

        everything = repo.list_for_pvzs(session, [first_pvz.id, second_pvz.id])
        windowed = repo.list_for_pvzs(
            session, [first_pvz.id, second_pvz.id], date_from=_dt(1), date_to=_dt(10)
        )

        assert len(everything) == 3
        assert [r.id for r in windowed] == [a.id, b.id]
        assert repo.list_for_pvzs(session, []) == []
