"""Unit tests for PickupPointRepository."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from pvz_app.repositories.base import Pagination
from pvz_app.repositories.pickup_point import PickupPointRepository
from tests.factories.pickup_point import PickupPointFactory
from tests.factories.reception import ReceptionFactory


def _dt(day: int, hour: int = 10) -> datetime:
    return datetime(2025, 4, day, hour, 0, tzinfo=UTC)


class TestPickupPointRepository:
    @pytest.fixture()
    def repo(self) -> PickupPointRepository:
        return PickupPointRepository()

    def test_paginate_orders_by_registration_date_with_total(self, repo, session):
        """
        GIVEN five pickup points registered on consecutive days
        WHEN the second page of size two is requested
        THEN it holds the third and fourth oldest and the total counts all five.
        """
        points = [
            PickupPointFactory(registration_date=_dt(1) + timedelta(days=i)) for i in range(5)
        ]

        page = repo.paginate(session, Pagination(page=2, limit=2, sort=[]))

        assert [p.id for p in page.items] == [points[2].id, points[3].id]
        assert page.total == 5
        assert (page.page, page.limit) == (2, 2)

    def test_paginate_honours_whitelisted_sort_tokens(self, repo, session):
        older = PickupPointFactory(registration_date=_dt(1))
        newer = PickupPointFactory(registration_date=_dt(2))

        page = repo.paginate(
            session, Pagination(page=1, limit=10, sort=["-registration_date", "password"])
        )

        assert [p.id for p in page.items] == [newer.id, older.id]

    def test_date_window_keeps_points_with_a_matching_reception(self, repo, session):
        """
        GIVEN three points with receptions on days 5, 10 and 15
        WHEN filtering with a window and with each bound alone
        THEN only points with a reception inside the bounds are returned.
        """
        early, middle, late = (PickupPointFactory() for _ in range(3))
        ReceptionFactory(pickup_point=early, date_time=_dt(5), closed=True)
        ReceptionFactory(pickup_point=middle, date_time=_dt(10), closed=True)
        ReceptionFactory(pickup_point=late, date_time=_dt(15))
        PickupPointFactory()  # never had a reception

        everything = Pagination(page=1, limit=30, sort=[])
        window = repo.paginate(session, everything, date_from=_dt(8), date_to=_dt(12))
        from_only = repo.paginate(session, everything, date_from=_dt(10))
        to_only = repo.paginate(session, everything, date_to=_dt(10))

        assert {p.id for p in window.items} == {middle.id}
        assert window.total == 1
        assert {p.id for p in from_only.items} == {middle.id, late.id}
        assert {p.id for p in to_only.items} == {early.id, middle.id}

    def test_point_with_several_matching_receptions_is_listed_once(self, repo, session):
        pvz = PickupPointFactory()
        ReceptionFactory(pickup_point=pvz, date_time=_dt(3), closed=True)
        ReceptionFactory(pickup_point=pvz, date_time=_dt(4), closed=True)

        page = repo.paginate(
            session, Pagination(page=1, limit=10, sort=[]), date_from=_dt(1), date_to=_dt(30)
        )

        assert [p.id for p in page.items] == [pvz.id]
        assert page.total == 1
