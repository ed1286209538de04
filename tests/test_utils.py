"""
Tests for block cache, booking context and date helpers.
"""

import pytest
from datetime import date

from models.errors import MissingCacheState
from utils.block_cache import BlockMapCache
from utils.datetime_helpers import iter_days, month_bounds, parse_date, shift_month


class TestBlockMapCache:
    """Tests for the session keyed cache."""

    def test_put_and_pop(self):
        store = {}
        cache = BlockMapCache(store)
        cache.put(3, {'2050-06-10': 42})

        assert store == {'block_map_3': {'2050-06-10': 42}}
        assert cache.pop(3) == {'2050-06-10': 42}
        assert store == {}

    def test_missing(self):
        with pytest.raises(MissingCacheState):
            BlockMapCache({}).get(1)

    def test_values_coerced_to_int(self):
        cache = BlockMapCache({'block_map_1': {'2050-06-10': '42'}})
        assert cache.get(1) == {'2050-06-10': 42}


class TestBookingContext:
    """Tests for context construction."""

    def test_sqlite_store_by_default(self, app):
        from models.restriction_store import SqliteIntervalStore
        from utils.booking_context import get_booking_context

        ctx = get_booking_context()
        assert isinstance(ctx.store, SqliteIntervalStore)
        assert ctx.owner_email == 'me@there.com'
        assert ctx.recheck_availability is False

    def test_admin_listing_sees_engine_reservations(self, app):
        from models.reservation import create_reservation, get_new_reservations, get_reservation_by_id
        from models.restriction import Reservation
        from utils.booking_context import get_booking_context

        ctx = get_booking_context()
        reservation = create_reservation(ctx, Reservation(
            first_name='John', last_name='Smith', email='john@here.com',
            start_date=date(2050, 3, 1), end_date=date(2050, 3, 3), room_id=1
        ))

        assert [r.id for r in get_new_reservations()] == [reservation.id]
        assert get_reservation_by_id(reservation.id) is not None


class TestDateHelpers:
    """Tests for date helpers."""

    def test_month_bounds_leap_year(self):
        assert month_bounds(2048, 2) == (date(2048, 2, 1), date(2048, 2, 29))

    def test_iter_days_inclusive(self):
        days = list(iter_days(date(2050, 1, 30), date(2050, 2, 1)))
        assert days == [date(2050, 1, 30), date(2050, 1, 31), date(2050, 2, 1)]

    def test_shift_month(self):
        assert shift_month(2050, 1, -1) == (2049, 12)
        assert shift_month(2050, 12, 1) == (2051, 1)

    def test_parse_date(self):
        assert parse_date(' 2050-01-02 ') == date(2050, 1, 2)
        with pytest.raises(ValueError):
            parse_date('')
