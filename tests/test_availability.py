"""
Tests for room availability over half-open date ranges.
"""

import pytest
from datetime import date

from models.availability import available_rooms, is_room_available, parse_date_range
from models.errors import InvalidRange, StorageUnavailable
from models.restriction import RestrictionKind, RoomRestriction


def _block(ctx, room_id, start, end):
    return ctx.store.insert(RoomRestriction(
        room_id=room_id, start_date=start, end_date=end,
        restriction_kind=RestrictionKind.OWNER_BLOCK,
    ))


class TestIsRoomAvailable:
    """Tests for single room checks."""

    def test_free_room(self, memory_ctx):
        assert is_room_available(memory_ctx, 1, date(2050, 1, 1), date(2050, 1, 2)) is True

    def test_back_to_back_bookings(self, memory_ctx):
        """Checkout day can be the next arrival day."""
        _block(memory_ctx, 1, date(2050, 1, 1), date(2050, 1, 5))

        assert is_room_available(memory_ctx, 1, date(2050, 1, 5), date(2050, 1, 8)) is True
        assert is_room_available(memory_ctx, 1, date(2049, 12, 28), date(2050, 1, 1)) is True

    def test_overlap_not_available(self, memory_ctx):
        _block(memory_ctx, 1, date(2050, 1, 1), date(2050, 1, 5))

        assert is_room_available(memory_ctx, 1, date(2050, 1, 4), date(2050, 1, 6)) is False
        assert is_room_available(memory_ctx, 1, date(2050, 1, 2), date(2050, 1, 3)) is False

    def test_invalid_range(self, memory_ctx):
        with pytest.raises(InvalidRange):
            is_room_available(memory_ctx, 1, date(2050, 1, 5), date(2050, 1, 5))
        with pytest.raises(InvalidRange):
            is_room_available(memory_ctx, 1, date(2050, 1, 6), date(2050, 1, 5))

    def test_storage_failure_propagates(self, memory_ctx):
        with pytest.raises(StorageUnavailable):
            is_room_available(memory_ctx, 1, date(2060, 1, 1), date(2060, 1, 2))

    def test_sqlite_store(self, ctx):
        """Same answers through the sqlite store."""
        _block(ctx, 1, date(2050, 1, 1), date(2050, 1, 5))

        assert is_room_available(ctx, 1, date(2050, 1, 5), date(2050, 1, 6)) is True
        assert is_room_available(ctx, 1, date(2050, 1, 4), date(2050, 1, 6)) is False


class TestAvailableRooms:
    """Tests for multi-room search."""

    def test_blocked_room_excluded_in_name_order(self, memory_ctx):
        _block(memory_ctx, 2, date(2050, 1, 1), date(2050, 1, 3))

        rooms = available_rooms(memory_ctx, date(2050, 1, 2), date(2050, 1, 4))

        assert [room.id for room in rooms] == [3, 1]
        assert [room.name for room in rooms] == ['Colonel Suite', "General's Quarters"]

    def test_no_availability_is_empty_list(self, memory_ctx):
        for room_id in (1, 2, 3):
            _block(memory_ctx, room_id, date(2050, 1, 1), date(2050, 1, 10))

        assert available_rooms(memory_ctx, date(2050, 1, 2), date(2050, 1, 3)) == []

    def test_invalid_range(self, memory_ctx):
        with pytest.raises(InvalidRange):
            available_rooms(memory_ctx, date(2050, 1, 3), date(2050, 1, 2))

    def test_timeout_propagates(self, memory_ctx):
        with pytest.raises(StorageUnavailable):
            available_rooms(memory_ctx, date(2061, 1, 1), date(2061, 1, 2))


class TestParseDateRange:
    """Tests for parsing posted date strings."""

    def test_valid(self):
        assert parse_date_range('2050-01-01', '2050-01-02') == (date(2050, 1, 1), date(2050, 1, 2))

    def test_unparsable(self):
        with pytest.raises(InvalidRange):
            parse_date_range('01/01/2050', '2050-01-02')

    def test_missing(self):
        with pytest.raises(InvalidRange):
            parse_date_range('', '2050-01-02')
        with pytest.raises(InvalidRange):
            parse_date_range(None, None)

    def test_same_day(self):
        with pytest.raises(InvalidRange):
            parse_date_range('2050-01-01', '2050-01-01')
