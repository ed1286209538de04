"""
Tests for the in-memory interval store and its scripted failures.
"""

import pytest
from datetime import date

from models.errors import RoomNotFound, StorageTimeout, StorageUnavailable
from models.memory_store import FAILING_ROOM_ID, InMemoryIntervalStore
from models.restriction import Reservation, RestrictionKind, RoomRestriction


def _block(room_id, start, end):
    return RoomRestriction(
        room_id=room_id, start_date=start, end_date=end,
        restriction_kind=RestrictionKind.OWNER_BLOCK,
    )


class TestInMemoryStore:
    """Behaviour matching the sqlite store."""

    def test_default_rooms(self):
        store = InMemoryIntervalStore()
        assert [room.name for room in store.list_rooms()] == ["General's Quarters", "Major's Suite"]

    def test_get_room_not_found(self):
        with pytest.raises(RoomNotFound):
            InMemoryIntervalStore().get_room(42)

    def test_overlap_and_delete(self):
        store = InMemoryIntervalStore()
        block_id = store.insert(_block(1, date(2050, 6, 10), date(2050, 6, 11)))

        assert store.find_overlapping(1, date(2050, 6, 9), date(2050, 6, 12)) == 1
        assert store.find_overlapping(1, date(2050, 6, 11), date(2050, 6, 12)) == 0
        assert store.delete_by_id(block_id, kind=RestrictionKind.OWNER_BLOCK) is True
        assert store.delete_by_id(block_id) is False

    def test_reservation_restriction_needs_live_reservation(self):
        store = InMemoryIntervalStore()
        restriction = RoomRestriction(
            room_id=1, start_date=date(2050, 6, 10), end_date=date(2050, 6, 12),
            reservation_id=7, restriction_kind=RestrictionKind.RESERVATION_HELD,
        )
        with pytest.raises(StorageUnavailable):
            store.insert(restriction)

    def test_reservation_restriction_with_reservation(self):
        store = InMemoryIntervalStore()
        reservation_id = store.insert_reservation(Reservation(
            first_name='Jane', last_name='Doe', email='jane@doe.com', room_id=1,
            start_date=date(2050, 6, 10), end_date=date(2050, 6, 12),
        ))
        store.insert(RoomRestriction(
            room_id=1, start_date=date(2050, 6, 10), end_date=date(2050, 6, 12),
            reservation_id=reservation_id, restriction_kind=RestrictionKind.RESERVATION_HELD,
        ))

        found = store.restrictions_in_range(1, date(2050, 6, 1), date(2050, 6, 30))
        assert found[0].reservation_id == reservation_id


class TestFailureInjection:
    """Scripted failures for rooms and years."""

    def test_failing_room(self):
        store = InMemoryIntervalStore()
        with pytest.raises(StorageUnavailable):
            store.find_overlapping(FAILING_ROOM_ID, date(2050, 1, 1), date(2050, 1, 2))

    def test_failing_year(self):
        store = InMemoryIntervalStore()
        with pytest.raises(StorageUnavailable):
            store.rooms_available(date(2060, 1, 1), date(2060, 1, 2))

    def test_timeout_year(self):
        store = InMemoryIntervalStore()
        with pytest.raises(StorageTimeout):
            store.find_overlapping(1, date(2061, 1, 1), date(2061, 1, 2))

    def test_timeout_is_storage_unavailable(self):
        assert issubclass(StorageTimeout, StorageUnavailable)
