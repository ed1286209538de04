"""
In-memory interval store.
Used by the engine tests. Scripted failures mimic an
unreachable or slow database:

- room id FAILING_ROOM_ID, or any date in FAILING_YEAR -> StorageUnavailable
- any date in TIMEOUT_YEAR -> StorageTimeout
"""

from datetime import date, datetime
from typing import Optional

from models.errors import RoomNotFound, StorageTimeout, StorageUnavailable
from models.restriction import IntervalStore, Reservation, RestrictionKind, Room, RoomRestriction

FAILING_ROOM_ID = 1000
FAILING_YEAR = 2060
TIMEOUT_YEAR = 2061

DEFAULT_ROOMS = [
    Room(1, "General's Quarters"),
    Room(2, "Major's Suite"),
]


class InMemoryIntervalStore(IntervalStore):
    """IntervalStore keeping rooms, reservations and restrictions in dicts."""

    def __init__(self, rooms=None, clock=datetime.now):
        self._clock = clock
        self.rooms = {room.id: room for room in (DEFAULT_ROOMS if rooms is None else rooms)}
        self.restrictions = {}
        self.reservations = {}
        self._next_restriction_id = 1
        self._next_reservation_id = 1

    def _check(self, room_id: Optional[int] = None, *dates) -> None:
        if room_id == FAILING_ROOM_ID:
            raise StorageUnavailable(f'Simulated failure for room {room_id}')
        for d in dates:
            if d is None:
                continue
            if d.year == TIMEOUT_YEAR:
                raise StorageTimeout(f'Simulated timeout for {d.isoformat()}')
            if d.year == FAILING_YEAR:
                raise StorageUnavailable(f'Simulated failure for {d.isoformat()}')

    def list_rooms(self) -> list:
        return sorted(self.rooms.values(), key=lambda room: room.name)

    def get_room(self, room_id: int) -> Room:
        self._check(room_id)
        try:
            return self.rooms[room_id]
        except KeyError:
            raise RoomNotFound(room_id) from None

    def find_overlapping(self, room_id: int, start: date, end: date) -> int:
        self._check(room_id, start, end)
        return sum(
            1 for r in self.restrictions.values()
            if r.room_id == room_id and r.overlaps(start, end)
        )

    def rooms_available(self, start: date, end: date) -> set:
        self._check(None, start, end)
        taken = {r.room_id for r in self.restrictions.values() if r.overlaps(start, end)}
        return set(self.rooms) - taken

    def restrictions_in_range(self, room_id: int, start: date, end: date) -> list:
        self._check(room_id, start, end)
        found = [
            r for r in self.restrictions.values()
            if r.room_id == room_id and r.end_date > start and r.start_date <= end
        ]
        return sorted(found, key=lambda r: (r.start_date, r.id))

    def insert(self, restriction: RoomRestriction) -> int:
        restriction.validate()
        self._check(restriction.room_id, restriction.start_date, restriction.end_date)
        if restriction.room_id not in self.rooms:
            raise StorageUnavailable(f'Unknown room {restriction.room_id}')
        if restriction.is_reservation and restriction.reservation_id not in self.reservations:
            raise StorageUnavailable(f'Unknown reservation {restriction.reservation_id}')

        now = self._clock()
        restriction.id = self._next_restriction_id
        restriction.created_at = now
        restriction.updated_at = now
        self._next_restriction_id += 1
        self.restrictions[restriction.id] = restriction
        return restriction.id

    def delete_by_id(self, restriction_id: int, kind: Optional[RestrictionKind] = None) -> bool:
        restriction = self.restrictions.get(restriction_id)
        if restriction is None:
            return False
        if kind is not None and restriction.restriction_kind != kind:
            return False
        self._check(restriction.room_id, restriction.start_date)
        del self.restrictions[restriction_id]
        return True

    def insert_reservation(self, reservation: Reservation) -> int:
        self._check(reservation.room_id, reservation.start_date, reservation.end_date)
        if reservation.room_id not in self.rooms:
            raise StorageUnavailable(f'Unknown room {reservation.room_id}')

        now = self._clock()
        reservation.id = self._next_reservation_id
        reservation.created_at = now
        reservation.updated_at = now
        self._next_reservation_id += 1
        self.reservations[reservation.id] = reservation
        return reservation.id
