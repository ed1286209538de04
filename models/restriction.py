"""
Room restriction model.
Record types for rooms, reservations and restriction intervals, plus the
IntervalStore capability interface every storage backend implements.

Restriction intervals are half-open: [start_date, end_date). Two intervals
overlap when existing.end_date > candidate.start AND existing.start_date <
candidate.end, so a checkout day may be the next guest's checkin day.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime
from enum import IntEnum
from typing import Optional

from models.errors import InvalidRange


class RestrictionKind(IntEnum):
    """Why a room is unavailable for an interval."""

    RESERVATION_HELD = 1
    OWNER_BLOCK = 2


@dataclass
class Room:
    id: int
    name: str


@dataclass
class RoomRestriction:
    """A stored interval of room unavailability."""

    room_id: int
    start_date: date
    end_date: date
    restriction_kind: RestrictionKind
    reservation_id: int = 0
    id: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_reservation(self) -> bool:
        return self.reservation_id > 0

    def overlaps(self, start: date, end: date) -> bool:
        """True if this interval overlaps [start, end)."""
        return self.end_date > start and self.start_date < end

    def validate(self) -> None:
        """
        Check the record invariants before it is stored.

        Raises:
            InvalidRange: If start_date is not before end_date
            ValueError: If the reservation id does not match the kind
        """
        if self.start_date >= self.end_date:
            raise InvalidRange(
                f'Restriction start {self.start_date} must be before end {self.end_date}'
            )

        if self.restriction_kind == RestrictionKind.RESERVATION_HELD and not self.reservation_id:
            raise ValueError('A reservation restriction needs a reservation id')

        if self.restriction_kind == RestrictionKind.OWNER_BLOCK and self.reservation_id:
            raise ValueError('An owner block cannot carry a reservation id')


@dataclass
class Reservation:
    """A guest reservation for one room and a date range."""

    first_name: str
    last_name: str
    email: str
    room_id: int
    start_date: date
    end_date: date
    phone: str = ''
    processed: bool = False
    id: int = 0
    room: Optional[Room] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_session(self) -> dict:
        """Serialize to plain values for the session store."""
        return {
            'id': self.id,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'email': self.email,
            'phone': self.phone,
            'room_id': self.room_id,
            'room_name': self.room.name if self.room else '',
            'start_date': self.start_date.isoformat() if self.start_date else '',
            'end_date': self.end_date.isoformat() if self.end_date else '',
        }

    @classmethod
    def from_session(cls, data: dict) -> 'Reservation':
        """Rebuild a reservation stored with to_session()."""
        start = data.get('start_date')
        end = data.get('end_date')
        room_id = int(data.get('room_id') or 0)
        room_name = data.get('room_name')
        return cls(
            id=int(data.get('id') or 0),
            first_name=data.get('first_name', ''),
            last_name=data.get('last_name', ''),
            email=data.get('email', ''),
            phone=data.get('phone', ''),
            room_id=room_id,
            start_date=date.fromisoformat(start) if start else None,
            end_date=date.fromisoformat(end) if end else None,
            room=Room(room_id, room_name) if room_name else None,
        )


def as_date(value) -> date:
    """Coerce a stored date value (date, datetime or ISO string) to date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


class IntervalStore(ABC):
    """
    Storage capability for room restriction intervals.

    Implementations raise StorageUnavailable (or StorageTimeout) when the
    backing store fails; callers decide whether to retry.
    """

    @abstractmethod
    def list_rooms(self) -> list:
        """All rooms ordered by name."""

    @abstractmethod
    def get_room(self, room_id: int) -> Room:
        """Room by id. Raises RoomNotFound."""

    @abstractmethod
    def find_overlapping(self, room_id: int, start: date, end: date) -> int:
        """Count restrictions of a room overlapping [start, end)."""

    @abstractmethod
    def rooms_available(self, start: date, end: date) -> set:
        """Ids of rooms with no restriction overlapping [start, end)."""

    @abstractmethod
    def restrictions_in_range(self, room_id: int, start: date, end: date) -> list:
        """
        Restrictions of a room touching the display window.

        Matches end_date > start AND start_date <= end, so a restriction
        starting on the last visible day is included.
        """

    @abstractmethod
    def insert(self, restriction: RoomRestriction) -> int:
        """Store a restriction and return its id."""

    @abstractmethod
    def delete_by_id(self, restriction_id: int, kind: Optional[RestrictionKind] = None) -> bool:
        """Delete a restriction. False if nothing matched."""

    @abstractmethod
    def insert_reservation(self, reservation: Reservation) -> int:
        """Store a reservation and return its id."""
