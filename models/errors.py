"""
Booking domain errors.
Raised by the interval stores and the availability/calendar operations,
handled by the route layer.
"""


class BookingError(Exception):
    """Base class for all booking engine errors."""


class InvalidRange(BookingError, ValueError):
    """Start date is not before end date, or a date could not be parsed."""


class RoomNotFound(BookingError):
    """Requested room does not exist."""

    def __init__(self, room_id):
        super().__init__(f'Room {room_id} not found')
        self.room_id = room_id


class StorageUnavailable(BookingError):
    """Backing store could not complete the operation."""


class StorageTimeout(StorageUnavailable):
    """Backing store did not answer within the storage timeout."""


class MissingCacheState(BookingError):
    """No cached block map for a room (calendar POST without a prior GET)."""

    def __init__(self, room_id):
        super().__init__(f'No cached block map for room {room_id}')
        self.room_id = room_id


class ConcurrentBookingConflict(BookingError):
    """Room was taken between the availability check and the insert."""
