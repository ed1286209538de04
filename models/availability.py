"""
Room availability.
Answers whether one room, or which rooms, are free for a half-open date
range [start, end). A checkout day can be the next guest's checkin day.
"""

from datetime import date

from models.errors import InvalidRange
from utils.datetime_helpers import parse_date


def validate_range(start: date, end: date) -> None:
    """
    Require start < end.

    Raises:
        InvalidRange: If start is on or after end
    """
    if start >= end:
        raise InvalidRange(f'Start date {start} must be before end date {end}')


def parse_date_range(start_str: str, end_str: str) -> tuple:
    """
    Parse YYYY-MM-DD strings into a validated (start, end) pair.

    Raises:
        InvalidRange: If a date is missing or unparsable, or start >= end
    """
    try:
        start = parse_date(start_str)
        end = parse_date(end_str)
    except (TypeError, ValueError) as e:
        raise InvalidRange(f"Can't parse date range {start_str!r} - {end_str!r}") from e

    validate_range(start, end)
    return start, end


def is_room_available(ctx, room_id: int, start: date, end: date) -> bool:
    """
    Check if a room has no restriction overlapping [start, end).

    Args:
        ctx: Booking context
        room_id: Room ID
        start: First night (inclusive)
        end: Checkout day (exclusive)

    Returns:
        bool: True if the room is free for the whole range

    Raises:
        InvalidRange: If start >= end
        StorageUnavailable: If the store fails
    """
    validate_range(start, end)
    count = ctx.store.find_overlapping(room_id, start, end)
    ctx.logger.debug(f'Room {room_id} {start}..{end}: {count} overlapping restrictions')
    return count == 0


def available_rooms(ctx, start: date, end: date) -> list:
    """
    Rooms free for the whole of [start, end), in room name order.

    An empty list means no availability; it is not an error.

    Raises:
        InvalidRange: If start >= end
        StorageUnavailable: If the store fails
    """
    validate_range(start, end)
    free_ids = ctx.store.rooms_available(start, end)
    return [room for room in ctx.store.list_rooms() if room.id in free_ids]
