"""
Reservation calendar projection.
Builds per-room day maps for one month: reservation_map holds the
reservation id occupying each day, block_map holds the id of the owner
block starting on each day. Zero means free.
"""

from dataclasses import dataclass, field
from datetime import date

from utils.datetime_helpers import format_date, iter_days, month_bounds, shift_month

FREE = 'free'
RESERVED = 'reserved'
BLOCKED = 'blocked'


@dataclass
class MonthCalendar:
    year: int
    month: int
    first_of_month: date
    last_of_month: date
    rooms: list
    days: list = field(default_factory=list)
    reservation_maps: dict = field(default_factory=dict)
    block_maps: dict = field(default_factory=dict)

    @property
    def days_in_month(self) -> int:
        return self.last_of_month.day

    @property
    def navigation(self) -> dict:
        """Month/year strings (MM, YYYY) for previous, current and next month."""
        last_year, last_month = shift_month(self.year, self.month, -1)
        next_year, next_month = shift_month(self.year, self.month, 1)
        return {
            'this_month': f'{self.month:02d}',
            'this_month_year': f'{self.year:04d}',
            'last_month': f'{last_month:02d}',
            'last_month_year': f'{last_year:04d}',
            'next_month': f'{next_month:02d}',
            'next_month_year': f'{next_year:04d}',
        }

    def day_status(self, room_id: int, day: str) -> str:
        """Classify a day for a room; a reservation wins over a block."""
        if self.reservation_maps[room_id].get(day, 0) > 0:
            return RESERVED
        if self.block_maps[room_id].get(day, 0) > 0:
            return BLOCKED
        return FREE

    def summary(self) -> dict:
        """Per-day counts of free, reserved and blocked rooms across all rooms."""
        result = {}
        total = len(self.rooms)
        for day in self.days:
            counts = {FREE: 0, RESERVED: 0, BLOCKED: 0}
            for room in self.rooms:
                counts[self.day_status(room.id, day)] += 1
            occupied = counts[RESERVED] + counts[BLOCKED]
            counts['total'] = total
            counts['occupancy_rate'] = round(occupied / total * 100, 1) if total > 0 else 0
            result[day] = counts
        return result


def empty_day_map(first: date, last: date) -> dict:
    return {format_date(d): 0 for d in iter_days(first, last)}


def project_room(ctx, room_id: int, first: date, last: date) -> tuple:
    """
    Build (reservation_map, block_map) for one room over [first, last].

    A reservation stamps every day from its start_date through its
    end_date inclusive; a block stamps only its start_date. Days outside
    the window are skipped, the stored records are not touched.
    """
    reservation_map = empty_day_map(first, last)
    block_map = empty_day_map(first, last)

    for restriction in ctx.store.restrictions_in_range(room_id, first, last):
        if restriction.is_reservation:
            stamp_from = max(restriction.start_date, first)
            stamp_to = min(restriction.end_date, last)
            for d in iter_days(stamp_from, stamp_to):
                reservation_map[format_date(d)] = restriction.reservation_id
        else:
            day = format_date(restriction.start_date)
            if day in block_map:
                block_map[day] = restriction.id

    return reservation_map, block_map


def project_month(ctx, year: int, month: int, cache=None, rooms=None) -> MonthCalendar:
    """
    Project the reservation calendar of a month for every room.

    Args:
        ctx: Booking context
        year: Calendar year
        month: Calendar month (1-12)
        cache: Optional BlockMapCache receiving each room's block map
        rooms: Rooms to project (default: all rooms in name order)

    Returns:
        MonthCalendar

    Raises:
        StorageUnavailable: If the store fails
    """
    first, last = month_bounds(year, month)
    if rooms is None:
        rooms = ctx.store.list_rooms()

    calendar = MonthCalendar(
        year=year,
        month=month,
        first_of_month=first,
        last_of_month=last,
        rooms=rooms,
        days=[format_date(d) for d in iter_days(first, last)],
    )

    for room in rooms:
        reservation_map, block_map = project_room(ctx, room.id, first, last)
        calendar.reservation_maps[room.id] = reservation_map
        calendar.block_maps[room.id] = block_map

        if cache is not None:
            cache.put(room.id, block_map)

    return calendar
