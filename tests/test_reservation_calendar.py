"""
Tests for the monthly reservation calendar projection.
"""

from datetime import date

from models.reservation_calendar import BLOCKED, FREE, RESERVED, project_month
from models.restriction import Reservation, RestrictionKind, RoomRestriction
from utils.block_cache import BlockMapCache


def _block(ctx, room_id, start, end):
    return ctx.store.insert(RoomRestriction(
        room_id=room_id, start_date=start, end_date=end,
        restriction_kind=RestrictionKind.OWNER_BLOCK,
    ))


def _reservation(ctx, room_id, start, end):
    reservation_id = ctx.store.insert_reservation(Reservation(
        first_name='John', last_name='Smith', email='john@smith.com',
        room_id=room_id, start_date=start, end_date=end,
    ))
    ctx.store.insert(RoomRestriction(
        room_id=room_id, start_date=start, end_date=end, reservation_id=reservation_id,
        restriction_kind=RestrictionKind.RESERVATION_HELD,
    ))
    return reservation_id


class TestProjectMonth:
    """Tests for day map stamping."""

    def test_empty_month(self, memory_ctx):
        calendar = project_month(memory_ctx, 2050, 2)

        assert calendar.days_in_month == 28
        for room in calendar.rooms:
            assert set(calendar.reservation_maps[room.id].values()) == {0}
            assert set(calendar.block_maps[room.id].values()) == {0}
            assert len(calendar.block_maps[room.id]) == 28

    def test_reservation_stamps_through_end_date(self, memory_ctx):
        reservation_id = _reservation(memory_ctx, 1, date(2050, 6, 10), date(2050, 6, 12))

        reservation_map = project_month(memory_ctx, 2050, 6).reservation_maps[1]

        assert reservation_map['2050-06-09'] == 0
        assert reservation_map['2050-06-10'] == reservation_id
        assert reservation_map['2050-06-11'] == reservation_id
        assert reservation_map['2050-06-12'] == reservation_id
        assert reservation_map['2050-06-13'] == 0

    def test_block_stamps_start_day_only(self, memory_ctx):
        block_id = _block(memory_ctx, 1, date(2050, 6, 10), date(2050, 6, 13))

        block_map = project_month(memory_ctx, 2050, 6).block_maps[1]

        assert block_map['2050-06-10'] == block_id
        assert block_map['2050-06-11'] == 0

    def test_reservation_clipped_to_month(self, memory_ctx):
        reservation_id = _reservation(memory_ctx, 1, date(2050, 5, 30), date(2050, 6, 2))

        calendar = project_month(memory_ctx, 2050, 6)
        reservation_map = calendar.reservation_maps[1]

        assert set(reservation_map) == set(calendar.days)
        assert reservation_map['2050-06-01'] == reservation_id
        assert reservation_map['2050-06-02'] == reservation_id
        assert reservation_map['2050-06-03'] == 0

    def test_block_starting_last_month_not_stamped(self, memory_ctx):
        _block(memory_ctx, 1, date(2050, 5, 31), date(2050, 6, 2))

        block_map = project_month(memory_ctx, 2050, 6).block_maps[1]

        assert set(block_map.values()) == {0}

    def test_projection_is_idempotent(self, memory_ctx):
        _reservation(memory_ctx, 1, date(2050, 6, 10), date(2050, 6, 12))
        _block(memory_ctx, 2, date(2050, 6, 20), date(2050, 6, 21))

        first = project_month(memory_ctx, 2050, 6)
        second = project_month(memory_ctx, 2050, 6)

        assert first.reservation_maps == second.reservation_maps
        assert first.block_maps == second.block_maps

    def test_block_maps_cached(self, memory_ctx):
        block_id = _block(memory_ctx, 2, date(2050, 6, 20), date(2050, 6, 21))
        session = {}

        project_month(memory_ctx, 2050, 6, cache=BlockMapCache(session))

        assert session['block_map_2']['2050-06-20'] == block_id
        assert set(session) == {'block_map_1', 'block_map_2', 'block_map_3'}


class TestMonthCalendar:
    """Tests for navigation, status and summary."""

    def test_navigation_wraps_year(self, memory_ctx):
        nav = project_month(memory_ctx, 2050, 1).navigation

        assert nav['this_month'] == '01'
        assert nav['last_month'] == '12'
        assert nav['last_month_year'] == '2049'
        assert nav['next_month'] == '02'
        assert nav['next_month_year'] == '2050'

    def test_day_status_reservation_wins(self, memory_ctx):
        _reservation(memory_ctx, 1, date(2050, 6, 10), date(2050, 6, 11))
        _block(memory_ctx, 1, date(2050, 6, 11), date(2050, 6, 12))
        _block(memory_ctx, 1, date(2050, 6, 15), date(2050, 6, 16))

        calendar = project_month(memory_ctx, 2050, 6)

        assert calendar.day_status(1, '2050-06-10') == RESERVED
        assert calendar.day_status(1, '2050-06-11') == RESERVED
        assert calendar.day_status(1, '2050-06-15') == BLOCKED
        assert calendar.day_status(1, '2050-06-16') == FREE

    def test_summary(self, memory_ctx):
        _reservation(memory_ctx, 1, date(2050, 6, 10), date(2050, 6, 11))
        _block(memory_ctx, 2, date(2050, 6, 10), date(2050, 6, 11))

        summary = project_month(memory_ctx, 2050, 6).summary()

        day = summary['2050-06-10']
        assert day[RESERVED] == 1
        assert day[BLOCKED] == 1
        assert day[FREE] == 1
        assert day['total'] == 3
        assert day['occupancy_rate'] == 66.7
        assert summary['2050-06-01']['occupancy_rate'] == 0
