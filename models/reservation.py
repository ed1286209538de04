"""
Reservation data access functions.

This module re-exports the reservation functions from the split modules:
- reservation_crud.py: Create, read, update, delete operations
- availability.py: Room availability over date ranges
- reservation_calendar.py: Monthly calendar projection
- calendar_reconciler.py: Calendar block edits
"""

from .reservation_crud import (
    create_reservation,
    send_reservation_notifications,
    get_all_reservations,
    get_new_reservations,
    get_reservation_by_id,
    update_reservation,
    mark_reservation_processed,
    delete_reservation,
)

from .availability import (
    parse_date_range,
    is_room_available,
    available_rooms,
)

from .reservation_calendar import project_month

from .calendar_reconciler import reconcile_calendar

__all__ = [
    # CRUD
    'create_reservation',
    'send_reservation_notifications',
    'get_all_reservations',
    'get_new_reservations',
    'get_reservation_by_id',
    'update_reservation',
    'mark_reservation_processed',
    'delete_reservation',

    # Availability
    'parse_date_range',
    'is_room_available',
    'available_rooms',

    # Calendar
    'project_month',
    'reconcile_calendar',
]
