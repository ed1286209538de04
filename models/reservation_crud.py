"""
Reservation CRUD operations.
Guest reservation creation (reservation row plus its held room restriction),
confirmation mails, and the staff console's read/update/delete queries.
"""

from models.availability import is_room_available, validate_range
from models.errors import ConcurrentBookingConflict
from models.restriction import Reservation, RestrictionKind, Room, RoomRestriction, as_date
from database import get_db
from utils.mailer import MailMessage


# =============================================================================
# CREATE
# =============================================================================

def create_reservation(ctx, reservation: Reservation) -> Reservation:
    """
    Store a reservation and the restriction holding its room.

    The two inserts are separate statements. Availability is checked by the
    search step beforehand, not here, unless the context asks for a recheck.

    Args:
        ctx: Booking context
        reservation: Reservation without id

    Returns:
        Reservation: The same object with id and room filled in

    Raises:
        InvalidRange: If start_date >= end_date
        RoomNotFound: If the room does not exist
        ConcurrentBookingConflict: If a recheck finds the room taken
        StorageUnavailable: If either insert fails
    """
    validate_range(reservation.start_date, reservation.end_date)

    if reservation.room is None:
        reservation.room = ctx.store.get_room(reservation.room_id)

    if ctx.recheck_availability and not is_room_available(
        ctx, reservation.room_id, reservation.start_date, reservation.end_date
    ):
        raise ConcurrentBookingConflict(
            f'Room {reservation.room_id} was booked for '
            f'{reservation.start_date}..{reservation.end_date} in the meantime'
        )

    reservation_id = ctx.store.insert_reservation(reservation)
    ctx.logger.info(f'Reservation {reservation_id} created for room {reservation.room_id}')

    try:
        ctx.store.insert(RoomRestriction(
            room_id=reservation.room_id,
            start_date=reservation.start_date,
            end_date=reservation.end_date,
            reservation_id=reservation_id,
            restriction_kind=RestrictionKind.RESERVATION_HELD,
        ))
    except Exception:
        ctx.logger.error(
            f'Reservation {reservation_id} stored without its room restriction', exc_info=True
        )
        raise

    return reservation


def send_reservation_notifications(ctx, reservation: Reservation) -> None:
    """Queue the guest confirmation and the owner notification."""
    start = reservation.start_date.isoformat()
    end = reservation.end_date.isoformat()
    room_name = reservation.room.name if reservation.room else f'room {reservation.room_id}'

    ctx.mailer.send(MailMessage(
        to=reservation.email,
        sender=ctx.mail_from,
        subject='Reservation Confirmation',
        body=(
            '<strong>Reservation Confirmation</strong><br>'
            f'Dear {reservation.first_name}, <br>'
            f'This is to confirm your reservation from {start} to {end}.'
        ),
    ))

    ctx.mailer.send(MailMessage(
        to=ctx.owner_email,
        sender=ctx.mail_from,
        subject='Reservation Notification',
        body=(
            '<strong>Reservation Notification</strong><br>'
            f'A reservation has been made for {room_name} from {start} to {end}.'
        ),
    ))


# =============================================================================
# READ
# =============================================================================

def _reservation_from_row(row) -> Reservation:
    return Reservation(
        id=row['id'],
        first_name=row['first_name'],
        last_name=row['last_name'],
        email=row['email'],
        phone=row['phone'] or '',
        room_id=row['room_id'],
        start_date=as_date(row['start_date']),
        end_date=as_date(row['end_date']),
        processed=bool(row['processed']),
        room=Room(row['room_id'], row['room_name']),
        created_at=row['created_at'],
        updated_at=row['updated_at'],
    )


_SELECT_RESERVATIONS = '''
    SELECT r.*, rm.room_name
    FROM reservations r
    LEFT JOIN rooms rm ON r.room_id = rm.id
'''


def get_all_reservations() -> list:
    """All reservations ordered by start date."""
    db = get_db()
    cursor = db.execute(_SELECT_RESERVATIONS + ' ORDER BY r.start_date ASC')
    return [_reservation_from_row(row) for row in cursor.fetchall()]


def get_new_reservations() -> list:
    """Reservations not yet processed by staff, ordered by start date."""
    db = get_db()
    cursor = db.execute(_SELECT_RESERVATIONS + ' WHERE r.processed = 0 ORDER BY r.start_date ASC')
    return [_reservation_from_row(row) for row in cursor.fetchall()]


def get_reservation_by_id(reservation_id: int):
    """
    Get a reservation by ID.

    Returns:
        Reservation or None if not found
    """
    db = get_db()
    row = db.execute(_SELECT_RESERVATIONS + ' WHERE r.id = ?', (reservation_id,)).fetchone()
    return _reservation_from_row(row) if row else None


# =============================================================================
# UPDATE / DELETE
# =============================================================================

def update_reservation(reservation_id: int, first_name: str, last_name: str,
                       email: str, phone: str) -> bool:
    """Update guest details. Dates and room are not editable here."""
    db = get_db()
    cursor = db.execute('''
        UPDATE reservations
        SET first_name = ?, last_name = ?, email = ?, phone = ?,
            updated_at = CURRENT_TIMESTAMP
        WHERE id = ?
    ''', (first_name, last_name, email, phone, reservation_id))
    db.commit()
    return cursor.rowcount > 0


def mark_reservation_processed(reservation_id: int, processed: bool = True) -> bool:
    db = get_db()
    cursor = db.execute('''
        UPDATE reservations
        SET processed = ?, updated_at = CURRENT_TIMESTAMP
        WHERE id = ?
    ''', (1 if processed else 0, reservation_id))
    db.commit()
    return cursor.rowcount > 0


def delete_reservation(reservation_id: int) -> bool:
    """
    Delete a reservation.

    Its held room restriction goes with it (ON DELETE CASCADE).
    """
    db = get_db()
    cursor = db.execute('DELETE FROM reservations WHERE id = ?', (reservation_id,))
    db.commit()
    return cursor.rowcount > 0
