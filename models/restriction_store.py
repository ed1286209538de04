"""
SQLite interval store.
Raw parameterized queries over the rooms, reservations and
room_restrictions tables.
"""

import sqlite3
from contextlib import contextmanager
from datetime import date, datetime
from typing import Optional

from models.errors import RoomNotFound, StorageTimeout, StorageUnavailable
from models.restriction import (
    IntervalStore, Reservation, RestrictionKind, Room, RoomRestriction, as_date
)


@contextmanager
def translate_storage_errors(conn=None):
    """
    Map sqlite3 failures onto StorageTimeout / StorageUnavailable.

    A locked or busy database means the connection timeout expired.
    Rolls back the open transaction when a connection is given.
    """
    try:
        yield
    except sqlite3.OperationalError as e:
        if conn is not None:
            conn.rollback()
        message = str(e).lower()
        if 'locked' in message or 'busy' in message:
            raise StorageTimeout(str(e)) from e
        raise StorageUnavailable(str(e)) from e
    except sqlite3.Error as e:
        if conn is not None:
            conn.rollback()
        raise StorageUnavailable(str(e)) from e


def _restriction_from_row(row) -> RoomRestriction:
    return RoomRestriction(
        id=row['id'],
        room_id=row['room_id'],
        start_date=as_date(row['start_date']),
        end_date=as_date(row['end_date']),
        reservation_id=row['reservation_id'],
        restriction_kind=RestrictionKind(row['restriction_id']),
    )


class SqliteIntervalStore(IntervalStore):
    """
    IntervalStore backed by sqlite.

    Args:
        connect: Callable returning an open sqlite3.Connection
            (get_db inside a Flask app context)
        clock: Callable returning the current datetime for timestamps
    """

    def __init__(self, connect, clock=datetime.now):
        self._connect = connect
        self._clock = clock

    def _db(self):
        with translate_storage_errors():
            return self._connect()

    def list_rooms(self) -> list:
        conn = self._db()
        with translate_storage_errors():
            cursor = conn.execute('SELECT id, room_name FROM rooms ORDER BY room_name')
            return [Room(row['id'], row['room_name']) for row in cursor.fetchall()]

    def get_room(self, room_id: int) -> Room:
        conn = self._db()
        with translate_storage_errors():
            row = conn.execute(
                'SELECT id, room_name FROM rooms WHERE id = ?', (room_id,)
            ).fetchone()
        if row is None:
            raise RoomNotFound(room_id)
        return Room(row['id'], row['room_name'])

    def find_overlapping(self, room_id: int, start: date, end: date) -> int:
        conn = self._db()
        with translate_storage_errors():
            row = conn.execute('''
                SELECT COUNT(id) AS num_rows
                FROM room_restrictions
                WHERE room_id = ?
                  AND end_date > ?
                  AND start_date < ?
            ''', (room_id, start.isoformat(), end.isoformat())).fetchone()
        return row['num_rows']

    def rooms_available(self, start: date, end: date) -> set:
        conn = self._db()
        with translate_storage_errors():
            cursor = conn.execute('''
                SELECT r.id
                FROM rooms r
                WHERE r.id NOT IN (
                    SELECT rr.room_id FROM room_restrictions rr
                    WHERE rr.end_date > ?
                      AND rr.start_date < ?
                )
            ''', (start.isoformat(), end.isoformat()))
            return {row['id'] for row in cursor.fetchall()}

    def restrictions_in_range(self, room_id: int, start: date, end: date) -> list:
        conn = self._db()
        with translate_storage_errors():
            cursor = conn.execute('''
                SELECT rr.id, COALESCE(rr.reservation_id, 0) AS reservation_id,
                       rr.restriction_id, rr.room_id, rr.start_date, rr.end_date
                FROM room_restrictions rr
                WHERE rr.end_date > ?
                  AND rr.start_date <= ?
                  AND rr.room_id = ?
                ORDER BY rr.start_date, rr.id
            ''', (start.isoformat(), end.isoformat(), room_id))
            return [_restriction_from_row(row) for row in cursor.fetchall()]

    def insert(self, restriction: RoomRestriction) -> int:
        restriction.validate()
        now = self._clock()
        conn = self._db()
        with translate_storage_errors(conn):
            cursor = conn.execute('''
                INSERT INTO room_restrictions
                (start_date, end_date, room_id, reservation_id, restriction_id,
                 created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
            ''', (
                restriction.start_date.isoformat(),
                restriction.end_date.isoformat(),
                restriction.room_id,
                restriction.reservation_id or None,
                int(restriction.restriction_kind),
                now.isoformat(sep=' '),
                now.isoformat(sep=' ')
            ))
            conn.commit()
        restriction.id = cursor.lastrowid
        return restriction.id

    def delete_by_id(self, restriction_id: int, kind: Optional[RestrictionKind] = None) -> bool:
        query = 'DELETE FROM room_restrictions WHERE id = ?'
        params = [restriction_id]

        if kind is not None:
            query += ' AND restriction_id = ?'
            params.append(int(kind))

        conn = self._db()
        with translate_storage_errors(conn):
            cursor = conn.execute(query, params)
            conn.commit()
        return cursor.rowcount > 0

    def insert_reservation(self, reservation: Reservation) -> int:
        now = self._clock()
        conn = self._db()
        with translate_storage_errors(conn):
            cursor = conn.execute('''
                INSERT INTO reservations
                (first_name, last_name, email, phone, start_date, end_date,
                 room_id, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            ''', (
                reservation.first_name,
                reservation.last_name,
                reservation.email,
                reservation.phone,
                reservation.start_date.isoformat(),
                reservation.end_date.isoformat(),
                reservation.room_id,
                now.isoformat(sep=' '),
                now.isoformat(sep=' ')
            ))
            conn.commit()
        reservation.id = cursor.lastrowid
        return reservation.id
