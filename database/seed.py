"""
Database seed data.
Initial data population for fresh database installations.
"""

from werkzeug.security import generate_password_hash


def seed_database(db):
    """Insert initial seed data."""

    # 1. Restriction kinds
    restrictions_data = [
        (1, 'Reservation'),
        (2, 'Owner Block')
    ]

    for restriction_id, name in restrictions_data:
        db.execute('''
            INSERT INTO restrictions (id, restriction_name)
            VALUES (?, ?)
        ''', (restriction_id, name))

    # 2. Rooms
    rooms_data = [
        "General's Quarters",
        "Major's Suite"
    ]

    for room_name in rooms_data:
        db.execute('''
            INSERT INTO rooms (room_name)
            VALUES (?)
        ''', (room_name,))

    # 3. Admin user
    db.execute('''
        INSERT INTO users (first_name, last_name, email, password_hash, access_level)
        VALUES (?, ?, ?, ?, ?)
    ''', ('Admin', 'User', 'admin@here.com', generate_password_hash('admin123'), 3))
