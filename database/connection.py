"""
Database connection management.
Handles per-request connections, initialization, and teardown.
"""

import os
import sqlite3
from flask import g, current_app


def get_db():
    """
    Get the request-scoped database connection with row factory.

    The connection waits at most STORAGE_TIMEOUT_SECONDS on a locked
    database before sqlite raises OperationalError.

    Returns:
        sqlite3.Connection: Database connection object
    """
    if 'db' not in g:
        db_path = current_app.config.get('DATABASE_PATH', 'instance/bookings.db')
        timeout = current_app.config.get('STORAGE_TIMEOUT_SECONDS', 3)

        directory = os.path.dirname(db_path)
        if directory and db_path != ':memory:' and not os.path.exists(directory):
            os.makedirs(directory, exist_ok=True)

        g.db = sqlite3.connect(db_path, timeout=timeout)
        g.db.row_factory = sqlite3.Row
        # Enable foreign key constraints
        g.db.execute('PRAGMA foreign_keys = ON')
    return g.db


def close_db(e=None):
    """
    Close database connection.

    Args:
        e: Exception if any (from Flask teardown context)
    """
    db = g.pop('db', None)
    if db is not None:
        db.close()


def init_db():
    """
    Initialize database: drop existing tables, create new schema, insert seed data.
    WARNING: This will delete all existing data!
    """
    from database.schema import drop_tables, create_tables, create_indexes
    from database.seed import seed_database

    db = get_db()

    # Drop existing tables (in reverse order of dependencies)
    drop_tables(db)

    # Create all tables
    create_tables(db)

    # Create indexes
    create_indexes(db)

    # Insert seed data
    seed_database(db)

    db.commit()
    current_app.logger.info('Database initialized at %s', current_app.config.get('DATABASE_PATH'))
