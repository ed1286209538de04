"""
Pytest configuration and fixtures.
Ensures tests use an isolated test database, not the production database.
"""

import os
import logging
import pytest
import tempfile

# Set test database path BEFORE importing app
# This ensures all tests use an isolated database
TEST_DB_PATH = os.path.join(tempfile.gettempdir(), 'bookings_test.db')
os.environ['DATABASE_PATH'] = TEST_DB_PATH


@pytest.fixture(scope='session', autouse=True)
def setup_test_environment():
    """Set up test environment before any tests run."""
    os.environ['DATABASE_PATH'] = TEST_DB_PATH
    os.environ['FLASK_ENV'] = 'test'

    yield

    # Cleanup: remove test database after all tests
    if os.path.exists(TEST_DB_PATH):
        try:
            os.remove(TEST_DB_PATH)
        except PermissionError:
            pass  # Windows may have file locked


@pytest.fixture
def app():
    """Create test application with isolated database."""
    from app import create_app
    from database import init_db

    os.environ['DATABASE_PATH'] = TEST_DB_PATH

    app = create_app('test')
    app.config['TESTING'] = True
    app.config['WTF_CSRF_ENABLED'] = False
    app.config['DATABASE_PATH'] = TEST_DB_PATH

    with app.app_context():
        init_db()
        yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def authenticated_client(app, client):
    """Create authenticated test client."""
    with app.app_context():
        # Login as seeded admin
        client.post('/user/login', data={
            'email': 'admin@here.com',
            'password': 'admin123'
        }, follow_redirects=True)
    return client


@pytest.fixture
def ctx(app):
    """Booking context of the test application (sqlite store)."""
    from utils.booking_context import get_booking_context
    ctx = get_booking_context()
    ctx.mailer.clear()
    return ctx


@pytest.fixture
def memory_ctx():
    """Booking context over an in-memory store, no Flask app needed."""
    from models.memory_store import InMemoryIntervalStore
    from models.restriction import Room
    from utils.booking_context import BookingContext
    from utils.datetime_helpers import make_clock
    from utils.mailer import Mailer

    logger = logging.getLogger('bookings.tests')
    clock = make_clock('UTC')
    store = InMemoryIntervalStore(
        rooms=[Room(1, "General's Quarters"), Room(2, "Major's Suite"), Room(3, 'Colonel Suite')],
        clock=clock
    )
    return BookingContext(store=store, clock=clock, logger=logger, mailer=Mailer(logger))
