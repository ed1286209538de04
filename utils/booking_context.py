"""
Booking context.
The explicit collaborator bundle (store, clock, logger, mailer, settings)
passed into every availability, calendar and reservation operation. Built
once by the application factory and kept on app.extensions.
"""

from dataclasses import dataclass

from flask import current_app

from utils.datetime_helpers import make_clock
from utils.mailer import Mailer

EXTENSION_KEY = 'booking_context'


@dataclass
class BookingContext:
    store: object
    clock: object
    logger: object
    mailer: Mailer
    mail_from: str = 'me@here.com'
    owner_email: str = 'me@there.com'
    recheck_availability: bool = False


def build_booking_context(app) -> BookingContext:
    """
    Create the booking context for an application.

    The interval store reads through the request-scoped sqlite connection,
    the same one the admin reservation queries use.
    """
    from database import get_db
    from models.restriction_store import SqliteIntervalStore

    clock = make_clock(app.config.get('TIMEZONE', 'UTC'))
    store = SqliteIntervalStore(get_db, clock=clock)

    return BookingContext(
        store=store,
        clock=clock,
        logger=app.logger,
        mailer=Mailer(app.logger, outbox_size=app.config.get('MAIL_OUTBOX_SIZE', 100)),
        mail_from=app.config.get('MAIL_FROM', 'me@here.com'),
        owner_email=app.config.get('OWNER_EMAIL', 'me@there.com'),
        recheck_availability=app.config.get('BOOKING_RECHECK_AVAILABILITY', False),
    )


def init_booking_context(app) -> BookingContext:
    ctx = build_booking_context(app)
    app.extensions[EXTENSION_KEY] = ctx
    return ctx


def get_booking_context() -> BookingContext:
    """Booking context of the current application."""
    return current_app.extensions[EXTENSION_KEY]
