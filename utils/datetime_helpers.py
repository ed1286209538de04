"""Date helpers for the bookings application."""

import calendar
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from flask import current_app

DATE_FORMAT = '%Y-%m-%d'


def get_timezone() -> ZoneInfo:
    """Get the configured timezone."""
    tz_name = current_app.config.get('TIMEZONE', 'UTC')
    return ZoneInfo(tz_name)


def get_today() -> date:
    """Get today's date in the configured timezone."""
    return datetime.now(get_timezone()).date()


def make_clock(tz_name: str):
    """Build a clock callable returning the current time in a timezone."""
    tz = ZoneInfo(tz_name)

    def clock() -> datetime:
        return datetime.now(tz)

    return clock


def parse_date(value: str) -> date:
    """
    Parse a YYYY-MM-DD string.

    Raises:
        ValueError: If the value is empty or not in YYYY-MM-DD format
    """
    if not value:
        raise ValueError('Date is required')
    return datetime.strptime(value.strip(), DATE_FORMAT).date()


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def month_bounds(year: int, month: int) -> tuple:
    """First and last day (inclusive) of a month."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def iter_days(first: date, last: date):
    """Yield every day from first to last inclusive."""
    current = first
    while current <= last:
        yield current
        current += timedelta(days=1)


def shift_month(year: int, month: int, delta: int) -> tuple:
    """(year, month) moved by delta months."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1
