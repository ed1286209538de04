"""
Centralized UI messages.
All user-facing text in one place for consistency.
"""

MESSAGES = {
    # Success messages
    'login_success': 'Logged in successfully',
    'logout_success': 'Logged out successfully',
    'reservation_updated': 'Reservation updated',
    'reservation_processed': 'Reservation marked as processed',
    'reservation_deleted': 'Reservation deleted',
    'calendar_saved': 'Changes saved',
    'user_created': 'User {email} created',

    # Error messages
    'invalid_credentials': 'Invalid login credentials',
    'permission_denied': 'You do not have permission to access that page',
    'login_required': 'Please log in to access that page',
    'availability_error': "Can't get availability for rooms",
    'no_availability': 'No Availability',
    'invalid_date_range': 'Start date must be before end date',
    'invalid_dates': "Can't parse the requested dates",
    'room_not_found': 'Invalid room selected',
    'reservation_missing': "Can't get reservation from session",
    'reservation_not_found': 'Reservation not found',
    'reservation_failed': "Can't insert reservation into database",
    'reservation_conflict': 'That room was just booked for those dates, please search again',
    'calendar_partial': 'Some calendar changes could not be saved',
    'invalid_form': 'Please correct the errors in the form',
    'invalid_email': 'Invalid email address',
    'invalid_phone': 'Invalid phone number',
    'email_exists': 'A user with that email already exists',

    # Info messages
    'no_results': 'No results',

    # JSON availability messages
    'room_available': 'Available!',
    'room_unavailable': 'Not available',
    'json_error': 'Error connecting to database',
    'json_invalid': 'Error parsing form',

    # Module titles
    'dashboard': 'Dashboard',
    'reservations_new': 'New Reservations',
    'reservations_all': 'All Reservations',
    'reservations_calendar': 'Reservation Calendar',
}


def get_message(key: str, **kwargs) -> str:
    """
    Get message with optional formatting.

    Args:
        key: Message key
        **kwargs: Format parameters

    Returns:
        Formatted message or key if not found
    """
    message = MESSAGES.get(key, key)
    if kwargs:
        return message.format(**kwargs)
    return message
