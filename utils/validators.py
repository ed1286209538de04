"""
Input validation helper functions.
Provides validation for common input types.
"""

import re


def validate_email(email: str) -> bool:
    """
    Validate email format.

    Args:
        email: Email address to validate

    Returns:
        True if valid email format
    """
    if not email:
        return False

    pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
    return bool(re.match(pattern, email))


def validate_phone(phone: str) -> bool:
    """
    Validate a phone number loosely.
    Accepts an optional leading +, then 7 to 15 digits with spaces,
    dashes, dots or parentheses as separators.

    Args:
        phone: Phone number to validate

    Returns:
        True if valid phone format
    """
    if not phone:
        return False

    cleaned = re.sub(r'[\s\-\.\(\)]', '', phone)
    return bool(re.match(r'^\+?[0-9]{7,15}$', cleaned))


def validate_password(password: str, min_length: int = 6) -> tuple:
    """
    Validate password strength.

    Args:
        password: Password to validate
        min_length: Minimum password length

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not password:
        return False, 'Password is required'

    if len(password) < min_length:
        return False, f'Password must be at least {min_length} characters long'

    return True, ''


def validate_year_month(year, month) -> bool:
    """Check a calendar year/month pair, accepting strings from query args."""
    try:
        year = int(year)
        month = int(month)
    except (TypeError, ValueError):
        return False
    return 1 <= year <= 9999 and 1 <= month <= 12


def sanitize_input(text: str, max_length: int = None) -> str:
    """
    Sanitize text input by trimming and limiting length.

    Args:
        text: Text to sanitize
        max_length: Maximum length (optional)

    Returns:
        Sanitized text
    """
    if not text:
        return ''

    sanitized = text.strip()

    if max_length and len(sanitized) > max_length:
        sanitized = sanitized[:max_length]

    return sanitized
