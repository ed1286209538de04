"""
Tests for input validation utilities.
"""

from utils.validators import (
    validate_email,
    validate_phone,
    validate_password,
    validate_year_month,
    sanitize_input
)


class TestValidateEmail:
    """Tests for email validation."""

    def test_valid_email(self):
        assert validate_email('user@example.com') is True
        assert validate_email('user.name@example.com') is True
        assert validate_email('user+tag@example.co.uk') is True

    def test_invalid_email(self):
        assert validate_email('') is False
        assert validate_email(None) is False
        assert validate_email('invalid') is False
        assert validate_email('missing@domain') is False
        assert validate_email('spaces in@email.com') is False


class TestValidatePhone:
    """Tests for phone validation."""

    def test_valid_phones(self):
        assert validate_phone('+1 555 123 4567') is True
        assert validate_phone('555-123-4567') is True
        assert validate_phone('(555) 123.4567') is True
        assert validate_phone('+34612345678') is True

    def test_invalid_phones(self):
        assert validate_phone('') is False
        assert validate_phone(None) is False
        assert validate_phone('12345') is False
        assert validate_phone('abc123456') is False


class TestValidatePassword:
    """Tests for password validation."""

    def test_valid(self):
        assert validate_password('secret123') == (True, '')

    def test_too_short(self):
        valid, message = validate_password('abc')
        assert valid is False
        assert '6' in message

    def test_missing(self):
        assert validate_password('')[0] is False


class TestValidateYearMonth:
    """Tests for calendar query parameters."""

    def test_valid(self):
        assert validate_year_month('2050', '06') is True
        assert validate_year_month(2050, 12) is True

    def test_invalid(self):
        assert validate_year_month('2050', '13') is False
        assert validate_year_month('2050', '0') is False
        assert validate_year_month('abcd', '06') is False
        assert validate_year_month(None, None) is False


class TestSanitizeInput:
    """Tests for input sanitizing."""

    def test_strip_and_limit(self):
        assert sanitize_input('  John  ') == 'John'
        assert sanitize_input('abcdef', max_length=3) == 'abc'
        assert sanitize_input(None) == ''
