"""
User model and data access functions.
Handles staff authentication, CRUD operations, and Flask-Login integration.
"""

from werkzeug.security import generate_password_hash, check_password_hash
from database import get_db

ACCESS_LEVEL_STAFF = 1
ACCESS_LEVEL_ADMIN = 3


class User:
    """
    User class for Flask-Login integration.
    Wraps database row dictionary with required Flask-Login properties.
    """

    def __init__(self, user_dict):
        """
        Initialize User from database row.

        Args:
            user_dict: Dictionary with user data from database
        """
        self.id = user_dict['id']
        self.first_name = user_dict.get('first_name', '')
        self.last_name = user_dict.get('last_name', '')
        self.email = user_dict['email']
        self.access_level = user_dict.get('access_level', ACCESS_LEVEL_STAFF)
        self.created_at = user_dict.get('created_at')

    @property
    def full_name(self):
        return f'{self.first_name} {self.last_name}'.strip() or self.email

    @property
    def is_admin(self):
        return self.access_level >= ACCESS_LEVEL_ADMIN

    @property
    def is_authenticated(self):
        """Required by Flask-Login."""
        return True

    @property
    def is_active(self):
        """Required by Flask-Login."""
        return True

    @property
    def is_anonymous(self):
        """Required by Flask-Login."""
        return False

    def get_id(self):
        """Required by Flask-Login. Returns user ID as unicode string."""
        return str(self.id)


def get_user_by_id(user_id: int) -> dict:
    """
    Get user by ID.

    Args:
        user_id: User ID

    Returns:
        User dict or None if not found
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('SELECT * FROM users WHERE id = ?', (user_id,))
    row = cursor.fetchone()
    return dict(row) if row else None


def get_user_by_email(email: str) -> dict:
    """
    Get user by email.

    Args:
        email: Email to search for

    Returns:
        User dict or None if not found
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('SELECT * FROM users WHERE email = ?', (email.strip().lower(),))
    row = cursor.fetchone()
    return dict(row) if row else None


def create_user(email: str, password: str, first_name: str = '', last_name: str = '',
                access_level: int = ACCESS_LEVEL_STAFF) -> int:
    """
    Create new user with hashed password.

    Args:
        email: Unique email, used as login
        password: Plain text password (will be hashed)
        first_name: User's first name
        last_name: User's last name
        access_level: 1 staff, 3 admin

    Returns:
        New user ID

    Raises:
        sqlite3.IntegrityError if email already exists
    """
    db = get_db()
    password_hash = generate_password_hash(password)

    cursor = db.cursor()
    cursor.execute('''
        INSERT INTO users (first_name, last_name, email, password_hash, access_level)
        VALUES (?, ?, ?, ?, ?)
    ''', (first_name, last_name, email.strip().lower(), password_hash, access_level))

    db.commit()
    return cursor.lastrowid


def authenticate(email: str, password: str):
    """
    Look up a user by email and verify the password.

    Returns:
        User dict or None if the credentials do not match
    """
    user = get_user_by_email(email)
    if user and check_password(user, password):
        return user
    return None


def check_password(user_dict: dict, password: str) -> bool:
    """
    Verify password against stored hash.

    Args:
        user_dict: User dictionary with password_hash
        password: Plain text password to check

    Returns:
        True if password matches
    """
    return check_password_hash(user_dict['password_hash'], password)
