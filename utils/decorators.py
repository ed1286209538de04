"""
Route decorators for authentication and authorization.
Provides access-level based control for staff routes.
"""

from functools import wraps
from flask import flash, abort
from flask_login import login_required, current_user

from utils.messages import get_message


def access_level_required(level: int):
    """
    Decorator to require a minimum access level for a route.

    Usage:
        @bp.route('/dashboard')
        @login_required
        @access_level_required(ACCESS_LEVEL_ADMIN)
        def dashboard():
            ...

    Args:
        level: Lowest access level allowed through

    Returns:
        Decorator function
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            if getattr(current_user, 'access_level', 0) < level:
                flash(get_message('permission_denied'), 'error')
                abort(403)

            return func(*args, **kwargs)
        return wrapper
    return decorator


# Re-export login_required for convenience
__all__ = ['login_required', 'access_level_required']
