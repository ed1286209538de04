"""
API routes for JSON endpoints.
"""

from flask import Blueprint, current_app

from models.errors import StorageUnavailable
from utils.api_response import api_success, api_error
from utils.booking_context import get_booking_context

api_bp = Blueprint('api', __name__)


@api_bp.route('/health')
def health_check():
    """
    Health check endpoint (no authentication required).
    Touches the interval store so a dead database reports 503.

    Returns:
        JSON with status and version
    """
    ctx = get_booking_context()
    try:
        room_count = len(ctx.store.list_rooms())
    except StorageUnavailable as e:
        current_app.logger.error(f'Health check failed: {e}')
        return api_error('Storage unavailable', status=503, status_detail='degraded')

    return api_success(data={
        'status': 'ok',
        'version': current_app.config.get('APP_VERSION', '1.0.0'),
        'app': current_app.config.get('APP_NAME', 'Bookings'),
        'rooms': room_count,
    })
