"""
Public routes: static pages, availability search and the reservation flow.
The reservation in progress travels in the session under 'reservation'.
"""

from flask import render_template, redirect, url_for, flash, request, Blueprint, session, jsonify, current_app

from blueprints.public.forms import SearchAvailabilityForm, ReservationForm
from models.errors import ConcurrentBookingConflict, InvalidRange, RoomNotFound, StorageUnavailable
from models.reservation import (
    available_rooms, create_reservation, is_room_available, parse_date_range,
    send_reservation_notifications,
)
from models.restriction import Reservation
from utils.booking_context import get_booking_context
from utils.messages import MESSAGES

public_bp = Blueprint('public', __name__, template_folder='../../templates/public')

SESSION_KEY = 'reservation'


def _reservation_from_session():
    data = session.get(SESSION_KEY)
    if not data:
        return None
    return Reservation.from_session(data)


@public_bp.route('/')
def home():
    return render_template('home.html')


@public_bp.route('/about')
def about():
    return render_template('about.html')


@public_bp.route('/contact')
def contact():
    return render_template('contact.html')


@public_bp.route('/search-availability', methods=['GET', 'POST'])
def search_availability():
    """
    Availability search.

    GET: Display search form
    POST: List free rooms for the posted range
    """
    form = SearchAvailabilityForm()

    if request.method == 'GET':
        return render_template('search_availability.html', form=form)

    if not form.validate_on_submit():
        flash(MESSAGES['invalid_dates'], 'error')
        return redirect(url_for('public.search_availability'))

    try:
        start, end = parse_date_range(form.start.data, form.end.data)
    except InvalidRange as e:
        current_app.logger.info(f'Rejected search range: {e}')
        flash(MESSAGES['invalid_date_range'], 'error')
        return redirect(url_for('public.search_availability'))

    ctx = get_booking_context()
    try:
        rooms = available_rooms(ctx, start, end)
    except StorageUnavailable as e:
        current_app.logger.error(f'Availability search {start}..{end} failed: {e}')
        flash(MESSAGES['availability_error'], 'error')
        return redirect(url_for('public.home'))

    if not rooms:
        flash(MESSAGES['no_availability'], 'error')
        return redirect(url_for('public.search_availability'))

    pending = Reservation(
        first_name='', last_name='', email='',
        room_id=0, start_date=start, end_date=end,
    )
    session[SESSION_KEY] = pending.to_session()

    return render_template('choose_room.html', rooms=rooms, reservation=pending)


@public_bp.route('/search-availability-json', methods=['POST'])
def availability_json():
    """
    Check one room for a range.

    Form fields: room_id, start, end (YYYY-MM-DD)

    Returns:
        JSON {ok, message, room_id, start_date, end_date}
    """
    room_id = request.form.get('room_id', '')
    start_str = request.form.get('start', '')
    end_str = request.form.get('end', '')

    response = {
        'ok': False,
        'message': '',
        'room_id': room_id,
        'start_date': start_str,
        'end_date': end_str,
    }

    ctx = get_booking_context()
    try:
        start, end = parse_date_range(start_str, end_str)
        available = is_room_available(ctx, int(room_id), start, end)
    except ValueError:
        response['message'] = MESSAGES['json_invalid']
    except StorageUnavailable as e:
        current_app.logger.error(f'Availability check for room {room_id} failed: {e}')
        response['message'] = MESSAGES['json_error']
    else:
        response['ok'] = available
        response['message'] = MESSAGES['room_available'] if available else MESSAGES['room_unavailable']

    return jsonify(response)


@public_bp.route('/choose-room/<int:room_id>')
def choose_room(room_id):
    """Attach the picked room to the reservation in progress."""
    reservation = _reservation_from_session()
    if reservation is None:
        flash(MESSAGES['reservation_missing'], 'error')
        return redirect(url_for('public.home'))

    ctx = get_booking_context()
    try:
        reservation.room = ctx.store.get_room(room_id)
    except RoomNotFound:
        flash(MESSAGES['room_not_found'], 'error')
        return redirect(url_for('public.search_availability'))
    except StorageUnavailable as e:
        current_app.logger.error(f'Loading room {room_id} failed: {e}')
        flash(MESSAGES['availability_error'], 'error')
        return redirect(url_for('public.home'))

    reservation.room_id = room_id
    session[SESSION_KEY] = reservation.to_session()
    return redirect(url_for('public.make_reservation'))


@public_bp.route('/book-room')
def book_room():
    """
    Direct booking link.

    Query params:
        id: Room ID
        s: Start date (YYYY-MM-DD)
        e: End date (YYYY-MM-DD)
    """
    room_id = request.args.get('id', type=int)
    if room_id is None:
        flash(MESSAGES['room_not_found'], 'error')
        return redirect(url_for('public.search_availability'))

    try:
        start, end = parse_date_range(request.args.get('s', ''), request.args.get('e', ''))
    except InvalidRange:
        flash(MESSAGES['invalid_dates'], 'error')
        return redirect(url_for('public.search_availability'))

    ctx = get_booking_context()
    try:
        room = ctx.store.get_room(room_id)
    except RoomNotFound:
        flash(MESSAGES['room_not_found'], 'error')
        return redirect(url_for('public.search_availability'))
    except StorageUnavailable as e:
        current_app.logger.error(f'Loading room {room_id} failed: {e}')
        flash(MESSAGES['availability_error'], 'error')
        return redirect(url_for('public.home'))

    reservation = Reservation(
        first_name='', last_name='', email='',
        room_id=room_id, start_date=start, end_date=end, room=room,
    )
    session[SESSION_KEY] = reservation.to_session()
    return redirect(url_for('public.make_reservation'))


@public_bp.route('/make-reservation', methods=['GET', 'POST'])
def make_reservation():
    """
    Guest details form.

    GET: Display form for the reservation in progress
    POST: Store the reservation, notify guest and owner
    """
    reservation = _reservation_from_session()
    if reservation is None or not reservation.room_id:
        flash(MESSAGES['reservation_missing'], 'error')
        return redirect(url_for('public.home'))

    form = ReservationForm()

    if request.method == 'GET':
        form.first_name.data = reservation.first_name
        form.last_name.data = reservation.last_name
        form.email.data = reservation.email
        form.phone.data = reservation.phone
        return render_template('make_reservation.html', form=form, reservation=reservation)

    if not form.validate_on_submit():
        flash(MESSAGES['invalid_form'], 'error')
        return render_template('make_reservation.html', form=form, reservation=reservation)

    reservation.first_name = form.first_name.data.strip()
    reservation.last_name = form.last_name.data.strip()
    reservation.email = form.email.data.strip()
    reservation.phone = (form.phone.data or '').strip()

    ctx = get_booking_context()
    try:
        create_reservation(ctx, reservation)
    except ConcurrentBookingConflict as e:
        current_app.logger.info(str(e))
        flash(MESSAGES['reservation_conflict'], 'error')
        return redirect(url_for('public.search_availability'))
    except InvalidRange:
        flash(MESSAGES['invalid_date_range'], 'error')
        return redirect(url_for('public.search_availability'))
    except RoomNotFound:
        flash(MESSAGES['room_not_found'], 'error')
        return redirect(url_for('public.search_availability'))
    except StorageUnavailable as e:
        current_app.logger.error(f'Storing reservation failed: {e}')
        flash(MESSAGES['reservation_failed'], 'error')
        return redirect(url_for('public.home'))

    send_reservation_notifications(ctx, reservation)

    session[SESSION_KEY] = reservation.to_session()
    return redirect(url_for('public.reservation_summary'))


@public_bp.route('/reservation-summary')
def reservation_summary():
    """Show the stored reservation once and clear it from the session."""
    data = session.pop(SESSION_KEY, None)
    if not data:
        current_app.logger.info('Reservation summary requested without a reservation in session')
        flash(MESSAGES['reservation_missing'], 'error')
        return redirect(url_for('public.home'))

    return render_template('reservation_summary.html', reservation=Reservation.from_session(data))
