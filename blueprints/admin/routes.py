"""
Admin routes for the staff console.
Reservation listings, guest detail edits, and the monthly reservation
calendar with owner block management.
"""

from flask import render_template, redirect, url_for, flash, request, Blueprint, session, abort, current_app
from flask_login import login_required

from blueprints.public.forms import ReservationForm
from models.calendar_reconciler import add_field, keep_field
from models.errors import StorageUnavailable
from models.reservation import (
    get_all_reservations, get_new_reservations, get_reservation_by_id,
    update_reservation, mark_reservation_processed, delete_reservation,
    project_month, reconcile_calendar,
)
from models.user import ACCESS_LEVEL_STAFF
from utils.block_cache import BlockMapCache
from utils.booking_context import get_booking_context
from utils.decorators import access_level_required
from utils.messages import MESSAGES
from utils.validators import sanitize_input, validate_year_month

admin_bp = Blueprint('admin', __name__, template_folder='../../templates/admin')

# Where a reservation was opened from: listings or the calendar
SOURCES = ('new', 'all', 'cal')


def _back_to_source(src: str, year=None, month=None):
    """Redirect to the page a reservation was opened from."""
    if src == 'cal' and validate_year_month(year, month):
        return redirect(url_for('admin.reservations_calendar', y=year, m=month))
    if src == 'new':
        return redirect(url_for('admin.reservations_new'))
    return redirect(url_for('admin.reservations_all'))


def _calendar_month(year, month) -> tuple:
    """Requested (year, month) as ints, falling back to the current month."""
    if year is not None and month is not None and validate_year_month(year, month):
        return int(year), int(month)

    if year is not None or month is not None:
        flash(MESSAGES['invalid_dates'], 'warning')

    today = get_booking_context().clock().date()
    return today.year, today.month


@admin_bp.route('/dashboard')
@login_required
@access_level_required(ACCESS_LEVEL_STAFF)
def dashboard():
    """Admin dashboard with summary statistics."""
    all_reservations = get_all_reservations()

    stats = {
        'total_reservations': len(all_reservations),
        'new_reservations': len([r for r in all_reservations if not r.processed]),
    }

    return render_template('dashboard.html', stats=stats)


@admin_bp.route('/reservations-new')
@login_required
@access_level_required(ACCESS_LEVEL_STAFF)
def reservations_new():
    """Reservations not yet processed."""
    return render_template(
        'reservations.html',
        reservations=get_new_reservations(),
        title=MESSAGES['reservations_new'],
        src='new'
    )


@admin_bp.route('/reservations-all')
@login_required
@access_level_required(ACCESS_LEVEL_STAFF)
def reservations_all():
    """All reservations."""
    return render_template(
        'reservations.html',
        reservations=get_all_reservations(),
        title=MESSAGES['reservations_all'],
        src='all'
    )


@admin_bp.route('/reservations/<src>/<int:reservation_id>/show', methods=['GET', 'POST'])
@login_required
@access_level_required(ACCESS_LEVEL_STAFF)
def reservation_show(src, reservation_id):
    """
    Show a reservation and edit its guest details.

    GET: Display reservation with edit form
    POST: Save guest details
    """
    if src not in SOURCES:
        abort(404)

    reservation = get_reservation_by_id(reservation_id)
    if reservation is None:
        flash(MESSAGES['reservation_not_found'], 'error')
        return _back_to_source(src)

    year = request.values.get('y')
    month = request.values.get('m')
    form = ReservationForm()

    if request.method == 'POST':
        if not form.validate_on_submit():
            flash(MESSAGES['invalid_form'], 'error')
            return render_template('reservation_show.html', reservation=reservation,
                                   form=form, src=src, year=year, month=month)

        update_reservation(
            reservation_id,
            first_name=sanitize_input(form.first_name.data, max_length=100),
            last_name=sanitize_input(form.last_name.data, max_length=100),
            email=sanitize_input(form.email.data, max_length=255),
            phone=sanitize_input(form.phone.data, max_length=30)
        )
        current_app.logger.info(f'Reservation {reservation_id} updated')
        flash(MESSAGES['reservation_updated'], 'success')
        return _back_to_source(src, year, month)

    form.first_name.data = reservation.first_name
    form.last_name.data = reservation.last_name
    form.email.data = reservation.email
    form.phone.data = reservation.phone

    return render_template('reservation_show.html', reservation=reservation,
                           form=form, src=src, year=year, month=month)


@admin_bp.route('/process-reservation/<src>/<int:reservation_id>', methods=['POST'])
@login_required
@access_level_required(ACCESS_LEVEL_STAFF)
def process_reservation(src, reservation_id):
    """Mark a reservation as processed."""
    if src not in SOURCES:
        abort(404)

    if mark_reservation_processed(reservation_id):
        current_app.logger.info(f'Reservation {reservation_id} marked processed')
        flash(MESSAGES['reservation_processed'], 'success')
    else:
        flash(MESSAGES['reservation_not_found'], 'error')

    return _back_to_source(src, request.form.get('y'), request.form.get('m'))


@admin_bp.route('/delete-reservation/<src>/<int:reservation_id>', methods=['POST'])
@login_required
@access_level_required(ACCESS_LEVEL_STAFF)
def delete_reservation_route(src, reservation_id):
    """Delete a reservation together with its held room restriction."""
    if src not in SOURCES:
        abort(404)

    if delete_reservation(reservation_id):
        current_app.logger.info(f'Reservation {reservation_id} deleted')
        flash(MESSAGES['reservation_deleted'], 'success')
    else:
        flash(MESSAGES['reservation_not_found'], 'error')

    return _back_to_source(src, request.form.get('y'), request.form.get('m'))


@admin_bp.route('/reservations-calendar', methods=['GET', 'POST'])
@login_required
@access_level_required(ACCESS_LEVEL_STAFF)
def reservations_calendar():
    """
    Monthly reservation calendar.

    GET: Project the month, caching each room's block map in the session
    POST: Reconcile posted keep/add block fields against the cached maps

    Params:
        y: Year (YYYY)
        m: Month (MM)
    """
    ctx = get_booking_context()
    cache = BlockMapCache(session)

    if request.method == 'POST':
        year, month = _calendar_month(request.form.get('y'), request.form.get('m'))

        try:
            room_ids = [room.id for room in ctx.store.list_rooms()]
        except StorageUnavailable as e:
            current_app.logger.error(f'Calendar save failed: {e}')
            flash(MESSAGES['availability_error'], 'error')
            return redirect(url_for('admin.dashboard'))

        result = reconcile_calendar(ctx, room_ids, cache, request.form.keys())

        if result.ok:
            flash(MESSAGES['calendar_saved'], 'success')
        else:
            flash(MESSAGES['calendar_partial'], 'warning')

        return redirect(url_for('admin.reservations_calendar', y=f'{year:04d}', m=f'{month:02d}'))

    year, month = _calendar_month(request.args.get('y'), request.args.get('m'))

    try:
        calendar = project_month(ctx, year, month, cache=cache)
    except StorageUnavailable as e:
        current_app.logger.error(f'Calendar projection {year}-{month:02d} failed: {e}')
        flash(MESSAGES['availability_error'], 'error')
        return redirect(url_for('admin.dashboard'))

    return render_template(
        'calendar.html',
        calendar=calendar,
        nav=calendar.navigation,
        summary=calendar.summary(),
        keep_field=keep_field,
        add_field=add_field
    )
