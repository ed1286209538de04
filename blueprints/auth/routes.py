"""
Authentication routes: login, logout.
Handles staff authentication.
"""

from flask import render_template, redirect, url_for, flash, request, Blueprint, session, current_app
from flask_login import login_user, logout_user, login_required, current_user
from urllib.parse import urlparse

from blueprints.auth.forms import LoginForm
from models.user import User, authenticate
from utils.messages import MESSAGES

auth_bp = Blueprint('auth', __name__, template_folder='../../templates/auth')


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """
    Login route with form handling.

    GET: Display login form
    POST: Process login credentials
    """
    if current_user.is_authenticated:
        return redirect(url_for('admin.dashboard'))

    form = LoginForm()

    if form.validate_on_submit():
        user_dict = authenticate(form.email.data, form.password.data)

        if user_dict is None:
            current_app.logger.info(f'Failed login for {form.email.data}')
            flash(MESSAGES['invalid_credentials'], 'error')
            return render_template('login.html', form=form)

        user = User(user_dict)

        # New session id on privilege change
        session.clear()
        login_user(user, remember=form.remember_me.data)

        flash(MESSAGES['login_success'], 'success')

        next_page = request.args.get('next')
        if not next_page or urlparse(next_page).netloc != '':
            next_page = url_for('admin.dashboard')

        return redirect(next_page)

    return render_template('login.html', form=form)


@auth_bp.route('/logout')
@login_required
def logout():
    """Logout current user."""
    logout_user()
    session.clear()
    flash(MESSAGES['logout_success'], 'success')
    return redirect(url_for('auth.login'))
