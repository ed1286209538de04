"""
Bookings - Hotel Room Reservation System
Flask application factory and initialization
"""

import os
import click
import logging
from flask import Flask, render_template, g
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Import configuration
from config import config

# Import extensions
from extensions import login_manager, csrf

# Import database functions
from database import close_db, init_db

from utils.booking_context import init_booking_context


def create_app(config_name=None):
    """
    Application factory for Flask app.

    Args:
        config_name: Configuration name ('development', 'production', 'test')

    Returns:
        Flask application instance
    """
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    app = Flask(__name__)

    app.config.from_object(config[config_name])

    if config_name == 'production':
        config[config_name].validate()

    initialize_extensions(app)

    # Booking context must exist before any request touches the store
    init_booking_context(app)

    register_blueprints(app)

    register_error_handlers(app)

    register_cli_commands(app)

    register_context_processors(app)

    register_teardown_handlers(app)

    configure_logging(app)

    return app


def initialize_extensions(app):
    """Initialize Flask extensions."""
    login_manager.init_app(app)
    csrf.init_app(app)


def register_blueprints(app):
    """Register Flask blueprints."""
    from blueprints.public.routes import public_bp
    from blueprints.auth.routes import auth_bp
    from blueprints.admin.routes import admin_bp
    from blueprints.api.routes import api_bp

    app.register_blueprint(public_bp)
    app.register_blueprint(auth_bp, url_prefix='/user')
    app.register_blueprint(admin_bp, url_prefix='/admin')
    app.register_blueprint(api_bp, url_prefix='/api')


def register_error_handlers(app):
    """Register error handlers."""

    @app.errorhandler(404)
    def not_found_error(error):
        """Handle 404 errors."""
        return render_template('errors/404.html'), 404

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        # Rollback database on error
        db = g.get('db')
        if db:
            db.rollback()
        return render_template('errors/500.html'), 500

    @app.errorhandler(403)
    def forbidden_error(error):
        """Handle 403 errors."""
        return render_template('errors/403.html'), 403


def register_cli_commands(app):
    """Register Flask CLI commands."""

    @app.cli.command('init-db')
    def init_db_command():
        """Initialize database with schema and seed data."""
        click.echo('Initializing database...')
        with app.app_context():
            init_db()
        click.echo('Database initialized successfully!')

    @app.cli.command('create-user')
    @click.argument('email')
    @click.option('--first-name', default='', help='First name')
    @click.option('--last-name', default='', help='Last name')
    @click.option('--access-level', default=3, type=int, help='1 staff, 3 admin')
    @click.password_option()
    def create_user_command(email, first_name, last_name, access_level, password):
        """Create a new staff user."""
        import sqlite3
        from models.user import create_user
        from utils.validators import validate_email, validate_password

        if not validate_email(email):
            click.echo('Error creating user: invalid email', err=True)
            return

        valid, error_msg = validate_password(password)
        if not valid:
            click.echo(f'Error creating user: {error_msg}', err=True)
            return

        with app.app_context():
            try:
                user_id = create_user(
                    email=email,
                    password=password,
                    first_name=first_name,
                    last_name=last_name,
                    access_level=access_level
                )
                click.echo(f'User created successfully! ID: {user_id}')
            except sqlite3.IntegrityError as e:
                click.echo(f'Error creating user: {str(e)}', err=True)


def register_context_processors(app):
    """Register template context processors."""

    @app.context_processor
    def utility_processor():
        """Inject utility values into templates."""
        from utils.datetime_helpers import get_today

        return {
            'current_year': get_today().year,
            'app_name': app.config.get('APP_NAME', 'Bookings'),
            'app_version': app.config.get('APP_VERSION', '1.0.0')
        }

    @app.template_filter('format_date')
    def format_date_filter(value, format='%d/%m/%Y'):
        """Format a date or YYYY-MM-DD string."""
        from datetime import datetime
        if not value:
            return ''
        try:
            if isinstance(value, str):
                value = datetime.strptime(value[:10], '%Y-%m-%d')
            return value.strftime(format)
        except (TypeError, ValueError):
            return value


def register_teardown_handlers(app):
    """Register teardown handlers."""

    @app.teardown_appcontext
    def teardown_db(error):
        """Close database connection at end of request."""
        close_db(error)


def configure_logging(app):
    """Configure application logging."""
    if not app.debug and not app.testing:
        # Production logging
        if not os.path.exists('logs'):
            os.mkdir('logs')

        file_handler = logging.FileHandler('logs/bookings.log')
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)

        app.logger.setLevel(logging.INFO)
        app.logger.info('Bookings startup')
    else:
        # Development logging
        app.logger.setLevel(logging.DEBUG)


# Create application instance for development server
if __name__ == '__main__':
    app = create_app()
    app.run(host='0.0.0.0', debug=True)
