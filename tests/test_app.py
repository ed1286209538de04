"""
Test application factory, configuration and CLI commands.
"""

import pytest
from app import create_app


class TestAppFactory:
    """Test Flask application factory."""

    def test_create_app_development(self):
        """Test app creation with development config."""
        app = create_app('development')
        assert app.config['DEBUG'] is True
        assert app.config['TESTING'] is False

    def test_create_app_test(self):
        """Test app creation with test config."""
        app = create_app('test')
        assert app.config['TESTING'] is True
        assert app.config['WTF_CSRF_ENABLED'] is False

    def test_app_has_blueprints(self):
        """Test that all blueprints are registered."""
        app = create_app('test')
        blueprint_names = list(app.blueprints.keys())

        assert 'public' in blueprint_names
        assert 'auth' in blueprint_names
        assert 'admin' in blueprint_names
        assert 'api' in blueprint_names

    def test_app_has_extensions(self):
        """Test that extensions and booking context are initialized."""
        app = create_app('test')

        assert hasattr(app, 'login_manager')
        assert 'booking_context' in app.extensions

    def test_production_requires_secret_key(self, monkeypatch):
        """Production refuses to start without a real secret."""
        monkeypatch.delenv('SECRET_KEY', raising=False)

        with pytest.raises(ValueError):
            create_app('production')


class TestAppConfiguration:
    """Test application configuration."""

    def test_storage_timeout(self, app):
        assert app.config['STORAGE_TIMEOUT_SECONDS'] == 1

    def test_defaults(self):
        from config import Config

        assert Config.STORAGE_TIMEOUT_SECONDS == 3
        assert Config.BOOKING_RECHECK_AVAILABILITY is False


class TestCliCommands:
    """Test Flask CLI commands."""

    def test_create_user(self, app):
        from models.user import get_user_by_email

        runner = app.test_cli_runner()
        result = runner.invoke(args=[
            'create-user', 'clerk@here.com', '--access-level', '1',
            '--password', 'secret123'
        ])

        assert 'User created successfully' in result.output
        assert get_user_by_email('clerk@here.com')['access_level'] == 1

    def test_create_user_duplicate(self, app):
        runner = app.test_cli_runner()
        result = runner.invoke(args=['create-user', 'admin@here.com', '--password', 'secret123'])

        assert 'Error creating user' in result.output

    def test_create_user_short_password(self, app):
        runner = app.test_cli_runner()
        result = runner.invoke(args=['create-user', 'clerk@here.com', '--password', 'abc'])

        assert 'Error creating user' in result.output
