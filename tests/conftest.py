"""
Pytest configuration and fixtures for the Flask host tests
"""
from datetime import timedelta

import pytest

from minage.app import create_app
from minage.extensions import db
from minage.models.user import User
from minage.services.auth_services import AuthService
from minage.services.realm_service import RealmService
from minage.utils.clock import utcnow

ADMIN_USERNAME = 'admin'
ADMIN_PASSWORD = 'admin-password-1'
USER_PASSWORD = 'alice-password-1'


@pytest.fixture
def app():
    """Create Flask application with an in-memory database and one administrator"""
    app = create_app('testing')

    with app.app_context():
        realm = RealmService.get_realm(app.config['DEFAULT_REALM'])
        AuthService.register(realm, ADMIN_USERNAME, ADMIN_PASSWORD, is_admin=True)
        db.session.commit()

        yield app

        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Create Flask test client"""
    return app.test_client()


@pytest.fixture
def alice(app, client):
    """A registered regular user whose password was just set"""
    response = client.post('/auth/register', json={
        'username': 'alice',
        'password': USER_PASSWORD,
    })
    assert response.status_code == 201
    return User.query.filter_by(username='alice').first()


def login(client, username, password):
    """Helper function to login a user"""
    return client.post('/auth/login', json={
        'username': username,
        'password': password,
    })


def login_admin(client):
    return login(client, ADMIN_USERNAME, ADMIN_PASSWORD)


def set_min_age(client, value):
    """Set the default realm's minimum password age as the administrator"""
    login_admin(client)
    response = client.put('/admin/realms/master/policies/minimum-password-age',
                          json={'value': value})
    client.post('/auth/logout')
    return response


def backdate_password(user, **delta):
    """Pretend the user's current password was set some time ago"""
    user.password_created = utcnow() - timedelta(**delta)
    db.session.commit()
