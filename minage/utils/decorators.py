# minage/utils/decorators.py
"""Authentication and authorization decorators"""
from functools import wraps

from flask import g, jsonify, session

from minage.extensions import db
from minage.models.user import User


def _load_session_user():
    user_id = session.get('user_id')
    if user_id is None:
        return None

    # Verify user still exists and is active
    user = db.session.get(User, user_id)
    if not user or not user.is_active:
        session.clear()
        return None
    return user


def login_required(f):
    """
    Decorator to ensure user is authenticated before accessing route.
    The user is made available as g.current_user.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        user = _load_session_user()
        if user is None:
            return jsonify({'error': 'Authentication required'}), 401

        g.current_user = user
        return f(*args, **kwargs)
    return decorated_function


def admin_required(f):
    """Decorator for administrative endpoints"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        user = _load_session_user()
        if user is None:
            return jsonify({'error': 'Authentication required'}), 401
        if not user.is_admin:
            return jsonify({'error': 'Administrator privileges required'}), 403

        g.current_user = user
        return f(*args, **kwargs)
    return decorated_function
