# minage/controllers/auth_controller.py
"""Authentication controller: registration, login and self-service password changes"""
from flask import Blueprint, current_app, g, jsonify, request, session

from minage.errors import (
    AuthenticationError,
    PasswordPolicyViolation,
    PasswordValidationError,
)
from minage.extensions import db
from minage.models.user import User
from minage.services.auth_services import AuthService
from minage.services.realm_service import RealmService
from minage.utils.decorators import login_required

auth_bp = Blueprint('auth', __name__)


def _default_realm():
    return RealmService.get_realm(current_app.config['DEFAULT_REALM'])


@auth_bp.route('/register', methods=['POST'])
def register():
    """Create a user in the default realm"""
    data = request.get_json(silent=True) or {}
    username = (data.get('username') or '').strip()
    password = data.get('password') or ''

    if not username or not password:
        return jsonify({'error': 'Username and password are required'}), 400

    realm = _default_realm()
    if User.query.filter_by(realm_id=realm.id, username=username).first():
        return jsonify({'error': 'Username already exists'}), 409

    try:
        user = AuthService.register(realm, username, password)
        db.session.commit()
    except PasswordValidationError as e:
        db.session.rollback()
        return jsonify({'error': str(e)}), 400

    return jsonify({'username': user.username, 'realm': realm.name}), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    """Start a session"""
    data = request.get_json(silent=True) or {}
    username = (data.get('username') or '').strip()
    password = data.get('password') or ''

    try:
        user = AuthService.authenticate(_default_realm(), username, password)
    except AuthenticationError as e:
        return jsonify({'error': str(e)}), 401

    session.clear()
    session['user_id'] = user.id

    return jsonify({
        'username': user.username,
        'requiredActions': sorted(user.get_required_actions()),
    })


@auth_bp.route('/logout', methods=['POST'])
def logout():
    session.clear()
    return jsonify({'message': 'Logged out'})


@auth_bp.route('/update-password', methods=['POST'])
@login_required
def update_password():
    """Self-service password change, subject to the realm's password policy"""
    data = request.get_json(silent=True) or {}
    current_password = data.get('current_password') or ''
    new_password = data.get('new_password') or ''

    try:
        AuthService.change_password(g.current_user, current_password, new_password)
        db.session.commit()
    except AuthenticationError as e:
        db.session.rollback()
        return jsonify({'error': str(e)}), 401
    except PasswordValidationError as e:
        db.session.rollback()
        return jsonify({'error': str(e)}), 400
    except PasswordPolicyViolation as e:
        db.session.rollback()
        return jsonify({
            'error': e.result.message,
            'errorKindId': e.result.error_kind_id,
            'params': e.result.params,
        }), 400

    return jsonify({'message': 'Password updated successfully'})
