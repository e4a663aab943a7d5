# minage/controllers/admin_controller.py
"""Administrative endpoints: realm policy configuration and password resets

Everything here is mounted under /admin/, which the minimum password age
policy treats as an administrative operation.
"""
from flask import Blueprint, jsonify, request

from minage.errors import (
    PasswordPolicyViolation,
    PasswordValidationError,
    PolicyConfigError,
    RealmNotFoundError,
    UserNotFoundError,
)
from minage.extensions import db
from minage.services.auth_services import AuthService
from minage.services.realm_service import RealmService
from minage.utils.decorators import admin_required

admin_bp = Blueprint('admin', __name__)


@admin_bp.errorhandler(RealmNotFoundError)
@admin_bp.errorhandler(UserNotFoundError)
def not_found(error):
    return jsonify({'error': str(error)}), 404


@admin_bp.route('/realms/<realm_name>/policies/minimum-password-age', methods=['GET'])
@admin_required
def get_min_password_age(realm_name):
    realm = RealmService.get_realm(realm_name)
    return jsonify(RealmService.get_min_password_age(realm))


@admin_bp.route('/realms/<realm_name>/policies/minimum-password-age', methods=['PUT'])
@admin_required
def set_min_password_age(realm_name):
    """Validate and save the realm's minimum password age"""
    realm = RealmService.get_realm(realm_name)
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or 'value' not in data:
        return jsonify({'error': "Missing 'value'"}), 400

    raw_value = data['value']
    if raw_value is not None and not isinstance(raw_value, str):
        raw_value = str(raw_value)

    try:
        RealmService.set_min_password_age(realm, raw_value)
        db.session.commit()
    except PolicyConfigError as e:
        db.session.rollback()
        return jsonify({'error': e.message, 'value': e.raw_value}), 400

    return jsonify(RealmService.get_min_password_age(realm))


@admin_bp.route('/realms/<realm_name>/users/<username>/reset-password', methods=['POST'])
@admin_required
def reset_password(realm_name, username):
    """Set a user's password, optionally as a temporary password"""
    realm = RealmService.get_realm(realm_name)
    user = AuthService.get_user(realm, username)

    data = request.get_json(silent=True) or {}
    password = data.get('password') or ''
    temporary = bool(data.get('temporary', False))

    try:
        AuthService.reset_password(user, password, temporary=temporary)
        db.session.commit()
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

    return jsonify({
        'username': user.username,
        'requiredActions': sorted(user.get_required_actions()),
    })
