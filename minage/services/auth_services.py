# minage/services/auth_services.py
"""Authentication service: password storage and password changes"""
import bcrypt
from flask import current_app, has_request_context, request

from minage.errors import (
    AuthenticationError,
    PasswordPolicyViolation,
    PasswordValidationError,
    UserNotFoundError,
)
from minage.extensions import db
from minage.logger import get_logger
from minage.models.password_history import PasswordHistory
from minage.models.user import User
from minage.policy import (
    EvaluationContext,
    MIN_PASSWORD_AGE_POLICY_ID,
    UPDATE_PASSWORD_ACTION,
    get_descriptor,
)
from minage.utils.clock import utcnow

logger = get_logger(__name__)


class AuthService:
    """Handles authentication operations"""

    @staticmethod
    def hash_password(password):
        """Hash password using bcrypt"""
        rounds = current_app.config.get('BCRYPT_ROUNDS', 12)
        hashed = bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt(rounds=rounds))
        return hashed.decode('utf-8')

    @staticmethod
    def verify_password(password, stored_hash):
        """Verify password against stored hash using constant-time comparison"""
        if not stored_hash:
            return False
        return bcrypt.checkpw(password.encode('utf-8'), stored_hash.encode('utf-8'))

    @staticmethod
    def validate_new_password(password):
        min_length = current_app.config['PASSWORD_MIN_LENGTH']
        if not password or len(password) < min_length:
            raise PasswordValidationError(f'Password must be at least {min_length} characters')

    @staticmethod
    def get_user(realm, username):
        user = User.query.filter_by(realm_id=realm.id, username=username).first()
        if user is None:
            raise UserNotFoundError(f"User '{username}' not found in realm '{realm.name}'")
        return user

    @staticmethod
    def register(realm, username, password=None, is_admin=False):
        """Create a user; without a password the account has no credential yet"""
        if password is not None:
            AuthService.validate_new_password(password)

        user = User(realm=realm, username=username, is_admin=is_admin)
        if password is not None:
            user.password_hash = AuthService.hash_password(password)
            user.password_created = utcnow()

        db.session.add(user)
        return user

    @staticmethod
    def authenticate(realm, username, password):
        user = User.query.filter_by(realm_id=realm.id, username=username).first()
        if not user or not user.is_active or not AuthService.verify_password(password, user.password_hash):
            raise AuthenticationError('Invalid credentials')
        return user

    @staticmethod
    def build_evaluation_context(user):
        """
        Collect what the password policy needs from the current request and user.

        Outside a request (shell, background job) the request path is None.
        """
        request_path = request.path if has_request_context() else None
        return EvaluationContext.build(
            request_path=request_path,
            required_actions=user.get_required_actions(),
            credentials=user.credential_records(),
        )

    @staticmethod
    def check_password_policy(user):
        """
        Run the minimum password age policy for a pending change.

        Raises:
            PasswordPolicyViolation: If the change must be blocked
        """
        descriptor = get_descriptor(MIN_PASSWORD_AGE_POLICY_ID)
        policy = descriptor.create()
        configured = user.realm.get_policy_config(descriptor.policy_id)

        result = policy.evaluate(AuthService.build_evaluation_context(user), configured)
        if not result.allowed:
            raise PasswordPolicyViolation(result)
        return result

    @staticmethod
    def set_password(user, new_password):
        """Replace the current password, moving it into history"""
        AuthService.validate_new_password(new_password)
        AuthService.check_password_policy(user)

        now = utcnow()
        if user.password_hash is not None:
            user.password_history.append(PasswordHistory(
                password_hash=user.password_hash,
                used_from=user.password_created or now,
                used_until=now,
            ))

        user.password_hash = AuthService.hash_password(new_password)
        user.password_created = now
        AuthService.trim_password_history(user)
        return user

    @staticmethod
    def change_password(user, current_password, new_password):
        """Self-service password change"""
        if not AuthService.verify_password(current_password, user.password_hash):
            raise AuthenticationError('Current password is incorrect')

        AuthService.set_password(user, new_password)
        user.remove_required_action(UPDATE_PASSWORD_ACTION)
        logger.info("Password changed for user %s", user.username)
        return user

    @staticmethod
    def reset_password(user, new_password, temporary=False):
        """Administrator password reset; temporary passwords must be changed at next login"""
        AuthService.set_password(user, new_password)
        if temporary:
            user.add_required_action(UPDATE_PASSWORD_ACTION)
        else:
            user.remove_required_action(UPDATE_PASSWORD_ACTION)
        logger.info("Password reset for user %s (temporary=%s)", user.username, temporary)
        return user

    @staticmethod
    def trim_password_history(user):
        """Maintain only PASSWORD_HISTORY_COUNT history entries"""
        keep = current_app.config['PASSWORD_HISTORY_COUNT']
        entries = sorted(user.password_history, key=lambda entry: entry.used_until, reverse=True)
        for entry in entries[keep:]:
            user.password_history.remove(entry)
