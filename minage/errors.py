"""Exceptions for the minimum password age policy and its host flows"""


class MinAgeError(Exception):
    """Base exception for all minage errors"""


class PolicyConfigError(MinAgeError):
    """
    Raised when a policy configuration value cannot be accepted.

    Surfaced to whoever is saving the configuration; the offending raw value
    is kept so it can be echoed back to the administrator.
    """

    def __init__(self, message, raw_value=None):
        super().__init__(message)
        self.message = message
        self.raw_value = raw_value


class PasswordPolicyViolation(MinAgeError):
    """Raised by the service layer when a password change is rejected"""

    def __init__(self, result):
        super().__init__(result.message)
        self.result = result


class AuthenticationError(MinAgeError):
    """Raised when supplied credentials do not match"""


class UserNotFoundError(MinAgeError):
    """Raised when a user does not exist in the realm"""


class RealmNotFoundError(MinAgeError):
    """Raised when a realm does not exist"""


class PasswordValidationError(MinAgeError):
    """Raised when a new password fails basic input validation"""
