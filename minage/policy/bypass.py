# minage/policy/bypass.py
"""Conditions under which the minimum age check is skipped"""

ADMIN_PATH_SEGMENT = '/admin/'
UPDATE_PASSWORD_ACTION = 'UPDATE_PASSWORD'


def is_admin_path(request_path):
    """True when the request path contains an admin segment anywhere"""
    if not request_path:
        return False
    return ADMIN_PATH_SEGMENT in request_path


def has_forced_reset(required_actions):
    """True when the user must update their password before continuing"""
    return UPDATE_PASSWORD_ACTION in (required_actions or ())


def should_bypass(context) -> bool:
    """
    Decide whether the age check should be skipped for this attempt.

    Administrative operations are exempt, and so are users carrying a
    pending UPDATE_PASSWORD action (temporary passwords, forced resets) so a
    forced rotation is never blocked by this policy.

    Args:
        context: EvaluationContext for the current attempt

    Returns:
        True if the check should be skipped
    """
    return is_admin_path(context.request_path) or has_forced_reset(context.required_actions)
