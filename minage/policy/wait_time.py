# minage/policy/wait_time.py
"""Human-readable wait time for rejected password changes"""

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400


def format_wait_time(seconds_left: int) -> str:
    """
    Describe a remaining duration using the coarsest single unit.

    The result is a floored approximation, e.g. 90061 seconds is "1 day(s)".
    Boundaries are strict, so exactly 3600 seconds reports as minutes.

    Args:
        seconds_left: Remaining seconds (non-negative)

    Returns:
        String such as "23 hour(s)"
    """
    if seconds_left > SECONDS_PER_DAY:
        return f"{seconds_left // SECONDS_PER_DAY} day(s)"
    if seconds_left > SECONDS_PER_HOUR:
        return f"{seconds_left // SECONDS_PER_HOUR} hour(s)"
    if seconds_left > SECONDS_PER_MINUTE:
        return f"{seconds_left // SECONDS_PER_MINUTE} minute(s)"
    return f"{seconds_left} second(s)"
