# minage/utils/clock.py
"""Wall clock helpers"""
from datetime import datetime, timezone


def utcnow() -> datetime:
    """
    Current UTC time as a naive datetime.

    SQLite drops timezone information, so every stored timestamp is naive
    UTC; the policy engine treats naive values the same way.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)
