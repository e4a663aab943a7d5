# minage/policy/duration.py
"""Duration parsing for the minimum password age configuration value

Accepted forms (case-insensitive, surrounding whitespace ignored):
    "<integer>"         seconds
    "<integer>:<unit>"  unit is one of s, m, h, d
An empty value disables the policy.
"""
import re
from typing import Optional

from minage.errors import PolicyConfigError

UNIT_MULTIPLIERS = {
    's': 1,
    'm': 60,
    'h': 3600,
    'd': 86400,
}

UNIT_SEPARATOR = ':'
INTEGER_PATTERN = re.compile(r'[+-]?[0-9]+')

# Largest value a stored 64-bit integer column can hold
MAX_SECONDS = 2 ** 63 - 1


def parse_duration(raw: Optional[str]) -> int:
    """
    Convert a configuration string into a number of seconds.

    Args:
        raw: Raw configuration value as entered by an administrator

    Returns:
        Duration in seconds; 0 means the policy is disabled

    Raises:
        PolicyConfigError: If the value is malformed, negative or uses an
            unknown unit
    """
    if raw is None or not raw.strip():
        return 0

    normalized = raw.strip().lower()
    number_part = normalized
    multiplier = 1

    if UNIT_SEPARATOR in normalized:
        parts = normalized.split(UNIT_SEPARATOR)
        if len(parts) != 2:
            raise PolicyConfigError(
                "Invalid format in Minimum Password Age policy. Expected 'value:unit'.",
                raw_value=raw,
            )

        number_part = parts[0].strip()
        unit = parts[1].strip()
        if unit not in UNIT_MULTIPLIERS:
            raise PolicyConfigError(
                f"Invalid unit in Minimum Password Age policy: '{unit}'",
                raw_value=raw,
            )
        multiplier = UNIT_MULTIPLIERS[unit]

    if not INTEGER_PATTERN.fullmatch(number_part):
        raise PolicyConfigError(
            f"Invalid format. '{number_part}' in Minimum Password Age policy.",
            raw_value=raw,
        )
    number = int(number_part)

    if number < 0:
        raise PolicyConfigError(
            "Negative value is not allowed in Minimum Password Age policy.",
            raw_value=raw,
        )

    seconds = number * multiplier
    if seconds > MAX_SECONDS:
        raise PolicyConfigError(
            f"Invalid format. '{number_part}' is out of range in Minimum Password Age policy.",
            raw_value=raw,
        )

    return seconds
