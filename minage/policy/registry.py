# minage/policy/registry.py
"""Policy descriptors the host uses to discover and create password policies"""
from dataclasses import dataclass
from typing import Callable, Dict

from minage.policy.min_age import MinimumAgePolicy

MIN_PASSWORD_AGE_POLICY_ID = 'minimum-password-age'


@dataclass(frozen=True)
class PolicyDescriptor:
    """Static metadata for one password policy type"""
    policy_id: str
    display_name: str
    config_type: str
    default_config_value: str
    multiple_supported: bool
    factory: Callable[[], MinimumAgePolicy]

    def create(self):
        return self.factory()


MIN_PASSWORD_AGE = PolicyDescriptor(
    policy_id=MIN_PASSWORD_AGE_POLICY_ID,
    display_name='Minimum Password Age',
    config_type='string',
    default_config_value='0',
    multiple_supported=False,
    factory=MinimumAgePolicy,
)

_descriptors: Dict[str, PolicyDescriptor] = {
    MIN_PASSWORD_AGE.policy_id: MIN_PASSWORD_AGE,
}


def get_descriptor(policy_id: str) -> PolicyDescriptor:
    """
    Look up a registered policy type.

    Raises:
        KeyError: If no policy is registered under policy_id
    """
    return _descriptors[policy_id]
