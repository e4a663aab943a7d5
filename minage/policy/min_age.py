# minage/policy/min_age.py
"""Minimum password age policy

Blocks a password change until the configured duration has passed since the
current password was created. Evaluation is pure apart from reading the wall
clock, and rejection is reported through the returned result, never raised.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import FrozenSet, Iterable, Optional, Tuple, Union

from minage.errors import PolicyConfigError
from minage.logger import get_logger
from minage.policy.bypass import should_bypass
from minage.policy.duration import parse_duration
from minage.policy.wait_time import format_wait_time

logger = get_logger(__name__)

MIN_AGE_NOT_REACHED = 'minPasswordAgeNotReached'
REJECTION_MESSAGE = "Password cannot be changed yet. Please wait {wait}."

# Parsed seconds, or the raw string when the host has no cached value
ConfiguredAge = Union[int, str, None]


def _as_utc(moment: datetime) -> datetime:
    # Naive datetimes from the database are stored as UTC
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


@dataclass(frozen=True)
class CredentialRecord:
    """One stored password version"""
    created_at: datetime


@dataclass(frozen=True)
class EvaluationContext:
    """
    What the policy needs to know about one password change attempt.

    request_path is None when there is no ambient request (background jobs,
    CLI usage); that is read as "not an admin operation".
    """
    request_path: Optional[str] = None
    required_actions: FrozenSet[str] = frozenset()
    credentials: Tuple[CredentialRecord, ...] = ()

    @classmethod
    def build(cls, request_path=None, required_actions: Iterable[str] = (),
              credentials: Iterable[CredentialRecord] = ()) -> 'EvaluationContext':
        return cls(
            request_path=request_path,
            required_actions=frozenset(required_actions or ()),
            credentials=tuple(credentials or ()),
        )

    def current_credential(self) -> Optional[CredentialRecord]:
        """The most recently created credential, or None if there is none"""
        if not self.credentials:
            return None
        return max(self.credentials, key=lambda record: _as_utc(record.created_at))


@dataclass(frozen=True)
class EvaluationResult:
    """Allowed when error_kind_id is None, otherwise Rejected"""
    message: Optional[str] = None
    error_kind_id: Optional[str] = None
    params: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.error_kind_id is None

    @classmethod
    def allow(cls) -> 'EvaluationResult':
        return cls()

    @classmethod
    def reject(cls, wait: str) -> 'EvaluationResult':
        return cls(
            message=REJECTION_MESSAGE.format(wait=wait),
            error_kind_id=MIN_AGE_NOT_REACHED,
            params=wait,
        )

    def to_dict(self) -> dict:
        if self.allowed:
            return {'allowed': True}
        return {
            'allowed': False,
            'error': self.message,
            'errorKindId': self.error_kind_id,
            'params': self.params,
        }


def resolve_min_age(configured: ConfiguredAge) -> int:
    """
    Turn the configured value into seconds at evaluation time.

    Hosts normally hand over the parsed value, but may fall back to the raw
    configuration string. A raw string is parsed again here and any error
    collapses to 0 (disabled) so validation never fails on configuration.
    """
    if configured is None:
        return 0
    if isinstance(configured, str):
        try:
            return parse_duration(configured)
        except PolicyConfigError as e:
            logger.warning("Ignoring invalid minimum password age %r: %s", configured, e.message)
            return 0
    return int(configured)


class MinimumAgePolicy:
    """Minimum time between password changes"""

    def parse_config(self, raw: Optional[str]) -> int:
        """
        Validate a configuration value before it is persisted.

        Raises:
            PolicyConfigError: If the value is not a valid duration
        """
        return parse_duration(raw)

    def evaluate(self, context: EvaluationContext, configured: ConfiguredAge,
                 now: Optional[datetime] = None) -> EvaluationResult:
        """
        Decide whether a password change may proceed.

        Args:
            context: Request path, pending required actions and stored credentials
            configured: Minimum age in seconds, or the raw configuration string
            now: Current time; defaults to the UTC wall clock

        Returns:
            EvaluationResult, rejected with minPasswordAgeNotReached when the
            current password is too recent
        """
        if should_bypass(context):
            logger.debug("Minimum password age check bypassed (path=%s)", context.request_path)
            return EvaluationResult.allow()

        min_age_seconds = resolve_min_age(configured)
        if min_age_seconds <= 0:
            return EvaluationResult.allow()

        credential = context.current_credential()
        if credential is None:
            return EvaluationResult.allow()

        current_time = _as_utc(now) if now is not None else datetime.now(timezone.utc)
        age_seconds = int((current_time - _as_utc(credential.created_at)).total_seconds())

        if age_seconds >= min_age_seconds:
            return EvaluationResult.allow()

        wait = format_wait_time(min_age_seconds - age_seconds)
        logger.info("Password change rejected, minimum age not reached (wait %s)", wait)
        return EvaluationResult.reject(wait)


_policy = MinimumAgePolicy()


def evaluate(context: EvaluationContext, configured: ConfiguredAge,
             now: Optional[datetime] = None) -> EvaluationResult:
    """Evaluate using a shared policy instance"""
    return _policy.evaluate(context, configured, now=now)


def parse_configuration(raw: Optional[str]) -> int:
    """Parse a configuration value using a shared policy instance"""
    return _policy.parse_config(raw)
