"""Minimum password age policy engine"""
from .duration import parse_duration
from .wait_time import format_wait_time
from .bypass import should_bypass, UPDATE_PASSWORD_ACTION
from .min_age import (
    CredentialRecord,
    EvaluationContext,
    EvaluationResult,
    MinimumAgePolicy,
    MIN_AGE_NOT_REACHED,
    evaluate,
    parse_configuration,
    resolve_min_age,
)
from .registry import MIN_PASSWORD_AGE_POLICY_ID, PolicyDescriptor, get_descriptor

__all__ = [
    'parse_duration',
    'format_wait_time',
    'should_bypass',
    'UPDATE_PASSWORD_ACTION',
    'CredentialRecord',
    'EvaluationContext',
    'EvaluationResult',
    'MinimumAgePolicy',
    'MIN_AGE_NOT_REACHED',
    'evaluate',
    'parse_configuration',
    'resolve_min_age',
    'MIN_PASSWORD_AGE_POLICY_ID',
    'PolicyDescriptor',
    'get_descriptor',
]
