"""Content validators and their shared result models."""

from sitelint.validators.base import Validator
from sitelint.validators.models import (
    ValidationContext,
    ValidationIssue,
    ValidationRunOptions,
    ValidationRunResult,
    ValidatorResult,
    ValidatorStatus,
)
from sitelint.validators.registry import build_validators, get_validator

__all__ = [
    "ValidationContext",
    "ValidationIssue",
    "ValidationRunOptions",
    "ValidationRunResult",
    "Validator",
    "ValidatorResult",
    "ValidatorStatus",
    "build_validators",
    "get_validator",
]
