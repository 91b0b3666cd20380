"""Validation run orchestration."""

from sitelint.engine.context import ContextBuilder
from sitelint.engine.service import ValidationService

__all__ = ["ContextBuilder", "ValidationService"]
