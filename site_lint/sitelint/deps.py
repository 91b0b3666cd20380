"""Shared FastAPI dependencies."""

from __future__ import annotations

from sitelint.engine.service import ValidationService

_validation_service: ValidationService | None = None


def get_validation_service() -> ValidationService:
    """FastAPI dependency: return the shared ValidationService."""
    assert _validation_service is not None, "ValidationService not initialised"
    return _validation_service
