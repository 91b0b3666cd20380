"""Abstract validator interface."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import Any

from sitelint.validators.models import (
    EstimatedDuration,
    IssueType,
    ValidationContext,
    ValidationIssue,
    ValidatorCategory,
    ValidatorMetadata,
    ValidatorResult,
)


def error(code: str, message: str, **kwargs: Any) -> ValidationIssue:
    return ValidationIssue(type=IssueType.error, code=code, message=message, **kwargs)


def warning(code: str, message: str, **kwargs: Any) -> ValidationIssue:
    return ValidationIssue(type=IssueType.warning, code=code, message=message, **kwargs)


def elapsed_ms(started: float) -> int:
    """Milliseconds since a ``time.perf_counter()`` reading."""
    return int((time.perf_counter() - started) * 1000)


class Validator(ABC):
    """A named, stateless check over a ValidationContext.

    Subclasses set the metadata class attributes and implement ``run``.
    """

    name: str = ""
    description: str = ""
    category: ValidatorCategory = ValidatorCategory.content
    api_exposed: bool = True
    estimated_duration: EstimatedDuration = EstimatedDuration.fast

    @property
    def metadata(self) -> ValidatorMetadata:
        return ValidatorMetadata(
            name=self.name,
            description=self.description,
            category=self.category,
            api_exposed=self.api_exposed,
            estimated_duration=self.estimated_duration,
        )

    @abstractmethod
    async def run(self, context: ValidationContext) -> ValidatorResult:
        """Check the context and report findings; must not mutate it."""
        ...

    def _result(
        self,
        started: float,
        errors: list[ValidationIssue],
        warnings: list[ValidationIssue],
        artifacts: dict[str, Any] | None = None,
    ) -> ValidatorResult:
        return ValidatorResult(
            name=self.name,
            description=self.description,
            errors=errors,
            warnings=warnings,
            duration=elapsed_ms(started),
            artifacts=artifacts,
        )
