"""Validation service -- runs validators and aggregates their results.

Shared by the CLI and the HTTP API.  The service caches one context between
runs; ``build_context`` or ``clear_context`` force a reload.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from sitelint.content.models import ContentType
from sitelint.engine.context import ContextBuilder
from sitelint.validators.base import Validator, elapsed_ms, error
from sitelint.validators.models import (
    RunSummary,
    ValidationContext,
    ValidationRunOptions,
    ValidationRunResult,
    ValidatorMetadata,
    ValidatorResult,
    ValidatorStatus,
)
from sitelint.validators.registry import get_validator, list_validators

logger = logging.getLogger(__name__)


def _summarize(results: list[ValidatorResult], duration: int) -> RunSummary:
    return RunSummary(
        total=len(results),
        passed=sum(1 for r in results if r.status == ValidatorStatus.passed),
        failed=sum(1 for r in results if r.status == ValidatorStatus.failed),
        warnings=sum(1 for r in results if r.status == ValidatorStatus.warning),
        duration=duration,
    )


class ValidationService:
    """Runs an explicit list of validators against a cached context."""

    def __init__(self, validators: list[Validator], context_builder: ContextBuilder) -> None:
        self._validators = validators
        self._context_builder = context_builder
        self._context: ValidationContext | None = None

    @property
    def validators(self) -> list[Validator]:
        return self._validators

    def build_context(self) -> ValidationContext:
        """Rebuild, cache and return the validation context."""
        self._context = self._context_builder.build()
        return self._context

    def get_context(self) -> ValidationContext | None:
        return self._context

    def clear_context(self) -> None:
        self._context = None

    def get_available_validators(self) -> list[ValidatorMetadata]:
        return list_validators(self._validators)

    async def run_validators(
        self, options: ValidationRunOptions | None = None,
    ) -> ValidationRunResult:
        """Run the requested validators in order and aggregate the outcome.

        An unknown name or a validator that raises becomes a failed result
        in its slot; the remaining validators still run.
        """
        options = options or ValidationRunOptions()
        started = time.perf_counter()

        context = self._context or self.build_context()

        names = (
            options.validators
            if options.validators is not None
            else [v.name for v in self._validators]
        )
        results: list[ValidatorResult] = []

        for name in names:
            validator = get_validator(self._validators, name)
            if validator is None:
                logger.warning("Unknown validator requested: %s", name)
                results.append(
                    ValidatorResult(
                        name=name,
                        description="Unknown validator",
                        errors=[error("UNKNOWN_VALIDATOR", f'Validator "{name}" not found')],
                    )
                )
                continue

            logger.debug("Running validator %s", name)
            try:
                result = await validator.run(context)
            except Exception as e:
                logger.exception("Validator %s raised", name)
                results.append(
                    ValidatorResult(
                        name=validator.name,
                        description=validator.description,
                        errors=[error("VALIDATOR_ERROR", f"Validator threw an error: {e}")],
                    )
                )
                continue

            if not options.include_artifacts:
                result.artifacts = None
            results.append(result)

        summary = _summarize(results, elapsed_ms(started))
        logger.info(
            "Validation finished: %d passed, %d warnings, %d failed (%dms)",
            summary.passed,
            summary.warnings,
            summary.failed,
            summary.duration,
        )
        return ValidationRunResult(summary=summary, validators=results)

    async def run_single_validator(
        self, name: str, include_artifacts: bool = False,
    ) -> ValidatorResult:
        result = await self.run_validators(
            ValidationRunOptions(validators=[name], include_artifacts=include_artifacts)
        )
        return result.validators[0]

    def describe_context(self) -> dict[str, Any]:
        """Counts for the current context, building one if needed."""
        context = self._context or self.build_context()
        files = context.content_files
        return {
            "contentFiles": {
                "programs": sum(1 for f in files if f.type == ContentType.program),
                "landings": sum(1 for f in files if f.type == ContentType.landing),
                "locations": sum(1 for f in files if f.type == ContentType.location),
                "pages": sum(1 for f in files if f.type == ContentType.page),
            },
            "totalFiles": len(files),
            "validUrls": len(context.valid_urls),
            "availableSchemas": len(context.available_schemas),
            "redirects": len(context.redirect_map),
        }
