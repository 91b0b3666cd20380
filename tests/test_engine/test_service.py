"""Tests for ValidationService."""

from __future__ import annotations

import time
from datetime import date

import pytest

from sitelint.engine.context import ContextBuilder
from sitelint.engine.service import ValidationService
from sitelint.validators.base import Validator, error, warning
from sitelint.validators.models import (
    ValidationContext,
    ValidationRunOptions,
    ValidatorResult,
    ValidatorStatus,
)
from sitelint.validators.registry import build_validators

TODAY = date(2026, 10, 1)


class FixedValidator(Validator):
    """Returns a canned outcome."""

    description = "Canned outcome"

    def __init__(self, name: str, errors: int = 0, warnings: int = 0) -> None:
        self.name = name
        self._errors = errors
        self._warnings = warnings

    async def run(self, context: ValidationContext) -> ValidatorResult:
        started = time.perf_counter()
        return self._result(
            started,
            [error("E", "boom") for _ in range(self._errors)],
            [warning("W", "hmm") for _ in range(self._warnings)],
            {"seen": len(context.content_files)},
        )


class ExplodingValidator(Validator):
    name = "exploding"
    description = "Always raises"

    async def run(self, context: ValidationContext) -> ValidatorResult:
        raise ValueError("kaboom")


def _service(site_settings, *validators: Validator) -> ValidationService:
    return ValidationService(list(validators), ContextBuilder(site_settings))


class TestRunValidators:
    @pytest.mark.asyncio
    async def test_summary_partitions_results(self, site_settings) -> None:
        service = _service(
            site_settings,
            FixedValidator("ok"),
            FixedValidator("warn", warnings=2),
            FixedValidator("fail", errors=1, warnings=1),
        )
        result = await service.run_validators()

        summary = result.summary
        assert summary.total == 3
        assert (summary.passed, summary.warnings, summary.failed) == (1, 1, 1)
        assert summary.passed + summary.warnings + summary.failed == summary.total
        assert [r.status for r in result.validators] == [
            ValidatorStatus.passed,
            ValidatorStatus.warning,
            ValidatorStatus.failed,
        ]

    @pytest.mark.asyncio
    async def test_exception_is_isolated(self, site_settings) -> None:
        service = _service(site_settings, ExplodingValidator(), FixedValidator("after"))
        result = await service.run_validators()

        exploded, after = result.validators
        assert exploded.status == ValidatorStatus.failed
        assert [e.code for e in exploded.errors] == ["VALIDATOR_ERROR"]
        assert "kaboom" in exploded.errors[0].message
        assert exploded.duration == 0
        assert after.status == ValidatorStatus.passed
        assert result.summary.failed == 1

    @pytest.mark.asyncio
    async def test_unknown_validator_keeps_its_slot(self, site_settings) -> None:
        service = _service(site_settings, FixedValidator("a"), FixedValidator("b"))
        result = await service.run_validators(
            ValidationRunOptions(validators=["a", "nonexistent", "b"])
        )

        assert [r.name for r in result.validators] == ["a", "nonexistent", "b"]
        unknown = result.validators[1]
        assert unknown.description == "Unknown validator"
        assert [e.code for e in unknown.errors] == ["UNKNOWN_VALIDATOR"]
        assert 'Validator "nonexistent" not found' == unknown.errors[0].message
        assert result.summary.failed == 1

    @pytest.mark.asyncio
    async def test_subset_runs_in_requested_order(self, site_settings) -> None:
        service = _service(site_settings, FixedValidator("a"), FixedValidator("b"))
        result = await service.run_validators(ValidationRunOptions(validators=["b", "a"]))
        assert [r.name for r in result.validators] == ["b", "a"]

    @pytest.mark.asyncio
    async def test_artifacts_stripped_by_default(self, site_settings) -> None:
        service = _service(site_settings, FixedValidator("a"))

        stripped = await service.run_validators()
        assert stripped.validators[0].artifacts is None
        assert "artifacts" not in stripped.model_dump(mode="json", exclude_none=True)["validators"][0]

        kept = await service.run_validators(ValidationRunOptions(include_artifacts=True))
        assert kept.validators[0].artifacts == {"seen": 4}

    @pytest.mark.asyncio
    async def test_run_single_validator(self, site_settings) -> None:
        service = _service(site_settings, FixedValidator("a"), FixedValidator("b", warnings=1))
        result = await service.run_single_validator("b")
        assert result.name == "b"
        assert result.status == ValidatorStatus.warning


class TestContextCache:
    @pytest.mark.asyncio
    async def test_context_built_lazily_and_cached(self, site_settings) -> None:
        service = _service(site_settings, FixedValidator("a"))
        assert service.get_context() is None

        await service.run_validators()
        first = service.get_context()
        assert first is not None

        await service.run_validators()
        assert service.get_context() is first

        service.clear_context()
        assert service.get_context() is None

    def test_build_context_always_rebuilds(self, site_settings) -> None:
        service = _service(site_settings)
        first = service.build_context()
        assert service.build_context() is not first

    def test_describe_context(self, site_settings) -> None:
        service = _service(site_settings)
        assert service.describe_context() == {
            "contentFiles": {"programs": 2, "landings": 0, "locations": 2, "pages": 0},
            "totalFiles": 4,
            "validUrls": 13,
            "availableSchemas": 3,
            "redirects": 1,
        }

    def test_available_validators(self, site_settings) -> None:
        service = _service(site_settings, FixedValidator("a"), ExplodingValidator())
        assert [m.name for m in service.get_available_validators()] == ["a", "exploding"]


@pytest.mark.asyncio
async def test_full_run_over_sample_site(site_settings) -> None:
    service = ValidationService(build_validators(site_settings, today=TODAY), ContextBuilder(site_settings))
    result = await service.run_validators()

    statuses = {r.name: r.status for r in result.validators}
    assert statuses.pop("schema-completeness") == ValidatorStatus.warning
    assert set(statuses.values()) == {ValidatorStatus.passed}
    assert result.summary.total == 11
    assert result.summary.failed == 0
