"""Validation data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, computed_field

from sitelint.content.models import ContentFile


class IssueType(str, Enum):
    """Errors fail a validator, warnings never do."""

    error = "error"
    warning = "warning"


class ValidatorStatus(str, Enum):
    passed = "passed"
    warning = "warning"
    failed = "failed"


class ValidatorCategory(str, Enum):
    content = "content"
    seo = "seo"
    integrity = "integrity"
    components = "components"


class EstimatedDuration(str, Enum):
    fast = "fast"
    medium = "medium"
    slow = "slow"


class ValidationIssue(BaseModel):
    """A single validation finding."""

    type: IssueType
    code: str
    message: str
    file: str | None = None
    line: int | None = None
    suggestion: str | None = None


class ValidatorResult(BaseModel):
    """Outcome of one validator run."""

    name: str
    description: str
    errors: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[ValidationIssue] = Field(default_factory=list)
    duration: int = 0
    artifacts: dict[str, Any] | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status(self) -> ValidatorStatus:
        if self.errors:
            return ValidatorStatus.failed
        if self.warnings:
            return ValidatorStatus.warning
        return ValidatorStatus.passed


class ValidatorMetadata(BaseModel):
    name: str
    description: str
    category: ValidatorCategory
    api_exposed: bool = True
    estimated_duration: EstimatedDuration = EstimatedDuration.fast


class RunSummary(BaseModel):
    total: int = 0
    passed: int = 0
    failed: int = 0
    warnings: int = 0
    duration: int = 0


class ValidationRunOptions(BaseModel):
    validators: list[str] | None = None
    include_artifacts: bool = False


class ValidationRunResult(BaseModel):
    """Aggregated result of a validation run."""

    summary: RunSummary = Field(default_factory=RunSummary)
    validators: list[ValidatorResult] = Field(default_factory=list)


class SitemapEntry(BaseModel):
    loc: str
    type: str = "static"
    slug: str | None = None
    locale: str | None = None


@dataclass
class RedirectEntry:
    """A normalized redirect source pointing at a target URL."""

    source_url: str
    target: str
    origin: ContentFile


@dataclass
class ValidationContext:
    """Shared read model for one validation run.

    Only the redirects validator may replace ``redirect_map``; everything
    else is read-only for the duration of a run.
    """

    content_files: list[ContentFile]
    valid_urls: set[str]
    available_schemas: set[str]
    content_dir: Path
    redirect_map: dict[str, RedirectEntry] = field(default_factory=dict)
    sitemap_entries: list[SitemapEntry] = field(default_factory=list)
