"""Meta validation -- page_title, description, priority, change_frequency, robots."""

from __future__ import annotations

import time
from typing import Any

from sitelint.validators.base import Validator, error, warning
from sitelint.validators.models import (
    ValidationContext,
    ValidationIssue,
    ValidatorCategory,
    ValidatorResult,
)

VALID_CHANGE_FREQUENCIES = [
    "always",
    "hourly",
    "daily",
    "weekly",
    "monthly",
    "yearly",
    "never",
]

VALID_ROBOTS_DIRECTIVES = ["index", "noindex", "follow", "nofollow", "none", "all"]


def _is_valid_priority(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return 0 <= value <= 1


class MetaValidator(Validator):
    name = "meta"
    description = "Validates meta properties (page_title, description, priority, change_frequency)"
    category = ValidatorCategory.seo

    async def run(self, context: ValidationContext) -> ValidatorResult:
        started = time.perf_counter()
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []
        missing_titles = 0
        missing_descriptions = 0

        for file in context.content_files:
            meta = file.meta

            if not (meta and meta.page_title):
                missing_titles += 1
                warnings.append(
                    warning(
                        "MISSING_PAGE_TITLE",
                        "Missing page_title in meta",
                        file=file.file_path,
                        suggestion="Add a descriptive page_title for better SEO",
                    )
                )

            if not (meta and meta.description):
                missing_descriptions += 1
                warnings.append(
                    warning(
                        "MISSING_DESCRIPTION",
                        "Missing description in meta",
                        file=file.file_path,
                        suggestion="Add a meta description (150-160 characters) for better SEO",
                    )
                )

            if meta is None:
                continue

            if meta.priority is not None and not _is_valid_priority(meta.priority):
                errors.append(
                    error(
                        "INVALID_PRIORITY",
                        f"Invalid priority value: {meta.priority}. Must be a number between 0 and 1",
                        file=file.file_path,
                        suggestion="Set priority to a value between 0.0 and 1.0 (e.g., 0.8)",
                    )
                )

            if meta.change_frequency and meta.change_frequency not in VALID_CHANGE_FREQUENCIES:
                errors.append(
                    error(
                        "INVALID_CHANGE_FREQUENCY",
                        f'Invalid change_frequency: "{meta.change_frequency}"',
                        file=file.file_path,
                        suggestion=f"Use one of: {', '.join(VALID_CHANGE_FREQUENCIES)}",
                    )
                )

            if meta.robots:
                for part in (p.strip().lower() for p in meta.robots.split(",")):
                    if part not in VALID_ROBOTS_DIRECTIVES:
                        warnings.append(
                            warning(
                                "UNKNOWN_ROBOTS_DIRECTIVE",
                                f'Unknown robots directive: "{part}"',
                                file=file.file_path,
                                suggestion=f"Valid directives: {', '.join(VALID_ROBOTS_DIRECTIVES)}",
                            )
                        )

        return self._result(
            started,
            errors,
            warnings,
            {
                "filesChecked": len(context.content_files),
                "missingTitles": missing_titles,
                "missingDescriptions": missing_descriptions,
            },
        )
