"""FAQ validation -- every entry needs a recent last_updated date."""

from __future__ import annotations

import time
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Any

from ruamel.yaml import YAMLError

from sitelint.content.loader import load_yaml_file
from sitelint.validators.base import Validator, error, warning
from sitelint.validators.models import (
    ValidationContext,
    ValidationIssue,
    ValidatorCategory,
    ValidatorResult,
)

FAQ_LOCALES = ("en", "es")
STALE_AFTER = timedelta(days=6 * 30)


def parse_faq_date(value: Any) -> date | None:
    """Accept YAML dates, datetimes and ISO strings; None if unparsable."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip()).date()
        except ValueError:
            return None
    return None


class FaqsValidator(Validator):
    name = "faqs"
    description = "Validates FAQ entries have last_updated dates within 6 months"
    category = ValidatorCategory.content

    def __init__(self, today: date | None = None) -> None:
        self._today = today

    async def run(self, context: ValidationContext) -> ValidatorResult:
        started = time.perf_counter()
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []
        today = self._today or date.today()

        counts: dict[str, int] = {}
        faq_dir = context.content_dir / "faqs"
        for locale in FAQ_LOCALES:
            counts[locale] = self._check_file(faq_dir / f"{locale}.yml", today, errors, warnings)

        return self._result(
            started,
            errors,
            warnings,
            {
                "filesChecked": len(FAQ_LOCALES),
                "totalFAQs": sum(counts.values()),
                "englishFAQs": counts["en"],
                "spanishFAQs": counts["es"],
                "staleFAQs": sum(1 for e in errors if e.code == "STALE_FAQ_ANSWER"),
                "missingDates": sum(1 for e in errors if e.code == "MISSING_LAST_UPDATED"),
            },
        )

    def _check_file(
        self,
        file_path: Path,
        today: date,
        errors: list[ValidationIssue],
        warnings: list[ValidationIssue],
    ) -> int:
        """Validate one locale file; return the number of entries checked."""
        path_str = str(file_path)

        if not file_path.exists():
            warnings.append(
                warning(
                    "FAQ_FILE_NOT_FOUND",
                    f"FAQ file not found: {file_path}",
                    file=path_str,
                    suggestion="Create the FAQ file with the required structure",
                )
            )
            return 0

        try:
            parsed = load_yaml_file(file_path)
        except (YAMLError, OSError, UnicodeDecodeError) as e:
            errors.append(
                error(
                    "FAQ_PARSE_ERROR",
                    f"Failed to parse FAQ file: {e}",
                    file=path_str,
                    suggestion="Check the YAML syntax in this file",
                )
            )
            return 0

        faqs = parsed.get("faqs") if isinstance(parsed, dict) else None
        if not isinstance(faqs, list):
            errors.append(
                error(
                    "INVALID_FAQ_STRUCTURE",
                    "FAQ file must contain a 'faqs' array",
                    file=path_str,
                    suggestion="Add a 'faqs:' key with an array of FAQ entries",
                )
            )
            return 0

        for index, faq in enumerate(faqs):
            entry = faq if isinstance(faq, dict) else {}
            question = entry.get("question")
            preview = str(question)[:50] if question else f"Entry {index + 1}"
            raw_date = entry.get("last_updated")

            if not raw_date:
                errors.append(
                    error(
                        "MISSING_LAST_UPDATED",
                        f'FAQ "{preview}..." is missing last_updated date',
                        file=path_str,
                        line=index + 1,
                        suggestion="Add 'last_updated: YYYY-MM-DD' to this FAQ entry",
                    )
                )
                continue

            updated = parse_faq_date(raw_date)
            if updated is None:
                errors.append(
                    error(
                        "INVALID_DATE_FORMAT",
                        f'FAQ "{preview}..." has invalid date format: {raw_date}',
                        file=path_str,
                        line=index + 1,
                        suggestion="Use YYYY-MM-DD format (e.g., 2025-01-15)",
                    )
                )
                continue

            age = today - updated
            if age > STALE_AFTER:
                errors.append(
                    error(
                        "STALE_FAQ_ANSWER",
                        f'FAQ "{preview}..." was last updated {age.days // 30} months ago ({updated.isoformat()})',
                        file=path_str,
                        line=index + 1,
                        suggestion="Review and update this FAQ answer, then set last_updated to today's date",
                    )
                )

        return len(faqs)
