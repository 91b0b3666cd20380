"""Content quality -- sections, empty critical fields, internal links, translations."""

from __future__ import annotations

import re
import time
from typing import Any

from sitelint.content.models import ContentType
from sitelint.validators.base import Validator, error, warning
from sitelint.validators.models import (
    EstimatedDuration,
    ValidationContext,
    ValidationIssue,
    ValidatorCategory,
    ValidatorResult,
)

CRITICAL_FIELDS = {"title", "heading", "description", "subtitle", "tagline"}
REQUIRED_LOCALES = ("en", "es")

INTERNAL_LINK_RE = re.compile(r"(?:^|\s)(/(?:en|es)/[^\s\"'<>]*)")


def find_empty_fields(obj: Any, path: str = "") -> list[str]:
    """Dotted paths of critical text fields whose value is blank."""
    results: list[str] = []
    if isinstance(obj, list):
        for i, item in enumerate(obj):
            results.extend(find_empty_fields(item, f"{path}[{i}]"))
    elif isinstance(obj, dict):
        for key, value in obj.items():
            field_path = f"{path}.{key}" if path else str(key)
            if key in CRITICAL_FIELDS and isinstance(value, str) and not value.strip():
                results.append(field_path)
            elif isinstance(value, (dict, list)):
                results.extend(find_empty_fields(value, field_path))
    return results


def find_internal_links(obj: Any) -> list[str]:
    """Every ``/en/...`` or ``/es/...`` link found in string values."""
    links: list[str] = []
    if isinstance(obj, str):
        links.extend(INTERNAL_LINK_RE.findall(obj))
    elif isinstance(obj, list):
        for item in obj:
            links.extend(find_internal_links(item))
    elif isinstance(obj, dict):
        for value in obj.values():
            links.extend(find_internal_links(value))
    return links


class ContentQualityValidator(Validator):
    name = "content-quality"
    description = "Validates content quality: sections structure, translation coverage, empty fields, and internal links"
    category = ValidatorCategory.content
    estimated_duration = EstimatedDuration.medium

    async def run(self, context: ValidationContext) -> ValidatorResult:
        started = time.perf_counter()
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []

        empty_sections = 0
        missing_types = 0
        empty_fields = 0
        broken_links = 0

        for file in context.content_files:
            data = file.data

            sections = data.get("sections")
            if not isinstance(sections, list) or not sections:
                empty_sections += 1
                errors.append(
                    error(
                        "EMPTY_SECTIONS",
                        "Content file has no sections defined",
                        file=file.file_path,
                        suggestion="Add a sections array with at least one section",
                    )
                )
            else:
                for i, section in enumerate(sections):
                    if not (isinstance(section, dict) and section.get("type")):
                        missing_types += 1
                        errors.append(
                            error(
                                "SECTION_MISSING_TYPE",
                                f"Section at index {i} is missing a type field",
                                file=file.file_path,
                                suggestion="Add a type field to every section (e.g., hero, faq, features_grid)",
                            )
                        )

            for field_path in find_empty_fields(data):
                empty_fields += 1
                warnings.append(
                    warning(
                        "EMPTY_FIELD_VALUE",
                        f'Critical field "{field_path}" has an empty value',
                        file=file.file_path,
                        suggestion="Fill in the empty field or remove it if not needed",
                    )
                )

            for link in find_internal_links(data):
                if link not in context.valid_urls:
                    broken_links += 1
                    errors.append(
                        error(
                            "BROKEN_INTERNAL_LINK",
                            f'Broken internal link: "{link}"',
                            file=file.file_path,
                            suggestion="Fix the URL or remove the broken link",
                        )
                    )

        # Landings are excluded from translation pairing.
        groups: dict[str, set[str]] = {}
        for file in context.content_files:
            if file.type == ContentType.landing:
                continue
            groups.setdefault(f"{file.type.value}:{file.slug}", set()).add(file.locale)

        missing_translations = 0
        for key, locales in groups.items():
            for locale in REQUIRED_LOCALES:
                if locale not in locales:
                    missing_translations += 1
                    warnings.append(
                        warning(
                            "MISSING_TRANSLATION",
                            f'{key} is missing "{locale}" locale translation',
                            suggestion=f"Add the {locale} locale file for this content",
                        )
                    )
                    break

        return self._result(
            started,
            errors,
            warnings,
            {
                "pagesChecked": len(context.content_files),
                "emptySections": empty_sections,
                "missingTypes": missing_types,
                "missingTranslations": missing_translations,
                "brokenLinks": broken_links,
                "emptyFields": empty_fields,
            },
        )
