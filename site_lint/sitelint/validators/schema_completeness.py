"""Schema.org completeness -- rendered JSON-LD, placeholders and FAQ coverage."""

from __future__ import annotations

import json
import re
import time
from typing import Any

from sitelint.content.urls import get_canonical_url
from sitelint.schema_org.renderer import SchemaRenderer
from sitelint.validators.base import Validator, error, warning
from sitelint.validators.models import (
    EstimatedDuration,
    ValidationContext,
    ValidationIssue,
    ValidatorCategory,
    ValidatorResult,
)

JSONLD_SCRIPT_RE = re.compile(
    r'<script type="application/ld\+json"[^>]*>(.*?)</script>', re.DOTALL,
)
PLACEHOLDER_RE = re.compile(r"todo", re.IGNORECASE)


def find_placeholders(obj: Any) -> list[str]:
    """Recursively collect string values that look like TODO placeholders."""
    found: list[str] = []
    if isinstance(obj, str):
        if PLACEHOLDER_RE.search(obj):
            found.append(obj)
    elif isinstance(obj, list):
        for item in obj:
            found.extend(find_placeholders(item))
    elif isinstance(obj, dict):
        for value in obj.values():
            found.extend(find_placeholders(value))
    return found


def extract_jsonld_blocks(html: str) -> list[Any]:
    """Parse every JSON-LD script body; malformed bodies are ignored."""
    blocks: list[Any] = []
    for match in JSONLD_SCRIPT_RE.finditer(html):
        try:
            blocks.append(json.loads(match.group(1)))
        except json.JSONDecodeError:
            continue
    return blocks


class SchemaCompletenessValidator(Validator):
    name = "schema-completeness"
    description = "Validates Schema.org completeness: rendered output, required fields, placeholders, and FAQ coverage"
    category = ValidatorCategory.seo
    estimated_duration = EstimatedDuration.medium

    def __init__(self, renderer: SchemaRenderer) -> None:
        self._renderer = renderer

    async def run(self, context: ValidationContext) -> ValidatorResult:
        started = time.perf_counter()
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []

        pages_with_schema = 0
        pages_without_schema = 0
        total_blocks = 0
        placeholder_values = 0

        for file in context.content_files:
            url = get_canonical_url(file)

            try:
                html = self._renderer.render(file)
            except Exception as e:
                errors.append(
                    error(
                        "SCHEMA_RENDER_ERROR",
                        f"Failed to render schema for {url}: {e}",
                        file=file.file_path,
                        suggestion="Check the schema configuration and rendering logic",
                    )
                )
                continue

            has_schema_config = bool(file.schema_ref and file.schema_ref.include)
            if not has_schema_config:
                pages_without_schema += 1
                warnings.append(
                    warning(
                        "PAGE_NO_SCHEMA",
                        f"No schema configured for {url}",
                        file=file.file_path,
                        suggestion="Add a schema.include array to improve structured data coverage",
                    )
                )
                continue

            pages_with_schema += 1
            if not html:
                warnings.append(
                    warning(
                        "SCHEMA_EMPTY_OUTPUT",
                        f"Schema is configured but rendered output is empty for {url}",
                        file=file.file_path,
                        suggestion="Check that the schema references in include array are valid",
                    )
                )

            payloads = extract_jsonld_blocks(html)
            blocks = [b for b in payloads if isinstance(b, dict)]
            total_blocks += len(payloads)

            for payload in payloads:
                for placeholder in find_placeholders(payload):
                    placeholder_values += 1
                    errors.append(
                        error(
                            "SCHEMA_PLACEHOLDER_VALUE",
                            f'Schema contains placeholder value: "{placeholder[:80]}"',
                            file=file.file_path,
                            suggestion="Replace TODO placeholder with actual content",
                        )
                    )

            for block in blocks:
                if not block.get("name"):
                    warnings.append(
                        warning(
                            "SCHEMA_MISSING_NAME",
                            f'JSON-LD block missing "name" field for {url}',
                            file=file.file_path,
                            suggestion="Add a name field to the schema for better search engine understanding",
                        )
                    )
                if not block.get("description"):
                    warnings.append(
                        warning(
                            "SCHEMA_MISSING_DESCRIPTION",
                            f'JSON-LD block missing "description" field for {url}',
                            file=file.file_path,
                            suggestion="Add a description field to the schema",
                        )
                    )

            sections = file.data.get("sections")
            has_faq_section = isinstance(sections, list) and any(
                isinstance(s, dict) and s.get("type") == "faq" for s in sections
            )
            if has_faq_section and not any(b.get("@type") == "FAQPage" for b in blocks):
                warnings.append(
                    warning(
                        "FAQ_SECTION_NO_SCHEMA",
                        f"Page has FAQ section but no FAQPage schema rendered for {url}",
                        file=file.file_path,
                        suggestion="Ensure FAQ sections generate FAQPage structured data",
                    )
                )

        return self._result(
            started,
            errors,
            warnings,
            {
                "pagesWithSchema": pages_with_schema,
                "pagesWithoutSchema": pages_without_schema,
                "totalJsonLdBlocks": total_blocks,
                "placeholderValues": placeholder_values,
            },
        )
