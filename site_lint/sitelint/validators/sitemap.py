"""Sitemap validation -- entries vs content files and redirects."""

from __future__ import annotations

import time
from collections import Counter

from sitelint.content.urls import get_canonical_url
from sitelint.validators.base import Validator, error, warning
from sitelint.validators.models import (
    EstimatedDuration,
    ValidationContext,
    ValidationIssue,
    ValidatorCategory,
    ValidatorResult,
)


class SitemapValidator(Validator):
    name = "sitemap"
    description = "Validates sitemap entries match actual content files"
    category = ValidatorCategory.integrity
    estimated_duration = EstimatedDuration.medium

    async def run(self, context: ValidationContext) -> ValidatorResult:
        started = time.perf_counter()
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []

        content_urls = {get_canonical_url(f) for f in context.content_files}
        sitemap_urls = {e.loc for e in context.sitemap_entries}

        if context.sitemap_entries:
            for file in context.content_files:
                url = get_canonical_url(file)
                if url not in sitemap_urls:
                    warnings.append(
                        warning(
                            "CONTENT_NOT_IN_SITEMAP",
                            f"Content file has no sitemap entry: {url}",
                            file=file.file_path,
                            suggestion="Regenerate the sitemap or check if the content is excluded intentionally",
                        )
                    )

        for entry in context.sitemap_entries:
            if entry.type == "static" or entry.loc in content_urls:
                continue
            if entry.loc in context.redirect_map:
                continue
            errors.append(
                error(
                    "ORPHAN_SITEMAP_ENTRY",
                    f"Sitemap contains URL without content: {entry.loc}",
                    suggestion="Remove this entry from the sitemap or create the missing content",
                )
            )

        for url, count in Counter(e.loc for e in context.sitemap_entries).items():
            if count > 1:
                warnings.append(
                    warning(
                        "DUPLICATE_SITEMAP_ENTRY",
                        f"Duplicate sitemap entry: {url} (appears {count} times)",
                        suggestion="Remove duplicate entries from the sitemap",
                    )
                )

        return self._result(
            started,
            errors,
            warnings,
            {
                "contentUrlCount": len(content_urls),
                "sitemapUrlCount": len(sitemap_urls),
                "orphanedEntries": len(errors),
                "missingFromSitemap": sum(
                    1 for w in warnings if w.code == "CONTENT_NOT_IN_SITEMAP"
                ),
            },
        )
