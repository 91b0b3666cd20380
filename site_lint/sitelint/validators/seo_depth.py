"""SEO depth validation -- title/description length, OG image, canonical, duplicates."""

from __future__ import annotations

import time

from sitelint.validators.base import Validator, error, warning
from sitelint.validators.models import (
    ValidationContext,
    ValidationIssue,
    ValidatorCategory,
    ValidatorResult,
)

TITLE_MIN, TITLE_MAX = 30, 60
DESCRIPTION_MIN, DESCRIPTION_MAX = 70, 160


class SeoDepthValidator(Validator):
    name = "seo-depth"
    description = "Validates SEO depth: title/description length, OG image, canonical URL, and duplicates"
    category = ValidatorCategory.seo

    async def run(self, context: ValidationContext) -> ValidatorResult:
        started = time.perf_counter()
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []

        titles: dict[str, list[str]] = {}
        descriptions: dict[str, list[str]] = {}
        optimal_titles = 0
        optimal_descriptions = 0

        for file in context.content_files:
            meta = file.meta
            page_title = meta.page_title if meta else None
            description = meta.description if meta else None

            if page_title:
                if len(page_title) < TITLE_MIN:
                    warnings.append(
                        warning(
                            "TITLE_TOO_SHORT",
                            f'Page title is too short ({len(page_title)} chars): "{page_title}"',
                            file=file.file_path,
                            suggestion=f"Aim for a page title between {TITLE_MIN}-{TITLE_MAX} characters for optimal SEO",
                        )
                    )
                elif len(page_title) > TITLE_MAX:
                    warnings.append(
                        warning(
                            "TITLE_TOO_LONG",
                            f'Page title is too long ({len(page_title)} chars): "{page_title[:TITLE_MAX]}..."',
                            file=file.file_path,
                            suggestion=f"Keep page title under {TITLE_MAX} characters to avoid truncation in search results",
                        )
                    )
                else:
                    optimal_titles += 1
                titles.setdefault(page_title, []).append(file.file_path)

            if description:
                if len(description) < DESCRIPTION_MIN:
                    warnings.append(
                        warning(
                            "DESCRIPTION_TOO_SHORT",
                            f"Description is too short ({len(description)} chars)",
                            file=file.file_path,
                            suggestion=f"Aim for a meta description between {DESCRIPTION_MIN}-{DESCRIPTION_MAX} characters",
                        )
                    )
                elif len(description) > DESCRIPTION_MAX:
                    warnings.append(
                        warning(
                            "DESCRIPTION_TOO_LONG",
                            f"Description is too long ({len(description)} chars)",
                            file=file.file_path,
                            suggestion=f"Keep meta description under {DESCRIPTION_MAX} characters to avoid truncation",
                        )
                    )
                else:
                    optimal_descriptions += 1
                descriptions.setdefault(description, []).append(file.file_path)

            if not (meta and meta.og_image):
                warnings.append(
                    warning(
                        "MISSING_OG_IMAGE",
                        "Missing og_image in meta",
                        file=file.file_path,
                        suggestion="Add an og_image for better social media sharing appearance",
                    )
                )

            if not (meta and meta.canonical_url):
                warnings.append(
                    warning(
                        "MISSING_CANONICAL",
                        "Missing canonical_url in meta",
                        file=file.file_path,
                        suggestion="Add a canonical_url to avoid duplicate content issues",
                    )
                )

        duplicate_titles = 0
        for title, files in titles.items():
            if len(files) > 1:
                duplicate_titles += 1
                errors.append(
                    error(
                        "DUPLICATE_TITLE",
                        f'Duplicate page_title "{title}" used by {len(files)} files: {", ".join(files)}',
                        file=files[0],
                        suggestion=f"Also used in: {', '.join(files[1:])}",
                    )
                )

        duplicate_descriptions = 0
        for desc, files in descriptions.items():
            if len(files) > 1:
                duplicate_descriptions += 1
                errors.append(
                    error(
                        "DUPLICATE_DESCRIPTION",
                        f'Duplicate description used by {len(files)} files: "{desc[:60]}..." ({", ".join(files)})',
                        file=files[0],
                        suggestion=f"Also used in: {', '.join(files[1:])}",
                    )
                )

        return self._result(
            started,
            errors,
            warnings,
            {
                "pagesChecked": len(context.content_files),
                "pagesWithOptimalTitles": optimal_titles,
                "pagesWithOptimalDescriptions": optimal_descriptions,
                "duplicateTitles": duplicate_titles,
                "duplicateDescriptions": duplicate_descriptions,
            },
        )
