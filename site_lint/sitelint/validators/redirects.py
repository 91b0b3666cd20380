"""Redirect validation -- conflicts, loops, self-redirects and content collisions."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ruamel.yaml import YAMLError

from sitelint.content.loader import load_yaml_file
from sitelint.content.models import ContentFile, ContentType
from sitelint.content.urls import get_canonical_url, normalize_url
from sitelint.validators.base import Validator, error
from sitelint.validators.models import (
    EstimatedDuration,
    RedirectEntry,
    ValidationContext,
    ValidationIssue,
    ValidatorCategory,
    ValidatorResult,
)

logger = logging.getLogger(__name__)

CUSTOM_REDIRECTS_FILENAME = "custom-redirects.yml"


@dataclass
class CustomRedirect:
    source: str
    target: str
    status: int | None = None


@dataclass
class RedirectAnalysis:
    redirect_map: dict[str, RedirectEntry] = field(default_factory=dict)
    errors: list[ValidationIssue] = field(default_factory=list)
    custom_count: int = 0


def load_custom_redirects(content_dir: Path) -> list[CustomRedirect]:
    """Read ``custom-redirects.yml``; entries without from/to are dropped."""
    file_path = content_dir / CUSTOM_REDIRECTS_FILENAME
    if not file_path.exists():
        return []

    try:
        parsed = load_yaml_file(file_path)
    except (YAMLError, OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to parse %s: %s", file_path, e)
        return []

    if not isinstance(parsed, dict) or not isinstance(parsed.get("redirects"), list):
        return []

    return [
        CustomRedirect(
            source=str(r["from"]),
            target=str(r["to"] or ""),
            status=r.get("status"),
        )
        for r in parsed["redirects"]
        if isinstance(r, dict) and "from" in r and "to" in r
    ]


def _custom_origin(content_dir: Path) -> ContentFile:
    return ContentFile(
        slug="_custom",
        title="Custom Redirects",
        type=ContentType.page,
        locale="_common",
        file_path=str(content_dir / CUSTOM_REDIRECTS_FILENAME),
    )


def _find_loops(redirect_map: dict[str, RedirectEntry]) -> list[ValidationIssue]:
    """Walk every chain with a visited set; report each chain that repeats."""
    issues: list[ValidationIssue] = []
    for source_url, entry in redirect_map.items():
        visited = [source_url]
        current = entry.target
        while current in redirect_map:
            if current in visited:
                chain = " -> ".join([*visited, current])
                issues.append(
                    error(
                        "REDIRECT_LOOP",
                        f"Redirect loop detected: {chain}",
                        suggestion="Break the redirect chain by removing one of the redirects",
                    )
                )
                break
            visited.append(current)
            current = redirect_map[current].target
    return issues


def analyze_redirects(
    content_files: list[ContentFile],
    valid_urls: set[str],
    content_dir: Path,
) -> RedirectAnalysis:
    """Build the normalized redirect map and collect every redirect error.

    First-seen wins: a redirect source that is already claimed, that points
    at its own page, or that shadows a real content URL is never added.
    """
    analysis = RedirectAnalysis()
    redirect_map = analysis.redirect_map
    errors = analysis.errors

    for file in content_files:
        redirects = file.meta.redirects if file.meta else []
        if not redirects:
            continue

        target_url = get_canonical_url(file)
        for redirect in redirects:
            source = normalize_url(redirect)

            if source == normalize_url(target_url):
                errors.append(
                    error(
                        "SELF_REDIRECT",
                        f'Self-redirect detected: "{source}" redirects to itself',
                        file=file.file_path,
                        suggestion="Remove this redirect or change the target URL",
                    )
                )
                continue

            existing = redirect_map.get(source)
            if existing is not None:
                errors.append(
                    error(
                        "REDIRECT_CONFLICT",
                        f'Redirect conflict: "{source}" is claimed by both '
                        f'"{file.file_path}" and "{existing.origin.file_path}"',
                        file=file.file_path,
                        suggestion="Remove one of the conflicting redirects",
                    )
                )
                continue

            if source in valid_urls:
                errors.append(
                    error(
                        "REDIRECT_OVERWRITES_CONTENT",
                        f'Redirect "{source}" conflicts with an existing content URL',
                        file=file.file_path,
                        suggestion="Choose a different redirect source URL",
                    )
                )
                continue

            redirect_map[source] = RedirectEntry(source_url=source, target=target_url, origin=file)

    custom_redirects = load_custom_redirects(content_dir)
    analysis.custom_count = len(custom_redirects)
    if custom_redirects:
        origin = _custom_origin(content_dir)
        for custom in custom_redirects:
            source = normalize_url(custom.source)

            existing = redirect_map.get(source)
            if existing is not None:
                errors.append(
                    error(
                        "REDIRECT_CONFLICT",
                        f'Redirect conflict: "{source}" in {CUSTOM_REDIRECTS_FILENAME} '
                        f'conflicts with "{existing.origin.file_path}"',
                        file=origin.file_path,
                        suggestion="Remove one of the conflicting redirects",
                    )
                )
                continue

            if source in valid_urls:
                errors.append(
                    error(
                        "REDIRECT_OVERWRITES_CONTENT",
                        f'Custom redirect "{source}" conflicts with an existing content URL',
                        file=origin.file_path,
                        suggestion="Choose a different redirect source URL",
                    )
                )
                continue

            if not custom.target.strip():
                errors.append(
                    error(
                        "CUSTOM_REDIRECT_MISSING_DEST",
                        f'Custom redirect "{source}" has no destination URL',
                        file=origin.file_path,
                        suggestion="Add a valid destination URL",
                    )
                )
                continue

            redirect_map[source] = RedirectEntry(
                source_url=source, target=custom.target, origin=origin,
            )

    errors.extend(_find_loops(redirect_map))
    return analysis


class RedirectsValidator(Validator):
    name = "redirects"
    description = "Validates redirect configurations for conflicts, loops, and self-redirects"
    category = ValidatorCategory.integrity
    estimated_duration = EstimatedDuration.fast

    async def run(self, context: ValidationContext) -> ValidatorResult:
        started = time.perf_counter()

        analysis = analyze_redirects(
            context.content_files, context.valid_urls, context.content_dir,
        )
        # Sole writer of the shared redirect map.
        context.redirect_map = analysis.redirect_map

        artifacts: dict[str, Any] = {
            "totalRedirects": len(analysis.redirect_map),
            "customRedirects": analysis.custom_count,
            "redirectMap": {k: v.target for k, v in analysis.redirect_map.items()},
        }
        return self._result(started, analysis.errors, [], artifacts)
