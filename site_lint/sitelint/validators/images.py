"""Image registry validation -- references, files on disk, alt text, orphans."""

from __future__ import annotations

import json
import re
import time
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from sitelint.content.loader import iter_content_documents
from sitelint.validators.base import Validator, error, warning
from sitelint.validators.models import (
    EstimatedDuration,
    ValidationContext,
    ValidationIssue,
    ValidatorCategory,
    ValidatorResult,
)

REGISTRY_FILENAME = "image-registry.json"
IMAGE_REF_KEYS = ("image_id", "image")
PLACEHOLDER_RE = re.compile(r"todo", re.IGNORECASE)


class ImageEntry(BaseModel):
    src: str | None = None
    alt: str | None = None
    # Descriptive only; never checked.
    focal_point: Any = None
    tags: list[str] | None = None
    usage_count: Any = None


class ImageRegistry(BaseModel):
    presets: dict[str, Any] = Field(default_factory=dict)
    images: dict[str, ImageEntry] = Field(default_factory=dict)


def extract_image_refs(obj: Any) -> set[str]:
    """Recursively collect string values of ``image_id`` / ``image`` keys."""
    refs: set[str] = set()
    if isinstance(obj, dict):
        for key, value in obj.items():
            if key in IMAGE_REF_KEYS and isinstance(value, str) and value:
                refs.add(value)
            elif isinstance(value, (dict, list)):
                refs |= extract_image_refs(value)
    elif isinstance(obj, list):
        for item in obj:
            refs |= extract_image_refs(item)
    return refs


class ImagesValidator(Validator):
    name = "images"
    description = "Validates image integrity: registry references, file existence, alt text, and orphaned entries"
    category = ValidatorCategory.content
    estimated_duration = EstimatedDuration.medium

    def __init__(self, project_root: Path) -> None:
        self._project_root = project_root

    async def run(self, context: ValidationContext) -> ValidatorResult:
        started = time.perf_counter()
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []

        registry_path = context.content_dir / REGISTRY_FILENAME
        registry_file = str(registry_path)

        if not registry_path.exists():
            warnings.append(
                warning(
                    "NO_IMAGE_REGISTRY",
                    f"Image registry not found at {registry_path}",
                    suggestion=f"Create {REGISTRY_FILENAME} to register content images",
                )
            )
            return self._result(started, errors, warnings)

        try:
            registry = ImageRegistry.model_validate(
                json.loads(registry_path.read_text(encoding="utf-8"))
            )
        except (json.JSONDecodeError, ValidationError, OSError) as e:
            errors.append(
                error(
                    "REGISTRY_LOAD_ERROR",
                    f"Failed to load image registry: {e}",
                    file=registry_file,
                    suggestion=f"Ensure {REGISTRY_FILENAME} exists and is valid JSON",
                )
            )
            return self._result(started, errors, warnings)

        images = registry.images
        referenced: set[str] = set()
        for _, document in iter_content_documents(context.content_dir):
            referenced |= extract_image_refs(document)

        missing_from_registry = 0
        for image_id in sorted(referenced):
            if image_id not in images:
                missing_from_registry += 1
                errors.append(
                    error(
                        "IMAGE_ID_NOT_IN_REGISTRY",
                        f'Referenced image_id "{image_id}" not found in image registry',
                        suggestion=f"Add this image to {REGISTRY_FILENAME} or fix the reference",
                    )
                )

        missing_from_disk = 0
        missing_alts = 0
        placeholder_alts = 0
        for image_id, entry in images.items():
            if entry.src:
                src_path = self._project_root / entry.src.lstrip("/")
                if not src_path.exists():
                    missing_from_disk += 1
                    errors.append(
                        error(
                            "IMAGE_SRC_FILE_MISSING",
                            f"Image file not found on disk: {entry.src}",
                            file=registry_file,
                            suggestion=f'Check that the file exists at {src_path} or update the registry entry for "{image_id}"',
                        )
                    )

            if not (entry.alt or "").strip():
                missing_alts += 1
                errors.append(
                    error(
                        "IMAGE_ALT_MISSING",
                        f'Image "{image_id}" has no alt text',
                        file=registry_file,
                        suggestion="Add descriptive alt text for accessibility",
                    )
                )
            elif PLACEHOLDER_RE.search(entry.alt or ""):
                placeholder_alts += 1
                warnings.append(
                    warning(
                        "IMAGE_ALT_PLACEHOLDER",
                        f'Image "{image_id}" has placeholder alt text: "{entry.alt}"',
                        file=registry_file,
                        suggestion="Replace TODO placeholder with actual descriptive alt text",
                    )
                )

        orphaned = 0
        for image_id in images:
            if image_id not in referenced:
                orphaned += 1
                warnings.append(
                    warning(
                        "ORPHANED_REGISTRY_ENTRY",
                        f'Registry image "{image_id}" is not referenced by any content file',
                        file=registry_file,
                        suggestion="Consider removing unused registry entries or adding references in content",
                    )
                )

        return self._result(
            started,
            errors,
            warnings,
            {
                "registryEntries": len(images),
                "referencedIds": len(referenced),
                "missingFromRegistry": missing_from_registry,
                "missingFromDisk": missing_from_disk,
                "missingAlts": missing_alts,
                "placeholderAlts": placeholder_alts,
                "orphanedEntries": orphaned,
            },
        )
