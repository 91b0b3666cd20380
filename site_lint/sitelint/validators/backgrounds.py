"""Background validation -- section backgrounds must come from theme.json."""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from sitelint.content.loader import iter_content_documents
from sitelint.validators.base import Validator, error, warning
from sitelint.validators.models import (
    ValidationContext,
    ValidationIssue,
    ValidatorCategory,
    ValidatorResult,
)

logger = logging.getLogger(__name__)

THEME_FILENAME = "theme.json"


class ThemeColor(BaseModel):
    id: str | None = None
    label: str | None = None
    cssVar: str | None = None
    value: str | None = None

    @property
    def display_name(self) -> str:
        return self.id or self.label or self.cssVar or self.value or "?"

    def allowed_values(self) -> list[str]:
        values = []
        if self.cssVar:
            values.append(f"hsl(var({self.cssVar}))")
        if self.value:
            values.append(self.value)
        return values


class ThemeConfig(BaseModel):
    backgrounds: list[ThemeColor] = Field(default_factory=list)
    accents: list[ThemeColor] = Field(default_factory=list)
    text: list[ThemeColor] = Field(default_factory=list)


def load_theme(content_dir: Path) -> ThemeConfig | None:
    """Load theme.json, or None when it is missing.

    Raises ValueError / OSError when the file exists but cannot be used.
    """
    theme_path = content_dir / THEME_FILENAME
    if not theme_path.exists():
        return None
    return ThemeConfig.model_validate(json.loads(theme_path.read_text(encoding="utf-8")))


def build_allowed_values(theme: ThemeConfig) -> set[str]:
    allowed = {""}
    for bg in theme.backgrounds:
        allowed.update(bg.allowed_values())
    return allowed


def validate_background(value: str, theme: ThemeConfig) -> tuple[bool, str | None]:
    """Check a single background value; returns ``(valid, suggestion)``."""
    if not value:
        return True, None
    allowed = build_allowed_values(theme)
    if value in allowed:
        return True, None
    allowed_list = ", ".join(sorted(v for v in allowed if v))
    return False, f"Allowed values: {allowed_list}"


def _extract_backgrounds(obj: Any, path: str = "") -> list[tuple[str, str]]:
    """Recursively collect non-empty ``background`` strings as (value, path)."""
    results: list[tuple[str, str]] = []

    if isinstance(obj, dict):
        background = obj.get("background")
        if isinstance(background, str) and background:
            results.append((background, f"{path}.background" if path else "background"))
        for key, value in obj.items():
            if key != "background" and isinstance(value, (dict, list)):
                results.extend(_extract_backgrounds(value, f"{path}.{key}" if path else str(key)))
    elif isinstance(obj, list):
        for i, item in enumerate(obj):
            results.extend(_extract_backgrounds(item, f"{path}[{i}]"))

    return results


class BackgroundsValidator(Validator):
    name = "backgrounds"
    description = "Validates background colors against theme.json definitions"
    category = ValidatorCategory.content

    async def run(self, context: ValidationContext) -> ValidatorResult:
        started = time.perf_counter()
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []

        theme_file = str(context.content_dir / THEME_FILENAME)
        try:
            theme = load_theme(context.content_dir)
        except (ValueError, OSError) as e:
            logger.warning("Failed to load theme config %s: %s", theme_file, e)
            errors.append(
                error(
                    "INVALID_THEME_CONFIG",
                    f"Theme configuration could not be loaded: {e}",
                    file=theme_file,
                    suggestion="Fix theme.json so it is valid JSON with backgrounds/accents/text lists",
                )
            )
            return self._result(started, errors, warnings)

        if theme is None:
            warnings.append(
                warning(
                    "NO_THEME_CONFIG",
                    f"Theme configuration not found at {context.content_dir / THEME_FILENAME}",
                    suggestion="Create a theme.json file to define allowed background colors",
                )
            )
            return self._result(started, errors, warnings)

        allowed = build_allowed_values(theme)
        examples = ", ".join(sorted(v for v in allowed if v)[:5])
        used: set[str] = set()
        total_backgrounds = 0
        files_scanned = 0

        for file_path, document in iter_content_documents(context.content_dir):
            backgrounds = _extract_backgrounds(document)
            if backgrounds:
                files_scanned += 1
            for value, path in backgrounds:
                total_backgrounds += 1
                used.add(value)
                if value not in allowed:
                    errors.append(
                        error(
                            "INVALID_BACKGROUND",
                            f'Invalid background value: "{value}" at {path}',
                            file=str(file_path),
                            suggestion=f"Use a theme-defined value. Examples: {examples}",
                        )
                    )

        for bg in theme.backgrounds:
            if not used.intersection(bg.allowed_values()):
                warnings.append(
                    warning(
                        "UNUSED_THEME_BACKGROUND",
                        f'Theme background "{bg.display_name}" is not used by any content file',
                        file=theme_file,
                    )
                )

        return self._result(
            started,
            errors,
            warnings,
            {
                "totalBackgrounds": total_backgrounds,
                "invalidBackgrounds": len(errors),
                "filesScanned": files_scanned,
                "allowedValues": sorted(v for v in allowed if v),
            },
        )
