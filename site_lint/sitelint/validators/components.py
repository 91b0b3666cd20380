"""Component registry validation -- schemas, examples, versions and usage."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Any

from ruamel.yaml import YAMLError

from sitelint.content.loader import YAML_SUFFIXES, iter_content_documents, load_yaml_file
from sitelint.validators.base import Validator, error, warning
from sitelint.validators.models import (
    EstimatedDuration,
    ValidationContext,
    ValidationIssue,
    ValidatorCategory,
    ValidatorResult,
)

REGISTRY_DIRNAME = "component-registry"


def _section_types(document: Any) -> set[str]:
    """Collect ``type`` values of every entry in a document's ``sections`` list."""
    types: set[str] = set()
    if not isinstance(document, dict):
        return types
    sections = document.get("sections")
    if not isinstance(sections, list):
        return types
    for section in sections:
        if isinstance(section, dict) and isinstance(section.get("type"), str):
            types.add(section["type"])
    return types


def _subdirs(path: Path) -> list[Path]:
    return sorted(p for p in path.iterdir() if p.is_dir())


class ComponentsValidator(Validator):
    name = "components"
    description = "Validates component registry schemas and examples"
    category = ValidatorCategory.components
    estimated_duration = EstimatedDuration.medium

    async def run(self, context: ValidationContext) -> ValidatorResult:
        started = time.perf_counter()
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []

        registry_path = context.content_dir / REGISTRY_DIRNAME
        if not registry_path.is_dir():
            warnings.append(
                warning(
                    "NO_COMPONENT_REGISTRY",
                    "Component registry directory not found",
                    suggestion=f"Create {registry_path}",
                )
            )
            return self._result(started, errors, warnings)

        registered: set[str] = set()
        total_versions = 0
        total_examples = 0

        for component_path in _subdirs(registry_path):
            component = component_path.name
            versions = [p for p in _subdirs(component_path) if p.name.startswith("v")]
            if not versions:
                warnings.append(
                    warning(
                        "NO_VERSIONS",
                        f'Component "{component}" has no versions',
                        file=str(component_path),
                        suggestion="Add at least one version (e.g., v1.0)",
                    )
                )
                continue

            registered.add(component)
            for version_path in versions:
                total_versions += 1
                total_examples += self._check_version(
                    component, version_path, errors, warnings,
                )

        used_types: set[str] = set()
        for _, document in iter_content_documents(context.content_dir):
            used_types |= _section_types(document)

        for section_type in sorted(used_types - registered):
            warnings.append(
                warning(
                    "UNREGISTERED_COMPONENT",
                    f'Section type "{section_type}" is used in content but has no registry entry',
                    suggestion=f"Add {REGISTRY_DIRNAME}/{section_type}/v1.0/schema.yml",
                )
            )

        for component in sorted(registered - used_types):
            warnings.append(
                warning(
                    "UNUSED_COMPONENT",
                    f'Component "{component}" is registered but not used by any content file',
                    file=str(registry_path / component),
                )
            )

        return self._result(
            started,
            errors,
            warnings,
            {
                "totalComponents": len(registered),
                "totalVersions": total_versions,
                "totalExamples": total_examples,
                "sectionTypesInUse": len(used_types),
            },
        )

    def _check_version(
        self,
        component: str,
        version_path: Path,
        errors: list[ValidationIssue],
        warnings: list[ValidationIssue],
    ) -> int:
        """Validate one ``<component>/<version>`` dir; return its example count."""
        label = f"{component}/{version_path.name}"
        schema_path = version_path / "schema.yml"

        if not schema_path.exists():
            errors.append(
                error(
                    "MISSING_SCHEMA",
                    f"Missing schema.yml for {label}",
                    file=str(version_path),
                    suggestion="Create a schema.yml file defining the component's props",
                )
            )
            return 0

        try:
            schema_data = load_yaml_file(schema_path) or {}
        except (YAMLError, OSError, UnicodeDecodeError) as e:
            errors.append(
                error("INVALID_SCHEMA_YAML", f"Invalid YAML in schema: {e}", file=str(schema_path))
            )
            return 0

        if not isinstance(schema_data, dict):
            schema_data = {}

        if not schema_data.get("name"):
            warnings.append(
                warning("MISSING_SCHEMA_NAME", "Schema missing 'name' property", file=str(schema_path))
            )

        examples_path = version_path / "examples"
        if not examples_path.is_dir():
            warnings.append(
                warning(
                    "NO_EXAMPLES",
                    f"No examples directory for {label}",
                    file=str(version_path),
                    suggestion="Add example files to help users understand component usage",
                )
            )
            return 0

        example_files = sorted(
            p for p in examples_path.iterdir() if p.is_file() and p.suffix in YAML_SUFFIXES
        )
        if not example_files:
            warnings.append(
                warning(
                    "EMPTY_EXAMPLES",
                    f"Examples directory is empty for {label}",
                    file=str(examples_path),
                )
            )

        variants = schema_data.get("variants")
        variant_names = list(variants) if isinstance(variants, dict) else []

        for example_path in example_files:
            try:
                example = load_yaml_file(example_path) or {}
            except (YAMLError, OSError, UnicodeDecodeError) as e:
                errors.append(
                    error("INVALID_EXAMPLE_YAML", f"Invalid YAML in example: {e}", file=str(example_path))
                )
                continue

            if not isinstance(example, dict):
                example = {}

            if not example.get("name"):
                warnings.append(
                    warning("MISSING_EXAMPLE_NAME", "Example missing 'name' property", file=str(example_path))
                )

            variant = example.get("variant")
            if variant_names and variant and variant not in variant_names:
                errors.append(
                    error(
                        "INVALID_EXAMPLE_VARIANT",
                        f'Example references unknown variant: "{variant}"',
                        file=str(example_path),
                        suggestion=f"Valid variants: {', '.join(variant_names)}",
                    )
                )

        return len(example_files)
