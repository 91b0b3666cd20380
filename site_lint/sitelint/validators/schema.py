"""Schema.org reference validation against schema-org.yml keys."""

from __future__ import annotations

import time

from sitelint.validators.base import Validator, error, warning
from sitelint.validators.models import (
    ValidationContext,
    ValidationIssue,
    ValidatorCategory,
    ValidatorResult,
)


class SchemaValidator(Validator):
    name = "schema"
    description = "Validates Schema.org references exist in schema-org.yml"
    category = ValidatorCategory.seo

    async def run(self, context: ValidationContext) -> ValidatorResult:
        started = time.perf_counter()
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []

        available = ", ".join(sorted(context.available_schemas))

        for file in context.content_files:
            schema_ref = file.schema_ref
            if schema_ref is None:
                continue

            for ref in schema_ref.include or []:
                if ref not in context.available_schemas:
                    errors.append(
                        error(
                            "INVALID_SCHEMA_REF",
                            f'Invalid schema reference: "{ref}"',
                            file=file.file_path,
                            suggestion=f"Available schemas: {available}",
                        )
                    )

            for key in schema_ref.overrides or {}:
                if key not in context.available_schemas:
                    errors.append(
                        error(
                            "INVALID_SCHEMA_OVERRIDE",
                            f'Invalid schema override key: "{key}"',
                            file=file.file_path,
                            suggestion=f"Available schemas: {available}",
                        )
                    )

            if schema_ref.include is not None and len(schema_ref.include) == 0:
                warnings.append(
                    warning(
                        "EMPTY_SCHEMA_INCLUDE",
                        "Schema include array is empty",
                        file=file.file_path,
                        suggestion="Either add schema references or remove the empty include array",
                    )
                )

        return self._result(
            started,
            errors,
            warnings,
            {
                "availableSchemas": sorted(context.available_schemas),
                "filesWithSchemas": sum(
                    1 for f in context.content_files
                    if f.schema_ref and f.schema_ref.include
                ),
            },
        )
