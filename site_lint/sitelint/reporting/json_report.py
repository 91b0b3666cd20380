"""JSON reporter for CI pipelines and API consumers."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import click

from sitelint.validators.models import ValidationRunResult


def format_as_json(
    result: ValidationRunResult,
    pretty: bool = False,
    include_timestamp: bool = False,
) -> str:
    output = result.model_dump(mode="json", exclude_none=True)
    if include_timestamp:
        output["timestamp"] = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    return json.dumps(output, indent=2 if pretty else None, ensure_ascii=False)


def print_json_results(result: ValidationRunResult, include_timestamp: bool = False) -> None:
    click.echo(format_as_json(result, pretty=True, include_timestamp=include_timestamp))


def get_exit_code(result: ValidationRunResult) -> int:
    return 1 if result.summary.failed > 0 else 0
