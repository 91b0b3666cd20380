"""
cli.py
------
Command-line entrypoint for running content validators.

Examples:
    sitelint                        # run every validator
    sitelint --list                 # list available validators
    sitelint -v redirects,meta      # run a subset
    sitelint --json                 # JSON output for CI
    sitelint --artifacts            # include validator artifacts
"""

from __future__ import annotations

import asyncio
import logging

import click

from sitelint.config import load_settings
from sitelint.engine.context import ContextBuilder
from sitelint.engine.service import ValidationService
from sitelint.reporting.console import print_results, print_validator_list
from sitelint.reporting.json_report import get_exit_code, print_json_results
from sitelint.validators.models import ValidationRunOptions
from sitelint.validators.registry import build_validators

logger = logging.getLogger(__name__)


def _split_names(
    ctx: click.Context, param: click.Parameter, value: str | None,
) -> list[str] | None:
    """Turn ``a,b`` (or ``=a,b`` from ``-v=a,b``) into a name list."""
    if value is None:
        return None
    names = [n.strip() for n in value.lstrip("=").split(",")]
    return [n for n in names if n] or None


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-l", "--list", "list_only", is_flag=True, help="List available validators")
@click.option(
    "-v",
    "--validators",
    callback=_split_names,
    metavar="NAMES",
    help="Run specific validators (comma-separated)",
)
@click.option("-j", "--json", "as_json", is_flag=True, help="Output results as JSON")
@click.option("-a", "--artifacts", is_flag=True, help="Include artifacts in output")
@click.option(
    "--content-dir",
    type=click.Path(file_okay=False, path_type=str),
    default=None,
    help="Content directory (defaults to <project root>/marketing-content)",
)
@click.pass_context
def main(
    ctx: click.Context,
    list_only: bool,
    validators: list[str] | None,
    as_json: bool,
    artifacts: bool,
    content_dir: str | None,
) -> None:
    """
    Validate the marketing site's YAML content.

    Exits 0 when no validator failed, 1 otherwise.
    """
    settings = load_settings(content_dir)
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    service = ValidationService(build_validators(settings), ContextBuilder(settings))

    if list_only:
        print_validator_list(service.get_available_validators())
        ctx.exit(0)

    try:
        logger.info("Building validation context from %s", settings.content_dir)
        service.build_context()

        logger.info("Running validators...")
        result = asyncio.run(
            service.run_validators(
                ValidationRunOptions(validators=validators, include_artifacts=artifacts)
            )
        )
    except Exception:
        logger.exception("Validation failed with error")
        ctx.exit(1)

    if as_json:
        print_json_results(result, include_timestamp=True)
    else:
        print_results(result)

    ctx.exit(get_exit_code(result))


if __name__ == "__main__":
    main()
