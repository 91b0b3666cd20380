"""Console reporter -- coloured, human-readable validation output."""

from __future__ import annotations

import click

from sitelint.validators.models import (
    IssueType,
    ValidationIssue,
    ValidationRunResult,
    ValidatorMetadata,
    ValidatorResult,
    ValidatorStatus,
)

RULE_WIDTH = 60

STATUS_STYLE = {
    ValidatorStatus.passed: ("✓", "PASSED", "green"),
    ValidatorStatus.warning: ("⚠", "WARNING", "yellow"),
    ValidatorStatus.failed: ("✗", "FAILED", "red"),
}


def format_issue(issue: ValidationIssue, indent: str = "  ") -> str:
    if issue.type == IssueType.error:
        prefix = click.style("✗", fg="red")
    else:
        prefix = click.style("⚠", fg="yellow")

    line = f"{indent}{prefix} [{issue.code}] {issue.message}"
    if issue.file:
        line += click.style(f" ({issue.file})", fg="bright_black")
    if issue.suggestion:
        line += f"\n{indent}  {click.style('→', fg='cyan')} {issue.suggestion}"
    return line


def format_validator_result(result: ValidatorResult) -> str:
    icon, label, colour = STATUS_STYLE[result.status]
    lines = [
        f"{click.style(icon, fg=colour)} {click.style(result.name, bold=True)} - "
        f"{click.style(label, fg=colour)} ({result.duration}ms)",
        click.style(f"  {result.description}", fg="bright_black"),
    ]

    if result.errors:
        lines.append("  " + click.style(f"Errors ({len(result.errors)}):", fg="red"))
        lines.extend(format_issue(e, "    ") for e in result.errors)

    if result.warnings:
        lines.append("  " + click.style(f"Warnings ({len(result.warnings)}):", fg="yellow"))
        lines.extend(format_issue(w, "    ") for w in result.warnings)

    return "\n".join(lines)


def format_results(result: ValidationRunResult) -> str:
    heavy = click.style("═" * RULE_WIDTH, fg="blue")
    light = click.style("─" * RULE_WIDTH, fg="bright_black")
    summary = result.summary

    lines = ["", heavy, click.style("  VALIDATION RESULTS", bold=True), heavy, ""]
    for validator_result in result.validators:
        lines.append(format_validator_result(validator_result))
        lines.append("")

    lines += [
        light,
        click.style("  SUMMARY", bold=True),
        light,
        f"  Total validators: {summary.total}",
        f"  {click.style('Passed:', fg='green')} {summary.passed}",
        f"  {click.style('Warnings:', fg='yellow')} {summary.warnings}",
        f"  {click.style('Failed:', fg='red')} {summary.failed}",
        f"  Duration: {summary.duration}ms",
        "",
    ]

    if summary.failed > 0:
        lines.append(click.style("✗ Validation FAILED", fg="red"))
    elif summary.warnings > 0:
        lines.append(click.style("⚠ Validation passed with warnings", fg="yellow"))
    else:
        lines.append(click.style("✓ Validation PASSED", fg="green"))
    lines.append("")

    return "\n".join(lines)


def print_results(result: ValidationRunResult) -> None:
    click.echo(format_results(result))


def print_validator_list(validators: list[ValidatorMetadata]) -> None:
    by_category: dict[str, list[ValidatorMetadata]] = {}
    for v in validators:
        by_category.setdefault(v.category.value, []).append(v)

    click.echo("\n" + click.style("Available Validators:", bold=True) + "\n")
    for category, members in by_category.items():
        click.echo(click.style(f"  {category.upper()}", fg="cyan"))
        for v in members:
            click.echo(f"    {click.style(v.name, bold=True)} - {v.description}")
        click.echo()
