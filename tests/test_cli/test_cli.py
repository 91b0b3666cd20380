"""Tests for the sitelint command line."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from sitelint.cli import main


@pytest.fixture
def runner(monkeypatch, site_root: Path) -> CliRunner:
    monkeypatch.delenv("SITELINT_OPTIONS_PATH", raising=False)
    monkeypatch.delenv("SITELINT_CONTENT_DIR", raising=False)
    monkeypatch.setenv("SITELINT_PROJECT_ROOT", str(site_root))
    return CliRunner()


def test_help(runner: CliRunner) -> None:
    result = runner.invoke(main, ["-h"])
    assert result.exit_code == 0
    assert "--validators" in result.output
    assert "--artifacts" in result.output


def test_list(runner: CliRunner) -> None:
    result = runner.invoke(main, ["--list"])
    assert result.exit_code == 0
    assert "Available Validators:" in result.output
    assert "content-quality" in result.output


@pytest.mark.parametrize(
    "args",
    [
        ["-v", "meta,schema"],
        ["-v=meta,schema"],
        ["--validators=meta,schema"],
        ["--validators", "meta, schema"],
    ],
)
def test_validator_selection_forms(runner: CliRunner, args: list[str]) -> None:
    result = runner.invoke(main, [*args, "--json"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert [v["name"] for v in data["validators"]] == ["meta", "schema"]
    assert "timestamp" in data


def test_json_artifacts_flag(runner: CliRunner) -> None:
    plain = json.loads(runner.invoke(main, ["-v", "redirects", "-j"]).stdout)
    assert "artifacts" not in plain["validators"][0]

    with_artifacts = json.loads(runner.invoke(main, ["-v", "redirects", "-j", "-a"]).stdout)
    assert with_artifacts["validators"][0]["artifacts"]["totalRedirects"] == 1


def test_unknown_validator_fails(runner: CliRunner) -> None:
    result = runner.invoke(main, ["-v", "nope", "--json"])
    assert result.exit_code == 1
    data = json.loads(result.stdout)
    assert data["validators"][0]["errors"][0]["code"] == "UNKNOWN_VALIDATOR"


def test_console_output(runner: CliRunner) -> None:
    result = runner.invoke(main, ["-v", "meta"])
    assert result.exit_code == 0
    assert "VALIDATION RESULTS" in result.output
    assert "Validation PASSED" in result.output


def test_content_dir_override(runner: CliRunner, write, tmp_path: Path) -> None:
    other = tmp_path / "other-content"
    write(other / "pages" / "about" / "en.yml", """
        meta:
          priority: 7
    """)
    result = runner.invoke(main, ["--content-dir", str(other), "-v", "meta", "-j"])
    assert result.exit_code == 1
    data = json.loads(result.stdout)
    assert "INVALID_PRIORITY" in [e["code"] for e in data["validators"][0]["errors"]]
