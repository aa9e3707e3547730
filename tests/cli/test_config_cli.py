"""Tests for the easydate config CLI."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from easydate.cli import cli

runner = CliRunner()


def test_init_writes_file(tmp_path: Path) -> None:
    config_file = tmp_path / "config.json"

    result = runner.invoke(
        cli,
        [
            "config",
            "init",
            "--config-path",
            str(config_file),
            "--order",
            "flexible,ical",
            "--default-tz",
            "US/Pacific",
        ],
    )

    assert result.exit_code == 0, result.output
    data = json.loads(config_file.read_text())
    assert data["parsers"]["order"] == ["flexible", "ical"]
    assert data["timezones"]["time_zone_if_floating"] == "America/Los_Angeles"


def test_init_refuses_overwrite(tmp_path: Path) -> None:
    config_file = tmp_path / "config.json"
    config_file.write_text("{}")

    result = runner.invoke(cli, ["config", "init", "--config-path", str(config_file)])

    assert result.exit_code == 1
    assert config_file.read_text() == "{}"


def test_init_force_overwrites(tmp_path: Path) -> None:
    config_file = tmp_path / "config.json"
    config_file.write_text("{}")

    result = runner.invoke(cli, ["config", "init", "--config-path", str(config_file), "--force"])

    assert result.exit_code == 0, result.output
    assert json.loads(config_file.read_text())["parsers"]["extended_phrases"] is True


def test_init_rejects_unknown_strategy(tmp_path: Path) -> None:
    config_file = tmp_path / "config.json"

    result = runner.invoke(cli, ["config", "init", "--config-path", str(config_file), "--order", "telepathy"])

    assert result.exit_code == 1
    assert not config_file.exists()


def test_validate_reports_settings(tmp_path: Path) -> None:
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"parsers": {"exclude": ["natural"]}}))

    result = runner.invoke(cli, ["config", "validate", "--config-path", str(config_file)])

    assert result.exit_code == 0, result.output
    assert "Configuration valid" in result.output
    assert "Excluded: natural" in result.output


def test_validate_missing_file(tmp_path: Path) -> None:
    result = runner.invoke(cli, ["config", "validate", "--config-path", str(tmp_path / "nope.json")])

    assert result.exit_code == 1
    assert "Configuration invalid" in result.output


def test_show_uses_env_config(isolated_settings: Path) -> None:
    isolated_settings.parent.mkdir(parents=True)
    isolated_settings.write_text(json.dumps({"timezones": {"time_zone_if_floating": "UTC"}}))

    result = runner.invoke(cli, ["config", "show"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["timezones"]["time_zone_if_floating"] == "UTC"


def test_validate_invalid_file_suggests_reset(tmp_path: Path) -> None:
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"parsers": {"order": ["telepathy"]}}))

    result = runner.invoke(cli, ["config", "validate", "--config-path", str(config_file)])

    assert result.exit_code == 1
    assert "The configuration is invalid. Check settings." in result.output
    assert "Suggestion: Reset to defaults: easydate config init --force" in result.output


def test_show_invalid_env_override(monkeypatch) -> None:
    monkeypatch.setenv("EASYDATE_PARSER_EXCLUDE", "guesswork")

    result = runner.invoke(cli, ["config", "show"])

    assert result.exit_code == 1
    assert "Suggestion: Reset to defaults" in result.output
