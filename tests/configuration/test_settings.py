"""Tests for easydate configuration settings."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from easydate.configuration.settings import (
    Settings,
    bootstrap_settings,
    config_path,
    load_settings,
    save_settings,
)
from easydate.errors import InvalidConfigError


def test_bootstrap_defaults_without_file(tmp_path: Path) -> None:
    config_file = tmp_path / "config.json"
    settings = bootstrap_settings(path=config_file)

    assert not config_file.exists()
    assert settings.parsers.order == ["ical", "dateparse", "natural", "flexible"]
    assert settings.parsers.exclude == []
    assert settings.parsers.extended_phrases is True
    assert settings.timezones.time_zone_if_floating is None


def test_config_path_honours_env(isolated_settings: Path) -> None:
    assert config_path() == isolated_settings


def test_load_settings_round_trip(tmp_path: Path) -> None:
    config_file = tmp_path / "nested" / "config.json"
    settings = Settings.model_validate(
        {
            "parsers": {"order": ["Flexible", "ical"], "exclude": ["natural"]},
            "timezones": {"time_zone_if_floating": "US/Eastern"},
        }
    )
    save_settings(settings, config_file)

    loaded = load_settings(config_file)
    assert loaded.parsers.order == ["flexible", "ical"]
    assert loaded.parsers.exclude == ["natural"]
    assert loaded.timezones.time_zone_if_floating == "America/New_York"


def test_load_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "missing.json")


def test_load_invalid_json(tmp_path: Path) -> None:
    config_file = tmp_path / "config.json"
    config_file.write_text("{not json")
    with pytest.raises(InvalidConfigError):
        load_settings(config_file)


@pytest.mark.parametrize(
    "payload",
    [
        {"parsers": {"order": ["ical", "telepathy"]}},
        {"parsers": {"order": []}},
        {"parsers": {"exclude": "astrology"}},
        {"timezones": {"time_zone_if_floating": "Mars/Olympus_Mons"}},
    ],
)
def test_load_rejects_invalid_values(tmp_path: Path, payload) -> None:
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps(payload))
    with pytest.raises(InvalidConfigError):
        load_settings(config_file)


def test_single_name_accepted() -> None:
    settings = Settings.model_validate({"parsers": {"exclude": "natural"}})
    assert settings.parsers.exclude == ["natural"]


def test_overrides_merge_sections(tmp_path: Path) -> None:
    config_file = tmp_path / "config.json"
    save_settings(Settings.model_validate({"parsers": {"exclude": ["natural"]}}), config_file)

    settings = bootstrap_settings(path=config_file, overrides={"parsers": {"order": ["ical"]}})
    assert settings.parsers.order == ["ical"]
    assert settings.parsers.exclude == ["natural"]


def test_env_overrides(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("EASYDATE_PARSER_ORDER", "flexible, ical")
    monkeypatch.setenv("EASYDATE_EXTENDED_PHRASES", "0")
    monkeypatch.setenv("EASYDATE_TIME_ZONE_IF_FLOATING", "UTC")

    settings = bootstrap_settings(path=tmp_path / "config.json")
    assert settings.parsers.order == ["flexible", "ical"]
    assert settings.parsers.extended_phrases is False
    assert settings.timezones.time_zone_if_floating == "UTC"


def test_empty_env_clears_default(tmp_path: Path, monkeypatch) -> None:
    config_file = tmp_path / "config.json"
    save_settings(Settings.model_validate({"timezones": {"time_zone_if_floating": "UTC"}}), config_file)
    monkeypatch.setenv("EASYDATE_TIME_ZONE_IF_FLOATING", "")

    assert bootstrap_settings(path=config_file).timezones.time_zone_if_floating is None


def test_invalid_env_override(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("EASYDATE_PARSER_EXCLUDE", "guesswork")
    with pytest.raises(InvalidConfigError):
        bootstrap_settings(path=tmp_path / "config.json")
