"""Typed settings management for easydate.

This module wraps user configuration in Pydantic models so the facade and
CLI commands can rely on validated defaults: the parser order, parsers to
skip, and the zone given to floating results. Settings are read from a JSON
file and can be overridden through environment variables.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from easydate.clock import default_clock
from easydate.errors import InvalidConfigError
from easydate.parsing.strategies import DEFAULT_PARSER_ORDER, STRATEGY_NAMES, normalize_names


DEFAULT_CONFIG_PATH = Path.home() / ".easydate" / "config.json"
CONFIG_PATH_ENV = "EASYDATE_CONFIG"


def _validate_strategy_names(value: Any) -> List[str]:
    names = list(normalize_names(value))
    unknown = [name for name in names if name not in STRATEGY_NAMES]
    if unknown:
        raise ValueError(
            f"unknown parser strategies {unknown}; expected any of {sorted(STRATEGY_NAMES)}"
        )
    return names


class ParserSettings(BaseModel):
    """Which parser strategies run, and in what order."""

    order: List[str] = Field(
        default_factory=lambda: list(DEFAULT_PARSER_ORDER),
        description="Strategies tried in sequence",
    )
    exclude: List[str] = Field(default_factory=list, description="Strategies never tried")
    extended_phrases: bool = Field(True, description="Resolve 'first day of ...' phrases")

    @field_validator("order", "exclude", mode="before")
    def _validate_names(cls, value: Any) -> List[str]:
        return _validate_strategy_names(value)

    @field_validator("order")
    def _validate_order_not_empty(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("order must name at least one parser strategy")
        return value


class TimezoneSettings(BaseModel):
    """Timezone defaults applied when a call does not say otherwise."""

    time_zone_if_floating: Optional[str] = Field(
        default=None, description="Zone attached to results without one"
    )

    @field_validator("time_zone_if_floating")
    def _validate_zone(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        if not default_clock.is_valid_zone_name(value):
            raise ValueError(f"unknown time zone {value!r}")
        return default_clock.canonical_zone(value)


class Settings(BaseModel):
    """Root configuration state."""

    parsers: ParserSettings = Field(default_factory=ParserSettings)
    timezones: TimezoneSettings = Field(default_factory=TimezoneSettings)


def config_path() -> Path:
    """Return the settings file location, honouring ``EASYDATE_CONFIG``."""
    raw = os.getenv(CONFIG_PATH_ENV)
    return Path(raw).expanduser() if raw else DEFAULT_CONFIG_PATH


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from disk or raise if invalid."""

    path = path or config_path()
    if not path.exists():
        raise FileNotFoundError(f"Settings file not found at {path}")
    try:
        payload = json.loads(path.read_text())
    except json.JSONDecodeError as exc:
        raise InvalidConfigError(f"Invalid configuration: {exc}") from exc
    try:
        return Settings.model_validate(payload)
    except ValidationError as exc:
        raise InvalidConfigError(f"Invalid configuration: {exc}") from exc


def save_settings(settings: Settings, path: Optional[Path] = None) -> None:
    """Persist settings to disk."""

    path = path or config_path()
    payload = settings.model_dump(mode="json")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2))


def bootstrap_settings(
    *,
    path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> Settings:
    """Resolve effective settings: file (if any), then overrides, then environment.

    Nothing is written to disk; a missing file simply means defaults.
    """

    path = path or config_path()
    overrides = overrides or {}

    if path.exists():
        settings = load_settings(path)
    else:
        settings = Settings()

    merged = settings.model_dump(mode="python")
    merged = _apply_overrides(merged, overrides)
    merged = _apply_env_overrides(merged)

    try:
        return Settings.model_validate(merged)
    except ValidationError as exc:
        raise InvalidConfigError(f"Invalid configuration: {exc}") from exc


def _apply_overrides(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = base.copy()
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = {**merged[key], **value}
        else:
            merged[key] = value
    return merged


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    parsers = data.setdefault("parsers", {})
    _set_env_override(parsers, "order", "EASYDATE_PARSER_ORDER", cast_list=True)
    _set_env_override(parsers, "exclude", "EASYDATE_PARSER_EXCLUDE", cast_list=True)
    _set_env_override(parsers, "extended_phrases", "EASYDATE_EXTENDED_PHRASES", cast_bool=True)

    timezones = data.setdefault("timezones", {})
    _set_env_override(timezones, "time_zone_if_floating", "EASYDATE_TIME_ZONE_IF_FLOATING")
    return data


def _set_env_override(
    mapping: Dict[str, Any],
    key: str,
    env_name: str,
    *,
    cast_bool: bool = False,
    cast_list: bool = False,
) -> None:
    raw = os.getenv(env_name)
    if raw is None:
        return
    if cast_bool:
        mapping[key] = raw.lower() in {"1", "true", "yes"}
    elif cast_list:
        mapping[key] = [item.strip() for item in raw.split(",") if item.strip()]
    else:
        mapping[key] = raw or None
