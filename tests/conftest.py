"""Shared test configuration."""

from __future__ import annotations

import time
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, Optional

import pytest

from easydate.facade import reset_settings_cache
from easydate.parsing.models import ParsedMoment

_ENV_OVERRIDES = (
    "EASYDATE_PARSER_ORDER",
    "EASYDATE_PARSER_EXCLUDE",
    "EASYDATE_EXTENDED_PHRASES",
    "EASYDATE_TIME_ZONE_IF_FLOATING",
)


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch) -> Path:
    """Point settings at an empty temp location and clear env overrides."""
    config_path = tmp_path / "easydate" / "config.json"
    monkeypatch.setenv("EASYDATE_CONFIG", str(config_path))
    for name in _ENV_OVERRIDES:
        monkeypatch.delenv(name, raising=False)
    reset_settings_cache()
    yield config_path
    reset_settings_cache()


@pytest.fixture
def fixed_strategy() -> Callable[..., Callable[[str], Optional[ParsedMoment]]]:
    """Build a strategy that always returns the given moment."""

    def _build(moment: datetime, timezone: Optional[str] = None, calls: Optional[Dict[str, int]] = None):
        def strategy(text: str) -> Optional[ParsedMoment]:
            if calls is not None:
                calls[text] = calls.get(text, 0) + 1
            parsed = ParsedMoment.from_datetime(moment)
            parsed.timezone = timezone
            return parsed

        return strategy

    return _build


@pytest.fixture
def host_zone(monkeypatch):
    """Switch the process timezone for one test."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")

    def _set(name: str) -> None:
        monkeypatch.setenv("TZ", name)
        time.tzset()

    yield _set
    monkeypatch.undo()
    time.tzset()
