"""Tests for the easydate error hierarchy and user messages."""

from __future__ import annotations

import pytest

from easydate.errors import (
    ConfigurationError,
    ConstructionError,
    EasyDateError,
    InvalidConfigError,
    InvalidTimezoneError,
    TimezoneError,
    TruncationError,
    handle_error,
)
from easydate.errors.user_messages import (
    ERROR_MESSAGES,
    RECOVERY_SUGGESTIONS,
    format_error_for_cli,
    get_recovery_suggestion,
    get_user_message,
)


class TestErrorHierarchy:
    """Tests for error classes."""

    def test_timezone_errors(self):
        error = InvalidTimezoneError("Mars/Olympus_Mons")
        assert isinstance(error, TimezoneError)
        assert isinstance(error, EasyDateError)
        assert isinstance(error, ValueError)
        assert str(error) == "Don't understand time zone (Mars/Olympus_Mons)"
        assert error.value == "Mars/Olympus_Mons"

    def test_construction_error_fields(self):
        error = ConstructionError("bad day", fields={"day": 30})
        assert error.fields == {"day": 30}
        assert error.details == {"fields": {"day": 30}}
        assert isinstance(error, ValueError)

    def test_truncation_error(self):
        error = TruncationError("decade")
        assert error.unit == "decade"
        assert "decade" in str(error)

    def test_config_errors(self):
        assert issubclass(InvalidConfigError, ConfigurationError)
        assert InvalidConfigError().message == "Invalid configuration"

    def test_to_dict(self):
        data = InvalidTimezoneError("Bogus").to_dict()
        assert data["code"] == "INVALID_TIMEZONE"
        assert data["recoverable"] is True
        assert data["details"] == {"time_zone": "Bogus"}
        assert data["user_message"] == ERROR_MESSAGES["INVALID_TIMEZONE"]

    def test_user_message_override(self):
        error = EasyDateError("internal", user_message="Friendly")
        assert error.user_message == "Friendly"


class TestUserMessages:
    """Tests for message lookup and formatting."""

    def test_every_code_has_suggestion(self):
        assert set(ERROR_MESSAGES) == set(RECOVERY_SUGGESTIONS)

    @pytest.mark.parametrize(
        "error_class",
        [EasyDateError, TimezoneError, ConfigurationError, InvalidConfigError],
    )
    def test_codes_catalogued(self, error_class):
        assert error_class.code in ERROR_MESSAGES

    def test_code_string_lookup(self):
        assert get_user_message("NO_MATCH") == ERROR_MESSAGES["NO_MATCH"]
        assert get_recovery_suggestion("NO_MATCH") == RECOVERY_SUGGESTIONS["NO_MATCH"]

    def test_unknown_error(self):
        assert get_user_message(RuntimeError("boom")) == ERROR_MESSAGES["UNKNOWN_ERROR"]

    def test_cli_format_includes_details(self):
        text = format_error_for_cli(InvalidTimezoneError("Bogus"))
        assert text.startswith("Error [INVALID_TIMEZONE]:")
        assert "Suggestion:" in text
        assert "time_zone: Bogus" in text

    def test_cli_format_plain_exception(self):
        assert format_error_for_cli(RuntimeError("boom")).startswith("Error [ERROR]:")

    def test_handle_error(self):
        text = handle_error(TruncationError("decade"))
        assert ERROR_MESSAGES["TRUNCATION_ERROR"] in text
        assert RECOVERY_SUGGESTIONS["TRUNCATION_ERROR"] in text
