"""Centralized error definitions for easydate.

This module provides a unified error hierarchy and user-friendly error handling.
"Nothing could be parsed" is deliberately not an error: ``easydate.parse``
returns ``None`` for that case. Everything below is raised.

Usage:
    from easydate.errors import (
        EasyDateError,
        InvalidTimezoneError,
        handle_error,
    )

    try:
        moment = easydate.parse("2007-01-01 10:00", time_zone="Mars/Olympus")
    except EasyDateError as e:
        print(handle_error(e))
"""

from __future__ import annotations

from typing import Any, Mapping

from easydate.errors.user_messages import (
    get_user_message,
    get_recovery_suggestion,
    format_error_for_user,
)


# =============================================================================
# Base Error
# =============================================================================


class EasyDateError(Exception):
    """Base exception for all easydate errors.

    Attributes:
        code: Error code for categorization
        user_message: User-friendly message (optional override)
        recoverable: Whether the caller can retry with different input
        details: Additional error details for debugging
    """

    code: str = "EASYDATE_ERROR"
    default_message: str = "An unexpected error occurred"
    recoverable: bool = True

    def __init__(
        self,
        message: str | None = None,
        *,
        user_message: str | None = None,
        details: dict | None = None,
    ) -> None:
        self.message = message or self.default_message
        self._user_message = user_message
        self.details = details or {}
        super().__init__(self.message)

    @property
    def user_message(self) -> str:
        """Get user-friendly message."""
        if self._user_message:
            return self._user_message
        return get_user_message(self)

    @property
    def recovery_suggestion(self) -> str:
        """Get recovery suggestion."""
        return get_recovery_suggestion(self)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "user_message": self.user_message,
            "recoverable": self.recoverable,
            "details": self.details,
        }


# =============================================================================
# Timezone Errors
# =============================================================================


class TimezoneError(EasyDateError):
    """Base error for timezone handling."""

    code = "TIMEZONE_ERROR"
    default_message = "Timezone handling failed"


class InvalidTimezoneError(TimezoneError, ValueError):
    """A timezone directive or label could not be resolved."""

    code = "INVALID_TIMEZONE"
    default_message = "Unrecognized time zone"

    def __init__(self, value: Any, *, message: str | None = None) -> None:
        self.value = value
        super().__init__(
            message or f"Don't understand time zone ({value})",
            details={"time_zone": str(value)},
        )


# =============================================================================
# Construction Errors
# =============================================================================


class ConstructionError(EasyDateError, ValueError):
    """Merged fields do not form a valid civil date/time."""

    code = "CONSTRUCTION_ERROR"
    default_message = "Invalid date/time fields"

    def __init__(
        self,
        message: str | None = None,
        *,
        fields: Mapping[str, Any] | None = None,
    ) -> None:
        self.fields = dict(fields or {})
        super().__init__(message, details={"fields": self.fields})


class TruncationError(EasyDateError, ValueError):
    """Truncation was requested to a unit the calendar does not know."""

    code = "TRUNCATION_ERROR"
    default_message = "Unknown truncation unit"

    def __init__(self, unit: Any, *, message: str | None = None) -> None:
        self.unit = unit
        super().__init__(
            message or f"Cannot truncate to {unit!r}",
            details={"unit": str(unit)},
        )


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(EasyDateError):
    """Base error for configuration issues."""

    code = "CONFIGURATION_ERROR"
    default_message = "Configuration error"
    recoverable = True


class InvalidConfigError(ConfigurationError):
    """Configuration is invalid."""

    code = "INVALID_CONFIG"
    default_message = "Invalid configuration"


# =============================================================================
# Error Handler
# =============================================================================


def handle_error(error: Exception) -> str:
    """Handle an error and return a user-friendly message.

    Args:
        error: The exception to handle

    Returns:
        User-friendly error message with recovery suggestion
    """
    return format_error_for_user(error)


__all__ = [
    # Base
    "EasyDateError",
    # Timezone
    "TimezoneError",
    "InvalidTimezoneError",
    # Construction
    "ConstructionError",
    "TruncationError",
    # Configuration
    "ConfigurationError",
    "InvalidConfigError",
    # Handlers
    "handle_error",
]
