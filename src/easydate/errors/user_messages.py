"""User-friendly error messages for easydate.

This module provides human-readable error messages and recovery suggestions
for all error types, so CLI users never see raw tracebacks.
"""

from __future__ import annotations

from typing import Any


# =============================================================================
# Error Message Catalog
# =============================================================================

ERROR_MESSAGES: dict[str, str] = {
    # Parsing outcomes
    "NO_MATCH": "None of the parsers could understand that date.",
    # Timezone errors
    "TIMEZONE_ERROR": "The time zone couldn't be applied.",
    "INVALID_TIMEZONE": "That time zone isn't recognized.",
    # Construction errors
    "CONSTRUCTION_ERROR": "The date/time fields don't form a valid date.",
    "TRUNCATION_ERROR": "That truncation unit isn't supported.",
    # Configuration errors
    "CONFIGURATION_ERROR": "There's a configuration issue.",
    "INVALID_CONFIG": "The configuration is invalid. Check settings.",
    # Generic
    "EASYDATE_ERROR": "An unexpected error occurred. Please try again.",
    "UNKNOWN_ERROR": "Something went wrong. Please try again.",
}


# =============================================================================
# Recovery Suggestions
# =============================================================================

RECOVERY_SUGGESTIONS: dict[str, str] = {
    "NO_MATCH": "Try an explicit form like '2007-01-01 10:00:00' or change --order.",
    "TIMEZONE_ERROR": "Use an Olson name (America/New_York), an offset (-0500), 'local' or 'floating'.",
    "INVALID_TIMEZONE": "Use an Olson name (America/New_York), an offset (-0500), 'local' or 'floating'.",
    "CONSTRUCTION_ERROR": "Check the day exists in that month and overrides are in range.",
    "TRUNCATION_ERROR": "Truncate to one of: year, month, week, day, hour, minute, second.",
    "CONFIGURATION_ERROR": "Check config: easydate config show",
    "INVALID_CONFIG": "Reset to defaults: easydate config init --force",
    "EASYDATE_ERROR": "If this persists, please report the issue.",
    "UNKNOWN_ERROR": "Report the issue with the input that triggered it.",
}


# =============================================================================
# Helper Functions
# =============================================================================


def _error_code(error: Any) -> str:
    if hasattr(error, "code"):
        return error.code
    if isinstance(error, str):
        return error
    return type(error).__name__.upper()


def get_user_message(error: Any) -> str:
    """Get user-friendly message for an error.

    Args:
        error: The error (can be Exception or error code string)

    Returns:
        User-friendly error message
    """
    return ERROR_MESSAGES.get(_error_code(error), ERROR_MESSAGES["UNKNOWN_ERROR"])


def get_recovery_suggestion(error: Any) -> str:
    """Get recovery suggestion for an error.

    Args:
        error: The error (can be Exception or error code string)

    Returns:
        Recovery suggestion
    """
    return RECOVERY_SUGGESTIONS.get(_error_code(error), RECOVERY_SUGGESTIONS["UNKNOWN_ERROR"])


def format_error_for_user(error: Any) -> str:
    """Format a complete user-friendly error message.

    Args:
        error: The error to format

    Returns:
        Complete error message with recovery suggestion
    """
    message = get_user_message(error)
    suggestion = get_recovery_suggestion(error)

    return f"{message}\n\nSuggestion: {suggestion}"


def format_error_for_cli(error: Any) -> str:
    """Format error for CLI output.

    Args:
        error: The error (or error code string) to format

    Returns:
        CLI-formatted error message
    """
    message = get_user_message(error)
    suggestion = get_recovery_suggestion(error)
    code = _error_code(error) if not isinstance(error, Exception) or hasattr(error, "code") else "ERROR"

    lines = [
        f"Error [{code}]: {message}",
        "",
        f"Suggestion: {suggestion}",
    ]

    if getattr(error, "details", None):
        lines.append("")
        lines.append("Details:")
        for key, value in error.details.items():
            lines.append(f"  {key}: {value}")

    return "\n".join(lines)


__all__ = [
    "ERROR_MESSAGES",
    "RECOVERY_SUGGESTIONS",
    "get_user_message",
    "get_recovery_suggestion",
    "format_error_for_user",
    "format_error_for_cli",
]
