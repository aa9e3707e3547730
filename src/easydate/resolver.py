"""Timezone resolution policy.

Every parsing engine handles timezones differently (or not at all), so the
decision about which zone the result carries, and whether getting there
moves the wall clock or keeps the instant, is made here and nowhere else.

Rules:
1. Nothing parsed and no directive: floating, no conversion.
2. No directive (or the "?" wildcard): keep the parsed zone; a floating
   result may be labelled with ``default_if_floating``.
3. Directive with ``soft``: relabel, civil fields unchanged.
4. Directive without ``soft``: convert, absolute instant unchanged.
5. An unknown directive raises; it never falls back to floating.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from easydate.clock import FLOATING, CalendarClock, default_clock
from easydate.errors import InvalidTimezoneError
from easydate.parsing.models import ConversionMode, ResolutionOutcome

logger = logging.getLogger(__name__)

WILDCARD = "?"


class TimezoneResolver:
    """Decide the final timezone and conversion mode for one call."""

    def __init__(self, clock: CalendarClock = default_clock) -> None:
        self.clock = clock

    def resolve(
        self,
        parsed_timezone: Optional[str] = None,
        directive: Any = None,
        soft: bool = False,
        default_if_floating: Any = None,
    ) -> ResolutionOutcome:
        """Resolve the final timezone.

        Args:
            parsed_timezone: Zone label from the parsed moment (None if absent)
            directive: User zone (name, offset, marker, tzinfo) or "?"
            soft: Relabel instead of converting when a directive is given
            default_if_floating: Zone to attach when the result would be floating

        Returns:
            ResolutionOutcome with canonical zone label and conversion mode

        Raises:
            InvalidTimezoneError: If the directive (or the floating default,
                when it applies) is not a known zone
        """
        base = parsed_timezone or FLOATING

        if directive is None or directive == WILDCARD:
            if base == FLOATING and default_if_floating is not None:
                label = self._label(default_if_floating)
                logger.debug(f"Floating result labelled with default zone {label}")
                return ResolutionOutcome(label, ConversionMode.NONE)
            return ResolutionOutcome(base, ConversionMode.NONE)

        label = self._label(directive)
        mode = ConversionMode.WALL_CLOCK if soft else ConversionMode.INSTANT
        logger.debug(f"Resolved zone {base} -> {label} ({mode.value})")
        return ResolutionOutcome(label, mode)

    def _label(self, zone: Any) -> str:
        if hasattr(zone, "utcoffset") and not isinstance(zone, str):
            return self.clock.zone_label(zone)
        if not self.clock.is_valid_zone_name(zone):
            raise InvalidTimezoneError(zone)
        return self.clock.canonical_zone(zone)


__all__ = ["TimezoneResolver", "WILDCARD"]
