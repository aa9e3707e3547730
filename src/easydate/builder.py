"""Final timestamp construction.

Merges the parsed civil fields with caller overrides, builds the moment in
the parsed zone, applies the resolved zone change and finally truncates.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from easydate.clock import FLOATING, CalendarClock, default_clock
from easydate.errors import ConstructionError
from easydate.parsing.models import ConversionMode, ParsedMoment, ResolutionOutcome

logger = logging.getLogger(__name__)

OVERRIDE_FIELDS = frozenset(
    {"year", "month", "day", "hour", "minute", "second", "nanosecond", "microsecond", "tzinfo"}
)


def normalize_truncation(value: Any) -> Optional[str]:
    """Normalize a truncation spec to a unit name.

    Accepts a unit name, a list/tuple whose second element is the unit
    (``["to", "day"]``) or a single-entry mapping (``{"to": "day"}``).
    """
    if not value:
        return None
    if isinstance(value, Mapping):
        values = list(value.values())
        return str(values[0]) if values else None
    if isinstance(value, (list, tuple)):
        return str(value[1]) if len(value) > 1 else None
    return str(value)


class MomentBuilder:
    """Build the final ``datetime`` from a parse result and a resolution."""

    def __init__(self, clock: CalendarClock = default_clock) -> None:
        self.clock = clock

    def build(
        self,
        parsed: Optional[ParsedMoment],
        resolution: ResolutionOutcome,
        overrides: Optional[Mapping[str, Any]] = None,
        truncate_to: Any = None,
    ) -> datetime:
        """Construct the final timestamp.

        Args:
            parsed: Parse result, or None to build from overrides alone
            resolution: Final zone and conversion mode
            overrides: Field values that win over the parsed ones; a
                ``tzinfo`` override replaces the resolved zone outright
            truncate_to: Optional truncation spec (see normalize_truncation)

        Returns:
            The constructed datetime (naive when floating)

        Raises:
            ConstructionError: If the merged fields are not a valid date/time
            TruncationError: If the truncation unit is unknown
        """
        fields: Dict[str, Any] = parsed.civil_fields() if parsed is not None else {}
        source_zone = (parsed.timezone if parsed is not None else None) or FLOATING

        overrides = dict(overrides or {})
        zone_override = overrides.pop("tzinfo", None)
        if "microsecond" in overrides:
            microsecond = overrides.pop("microsecond")
            try:
                overrides["nanosecond"] = int(microsecond) * 1000
            except (TypeError, ValueError) as exc:
                raise ConstructionError(
                    f"Invalid microsecond {microsecond!r}", fields={"microsecond": microsecond}
                ) from exc
        fields.update(overrides)

        if zone_override is not None:
            moment = self.clock.construct(fields, zone_override)
        else:
            moment = self.clock.construct(fields, source_zone)
            moment = self._apply_resolution(moment, source_zone, resolution)

        unit = normalize_truncation(truncate_to)
        if unit:
            moment = self.clock.truncate(moment, unit)
        return moment

    def _apply_resolution(
        self,
        moment: datetime,
        source_zone: str,
        resolution: ResolutionOutcome,
    ) -> datetime:
        mode = resolution.conversion_mode
        if mode is ConversionMode.INSTANT:
            return self.clock.convert_zone(moment, resolution.final_timezone)
        if mode is ConversionMode.WALL_CLOCK:
            return self.clock.relabel_zone(moment, resolution.final_timezone)
        if resolution.final_timezone != source_zone:
            # floating result labelled with the caller's default
            return self.clock.relabel_zone(moment, resolution.final_timezone)
        return moment


__all__ = ["MomentBuilder", "OVERRIDE_FIELDS", "normalize_truncation"]
