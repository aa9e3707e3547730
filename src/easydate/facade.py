"""One call from arbitrary date input to a fully specified ``datetime``.

``parse`` accepts text, a ``datetime`` or a ``date`` plus keyword options:

    parse       # Input (wins over the positional argument)
    year, month, day, hour, minute, second, nanosecond, microsecond
                # Override the parsed field
    tzinfo      # Override the zone outright (no conversion)
    truncate    # "year", "month", "week", "day", "hour", "minute", "second"
    time_zone, timezone, tz
                # Zone directive; time_zone > timezone > tz. "?" keeps
                # whatever was parsed. Converts (same instant) unless
                # soft_time_zone_conversion is set, which relabels.
    soft_time_zone_conversion
    time_zone_if_floating, default_time_zone
                # Zone for results that would otherwise be floating
    parser_order, parser_exclude
                # Strategy name or list of names

Examples:
    >>> parse("2007/01/01 23:22:01")
    datetime.datetime(2007, 1, 1, 23, 22, 1)
    >>> parse("2007/01/04 10:22:01 PM", truncate="year")
    datetime.datetime(2007, 1, 1, 0, 0)

Returns ``None`` when nothing could parse the input; raises
``InvalidTimezoneError`` / ``ConstructionError`` for bad directives and
impossible fields.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from functools import lru_cache
from typing import Any, Dict, Optional, Tuple

from easydate.builder import OVERRIDE_FIELDS, MomentBuilder
from easydate.clock import CalendarClock, default_clock
from easydate.configuration.settings import Settings, bootstrap_settings
from easydate.parsing.chain import ParserChain
from easydate.parsing.extended import PhraseParser, is_phrase
from easydate.parsing.models import ParsedMoment
from easydate.parsing.strategies import normalize_names
from easydate.resolver import TimezoneResolver

logger = logging.getLogger(__name__)

_MISSING = object()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, loaded once."""
    return bootstrap_settings()


def reset_settings_cache() -> None:
    """Forget loaded settings so the next call re-reads file and environment."""
    get_settings.cache_clear()


def _first_present(options: Dict[str, Any], *keys: str) -> Any:
    """Pop every alias in ``keys``; the first one supplied wins."""
    found = _MISSING
    for key in keys:
        value = options.pop(key, _MISSING)
        if found is _MISSING and value is not _MISSING:
            found = value
    return None if found is _MISSING else found


@dataclass
class ParseRequest:
    """Caller options resolved to one canonical field each."""

    value: Any = None
    directive: Any = None
    soft: bool = False
    default_if_floating: Any = None
    parser_order: Tuple[str, ...] = ()
    parser_exclude: Tuple[str, ...] = ()
    truncate: Any = None
    overrides: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_call(cls, args: Tuple[Any, ...], options: Dict[str, Any]) -> "ParseRequest":
        """Resolve positional input and keyword aliases.

        Raises:
            TypeError: On extra positional arguments or unknown keywords
        """
        if len(args) > 1:
            raise TypeError(f"parse() takes at most 1 positional argument ({len(args)} given)")
        options = dict(options)

        value = args[0] if args else None
        if "parse" in options:
            value = options.pop("parse")

        request = cls(
            value=value,
            directive=_first_present(options, "time_zone", "timezone", "tz") or None,
            soft=bool(options.pop("soft_time_zone_conversion", False)),
            default_if_floating=_first_present(
                options, "time_zone_if_floating", "default_time_zone"
            ) or None,
            parser_order=normalize_names(options.pop("parser_order", None)),
            parser_exclude=normalize_names(options.pop("parser_exclude", None)),
            truncate=options.pop("truncate", None),
        )

        unknown = sorted(set(options) - OVERRIDE_FIELDS)
        if unknown:
            raise TypeError(f"parse() got unexpected keyword arguments: {', '.join(unknown)}")
        request.overrides = options
        return request


class DateParser:
    """Sequence parser chain, timezone resolver and moment builder."""

    def __init__(
        self,
        chain: Optional[ParserChain] = None,
        clock: CalendarClock = default_clock,
        settings: Optional[Settings] = None,
    ) -> None:
        self.chain = chain or ParserChain()
        self.clock = clock
        self.resolver = TimezoneResolver(clock)
        self.builder = MomentBuilder(clock)
        self._settings = settings

    @property
    def settings(self) -> Settings:
        if self._settings is not None:
            return self._settings
        return get_settings()

    def parse(self, *args: Any, **options: Any) -> Optional[datetime]:
        """Parse input and apply overrides, timezone directives and truncation.

        Returns:
            The resulting datetime, or None if the input could not be parsed
        """
        request = ParseRequest.from_call(args, options)
        settings = self.settings

        parsed: Optional[ParsedMoment] = None
        if request.value:
            parsed = self.read(request, settings)
            if parsed is None:
                return None

        default_if_floating = request.default_if_floating
        if default_if_floating is None:
            default_if_floating = settings.timezones.time_zone_if_floating

        resolution = self.resolver.resolve(
            parsed.timezone if parsed is not None else None,
            request.directive,
            soft=request.soft,
            default_if_floating=default_if_floating,
        )
        return self.builder.build(
            parsed,
            resolution,
            overrides=request.overrides,
            truncate_to=request.truncate,
        )

    def read(self, request: ParseRequest, settings: Settings) -> Optional[ParsedMoment]:
        """Turn the request's input into a ParsedMoment (None when nothing matched)."""
        value = request.value
        if isinstance(value, (datetime, date)):
            return ParsedMoment.from_datetime(value, clock=self.clock)

        text = str(value)
        order = request.parser_order or tuple(settings.parsers.order)
        exclude = request.parser_exclude or tuple(settings.parsers.exclude)

        def attempt(expression: str) -> Optional[ParsedMoment]:
            return self.chain.attempt(expression, order=order, exclude=exclude)

        if settings.parsers.extended_phrases and is_phrase(text):
            parsed = PhraseParser(attempt, self.clock).parse(text)
            if parsed is not None:
                return parsed
            logger.debug(f"Extended phrase '{text}' unresolved, trying parsers directly")
        return attempt(text)


_default_parser = DateParser()


def parse(*args: Any, **options: Any) -> Optional[datetime]:
    """Parse a date/time with the process-wide parser. See module docs for options."""
    return _default_parser.parse(*args, **options)


__all__ = ["DateParser", "ParseRequest", "get_settings", "parse", "reset_settings_cache"]
