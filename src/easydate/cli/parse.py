"""Parse CLI commands.

Commands:
    easydate parse "2007/01/01 23:22:01 US/Eastern" --tz US/Pacific
    easydate parse "first day of last month" --truncate day --json
    easydate strategies
"""

import json
import logging
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from easydate.clock import default_clock
from easydate.errors import EasyDateError
from easydate.errors.user_messages import format_error_for_cli
from easydate.facade import DateParser, get_settings
from easydate.parsing.strategies import PARSER_SOURCES

logger = logging.getLogger(__name__)

console = Console()


def _describe(moment) -> dict:
    zone = moment.tzinfo
    return {
        "iso": moment.isoformat(),
        "time_zone": default_clock.zone_label(zone, moment),
        "epoch": moment.timestamp() if zone is not None else None,
    }


def parse_command(
    text: str = typer.Argument(..., help="Date/time text to parse"),
    tz: Optional[str] = typer.Option(None, "--tz", "--time-zone", help="Zone directive ('?' keeps the parsed zone)"),
    soft: bool = typer.Option(False, "--soft", help="Relabel the zone instead of converting"),
    default_tz: Optional[str] = typer.Option(None, "--default-tz", help="Zone for floating results"),
    truncate: Optional[str] = typer.Option(None, help="Truncate to year, month, week, day, hour, minute or second"),
    order: Optional[List[str]] = typer.Option(None, "--order", help="Parser strategy to try (repeatable)"),
    exclude: Optional[List[str]] = typer.Option(None, "--exclude", help="Parser strategy to skip (repeatable)"),
    year: Optional[int] = typer.Option(None, help="Override the year"),
    month: Optional[int] = typer.Option(None, help="Override the month"),
    day: Optional[int] = typer.Option(None, help="Override the day"),
    hour: Optional[int] = typer.Option(None, help="Override the hour"),
    minute: Optional[int] = typer.Option(None, help="Override the minute"),
    second: Optional[int] = typer.Option(None, help="Override the second"),
    output_json: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Parse TEXT and print the resulting timestamp.

    Examples:
        easydate parse "2007/01/04 10:22:01 PM" --truncate year
        easydate parse "10:00 UTC" --tz PST8PDT --soft
    """
    options = {
        "time_zone": tz,
        "soft_time_zone_conversion": soft,
        "time_zone_if_floating": default_tz,
        "truncate": truncate,
        "parser_order": order or None,
        "parser_exclude": exclude or None,
    }
    overrides = {
        "year": year,
        "month": month,
        "day": day,
        "hour": hour,
        "minute": minute,
        "second": second,
    }
    options.update({key: value for key, value in overrides.items() if value is not None})

    try:
        moment = DateParser().parse(text, **options)
    except EasyDateError as e:
        logger.debug(f"Parse of '{text}' failed: {e}")
        if output_json:
            print(json.dumps({"success": False, "error": e.to_dict()}))
        else:
            typer.echo(format_error_for_cli(e), err=True)
        raise typer.Exit(code=1)

    if moment is None:
        if output_json:
            print(json.dumps({"success": False, "error": {"code": "NO_MATCH", "input": text}}))
        else:
            typer.echo(format_error_for_cli("NO_MATCH"), err=True)
        raise typer.Exit(code=1)

    result = _describe(moment)
    if output_json:
        print(json.dumps({"success": True, **result}))
    else:
        typer.echo(f"{result['iso']} ({result['time_zone']})")


def list_strategies() -> None:
    """Show parser strategies in the effective order."""

    settings = get_settings()
    excluded = set(settings.parsers.exclude)

    table = Table(title="Parser strategies")
    table.add_column("#", justify="right")
    table.add_column("Strategy")
    table.add_column("Status")
    table.add_column("Description")

    for index, name in enumerate(settings.parsers.order, start=1):
        strategy = PARSER_SOURCES[name]
        summary = (strategy.__doc__ or "").strip().splitlines()[0] if strategy.__doc__ else ""
        status = "[red]excluded[/red]" if name in excluded else "[green]active[/green]"
        table.add_row(str(index), name, status, summary)

    console.print(table)
    if settings.parsers.extended_phrases:
        console.print("Extended phrases ('first day of ...') are enabled.")
