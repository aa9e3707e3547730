"""CLI commands for managing easydate settings."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from easydate.configuration.settings import (
    Settings,
    bootstrap_settings,
    config_path,
    load_settings,
    save_settings,
)
from easydate.errors import InvalidConfigError, handle_error


config_app = typer.Typer(help="Manage easydate configuration")


@config_app.command("init")
def init_config(
    path: Optional[Path] = typer.Option(None, "--config-path", help="Path to config file"),
    order: Optional[str] = typer.Option(None, help="Comma separated parser order"),
    default_tz: Optional[str] = typer.Option(None, "--default-tz", help="Zone for floating results"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    """Write a settings file with defaults plus the given overrides."""

    path = path or config_path()
    if path.exists() and not force:
        typer.echo(f"Configuration already exists at {path} (use --force to overwrite)", err=True)
        raise typer.Exit(code=1)

    overrides = {}
    if order:
        overrides.setdefault("parsers", {})["order"] = [name for name in order.split(",") if name]
    if default_tz:
        overrides.setdefault("timezones", {})["time_zone_if_floating"] = default_tz

    try:
        settings = Settings.model_validate(
            {**Settings().model_dump(mode="python"), **overrides}
        )
    except ValueError as e:
        typer.echo(f"❌ Configuration invalid: {e}", err=True)
        raise typer.Exit(code=1)

    save_settings(settings, path)
    typer.echo(f"Configuration initialized at {path}")
    typer.echo(_summarize_settings(settings))


@config_app.command("show")
def show_config(
    path: Optional[Path] = typer.Option(None, "--config-path", help="Path to config file"),
) -> None:
    """Display effective configuration (file plus environment overrides)."""

    try:
        settings = bootstrap_settings(path=path)
    except InvalidConfigError as e:
        typer.echo(f"❌ {e}", err=True)
        typer.echo(handle_error(e), err=True)
        raise typer.Exit(code=1)
    typer.echo(_summarize_settings(settings))


@config_app.command("validate")
def validate_config(
    path: Optional[Path] = typer.Option(None, "--config-path", help="Path to config file"),
) -> None:
    """Validate configuration file for correctness."""

    path = path or config_path()
    try:
        settings = load_settings(path)
    except FileNotFoundError as e:
        typer.echo(f"❌ Configuration invalid: {e}", err=True)
        raise typer.Exit(code=1)
    except InvalidConfigError as e:
        typer.echo(f"❌ Configuration invalid: {e}", err=True)
        typer.echo(handle_error(e), err=True)
        raise typer.Exit(code=1)

    typer.echo(f"✅ Configuration valid at {path}")
    typer.echo(f"   Parser order: {', '.join(settings.parsers.order)}")
    typer.echo(f"   Excluded: {', '.join(settings.parsers.exclude) or '-'}")
    typer.echo(f"   Floating default: {settings.timezones.time_zone_if_floating or '-'}")


def _summarize_settings(settings: Settings) -> str:
    data = settings.model_dump(mode="json")
    return json.dumps(data, indent=2)
