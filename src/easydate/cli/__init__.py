"""Command line entry points for easydate."""

import logging

from typer import Option, Typer

from .parse import list_strategies, parse_command
from ..configuration.cli import config_app


cli = Typer(help="easydate command line tools")


@cli.callback()
def main(
    verbose: bool = Option(False, "--verbose", "-v", help="Log parser decisions"),
) -> None:
    """Parse messy dates into exact timestamps."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


cli.command("parse")(parse_command)
cli.command("strategies")(list_strategies)
cli.add_typer(config_app, name="config")

__all__ = ["cli", "config_app"]
