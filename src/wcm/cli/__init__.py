# ABOUTME: CLI package for wcm, built on Click.
# ABOUTME: Defines the root command group and registers subcommands.

import logging
from pathlib import Path

import click

from wcm.cli.commands import add_cmd, categories_cmd, connection_cmd
from wcm.cli.options import config_option, configure_logging
from wcm.cli.services import CliState


@click.group()
@click.version_option(package_name="wcm")
@config_option
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show debug logging.")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """Wattanit Collection Manager - add books to your personal Baserow library."""
    configure_logging(logging.DEBUG if verbose else logging.WARNING)
    ctx.obj = CliState(config_path=config_path, verbose=verbose)


cli.add_command(add_cmd.add)
cli.add_command(connection_cmd.test_connection)
cli.add_command(categories_cmd.categories)
