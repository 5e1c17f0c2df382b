# ABOUTME: Shared Click options and logging setup for wcm CLI commands.
# ABOUTME: Provides the --config flag and maps verbosity to a logging level.

import logging
from pathlib import Path

import click

from wcm.config import DEFAULT_CONFIG_PATH

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help=f"Path to the YAML config file (default: ./{DEFAULT_CONFIG_PATH})",
)


def configure_logging(level: int) -> None:
    """Set the root log level, installing a stderr handler on first use."""
    logging.basicConfig(level=level, format=_LOG_FORMAT)
    logging.getLogger().setLevel(level)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
