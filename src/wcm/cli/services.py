# ABOUTME: Builds configured service objects (sources, Baserow client, text backend) for commands.
# ABOUTME: Commands call through this module so tests can patch a single factory.

import logging
from dataclasses import dataclass
from pathlib import Path

import click
from rich.console import Console

from wcm.baserow.client import BaserowClient
from wcm.cli.options import configure_logging
from wcm.config import Config, ConfigError, load_config
from wcm.core.writer import DestinationWriter
from wcm.http import WcmHttpClient
from wcm.llm.backend import TextBackend, create_backend
from wcm.metadata.aggregator import BookSourceAggregator
from wcm.metadata.googlebooks import GoogleBooksSource
from wcm.metadata.openlibrary import OpenLibrarySource
from wcm.metadata.websearch import WebSearchClient

logger = logging.getLogger(__name__)


@dataclass
class CliState:
    """Values from the root command group, stored on the click context."""

    config_path: Path | None = None
    verbose: bool = False


def load_command_config(
    ctx: click.Context, console: Console, *, baserow_only: bool = False
) -> Config:
    """Load and validate configuration for a command, exiting with status 1 on error."""
    state = ctx.find_object(CliState) or CliState()
    try:
        config = load_config(state.config_path)
        if baserow_only:
            config.validate_baserow()
        else:
            config.validate()
    except ConfigError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        raise SystemExit(1) from exc

    if config.app.verbose and not state.verbose:
        configure_logging(logging.INFO)
    return config


def create_baserow_client(config: Config) -> BaserowClient:
    http_client = WcmHttpClient(
        headers={"Authorization": f"Token {config.baserow.api_token}"},
        timeout=config.app.request_timeout,
    )
    return BaserowClient(config.baserow, http_client)


def create_aggregator(config: Config) -> BookSourceAggregator:
    """Google Books as primary source, Open Library as fallback, DuckDuckGo for enrichment."""
    http_client = WcmHttpClient(timeout=config.app.request_timeout)
    web_search = WebSearchClient(http_client) if config.app.web_search else None
    return BookSourceAggregator(
        GoogleBooksSource(http_client, config.google_books),
        OpenLibrarySource(http_client, config.open_library),
        web_search=web_search,
    )


def create_text_backend(config: Config) -> TextBackend:
    return create_backend(config.llm)


def create_writer(config: Config, client: BaserowClient) -> DestinationWriter:
    download_client = None
    if config.app.cover_upload == "bytes":
        download_client = WcmHttpClient(timeout=config.app.request_timeout)
    return DestinationWriter(
        client,
        media_type_options=config.baserow.media_type_options,
        cover_upload=config.app.cover_upload,
        download_client=download_client,
    )
