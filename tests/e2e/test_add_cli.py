# ABOUTME: End-to-end tests for `wcm add`.
# ABOUTME: Drives the CLI via CliRunner with typed input; external services are patched at the factory seam.

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from wcm.baserow.client import BaserowClient
from wcm.cli import cli
from wcm.config import Config
from wcm.metadata.aggregator import BookSourceAggregator
from wcm.metadata.googlebooks import GoogleBooksSource
from wcm.metadata.openlibrary import OpenLibrarySource
from tests.fixtures.baserow_responses import CATEGORY_ROWS
from tests.fixtures.fake_baserow import FakeBaserow
from tests.fixtures.fake_http import FakeBackend, FakeHttpClient
from tests.fixtures.googlebooks_responses import (
    VOLUMES_RESPONSE_EMPTY,
    VOLUMES_RESPONSE_MULTIPLE,
    VOLUMES_RESPONSE_SINGLE,
)

MEDIA_TABLE = 20


@contextmanager
def patched_services(
    store: FakeBaserow, source_responses: dict[str, object], backend: FakeBackend
) -> Iterator[None]:
    """Replace the network-facing service factories with fakes."""
    http = FakeHttpClient(source_responses)

    def make_aggregator(config: Config) -> BookSourceAggregator:
        return BookSourceAggregator(
            GoogleBooksSource(http, config.google_books),
            OpenLibrarySource(http, config.open_library),
        )

    with patch.multiple(
        "wcm.cli.services",
        create_baserow_client=lambda config: BaserowClient(config.baserow, store),
        create_aggregator=make_aggregator,
        create_text_backend=lambda config: backend,
    ):
        yield


@pytest.fixture
def store(config_file: Path) -> FakeBaserow:
    return FakeBaserow(CATEGORY_ROWS)


class TestAddCommand:
    """E2e tests for `wcm add`."""

    def test_add_by_isbn_confirmed(self, store: FakeBaserow) -> None:
        backend = FakeBackend(["Fantasy, Classic, Adventure"])
        runner = CliRunner()

        with patched_services(store, {"googleapis": VOLUMES_RESPONSE_SINGLE}, backend):
            result = runner.invoke(
                cli, ["add", "--isbn", "978-0-345-39180-3", "--ebook"], input="y\n"
            )

        assert result.exit_code == 0, result.output
        assert "Added:" in result.output
        assert "The Lord of the Rings" in result.output
        [row] = store.rows(MEDIA_TABLE)
        assert row["ISBN"] == "9780345391803"
        assert row["Media Type"] == "Ebook"

    def test_add_declined_writes_nothing(self, store: FakeBaserow) -> None:
        backend = FakeBackend(["Fantasy, Classic, Adventure"])
        runner = CliRunner()

        with patched_services(store, {"googleapis": VOLUMES_RESPONSE_SINGLE}, backend):
            result = runner.invoke(cli, ["add", "--isbn", "9780345391803"], input="\n")

        assert result.exit_code == 0
        assert "Book not added" in result.output
        assert store.rows(MEDIA_TABLE) == []

    def test_add_by_title_author_with_selection(self, store: FakeBaserow) -> None:
        backend = FakeBackend(["Science Fiction, Classic, Epic", "A generated synopsis."])
        runner = CliRunner()

        with patched_services(store, {"googleapis": VOLUMES_RESPONSE_MULTIPLE}, backend):
            result = runner.invoke(
                cli,
                ["add", "--title", "Dune", "--author", "Frank Herbert", "--ebook"],
                input="2\ny\n",
            )

        assert result.exit_code == 0, result.output
        assert "Found 3 books" in result.output
        [row] = store.rows(MEDIA_TABLE)
        assert row["Title"] == "Dune: Deluxe Edition"
        assert row["Media Type"] == "Ebook"
        assert row["Synopsis"] == "A generated synopsis."

    def test_selection_cancelled(self, store: FakeBaserow) -> None:
        runner = CliRunner()

        with patched_services(store, {"googleapis": VOLUMES_RESPONSE_MULTIPLE}, FakeBackend()):
            result = runner.invoke(
                cli, ["add", "--title", "Dune", "--author", "Frank Herbert"], input="c\n"
            )

        assert result.exit_code == 1
        assert "No book selected" in result.output
        assert store.rows(MEDIA_TABLE) == []

    def test_cover_failure_reports_partial_success(self, store: FakeBaserow) -> None:
        store.fail_uploads = True
        backend = FakeBackend(["Fantasy, Classic, Adventure"])
        runner = CliRunner()

        with patched_services(store, {"googleapis": VOLUMES_RESPONSE_SINGLE}, backend):
            result = runner.invoke(cli, ["add", "--isbn", "9780345391803"], input="y\n")

        assert result.exit_code == 0
        assert "Added:" in result.output
        assert "Warning" in result.output
        assert len(store.rows(MEDIA_TABLE)) == 1

    def test_no_book_found(self, store: FakeBaserow) -> None:
        runner = CliRunner()
        responses = {"googleapis": VOLUMES_RESPONSE_EMPTY, "search.json": {"docs": []}}

        with patched_services(store, responses, FakeBackend()):
            result = runner.invoke(cli, ["add", "--isbn", "9780345391803"])

        assert result.exit_code == 1
        assert "No books found" in result.output

    def test_title_without_author_fails(self, store: FakeBaserow) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["add", "--title", "Dune"])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_isbn_with_title_fails(self, store: FakeBaserow) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["add", "--isbn", "9780345391803", "--title", "Dune"])
        assert result.exit_code == 1

    def test_missing_configuration(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["add", "--isbn", "9780345391803"])
        assert result.exit_code == 1
        assert "Configuration error" in result.output

    def test_explicit_config_path_missing(self, tmp_path: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--config", str(tmp_path / "absent.yaml"), "add", "--isbn", "9780345391803"]
        )
        assert result.exit_code == 1
        assert "not found" in result.output
