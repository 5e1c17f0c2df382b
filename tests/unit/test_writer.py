# ABOUTME: Unit tests for the destination writer.
# ABOUTME: Covers row creation, both cover upload modes, and partial-success reporting.

import pytest

from wcm.baserow.client import BaserowClient, BaserowError
from wcm.baserow.mapping import CategoryLabel
from wcm.config import BaserowConfig
from wcm.core.record import MediaRecord, MediaType
from wcm.core.writer import DestinationWriter, cover_filename
from tests.fixtures.baserow_responses import CATEGORY_ROWS
from tests.fixtures.fake_baserow import FakeBaserow

MEDIA_TABLE = 20


def _record(cover_url: str | None = "https://covers.example.com/lotr.jpg") -> MediaRecord:
    return MediaRecord(
        title="The Lord of the Rings",
        authors=("J.R.R. Tolkien",),
        description="An epic journey.",
        categories=(
            CategoryLabel(1, "Fantasy"),
            CategoryLabel(2, "Classic"),
            CategoryLabel(3, "Adventure"),
        ),
        media_type=MediaType.EBOOK,
        isbn="9780345391803",
        cover_url=cover_url,
    )


def _client(store: FakeBaserow) -> BaserowClient:
    config = BaserowConfig(
        api_token="t",
        base_url="https://baserow.example.com",
        database_id=1,
        media_table_id=MEDIA_TABLE,
        categories_table_id=10,
    )
    return BaserowClient(config, store)


class TestCoverFilename:
    def test_isbn_stem(self) -> None:
        assert cover_filename(_record()) == "cover-9780345391803.jpg"

    def test_title_slug_and_png(self) -> None:
        record = MediaRecord(
            title="Dune: Deluxe Edition",
            authors=(),
            description="d",
            categories=_record().categories,
            media_type=MediaType.EBOOK,
            cover_url="https://example.com/x.PNG",
        )
        assert cover_filename(record) == "cover-dune-deluxe-edition.png"


class TestDestinationWriter:
    """Tests for DestinationWriter.write."""

    def test_creates_row_and_attaches_cover_via_url(self) -> None:
        store = FakeBaserow(CATEGORY_ROWS)
        writer = DestinationWriter(_client(store))

        result = writer.write(_record())

        [row] = store.rows(MEDIA_TABLE)
        assert result.row_id == row["id"]
        assert result.cover_attached
        assert not result.partial
        assert row["Title"] == "The Lord of the Rings"
        assert row["Media Type"] == "Ebook"
        assert row["Cover"] == [{"name": "upload_1.jpg"}]

    def test_media_type_option_id_used(self) -> None:
        store = FakeBaserow(CATEGORY_ROWS)
        writer = DestinationWriter(_client(store), media_type_options={"ebook": 77})
        writer.write(_record(cover_url=None))
        assert store.rows(MEDIA_TABLE)[0]["Media Type"] == 77

    def test_no_cover_skips_upload(self) -> None:
        store = FakeBaserow(CATEGORY_ROWS)
        result = DestinationWriter(_client(store)).write(_record(cover_url=None))

        assert not result.cover_attached
        assert not result.partial
        assert store.uploads == []
        assert "Cover" not in store.rows(MEDIA_TABLE)[0]

    def test_bytes_mode_downloads_then_uploads(self) -> None:
        store = FakeBaserow(CATEGORY_ROWS)
        writer = DestinationWriter(_client(store), cover_upload="bytes", download_client=store)

        result = writer.write(_record())

        assert result.cover_attached
        assert store.uploads == ["upload_1.jpg"]

    def test_bytes_mode_requires_download_client(self) -> None:
        with pytest.raises(ValueError, match="download_client"):
            DestinationWriter(_client(FakeBaserow([])), cover_upload="bytes")

    def test_attach_failure_keeps_row(self) -> None:
        store = FakeBaserow(CATEGORY_ROWS)
        store.fail_uploads = True

        result = DestinationWriter(_client(store)).write(_record())

        assert len(store.rows(MEDIA_TABLE)) == 1
        assert result.partial
        assert not result.cover_attached
        assert result.attach_error is not None
        assert "upload" in result.attach_error

    def test_create_failure_writes_nothing(self) -> None:
        store = FakeBaserow(CATEGORY_ROWS)
        store.fail_create = True

        with pytest.raises(BaserowError, match="Failed to create entry"):
            DestinationWriter(_client(store)).write(_record())
        assert store.rows(MEDIA_TABLE) == []
        assert store.uploads == []
