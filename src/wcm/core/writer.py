# ABOUTME: Destination writer: creates the media row, then uploads and attaches the cover.
# ABOUTME: A failed attach after a successful create is reported, not rolled back.

import logging
import re
from dataclasses import dataclass
from urllib.parse import urlparse

from wcm.baserow.client import BaserowClient, BaserowError
from wcm.baserow.mapping import record_to_row
from wcm.core.record import MediaRecord
from wcm.http import ApiRequestError, HttpClient

logger = logging.getLogger(__name__)

_SLUG_RE = re.compile(r"[^a-z0-9]+")


@dataclass
class WriteResult:
    """Outcome of writing one record to Baserow."""

    row_id: int
    cover_attached: bool = False
    attach_error: str | None = None

    @property
    def partial(self) -> bool:
        """The row exists but its cover could not be attached."""
        return self.attach_error is not None


def cover_filename(record: MediaRecord) -> str:
    """Filename for an uploaded cover: ISBN or title slug, keeping the URL's image extension."""
    path = urlparse(record.cover_url or "").path.lower()
    extension = ".png" if path.endswith(".png") else ".jpg"
    stem = record.isbn or _SLUG_RE.sub("-", record.title.lower()).strip("-") or "cover"
    return f"cover-{stem}{extension}"


class DestinationWriter:
    """Write a confirmed MediaRecord to the Baserow media table.

    cover_upload selects how the cover reaches Baserow: "url" asks Baserow
    to fetch it, "bytes" downloads it here and uploads the file.
    """

    def __init__(
        self,
        client: BaserowClient,
        *,
        media_type_options: dict[str, int] | None = None,
        cover_upload: str = "url",
        download_client: HttpClient | None = None,
    ) -> None:
        if cover_upload == "bytes" and download_client is None:
            raise ValueError("cover_upload='bytes' requires a download_client")
        self._client = client
        self._media_type_options = media_type_options or {}
        self._cover_upload = cover_upload
        self._download = download_client

    def write(self, record: MediaRecord) -> WriteResult:
        """Create the row and attach the cover if the record has one.

        Raises:
            BaserowError: If the create call fails (nothing was written).
        """
        row_id = self._client.create_row(record_to_row(record, self._media_type_options))
        result = WriteResult(row_id=row_id)

        if not record.cover_url:
            return result

        try:
            file_name = self._upload_cover(record)
            self._client.attach_cover(row_id, file_name)
        except (BaserowError, ApiRequestError) as exc:
            logger.warning("Cover attach failed for row %d: %s", row_id, exc)
            result.attach_error = str(exc)
            return result

        result.cover_attached = True
        return result

    def _upload_cover(self, record: MediaRecord) -> str:
        assert record.cover_url is not None
        if self._cover_upload == "bytes":
            assert self._download is not None
            content = self._download.get_bytes(record.cover_url)
            return self._client.upload_file(content, cover_filename(record))
        return self._client.upload_file_via_url(record.cover_url)
