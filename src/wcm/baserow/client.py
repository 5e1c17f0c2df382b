# ABOUTME: Baserow REST client for the categories and media tables.
# ABOUTME: Reads the category set, creates media rows, and uploads/attaches cover files.

import logging
import mimetypes
from typing import Any

from wcm.baserow.mapping import CategorySet, cover_payload, parse_category_rows
from wcm.config import BaserowConfig
from wcm.http import ApiRequestError, HttpClient, WcmHttpClient

logger = logging.getLogger(__name__)

_ROW_PARAMS = {"user_field_names": "true"}


class BaserowError(Exception):
    """Raised when a Baserow API call fails."""


class AuthenticationError(BaserowError):
    """Raised on HTTP 401: the API token is wrong or lacks permission."""


class TableNotFoundError(BaserowError):
    """Raised on HTTP 404: the table or row id does not exist."""


def _translate(exc: ApiRequestError, action: str) -> BaserowError:
    if exc.status_code == 401:
        return AuthenticationError(f"{action}: authentication failed - check your API token")
    if exc.status_code == 404:
        return TableNotFoundError(f"{action}: resource not found - check your table ids")
    detail = f" - {exc.body}" if exc.body else ""
    return BaserowError(f"{action}: {exc}{detail}")


class BaserowClient:
    """Client for one Baserow database's categories and media tables."""

    def __init__(self, config: BaserowConfig, http_client: HttpClient | None = None) -> None:
        self._config = config
        self._base_url = config.base_url.rstrip("/")
        self._http = http_client or WcmHttpClient(
            headers={"Authorization": f"Token {config.api_token}"}
        )

    def _rows_url(self, table_id: int | None) -> str:
        return f"{self._base_url}/api/database/rows/table/{table_id}/"

    def list_rows(self, table_id: int | None, *, size: int | None = None) -> list[dict[str, Any]]:
        """Read one page of rows from a table (Baserow's default page size unless given)."""
        params = dict(_ROW_PARAMS)
        if size is not None:
            params["size"] = str(size)
        try:
            data: Any = self._http.get(self._rows_url(table_id), params=params)
        except ApiRequestError as exc:
            raise _translate(exc, f"Reading table {table_id}") from exc
        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list):
            raise BaserowError(f"Reading table {table_id}: response has no 'results' list")
        return results

    def fetch_categories(self) -> CategorySet:
        """Fetch the admissible category labels from the categories table."""
        rows = self.list_rows(self._config.categories_table_id)
        categories = parse_category_rows(rows)
        logger.info("Found %d categories", len(categories))
        return categories

    def test_connection(self) -> None:
        """Check the token and categories table id with a one-row read.

        Raises:
            AuthenticationError, TableNotFoundError, BaserowError: On failure.
        """
        self.list_rows(self._config.categories_table_id, size=1)

    def create_row(self, fields: dict[str, Any]) -> int:
        """Create a row in the media table and return its id."""
        table_id = self._config.media_table_id
        try:
            data: Any = self._http.post(self._rows_url(table_id), params=_ROW_PARAMS, json=fields)
        except ApiRequestError as exc:
            raise _translate(exc, "Failed to create entry") from exc
        row_id = data.get("id") if isinstance(data, dict) else None
        if not isinstance(row_id, int):
            raise BaserowError("Failed to create entry: response has no row id")
        logger.info("Created media row %d", row_id)
        return row_id

    def update_row(self, row_id: int, fields: dict[str, Any]) -> None:
        url = f"{self._rows_url(self._config.media_table_id)}{row_id}/"
        try:
            self._http.patch(url, params=_ROW_PARAMS, json=fields)
        except ApiRequestError as exc:
            raise _translate(exc, f"Failed to update row {row_id}") from exc

    def upload_file_via_url(self, url: str) -> str:
        """Have Baserow fetch a file from a URL; returns the stored user-file name."""
        try:
            data: Any = self._http.post(
                f"{self._base_url}/api/user-files/upload-via-url/", json={"url": url}
            )
        except ApiRequestError as exc:
            raise _translate(exc, "Failed to upload file via URL") from exc
        return self._file_name(data)

    def upload_file(self, content: bytes, filename: str) -> str:
        """Upload file bytes as multipart form data; returns the stored user-file name."""
        files = {"file": (filename, content, _mime_type(filename))}
        try:
            data: Any = self._http.post(
                f"{self._base_url}/api/user-files/upload-file/", files=files
            )
        except ApiRequestError as exc:
            raise _translate(exc, "Failed to upload file") from exc
        return self._file_name(data)

    def attach_cover(self, row_id: int, file_name: str) -> None:
        """Point a media row's Cover field at an uploaded user file."""
        self.update_row(row_id, cover_payload(file_name))

    @staticmethod
    def _file_name(data: Any) -> str:
        name = data.get("name") if isinstance(data, dict) else None
        if not isinstance(name, str) or not name:
            raise BaserowError("Upload response has no file name")
        return name


def _mime_type(filename: str) -> str:
    return mimetypes.guess_type(filename)[0] or "application/octet-stream"
