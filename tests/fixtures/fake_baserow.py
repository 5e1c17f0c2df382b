# ABOUTME: In-memory stand-in for the Baserow REST API at the HttpClient seam.
# ABOUTME: Lets tests assert how many rows exist after a run and what they contain.

from typing import Any

from wcm.http import ApiRequestError


class FakeBaserow:
    """HttpClient fake that keeps table rows in memory.

    Supports listing rows, creating rows, patching rows, and both user-file
    upload endpoints. Set fail_uploads to make uploads return HTTP 500.
    """

    def __init__(self, categories: list[dict[str, Any]], *, categories_table_id: int = 10) -> None:
        self.tables: dict[int, list[dict[str, Any]]] = {categories_table_id: list(categories)}
        self.uploads: list[str] = []
        self.fail_uploads = False
        self.fail_create = False
        self._next_id = 100

    def rows(self, table_id: int) -> list[dict[str, Any]]:
        return self.tables.get(table_id, [])

    @staticmethod
    def _parse_rows_path(url: str) -> tuple[int, int | None]:
        tail = url.split("/api/database/rows/table/", 1)[1].strip("/")
        parts = tail.split("/")
        return int(parts[0]), int(parts[1]) if len(parts) > 1 else None

    def get(self, url: str, params: dict[str, str] | None = None) -> Any:
        table_id, _ = self._parse_rows_path(url)
        if table_id not in self.tables:
            raise ApiRequestError(f"HTTP 404 from {url}", status_code=404)
        rows = self.tables[table_id]
        size = int((params or {}).get("size", len(rows) or 1))
        return {"count": len(rows), "next": None, "previous": None, "results": rows[:size]}

    def get_bytes(self, url: str) -> bytes:
        return b"\xff\xd8fake-jpeg"

    def post(
        self,
        url: str,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
        files: dict[str, tuple[str, bytes, str]] | None = None,
    ) -> Any:
        if "/api/user-files/" in url:
            if self.fail_uploads:
                raise ApiRequestError(f"HTTP 500 from {url}", status_code=500, body="boom")
            name = f"upload_{len(self.uploads) + 1}.jpg"
            self.uploads.append(name)
            return {"name": name, "url": f"https://files.example.com/{name}"}

        if self.fail_create:
            raise ApiRequestError(f"HTTP 400 from {url}", status_code=400, body="bad field")
        table_id, _ = self._parse_rows_path(url)
        self._next_id += 1
        row = {"id": self._next_id, **(json or {})}
        self.tables.setdefault(table_id, []).append(row)
        return row

    def patch(self, url: str, *, params: dict[str, str] | None = None, json: Any = None) -> Any:
        table_id, row_id = self._parse_rows_path(url)
        for row in self.tables.get(table_id, []):
            if row["id"] == row_id:
                row.update(json or {})
                return row
        raise ApiRequestError(f"HTTP 404 from {url}", status_code=404)
