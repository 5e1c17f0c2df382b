# ABOUTME: HTTP client abstraction shared by the book sources, text backends, and Baserow.
# ABOUTME: Wraps httpx with a fixed timeout, default headers, and an injectable transport for testing.

import logging
from typing import Any, Protocol, runtime_checkable

import httpx

logger = logging.getLogger(__name__)

_USER_AGENT = "wcm/0.1.0"


class ApiRequestError(Exception):
    """Raised when an HTTP request fails or returns a non-success status."""

    def __init__(self, message: str, *, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for the HTTP operations used against external APIs."""

    def get(self, url: str, params: dict[str, str] | None = None) -> Any: ...

    def get_bytes(self, url: str) -> bytes: ...

    def post(
        self,
        url: str,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
        files: dict[str, tuple[str, bytes, str]] | None = None,
    ) -> Any: ...

    def patch(
        self, url: str, *, params: dict[str, str] | None = None, json: Any = None
    ) -> Any: ...


class WcmHttpClient:
    """HTTP client for JSON APIs.

    Wraps httpx.Client with default headers (User-Agent plus any auth
    headers a service needs) and a per-call timeout. Requests are never
    retried: a failed call surfaces immediately as ApiRequestError.
    """

    def __init__(
        self,
        *,
        headers: dict[str, str] | None = None,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        client_kwargs: dict[str, Any] = {
            "headers": {"User-Agent": _USER_AGENT, **(headers or {})},
            "timeout": timeout,
            "follow_redirects": True,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.Client(**client_kwargs)

    def get(self, url: str, params: dict[str, str] | None = None) -> Any:
        """Send a GET request and return the parsed JSON body.

        Raises:
            ApiRequestError: On transport errors, non-2xx status, or a body
                that is not valid JSON.
        """
        response = self._send("GET", url, params=params)
        return self._json(response)

    def get_bytes(self, url: str) -> bytes:
        """Send a GET request and return the raw response body."""
        return self._send("GET", url).content

    def post(
        self,
        url: str,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
        files: dict[str, tuple[str, bytes, str]] | None = None,
    ) -> Any:
        """Send a POST request with a JSON or multipart body and return the parsed JSON."""
        response = self._send("POST", url, params=params, json=json, files=files)
        return self._json(response)

    def patch(self, url: str, *, params: dict[str, str] | None = None, json: Any = None) -> Any:
        """Send a PATCH request with a JSON body and return the parsed JSON."""
        response = self._send("PATCH", url, params=params, json=json)
        return self._json(response)

    def close(self) -> None:
        self._client.close()

    def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        logger.debug("%s %s", method, url)
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise ApiRequestError(f"Request failed: {url}: {exc}") from exc

        if not response.is_success:
            raise ApiRequestError(
                f"HTTP {response.status_code} from {url}",
                status_code=response.status_code,
                body=response.text,
            )
        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise ApiRequestError(
                f"Invalid JSON from {response.request.url}",
                status_code=response.status_code,
                body=response.text,
            ) from exc
