# ABOUTME: Anthropic messages API text backend.
# ABOUTME: Sends the prompt as a single user turn and concatenates the text blocks of the reply.

from typing import Any

from wcm.config import ConfigError, LlmConfig, is_placeholder
from wcm.http import ApiRequestError, HttpClient
from wcm.llm.backend import TextBackendError, default_http_client, register_backend

_API_VERSION = "2023-06-01"
_MAX_TOKENS = 1024


class AnthropicBackend:
    """Text backend for the Anthropic messages API."""

    def __init__(self, http_client: HttpClient, *, model: str, base_url: str) -> None:
        self._http = http_client
        self._model = model
        self._url = f"{base_url.rstrip('/')}/v1/messages"

    @property
    def name(self) -> str:
        return "anthropic"

    def generate(self, prompt: str) -> str:
        payload = {
            "model": self._model,
            "max_tokens": _MAX_TOKENS,
            "messages": [{"role": "user", "content": prompt}],
        }
        try:
            data: Any = self._http.post(self._url, json=payload)
        except ApiRequestError as exc:
            raise TextBackendError(f"Anthropic request failed: {exc}") from exc

        try:
            blocks = data["content"]
            text = "".join(b.get("text", "") for b in blocks if b.get("type") == "text")
        except (KeyError, TypeError, AttributeError) as exc:
            raise TextBackendError("Unexpected response shape from Anthropic") from exc
        if not text:
            raise TextBackendError("No text content in Anthropic response")
        return text


@register_backend("anthropic")
def _create(config: LlmConfig, http_client: HttpClient | None) -> AnthropicBackend:
    settings = config.anthropic
    if is_placeholder(settings.api_key):
        raise ConfigError("Anthropic API key not configured")
    client = http_client or default_http_client(
        config,
        {"x-api-key": settings.api_key, "anthropic-version": _API_VERSION},
    )
    return AnthropicBackend(client, model=settings.model, base_url=settings.base_url)
