# ABOUTME: OpenAI chat completions text backend.
# ABOUTME: Sends the prompt as a single user message and returns the first choice's content.

from typing import Any

from wcm.config import ConfigError, LlmConfig, is_placeholder
from wcm.http import ApiRequestError, HttpClient
from wcm.llm.backend import TextBackendError, default_http_client, register_backend

_MAX_TOKENS = 1000
_TEMPERATURE = 0.7


class OpenAIBackend:
    """Text backend for the OpenAI chat completions API (or a compatible server)."""

    def __init__(self, http_client: HttpClient, *, model: str, base_url: str) -> None:
        self._http = http_client
        self._model = model
        self._url = f"{base_url.rstrip('/')}/chat/completions"

    @property
    def name(self) -> str:
        return "openai"

    def generate(self, prompt: str) -> str:
        payload = {
            "model": self._model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": _MAX_TOKENS,
            "temperature": _TEMPERATURE,
        }
        try:
            data: Any = self._http.post(self._url, json=payload)
        except ApiRequestError as exc:
            raise TextBackendError(f"OpenAI request failed: {exc}") from exc

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise TextBackendError("No response content from OpenAI") from exc
        if not isinstance(content, str):
            raise TextBackendError("No response content from OpenAI")
        return content


@register_backend("openai")
def _create(config: LlmConfig, http_client: HttpClient | None) -> OpenAIBackend:
    settings = config.openai
    if is_placeholder(settings.api_key):
        raise ConfigError("OpenAI API key not configured")
    client = http_client or default_http_client(
        config, {"Authorization": f"Bearer {settings.api_key}"}
    )
    return OpenAIBackend(client, model=settings.model, base_url=settings.base_url)
