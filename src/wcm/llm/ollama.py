# ABOUTME: Ollama text backend for a locally reachable model server.
# ABOUTME: Calls /api/generate without streaming; needs only an endpoint and a model name.

from typing import Any

from wcm.config import LlmConfig
from wcm.http import ApiRequestError, HttpClient
from wcm.llm.backend import TextBackendError, default_http_client, register_backend


class OllamaBackend:
    """Text backend for an Ollama server."""

    def __init__(self, http_client: HttpClient, *, model: str, base_url: str) -> None:
        self._http = http_client
        self._model = model
        self._url = f"{base_url.rstrip('/')}/api/generate"

    @property
    def name(self) -> str:
        return "ollama"

    def generate(self, prompt: str) -> str:
        payload = {"model": self._model, "prompt": prompt, "stream": False}
        try:
            data: Any = self._http.post(self._url, json=payload)
        except ApiRequestError as exc:
            raise TextBackendError(f"Ollama request failed: {exc}") from exc

        response = data.get("response") if isinstance(data, dict) else None
        if not isinstance(response, str):
            raise TextBackendError("Ollama response has no 'response' text")
        return response


@register_backend("ollama")
def _create(config: LlmConfig, http_client: HttpClient | None) -> OllamaBackend:
    settings = config.ollama
    client = http_client or default_http_client(config)
    return OllamaBackend(client, model=settings.model, base_url=settings.base_url)
