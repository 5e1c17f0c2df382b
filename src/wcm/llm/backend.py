# ABOUTME: TextBackend protocol and the provider registry used to pick one from configuration.
# ABOUTME: Every LLM provider exposes generate(prompt) -> text; nothing else in wcm depends on which one.

import logging
from collections.abc import Callable
from typing import Protocol, runtime_checkable

from wcm.config import ConfigError, LlmConfig
from wcm.http import HttpClient, WcmHttpClient

logger = logging.getLogger(__name__)


class TextBackendError(Exception):
    """Raised when a text backend call fails or returns an unusable response."""


@runtime_checkable
class TextBackend(Protocol):
    """Protocol for text generation services."""

    @property
    def name(self) -> str: ...

    def generate(self, prompt: str) -> str: ...


BackendFactory = Callable[[LlmConfig, HttpClient | None], TextBackend]

_REGISTRY: dict[str, BackendFactory] = {}


def register_backend(provider: str) -> Callable[[BackendFactory], BackendFactory]:
    """Decorator registering a factory under a `llm.provider` value."""

    def decorator(factory: BackendFactory) -> BackendFactory:
        _REGISTRY[provider] = factory
        return factory

    return decorator


def create_backend(config: LlmConfig, http_client: HttpClient | None = None) -> TextBackend:
    """Create the backend selected by `config.provider`.

    Args:
        config: The llm configuration section.
        http_client: Optional client to use instead of a new WcmHttpClient
            (tests inject a fake here).

    Raises:
        ConfigError: If the provider is unknown or its credentials are missing.
    """
    # Importing the implementations registers them.
    from wcm.llm import anthropic, ollama, openai  # noqa: F401

    factory = _REGISTRY.get(config.provider)
    if factory is None:
        raise ConfigError(
            f"Unsupported LLM provider: {config.provider}. "
            f"Supported providers: {', '.join(sorted(_REGISTRY))}"
        )
    backend = factory(config, http_client)
    logger.info("Using %s text backend", backend.name)
    return backend


def default_http_client(config: LlmConfig, headers: dict[str, str] | None = None) -> HttpClient:
    return WcmHttpClient(headers=headers, timeout=config.timeout)
