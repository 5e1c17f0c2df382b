# ABOUTME: Pluggable text generation backends (OpenAI, Anthropic, Ollama).
# ABOUTME: Exports the TextBackend protocol and the configuration-driven factory.

from wcm.llm.backend import TextBackend, TextBackendError, create_backend

__all__ = [
    "TextBackend",
    "TextBackendError",
    "create_backend",
]
