# ABOUTME: Layered configuration for wcm: defaults, config.yaml, then environment overrides.
# ABOUTME: Loads .env via python-dotenv and validates credentials before any API call is made.

import logging
import os
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any

import yaml
from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config.yaml")

ENV_PREFIX = "WCM_"
ENV_NESTED_SEPARATOR = "__"

# Flat environment variables that override a single nested setting.
_FLAT_ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "GOOGLE_BOOKS_API_KEY": ("google_books", "api_key"),
    "BASEROW_API_TOKEN": ("baserow", "api_token"),
    "BASEROW_DATABASE_ID": ("baserow", "database_id"),
    "BASEROW_MEDIA_TABLE_ID": ("baserow", "media_table_id"),
    "BASEROW_CATEGORIES_TABLE_ID": ("baserow", "categories_table_id"),
    "OPENAI_API_KEY": ("llm.openai", "api_key"),
    "ANTHROPIC_API_KEY": ("llm.anthropic", "api_key"),
    "WCM_LLM_PROVIDER": ("llm", "provider"),
}

_PLACEHOLDER_MARKER = "your_"

SUPPORTED_PROVIDERS = ("openai", "anthropic", "ollama")
COVER_UPLOAD_MODES = ("url", "bytes")


class ConfigError(Exception):
    """Raised when configuration is missing, malformed, or incomplete."""


def is_placeholder(value: str | None) -> bool:
    """Whether a credential is unset or still holds a `your_...` template value."""
    return not value or _PLACEHOLDER_MARKER in value


@dataclass
class GoogleBooksConfig:
    api_key: str = ""
    base_url: str = "https://www.googleapis.com/books/v1"


@dataclass
class OpenLibraryConfig:
    base_url: str = "https://openlibrary.org"


@dataclass
class BaserowConfig:
    api_token: str = ""
    base_url: str = "https://api.baserow.io"
    database_id: int | None = None
    media_table_id: int | None = None
    categories_table_id: int | None = None
    # Single-select option ids for the "Media Type" field, keyed by media type value.
    media_type_options: dict[str, int] = field(default_factory=dict)


@dataclass
class OpenAIConfig:
    api_key: str = ""
    model: str = "gpt-4o-mini"
    base_url: str = "https://api.openai.com/v1"


@dataclass
class AnthropicConfig:
    api_key: str = ""
    model: str = "claude-3-5-haiku-latest"
    base_url: str = "https://api.anthropic.com"


@dataclass
class OllamaConfig:
    base_url: str = "http://localhost:11434"
    model: str = "llama3.1"


@dataclass
class LlmConfig:
    provider: str = "ollama"
    timeout: float = 120.0
    openai: OpenAIConfig = field(default_factory=OpenAIConfig)
    anthropic: AnthropicConfig = field(default_factory=AnthropicConfig)
    ollama: OllamaConfig = field(default_factory=OllamaConfig)


@dataclass
class AppConfig:
    verbose: bool = False
    max_search_results: int = 5
    description_preview_chars: int = 200
    min_synopsis_words: int = 50
    target_synopsis_words: int = 150
    category_attempts: int = 2
    web_search: bool = True
    cover_upload: str = "url"
    request_timeout: float = 30.0


@dataclass
class Config:
    """Complete wcm configuration, one section per external service."""

    google_books: GoogleBooksConfig = field(default_factory=GoogleBooksConfig)
    open_library: OpenLibraryConfig = field(default_factory=OpenLibraryConfig)
    baserow: BaserowConfig = field(default_factory=BaserowConfig)
    llm: LlmConfig = field(default_factory=LlmConfig)
    app: AppConfig = field(default_factory=AppConfig)

    def validate(self) -> None:
        """Check that the settings needed for adding a book are present.

        Raises:
            ConfigError: Describing the first problem found.
        """
        self.validate_baserow()

        provider = self.llm.provider
        if provider not in SUPPORTED_PROVIDERS:
            raise ConfigError(
                f"Unsupported LLM provider: {provider}. "
                f"Supported providers: {', '.join(SUPPORTED_PROVIDERS)}"
            )
        if provider == "openai" and is_placeholder(self.llm.openai.api_key):
            raise ConfigError("OpenAI API key not configured")
        if provider == "anthropic" and is_placeholder(self.llm.anthropic.api_key):
            raise ConfigError("Anthropic API key not configured")

        if self.app.cover_upload not in COVER_UPLOAD_MODES:
            raise ConfigError(
                f"app.cover_upload must be one of {', '.join(COVER_UPLOAD_MODES)}, "
                f"got {self.app.cover_upload!r}"
            )
        if self.app.max_search_results < 1:
            raise ConfigError("app.max_search_results must be at least 1")
        if self.app.category_attempts < 1:
            raise ConfigError("app.category_attempts must be at least 1")

    def validate_baserow(self) -> None:
        """Check only the Baserow settings (enough for read-only commands)."""
        if is_placeholder(self.baserow.api_token):
            raise ConfigError("Baserow API token not configured")
        for name in ("database_id", "media_table_id", "categories_table_id"):
            if getattr(self.baserow, name) is None:
                raise ConfigError(f"baserow.{name} not configured")


def load_config(
    path: Path | None = None, *, environ: dict[str, str] | None = None
) -> Config:
    """Load configuration from defaults, a YAML file, and the environment.

    Environment values take precedence over file values. A `.env` file in
    the working directory is loaded first when reading the real environment.

    Args:
        path: YAML file to read. Defaults to ./config.yaml; a missing default
            file is not an error, a missing explicit path is.
        environ: Environment mapping to read overrides from (os.environ if None).

    Raises:
        ConfigError: If the file cannot be parsed or a value has the wrong type.
    """
    if environ is None:
        load_dotenv(find_dotenv(usecwd=True))
        environ = dict(os.environ)

    config = Config()

    file_path = path or DEFAULT_CONFIG_PATH
    if file_path.exists():
        _apply_mapping(config, _read_yaml(file_path), section="")
        logger.debug("Loaded configuration from %s", file_path)
    elif path is not None:
        raise ConfigError(f"Config file not found: {path}")

    _apply_nested_env(config, environ)
    _apply_flat_env(config, environ)
    return config


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping at the top level")
    return data


def _apply_mapping(target: Any, data: dict[str, Any], section: str) -> None:
    """Recursively copy a nested mapping onto a dataclass tree, coercing scalar types."""
    known = {f.name: f for f in fields(target)}
    for key, value in data.items():
        name = f"{section}.{key}" if section else key
        if key not in known:
            logger.warning("Ignoring unknown config key: %s", name)
            continue
        current = getattr(target, key)
        if is_dataclass(current):
            if not isinstance(value, dict):
                raise ConfigError(f"Config section {name} must be a mapping")
            _apply_mapping(current, value, name)
        else:
            setattr(target, key, _coerce(name, value, known[key].type))


def _apply_nested_env(config: Config, environ: dict[str, str]) -> None:
    """Apply WCM_SECTION__KEY style overrides."""
    for env_name, value in environ.items():
        if not env_name.startswith(ENV_PREFIX) or ENV_NESTED_SEPARATOR not in env_name:
            continue
        parts = env_name[len(ENV_PREFIX):].lower().split(ENV_NESTED_SEPARATOR)
        nested: dict[str, Any] = {parts[-1]: value}
        for part in reversed(parts[:-1]):
            nested = {part: nested}
        _apply_mapping(config, nested, section="")


def _apply_flat_env(config: Config, environ: dict[str, str]) -> None:
    for env_name, (section, key) in _FLAT_ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value is None:
            continue
        target: Any = config
        for part in section.split("."):
            target = getattr(target, part)
        field_type = next(f.type for f in fields(target) if f.name == key)
        setattr(target, key, _coerce(f"{section}.{key}", value, field_type))


_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off", ""}


def _coerce(name: str, value: Any, field_type: Any) -> Any:
    """Convert a YAML or environment value to the declared field type."""
    if isinstance(field_type, type):
        type_name = field_type.__name__
    else:
        # "int | None", "dict[str, int]", or an already-stringified name
        type_name = str(field_type)

    if value is None:
        return None
    if type_name.startswith("dict"):
        if not isinstance(value, dict):
            raise ConfigError(f"{name} must be a mapping")
        return {str(k): _coerce(f"{name}.{k}", v, "int") for k, v in value.items()}
    if type_name == "bool":
        if isinstance(value, bool):
            return value
        lowered = str(value).strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
        raise ConfigError(f"{name} must be a boolean, got {value!r}")
    if type_name.startswith("int"):
        try:
            return int(value)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"{name} must be an integer, got {value!r}") from exc
    if type_name == "float":
        try:
            return float(value)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"{name} must be a number, got {value!r}") from exc
    return str(value)
