# ABOUTME: Shared pytest fixtures for wcm tests.
# ABOUTME: Provides a valid Config, the sample category set, and an isolated environment.

from pathlib import Path

import pytest

from wcm.baserow.mapping import CategorySet, parse_category_rows
from wcm.config import BaserowConfig, Config
from tests.fixtures.baserow_responses import CATEGORY_ROWS

_ENV_VARS = (
    "GOOGLE_BOOKS_API_KEY",
    "BASEROW_API_TOKEN",
    "BASEROW_DATABASE_ID",
    "BASEROW_MEDIA_TABLE_ID",
    "BASEROW_CATEGORIES_TABLE_ID",
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    "WCM_LLM_PROVIDER",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Run every test in an empty directory with no wcm-related environment variables."""
    monkeypatch.chdir(tmp_path)
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config() -> Config:
    """A configuration that passes validation, using the Ollama backend."""
    return Config(
        baserow=BaserowConfig(
            api_token="test-token",
            base_url="https://baserow.example.com",
            database_id=1,
            media_table_id=20,
            categories_table_id=10,
        ),
    )


@pytest.fixture
def category_set() -> CategorySet:
    return parse_category_rows(CATEGORY_ROWS)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Write a complete config.yaml into the working directory."""
    path = tmp_path / "config.yaml"
    path.write_text(
        """
baserow:
  api_token: file-token
  base_url: https://baserow.example.com
  database_id: 1
  media_table_id: 20
  categories_table_id: 10
llm:
  provider: ollama
app:
  max_search_results: 3
"""
    )
    return path
