"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from keyroute.catalog import Catalog, default_catalog
from keyroute.keys import KeyValidator, MappingKeyStore

ALL_KEY_NAMES = (
    "BRAVE_SEARCH_API_KEY",
    "PERPLEXITY_API_KEY",
    "GAMMA_API_KEY",
    "TRANSCRIPT_API_KEY",
    "AUDIOPOD_API_KEY",
    "API_GATEWAY_KEYS",
    "SLACK_BOT_TOKEN",
    "GEMINI_API_KEY",
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    "XAI_API_KEY",
    "DEEPSEEK_API_KEY",
    "MISTRAL_API_KEY",
    "GROQ_API_KEY",
    "FAL_KEY",
    "HF_TOKEN",
)


@pytest.fixture
def catalog() -> Catalog:
    """Built-in catalog."""
    return default_catalog()


@pytest.fixture
def make_keys() -> Callable[..., KeyValidator]:
    """Build a validator over a fixed set of credential values."""

    def _make(**values: str) -> KeyValidator:
        return KeyValidator(MappingKeyStore(values))

    return _make


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every catalogued credential from the environment."""
    for name in ALL_KEY_NAMES:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
