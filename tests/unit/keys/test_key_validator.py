"""Unit tests for credential presence and format validation."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from keyroute.catalog import Catalog
from keyroute.keys import (
    EnvKeyStore,
    KeyLookupError,
    KeyValidator,
    configured_keys,
    has_provider_key,
    has_skill_key,
)
from tests.key_values import BRAVE_KEY, OPENAI_KEY


class _BrokenStore:
    """Store whose backend is unavailable."""

    def get(self, name: str) -> str | None:
        raise KeyLookupError(f"secret manager unreachable for {name}")


@pytest.mark.unit
def test_missing_and_blank_keys_are_absent(
    make_keys: Callable[..., KeyValidator],
) -> None:
    """Unset, empty and whitespace-only values should be treated as absent."""
    keys = make_keys(EMPTY_KEY="", BLANK_KEY="   ")

    assert keys.has_key("UNSET_KEY") is False
    assert keys.has_key("EMPTY_KEY") is False
    assert keys.has_key("BLANK_KEY") is False


@pytest.mark.unit
def test_pattern_must_match_whole_value(
    make_keys: Callable[..., KeyValidator],
) -> None:
    """Values failing the declared pattern count as absent."""
    keys = make_keys(GOOD=BRAVE_KEY, BAD="xBSAtest1234567890abcdefghij")
    pattern = r"^BSA[a-zA-Z0-9_-]{20,}$"

    assert keys.has_key("GOOD", pattern) is True
    assert keys.has_key("BAD", pattern) is False
    assert keys.has_key("GOOD", r"BSA") is False


@pytest.mark.unit
def test_store_failure_maps_to_absent(caplog: pytest.LogCaptureFixture) -> None:
    """A failing credential store must not propagate errors."""
    keys = KeyValidator(_BrokenStore())

    assert keys.has_key("OPENAI_API_KEY") is False
    assert "Key lookup failed" in caplog.text


class _BytesStore:
    """Store whose backend hands back raw bytes."""

    def get(self, name: str) -> object:
        return BRAVE_KEY.encode()


@pytest.mark.unit
def test_non_string_store_value_is_absent() -> None:
    """A value that is not text counts as absent instead of raising."""
    keys = KeyValidator(_BytesStore())  # type: ignore[arg-type]

    assert keys.has_key("BRAVE_SEARCH_API_KEY") is False
    assert keys.has_key("BRAVE_SEARCH_API_KEY", r"^BSA[a-zA-Z0-9_-]{20,}$") is False


@pytest.mark.unit
def test_skill_key_uses_declared_pattern(
    catalog: Catalog, make_keys: Callable[..., KeyValidator]
) -> None:
    """Skill key checks should apply the skill's declared pattern."""
    assert has_skill_key(
        make_keys(BRAVE_SEARCH_API_KEY=BRAVE_KEY),
        catalog,
        "brave-search",
        "BRAVE_SEARCH_API_KEY",
    )
    assert not has_skill_key(
        make_keys(BRAVE_SEARCH_API_KEY="plain-value"),
        catalog,
        "brave-search",
        "BRAVE_SEARCH_API_KEY",
    )


@pytest.mark.unit
def test_invalid_provider_key_format_is_rejected(
    catalog: Catalog, make_keys: Callable[..., KeyValidator]
) -> None:
    """An OpenAI key that does not match its pattern is absent."""
    openai = catalog.provider("openai")
    assert openai is not None

    assert has_provider_key(make_keys(OPENAI_API_KEY="invalid-key"), openai) is False
    assert has_provider_key(make_keys(OPENAI_API_KEY=OPENAI_KEY), openai) is True


@pytest.mark.unit
def test_env_store_reads_live_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Default store should read the process environment at lookup time."""
    keys = KeyValidator(EnvKeyStore())
    monkeypatch.delenv("KEYROUTE_TEST_KEY", raising=False)
    assert keys.has_key("KEYROUTE_TEST_KEY") is False

    monkeypatch.setenv("KEYROUTE_TEST_KEY", "value")
    assert keys.has_key("KEYROUTE_TEST_KEY") is True


@pytest.mark.unit
def test_snapshot_freezes_key_state(catalog: Catalog) -> None:
    """Snapshots should not observe later store changes."""
    values = {"OPENAI_API_KEY": OPENAI_KEY}
    keys = KeyValidator(EnvKeyStore(values))
    snapshot = keys.snapshot(catalog)
    values.pop("OPENAI_API_KEY")
    openai = catalog.provider("openai")
    assert openai is not None

    assert has_provider_key(snapshot, openai) is True
    assert has_provider_key(keys, openai) is False


@pytest.mark.unit
def test_configured_keys_lists_declared_keys_in_order(
    catalog: Catalog, make_keys: Callable[..., KeyValidator]
) -> None:
    """Status rows should follow catalog order and reflect key validity."""
    rows = configured_keys(make_keys(BRAVE_SEARCH_API_KEY=BRAVE_KEY), catalog)

    assert rows[0].skill == "brave-search"
    assert rows[0].configured is True
    assert all(not row.configured for row in rows[1:])
    assert {row.env_var for row in rows if row.skill.startswith("hugging-face")} == {
        "HF_TOKEN"
    }
