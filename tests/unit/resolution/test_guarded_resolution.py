"""Unit tests for non-blocking resolution with a bounded timeout."""

from __future__ import annotations

import asyncio
import threading

import pytest

from keyroute.catalog import Catalog
from keyroute.keys import KeyValidator, MappingKeyStore
from keyroute.resolution import (
    FallbackResolver,
    FallbackTier,
    ModelStrategyResolver,
    ModelTier,
    ResolutionError,
    UserStrategyConfig,
    resolve_fallback_async,
    resolve_model_strategy_async,
)
from tests.key_values import BRAVE_KEY


class _SlowChecker:
    """Key checker that blocks until released, like a stalled secret manager."""

    def __init__(self) -> None:
        self.release = threading.Event()

    def has_key(self, env_var: str, pattern: str | None = None) -> bool:
        self.release.wait(timeout=5)
        return True


class _ExplodingResolver(ModelStrategyResolver):
    """Resolver whose infrastructure fails mid-resolution."""

    def resolve(self, config: UserStrategyConfig):  # type: ignore[override]
        raise ConnectionError("secret manager down")


@pytest.mark.unit
def test_async_fallback_matches_sync_tier_order(catalog: Catalog) -> None:
    """The async path should return exactly what the sync path does."""
    keys = KeyValidator(MappingKeyStore({"BRAVE_SEARCH_API_KEY": BRAVE_KEY}))
    resolver = FallbackResolver(catalog, keys)

    result = asyncio.run(resolve_fallback_async(resolver, "brave-search"))

    assert result == resolver.resolve("brave-search")
    assert result.tier == FallbackTier.SKILL_API


@pytest.mark.unit
def test_async_fallback_times_out_to_free_tier(catalog: Catalog) -> None:
    """A stalled key lookup degrades to the free tier instead of failing."""
    checker = _SlowChecker()
    resolver = FallbackResolver(catalog, checker)

    async def _resolve_then_release():
        try:
            return await resolve_fallback_async(resolver, "brave-search", timeout=0.05)
        finally:
            checker.release.set()

    result = asyncio.run(_resolve_then_release())

    assert result.tier == FallbackTier.FREE_FALLBACK
    assert result.strategy_text == "DuckDuckGo via curl (no API key needed)"


@pytest.mark.unit
def test_async_fallback_still_rejects_invalid_arguments(catalog: Catalog) -> None:
    """Structural errors are not masked by the degrade path."""
    resolver = FallbackResolver(catalog, KeyValidator(MappingKeyStore({})))

    with pytest.raises(ResolutionError):
        asyncio.run(resolve_fallback_async(resolver, 42))  # type: ignore[arg-type]


@pytest.mark.unit
def test_async_model_resolution_matches_sync(catalog: Catalog) -> None:
    """Async model resolution preserves the synchronous outcome."""
    resolver = ModelStrategyResolver(catalog)
    config = UserStrategyConfig(
        strategy="max-performance", subscribed_providers=("anthropic",)
    )

    result = asyncio.run(resolve_model_strategy_async(resolver, config))

    assert result == resolver.resolve(config)
    assert result.tier == ModelTier.OWN_KEY


@pytest.mark.unit
def test_async_model_failure_degrades_to_credit(catalog: Catalog) -> None:
    """Infrastructure failure answers with the platform-credit model."""
    resolver = _ExplodingResolver(catalog)
    config = UserStrategyConfig(
        strategy="max-performance", subscribed_providers=("anthropic",)
    )

    result = asyncio.run(resolve_model_strategy_async(resolver, config))

    assert result.tier == ModelTier.PLATFORM_CREDIT
    assert result.primary.model == "claude-opus-4-6"


@pytest.mark.unit
def test_async_model_requires_config_object(catalog: Catalog) -> None:
    """Non-config input is rejected before any work is scheduled."""
    with pytest.raises(ResolutionError):
        asyncio.run(
            resolve_model_strategy_async(ModelStrategyResolver(catalog), None)  # type: ignore[arg-type]
        )
