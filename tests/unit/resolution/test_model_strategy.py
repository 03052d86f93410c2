"""Unit tests for model strategy resolution."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from keyroute.catalog import Catalog, StrategyId
from keyroute.keys import KeyValidator
from keyroute.resolution import (
    TIER_LABEL_OWN_KEY,
    TIER_LABEL_PLATFORM_CREDIT,
    TIER_LABEL_USER_SPECIFIED,
    ModelOverride,
    ModelStrategyResolver,
    ModelTier,
    ResolutionError,
    UserStrategyConfig,
    charges_platform_credit,
    detect_subscribed_providers,
    is_valid_strategy,
    normalize_strategy,
    resolve_model_strategy,
)
from tests.key_values import ANTHROPIC_KEY, GEMINI_KEY, OPENAI_KEY


@pytest.fixture
def resolver(catalog: Catalog) -> ModelStrategyResolver:
    """Resolver over the built-in catalog."""
    return ModelStrategyResolver(catalog)


@pytest.mark.unit
def test_cost_efficient_without_keys_uses_gemini_credit(
    resolver: ModelStrategyResolver,
) -> None:
    """No keys plus cost-efficient should pick the Gemini thinking model."""
    result = resolver.resolve(UserStrategyConfig(strategy="cost-efficient"))

    assert result.tier == ModelTier.PLATFORM_CREDIT
    assert result.tier_label == TIER_LABEL_PLATFORM_CREDIT
    assert result.primary.provider == "gemini"
    assert result.primary.model == "gemini-2.5-flash-thinking"
    assert result.extra_params == {"thinkingBudget": -1}
    assert result.parallel is False
    assert charges_platform_credit(result) is True


@pytest.mark.unit
def test_max_performance_without_keys_uses_opus_credit(
    resolver: ModelStrategyResolver,
) -> None:
    """No keys plus max-performance should pick Claude Opus without params."""
    result = resolver.resolve(
        UserStrategyConfig(strategy="max-performance", subscribed_providers=())
    )

    assert result.primary.provider == "anthropic"
    assert result.primary.model == "claude-opus-4-6"
    assert result.extra_params is None
    assert result.tier_label == TIER_LABEL_PLATFORM_CREDIT


@pytest.mark.unit
@pytest.mark.parametrize(
    ("strategy", "model"),
    [("cost-efficient", "claude-haiku-4-5"), ("max-performance", "claude-opus-4-6")],
)
def test_own_key_tier_selects_strategy_model(
    resolver: ModelStrategyResolver, strategy: str, model: str
) -> None:
    """A subscribed provider serves at the strategy's quality level."""
    result = resolver.resolve(
        UserStrategyConfig(strategy=strategy, subscribed_providers=("anthropic",))
    )

    assert result.tier == ModelTier.OWN_KEY
    assert result.tier_label == TIER_LABEL_OWN_KEY
    assert result.primary.provider == "anthropic"
    assert result.primary.model == model
    assert result.extra_params is None
    assert result.parallel is False
    assert charges_platform_credit(result) is False


@pytest.mark.unit
def test_first_subscribed_provider_always_wins(
    resolver: ModelStrategyResolver,
) -> None:
    """Caller order decides; the resolver never re-ranks providers."""
    config = UserStrategyConfig(
        strategy="max-performance", subscribed_providers=("openai", "anthropic")
    )

    results = [resolver.resolve(config) for _ in range(5)]

    assert {result.primary.provider for result in results} == {"openai"}
    assert results[0].primary.model == "gpt-5.2"
    assert all(result == results[0] for result in results)


@pytest.mark.unit
def test_override_wins_over_everything(resolver: ModelStrategyResolver) -> None:
    """A well-formed override bypasses strategy and subscriptions."""
    result = resolver.resolve(
        UserStrategyConfig(
            strategy="max-performance",
            subscribed_providers=("anthropic",),
            primary_override="openai/gpt-4o",
        )
    )

    assert result.tier == ModelTier.USER_SPECIFIED
    assert result.tier_label == TIER_LABEL_USER_SPECIFIED
    assert [(m.provider, m.model) for m in result.selected_models] == [
        ("openai", "gpt-4o")
    ]
    assert result.parallel is False
    assert result.extra_params is None
    assert charges_platform_credit(result) is False


@pytest.mark.unit
@pytest.mark.parametrize("override", ["gpt-4o", "openai/", "/gpt-4o", "", "   "])
def test_malformed_override_is_discarded(
    resolver: ModelStrategyResolver, override: str
) -> None:
    """Unparsable overrides behave as if absent."""
    config = UserStrategyConfig(
        strategy="cost-efficient",
        subscribed_providers=("anthropic",),
        primary_override=override,
    )

    assert config.primary_override is None
    assert resolver.resolve(config).primary.model == "claude-haiku-4-5"


@pytest.mark.unit
def test_override_splits_on_first_separator() -> None:
    """Model ids containing slashes survive parsing."""
    override = ModelOverride.parse("together/meta-llama/Llama-3.3-70B")

    assert override is not None
    assert override.provider == "together"
    assert override.model == "meta-llama/Llama-3.3-70B"


@pytest.mark.unit
@pytest.mark.parametrize("strategy", ["turbo", "", "COST-EFFICIENT"])
def test_unknown_strategy_resolves_as_cost_efficient(
    resolver: ModelStrategyResolver, strategy: str
) -> None:
    """Unknown strategies never raise and match cost-efficient output."""
    for subscribed in ((), ("anthropic",)):
        unknown = resolver.resolve(
            UserStrategyConfig(strategy=strategy, subscribed_providers=subscribed)
        )
        expected = resolver.resolve(
            UserStrategyConfig(strategy="cost-efficient", subscribed_providers=subscribed)
        )
        assert unknown == expected


@pytest.mark.unit
def test_unmapped_first_provider_falls_to_credit(
    resolver: ModelStrategyResolver,
) -> None:
    """A first provider without a model mapping yields the credit model."""
    result = resolver.resolve(
        UserStrategyConfig(subscribed_providers=("together", "anthropic"))
    )

    assert result.tier == ModelTier.PLATFORM_CREDIT


@pytest.mark.unit
def test_strategy_validation_helpers() -> None:
    """Only the two strategy ids are valid; everything else normalizes."""
    assert is_valid_strategy("cost-efficient")
    assert is_valid_strategy("max-performance")
    for value in ("invalid", "", None, 123):
        assert not is_valid_strategy(value)
        assert normalize_strategy(value) == StrategyId.COST_EFFICIENT
    assert normalize_strategy("max-performance") == StrategyId.MAX_PERFORMANCE


@pytest.mark.unit
def test_detect_subscribed_providers_uses_catalog_order(
    catalog: Catalog, make_keys: Callable[..., KeyValidator]
) -> None:
    """Detected providers come back in catalog order."""
    keys = make_keys(
        GEMINI_API_KEY=GEMINI_KEY,
        ANTHROPIC_API_KEY=ANTHROPIC_KEY,
        OPENAI_API_KEY=OPENAI_KEY,
    )

    assert detect_subscribed_providers(catalog, keys) == (
        "openai",
        "anthropic",
        "gemini",
    )


@pytest.mark.unit
def test_resolve_requires_config_object(catalog: Catalog) -> None:
    """Passing a plain dict is a programmer error caught at the boundary."""
    with pytest.raises(ResolutionError, match="requires a UserStrategyConfig"):
        resolve_model_strategy({"strategy": "cost-efficient"}, catalog)  # type: ignore[arg-type]
