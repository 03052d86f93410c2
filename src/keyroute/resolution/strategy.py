"""Model strategy resolution for general chat/LLM invocations."""

from __future__ import annotations

import logging

from keyroute.catalog.types import DEFAULT_STRATEGY, Catalog, StrategyId
from keyroute.keys.validator import KeyChecker, has_provider_key
from keyroute.resolution.types import (
    TIER_LABEL_OWN_KEY,
    TIER_LABEL_PLATFORM_CREDIT,
    TIER_LABEL_USER_SPECIFIED,
    ModelOverride,
    ModelSelection,
    ModelTier,
    ResolutionError,
    ResolvedModel,
    UserStrategyConfig,
)

_LOGGER = logging.getLogger(__name__)


def is_valid_strategy(value: object) -> bool:
    """Return whether ``value`` names a known strategy.

    Args:
        value: Any candidate value.

    Returns:
        True for ``cost-efficient`` and ``max-performance`` only.
    """
    return isinstance(value, str) and value in {
        strategy.value for strategy in StrategyId
    }


def normalize_strategy(value: object) -> StrategyId:
    """Map ``value`` to a known strategy, defaulting silently.

    Args:
        value: Raw strategy value.

    Returns:
        Known strategy id.
    """
    if is_valid_strategy(value):
        return StrategyId(value)
    _LOGGER.debug("Unknown strategy %r; using %s", value, DEFAULT_STRATEGY)
    return DEFAULT_STRATEGY


def detect_subscribed_providers(catalog: Catalog, keys: KeyChecker) -> tuple[str, ...]:
    """Return ids of providers whose key validates, in catalog order.

    Args:
        catalog: Catalog declaring providers.
        keys: Key validator or snapshot.

    Returns:
        Provider ids.
    """
    return tuple(
        provider.id
        for provider in catalog.providers
        if has_provider_key(keys, provider)
    )


class ModelStrategyResolver:
    """Pick the provider/model serving a chat request.

    An override always wins. Otherwise the first subscribed provider serves at
    the strategy's quality level, and without subscriptions the strategy's
    platform-credit model is used.
    """

    def __init__(self, catalog: Catalog) -> None:
        """Bind the catalog.

        Args:
            catalog: Immutable registry of provider models and strategies.
        """
        if not isinstance(catalog, Catalog):
            raise ResolutionError("ModelStrategyResolver requires a Catalog instance.")
        self._catalog = catalog

    @property
    def catalog(self) -> Catalog:
        """Catalog this resolver reads."""
        return self._catalog

    def resolve(self, config: UserStrategyConfig) -> ResolvedModel:
        """Resolve the model for one request.

        Args:
            config: Per-request strategy input.

        Returns:
            Resolved model selection; never empty.

        Raises:
            ResolutionError: If ``config`` is not a ``UserStrategyConfig``.
        """
        if not isinstance(config, UserStrategyConfig):
            raise ResolutionError(
                "resolve() requires a UserStrategyConfig, "
                f"got {type(config).__name__}."
            )
        strategy = normalize_strategy(config.strategy)
        if config.primary_override is not None:
            return self._resolve_override(strategy, config.primary_override)
        own_key = self._resolve_own_key(strategy, config.subscribed_providers)
        if own_key is not None:
            return own_key
        return self.platform_credit(strategy)

    def _resolve_override(
        self, strategy: StrategyId, override: ModelOverride
    ) -> ResolvedModel:
        return ResolvedModel(
            strategy=strategy,
            tier=ModelTier.USER_SPECIFIED,
            tier_label=TIER_LABEL_USER_SPECIFIED,
            selected_models=(
                ModelSelection(provider=override.provider, model=override.model),
            ),
            parallel=False,
            explanation=f"Using user-specified model {override}.",
        )

    def _resolve_own_key(
        self, strategy: StrategyId, subscribed: tuple[str, ...]
    ) -> ResolvedModel | None:
        if not subscribed:
            return None
        provider_id = subscribed[0]
        models = self._catalog.models_of(provider_id)
        if models is None:
            _LOGGER.debug("No model mapping for provider %s", provider_id)
            return None
        model = models.for_strategy(strategy)
        provider = self._catalog.provider(provider_id)
        provider_name = provider.name if provider is not None else models.display_name
        quality = (
            "top-performance"
            if strategy == StrategyId.MAX_PERFORMANCE
            else "cost-efficient"
        )
        return ResolvedModel(
            strategy=strategy,
            tier=ModelTier.OWN_KEY,
            tier_label=TIER_LABEL_OWN_KEY,
            selected_models=(ModelSelection(provider=provider_id, model=model),),
            parallel=self._catalog.strategy(strategy).parallel_fallback,
            explanation=(
                f"{provider_name} subscription: {quality} model {model} "
                "(no extra cost)"
            ),
        )

    def platform_credit(self, strategy: StrategyId) -> ResolvedModel:
        """Return the platform-credit default for ``strategy``.

        Args:
            strategy: Normalized strategy id.

        Returns:
            Credit-model resolution; always available.
        """
        credit = self._catalog.credit_model(strategy)
        return ResolvedModel(
            strategy=strategy,
            tier=ModelTier.PLATFORM_CREDIT,
            tier_label=TIER_LABEL_PLATFORM_CREDIT,
            selected_models=(
                ModelSelection(provider=credit.provider, model=credit.model),
            ),
            parallel=False,
            extra_params=dict(credit.extra_params) if credit.extra_params else None,
            explanation=f"Platform credit: {credit.display_name}",
        )


def resolve_model_strategy(config: UserStrategyConfig, catalog: Catalog) -> ResolvedModel:
    """Resolve ``config`` with a one-off resolver.

    Args:
        config: Per-request strategy input.
        catalog: Immutable registry.

    Returns:
        Resolved model selection.
    """
    return ModelStrategyResolver(catalog).resolve(config)
