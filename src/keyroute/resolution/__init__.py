"""Fallback and model strategy resolvers."""

from keyroute.resolution.fallback import FallbackResolver, resolve_fallback
from keyroute.resolution.guarded import (
    DEFAULT_RESOLUTION_TIMEOUT_SECONDS,
    resolve_fallback_async,
    resolve_model_strategy_async,
)
from keyroute.resolution.strategy import (
    ModelStrategyResolver,
    detect_subscribed_providers,
    is_valid_strategy,
    normalize_strategy,
    resolve_model_strategy,
)
from keyroute.resolution.types import (
    NO_FALLBACK_AVAILABLE,
    TIER_LABEL_OWN_KEY,
    TIER_LABEL_PLATFORM_CREDIT,
    TIER_LABEL_USER_SPECIFIED,
    CapabilityCandidates,
    FallbackChain,
    FallbackResolution,
    FallbackTier,
    ModelOverride,
    ModelSelection,
    ModelTier,
    ResolutionError,
    ResolvedModel,
    UserStrategyConfig,
    charges_platform_credit,
)

__all__ = [
    "DEFAULT_RESOLUTION_TIMEOUT_SECONDS",
    "NO_FALLBACK_AVAILABLE",
    "TIER_LABEL_OWN_KEY",
    "TIER_LABEL_PLATFORM_CREDIT",
    "TIER_LABEL_USER_SPECIFIED",
    "CapabilityCandidates",
    "FallbackChain",
    "FallbackResolution",
    "FallbackResolver",
    "FallbackTier",
    "ModelOverride",
    "ModelSelection",
    "ModelStrategyResolver",
    "ModelTier",
    "ResolutionError",
    "ResolvedModel",
    "UserStrategyConfig",
    "charges_platform_credit",
    "detect_subscribed_providers",
    "is_valid_strategy",
    "normalize_strategy",
    "resolve_fallback",
    "resolve_fallback_async",
    "resolve_model_strategy",
    "resolve_model_strategy_async",
]
