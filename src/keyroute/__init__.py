"""Model & skill resolution engine."""

from keyroute.catalog import (
    Capability,
    Catalog,
    CatalogHolder,
    StrategyId,
    default_catalog,
    load_catalog,
)
from keyroute.explain import ExplanationFormatter, Locale
from keyroute.keys import EnvKeyStore, KeySnapshot, KeyValidator, MappingKeyStore
from keyroute.resolution import (
    FallbackResolution,
    FallbackResolver,
    FallbackTier,
    ModelStrategyResolver,
    ModelTier,
    ResolutionError,
    ResolvedModel,
    UserStrategyConfig,
    charges_platform_credit,
    resolve_fallback,
    resolve_model_strategy,
)

__version__ = "0.1.0"

__all__ = [
    "Capability",
    "Catalog",
    "CatalogHolder",
    "EnvKeyStore",
    "ExplanationFormatter",
    "FallbackResolution",
    "FallbackResolver",
    "FallbackTier",
    "KeySnapshot",
    "KeyValidator",
    "Locale",
    "MappingKeyStore",
    "ModelStrategyResolver",
    "ModelTier",
    "ResolutionError",
    "ResolvedModel",
    "StrategyId",
    "UserStrategyConfig",
    "charges_platform_credit",
    "default_catalog",
    "load_catalog",
    "resolve_fallback",
    "resolve_model_strategy",
]
