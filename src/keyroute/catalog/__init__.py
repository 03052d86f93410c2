"""Key & capability registry."""

from keyroute.catalog.defaults import default_catalog
from keyroute.catalog.holder import CatalogHolder
from keyroute.catalog.loader import CatalogError, load_catalog
from keyroute.catalog.types import (
    DEFAULT_STRATEGY,
    Capability,
    Catalog,
    CreditModel,
    ProviderConfig,
    ProviderModels,
    SkillKeyConfig,
    StrategyDefinition,
    StrategyId,
    StrategyTier,
)

__all__ = [
    "DEFAULT_STRATEGY",
    "Capability",
    "Catalog",
    "CatalogError",
    "CatalogHolder",
    "CreditModel",
    "ProviderConfig",
    "ProviderModels",
    "SkillKeyConfig",
    "StrategyDefinition",
    "StrategyId",
    "StrategyTier",
    "default_catalog",
    "load_catalog",
]
