"""Catalog domain types."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from types import MappingProxyType
from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_K = TypeVar("_K")
_V = TypeVar("_V")


def _read_only(value: Mapping[_K, _V]) -> Mapping[_K, _V]:
    """Return a read-only copy of a validated mapping."""
    return MappingProxyType(dict(value))


class Capability(StrEnum):
    """Closed set of abilities a provider may expose and a skill may need."""

    TEXT_GENERATION = "text-generation"
    SUMMARIZATION = "summarization"
    WEB_SEARCH = "web-search"
    IMAGE_GENERATION = "image-generation"
    IMAGE_ANALYSIS = "image-analysis"
    AUDIO_TRANSCRIPTION = "audio-transcription"
    CODE_GENERATION = "code-generation"
    TRANSLATION = "translation"
    LONG_CONTEXT = "long-context"
    VIDEO_GENERATION = "video-generation"
    EMBEDDING = "embedding"


class StrategyId(StrEnum):
    """Supported cost/performance strategies."""

    COST_EFFICIENT = "cost-efficient"
    MAX_PERFORMANCE = "max-performance"


DEFAULT_STRATEGY = StrategyId.COST_EFFICIENT


class SkillKeyConfig(BaseModel):
    """One credential a skill can use, with its free alternative."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    env_var: str = Field(min_length=1)
    description: str
    required: bool = False
    free_fallback: str | None = None
    validate_pattern: str | None = None


class ProviderConfig(BaseModel):
    """LLM provider the user may hold a key for."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(min_length=1)
    name: str
    env_var: str = Field(min_length=1)
    capabilities: frozenset[Capability] = frozenset()
    validate_pattern: str | None = None

    def supports(self, capability: Capability) -> bool:
        """Return whether this provider declares ``capability``.

        Args:
            capability: Capability to check.

        Returns:
            True when declared.
        """
        return capability in self.capabilities


class ProviderModels(BaseModel):
    """Per-provider model choice for each strategy."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    cost_efficient: str
    max_performance: str
    display_name: str

    def for_strategy(self, strategy: StrategyId) -> str:
        """Return the model id serving ``strategy``.

        Args:
            strategy: Normalized strategy id.

        Returns:
            Model id.
        """
        if strategy == StrategyId.MAX_PERFORMANCE:
            return self.max_performance
        return self.cost_efficient


class StrategyTier(BaseModel):
    """Display-level description of one strategy tier."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    priority: int = Field(ge=1)
    label: str
    description: str
    models: tuple[str, ...] = ()
    free: bool = False


class StrategyDefinition(BaseModel):
    """Strategy with its own-key and platform-credit tiers."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: StrategyId
    name: str
    description: str
    tiers: tuple[StrategyTier, ...]
    # Reserved for multi-model execution; no reconciliation exists yet.
    parallel_fallback: bool = False

    @model_validator(mode="after")
    def _validate_tier_count(self) -> StrategyDefinition:
        """Require exactly the own-key tier and the platform-credit tier.

        Returns:
            Validated strategy definition.

        Raises:
            ValueError: If the strategy does not carry exactly two tiers.
        """
        if len(self.tiers) != 2:
            raise ValueError(
                f"Strategy '{self.id}' must define exactly 2 tiers, got {len(self.tiers)}."
            )
        return self


class CreditModel(BaseModel):
    """Platform-credit default model for one strategy."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    provider: str
    model: str
    display_name: str
    extra_params: Mapping[str, object] | None = None

    @field_validator("extra_params", mode="after")
    @classmethod
    def _freeze_extra_params(
        cls, value: Mapping[str, object] | None
    ) -> Mapping[str, object] | None:
        return None if value is None else _read_only(value)


class Catalog(BaseModel):
    """Immutable registry of skills, providers, models and strategies."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    skill_keys: Mapping[str, tuple[SkillKeyConfig, ...]] = Field(default_factory=dict)
    skill_capabilities: Mapping[str, tuple[Capability, ...]] = Field(
        default_factory=dict
    )
    providers: tuple[ProviderConfig, ...] = ()
    provider_models: Mapping[str, ProviderModels] = Field(default_factory=dict)
    strategies: Mapping[StrategyId, StrategyDefinition]
    credit_models: Mapping[StrategyId, CreditModel]

    @field_validator(
        "skill_keys",
        "skill_capabilities",
        "provider_models",
        "strategies",
        "credit_models",
        mode="after",
    )
    @classmethod
    def _freeze_mappings(cls, value: Mapping[str, object]) -> Mapping[str, object]:
        """Store registry mappings as read-only views.

        Args:
            value: Validated mapping.

        Returns:
            Read-only copy, so shared catalogs cannot be edited in place.
        """
        return _read_only(value)

    @model_validator(mode="after")
    def _validate_registry(self) -> Catalog:
        """Check cross-entry invariants of the registry.

        Returns:
            Validated catalog.

        Raises:
            ValueError: If provider ids repeat or a strategy lacks a definition
                or credit model.
        """
        seen: set[str] = set()
        for provider in self.providers:
            if provider.id in seen:
                raise ValueError(f"Duplicate provider id '{provider.id}'.")
            seen.add(provider.id)
        for strategy_id in StrategyId:
            if strategy_id not in self.strategies:
                raise ValueError(f"Missing strategy definition for '{strategy_id}'.")
            if strategy_id not in self.credit_models:
                raise ValueError(f"Missing credit model for '{strategy_id}'.")
        for key, strategy in self.strategies.items():
            if strategy.id != key:
                raise ValueError(
                    f"Strategy keyed as '{key}' declares id '{strategy.id}'."
                )
        return self

    def skill_key_configs(self, skill_id: str) -> tuple[SkillKeyConfig, ...]:
        """Return declared key configs for a skill in priority order."""
        return self.skill_keys.get(skill_id, ())

    def capabilities_of(self, skill_id: str) -> tuple[Capability, ...]:
        """Return capabilities a skill can be served by, in try order."""
        return self.skill_capabilities.get(skill_id, ())

    def provider(self, provider_id: str) -> ProviderConfig | None:
        """Return provider config by id, if catalogued."""
        for provider in self.providers:
            if provider.id == provider_id:
                return provider
        return None

    def models_of(self, provider_id: str) -> ProviderModels | None:
        """Return the strategy model mapping for a provider, if any."""
        return self.provider_models.get(provider_id)

    def strategy(self, strategy_id: StrategyId) -> StrategyDefinition:
        """Return the definition for a normalized strategy id."""
        return self.strategies[strategy_id]

    def credit_model(self, strategy_id: StrategyId) -> CreditModel:
        """Return the platform-credit model for a normalized strategy id."""
        return self.credit_models[strategy_id]

    def key_pattern(self, skill_id: str, env_var: str) -> str | None:
        """Return the declared format pattern for one skill credential.

        Args:
            skill_id: Skill identifier.
            env_var: Credential name.

        Returns:
            Pattern string, or ``None`` when not declared.
        """
        for config in self.skill_key_configs(skill_id):
            if config.env_var == env_var:
                return config.validate_pattern
        return None

    def free_fallback_of(self, skill_id: str) -> str | None:
        """Return the first non-empty free alternative declared for a skill.

        Args:
            skill_id: Skill identifier.

        Returns:
            Free tool description, or ``None``.
        """
        for config in self.skill_key_configs(skill_id):
            if config.free_fallback:
                return config.free_fallback
        return None
