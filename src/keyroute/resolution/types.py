"""Resolution input and output value objects."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from keyroute.catalog.types import (
    DEFAULT_STRATEGY,
    Capability,
    ProviderConfig,
    SkillKeyConfig,
    StrategyId,
)

NO_FALLBACK_AVAILABLE = "no fallback available"
FREE_PROVIDER = "free"

TIER_LABEL_USER_SPECIFIED = "user-specified model"
TIER_LABEL_OWN_KEY = "user holding own key"
TIER_LABEL_PLATFORM_CREDIT = "platform credit (default)"


class ResolutionError(TypeError):
    """Raised when a resolver is called with structurally invalid arguments."""


class FallbackTier(StrEnum):
    """Skill fallback tiers in priority order."""

    SKILL_API = "skill-api"
    USER_LLM = "user-llm"
    FREE_FALLBACK = "free-fallback"


class ModelTier(StrEnum):
    """Chat model resolution outcomes."""

    USER_SPECIFIED = "user-specified"
    OWN_KEY = "own-key"
    PLATFORM_CREDIT = "platform-credit"


class ModelSelection(BaseModel):
    """Concrete provider/model pair to dispatch to."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    provider: str = Field(min_length=1)
    model: str = Field(min_length=1)

    def __str__(self) -> str:
        return f"{self.provider}/{self.model}"


class ModelOverride(ModelSelection):
    """User-pinned model parsed from a ``provider/model`` string."""

    @classmethod
    def parse(cls, value: str) -> ModelOverride | None:
        """Parse ``provider/model`` text, splitting on the first separator.

        Args:
            value: Raw override text.

        Returns:
            Parsed override, or ``None`` when either side is empty.
        """
        provider, separator, model = value.strip().partition("/")
        if not separator or not provider or not model:
            return None
        return cls(provider=provider, model=model)


class UserStrategyConfig(BaseModel):
    """Per-request strategy input assembled by the caller."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    strategy: str = DEFAULT_STRATEGY.value
    subscribed_providers: tuple[str, ...] = ()
    primary_override: ModelOverride | None = None

    @field_validator("primary_override", mode="before")
    @classmethod
    def _parse_override(cls, value: object) -> object:
        """Parse override strings once; malformed text becomes ``None``.

        Args:
            value: Raw field value.

        Returns:
            Parsed override, ``None``, or the value unchanged for model input.
        """
        if isinstance(value, str):
            return ModelOverride.parse(value)
        return value


class FallbackResolution(BaseModel):
    """Outcome of resolving a skill invocation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    tier: FallbackTier
    strategy_text: str
    provider: str
    env_var: str | None = None

    @property
    def uses_user_key(self) -> bool:
        """Whether the resolution runs on a credential the user holds."""
        return self.tier != FallbackTier.FREE_FALLBACK

    @property
    def charges_platform_credit(self) -> bool:
        """Skill resolutions never draw platform credit."""
        return False


class ResolvedModel(BaseModel):
    """Outcome of resolving a chat/LLM invocation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    strategy: StrategyId
    tier: ModelTier
    tier_label: str
    selected_models: tuple[ModelSelection, ...] = Field(min_length=1)
    parallel: bool = False
    extra_params: Mapping[str, object] | None = None
    explanation: str = ""

    @property
    def primary(self) -> ModelSelection:
        """First selected model."""
        return self.selected_models[0]

    @property
    def charges_platform_credit(self) -> bool:
        """Only the platform-credit tier is billed against credits."""
        return self.tier == ModelTier.PLATFORM_CREDIT


class CapabilityCandidates(BaseModel):
    """Providers considered for one capability during tier 2."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    capability: Capability
    providers: tuple[ProviderConfig, ...] = ()
    configured_ids: frozenset[str] = frozenset()


class FallbackChain(BaseModel):
    """Full priority chain of a skill, independent of what matched."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    skill_id: str
    key_configs: tuple[SkillKeyConfig, ...] = ()
    configured_env_vars: frozenset[str] = frozenset()
    candidates: tuple[CapabilityCandidates, ...] = ()
    free_fallback: str = NO_FALLBACK_AVAILABLE


def charges_platform_credit(result: FallbackResolution | ResolvedModel) -> bool:
    """Return whether the billing ledger must deduct credit for ``result``.

    Args:
        result: Any resolver output.

    Returns:
        True only for the platform-credit model tier.
    """
    return result.charges_platform_credit
