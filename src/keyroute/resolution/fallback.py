"""Three-tier fallback resolution for skill tool invocations."""

from __future__ import annotations

import logging

from keyroute.catalog.types import Capability, Catalog, ProviderConfig
from keyroute.keys.validator import KeyChecker, has_config_key, has_provider_key
from keyroute.resolution.types import (
    FREE_PROVIDER,
    NO_FALLBACK_AVAILABLE,
    CapabilityCandidates,
    FallbackChain,
    FallbackResolution,
    FallbackTier,
    ResolutionError,
)

_LOGGER = logging.getLogger(__name__)


class FallbackResolver:
    """Resolve which key, provider, or free tool serves a skill.

    Tiers are evaluated in order and the first satisfied one wins:

    1. a dedicated skill key, in declared order;
    2. a keyed LLM provider offering one of the skill's capabilities, trying
       capabilities in declared order and providers in catalog order;
    3. the skill's free fallback, which always succeeds.
    """

    def __init__(self, catalog: Catalog, keys: KeyChecker) -> None:
        """Bind the catalog and key source used for every resolution.

        Args:
            catalog: Immutable registry of skills and providers.
            keys: Live key validator or point-in-time snapshot.
        """
        if not isinstance(catalog, Catalog):
            raise ResolutionError("FallbackResolver requires a Catalog instance.")
        self._catalog = catalog
        self._keys = keys

    @property
    def catalog(self) -> Catalog:
        """Catalog this resolver reads."""
        return self._catalog

    def resolve(self, skill_id: str) -> FallbackResolution:
        """Resolve the best available strategy for ``skill_id``.

        Args:
            skill_id: Skill identifier; unknown skills resolve to the free tier.

        Returns:
            Resolution for the first satisfied tier.

        Raises:
            ResolutionError: If ``skill_id`` is not a string.
        """
        _require_skill_id(skill_id)
        resolution = (
            self._resolve_skill_api(skill_id)
            or self._resolve_user_llm(skill_id)
            or self.free_fallback(skill_id)
        )
        _LOGGER.debug(
            "Resolved skill %s to tier %s (%s)",
            skill_id,
            resolution.tier,
            resolution.provider,
        )
        return resolution

    def _resolve_skill_api(self, skill_id: str) -> FallbackResolution | None:
        for config in self._catalog.skill_key_configs(skill_id):
            if has_config_key(self._keys, config):
                return FallbackResolution(
                    tier=FallbackTier.SKILL_API,
                    strategy_text=config.description,
                    provider=skill_id,
                    env_var=config.env_var,
                )
        return None

    def _resolve_user_llm(self, skill_id: str) -> FallbackResolution | None:
        for capability in self._catalog.capabilities_of(skill_id):
            providers = self.find_providers_with_capability(capability)
            if providers:
                provider = providers[0]
                return FallbackResolution(
                    tier=FallbackTier.USER_LLM,
                    strategy_text=f"{provider.name} ({capability}) via your API key",
                    provider=provider.id,
                    env_var=provider.env_var,
                )
        return None

    def free_fallback(self, skill_id: str) -> FallbackResolution:
        """Return the tier-3 resolution for ``skill_id``.

        Args:
            skill_id: Skill identifier.

        Returns:
            Free-fallback resolution; never fails.
        """
        return FallbackResolution(
            tier=FallbackTier.FREE_FALLBACK,
            strategy_text=self._catalog.free_fallback_of(skill_id)
            or NO_FALLBACK_AVAILABLE,
            provider=FREE_PROVIDER,
        )

    def find_providers_with_capability(
        self, capability: Capability
    ) -> tuple[ProviderConfig, ...]:
        """Return keyed providers declaring ``capability``, in catalog order.

        Args:
            capability: Capability to serve.

        Returns:
            Matching providers whose key currently validates.
        """
        return tuple(
            provider
            for provider in self._catalog.providers
            if provider.supports(capability) and has_provider_key(self._keys, provider)
        )

    def configured_providers(self) -> tuple[ProviderConfig, ...]:
        """Return all providers whose key validates, in catalog order."""
        return tuple(
            provider
            for provider in self._catalog.providers
            if has_provider_key(self._keys, provider)
        )

    def chain(self, skill_id: str) -> FallbackChain:
        """Describe every tier of ``skill_id`` for display.

        Args:
            skill_id: Skill identifier.

        Returns:
            Key configs, candidate providers per capability, and free text.

        Raises:
            ResolutionError: If ``skill_id`` is not a string.
        """
        _require_skill_id(skill_id)
        configs = self._catalog.skill_key_configs(skill_id)
        candidates: list[CapabilityCandidates] = []
        for capability in self._catalog.capabilities_of(skill_id):
            declaring = tuple(
                provider
                for provider in self._catalog.providers
                if provider.supports(capability)
            )
            candidates.append(
                CapabilityCandidates(
                    capability=capability,
                    providers=declaring,
                    configured_ids=frozenset(
                        provider.id
                        for provider in declaring
                        if has_provider_key(self._keys, provider)
                    ),
                )
            )
        return FallbackChain(
            skill_id=skill_id,
            key_configs=configs,
            configured_env_vars=frozenset(
                config.env_var for config in configs if has_config_key(self._keys, config)
            ),
            candidates=tuple(candidates),
            free_fallback=self._catalog.free_fallback_of(skill_id)
            or NO_FALLBACK_AVAILABLE,
        )


def _require_skill_id(skill_id: object) -> None:
    if not isinstance(skill_id, str):
        raise ResolutionError(
            f"skill_id must be a string, got {type(skill_id).__name__}."
        )


def resolve_fallback(
    skill_id: str, catalog: Catalog, keys: KeyChecker
) -> FallbackResolution:
    """Resolve ``skill_id`` with a one-off resolver.

    Args:
        skill_id: Skill identifier.
        catalog: Immutable registry.
        keys: Key validator or snapshot.

    Returns:
        Resolution for the first satisfied tier.
    """
    return FallbackResolver(catalog, keys).resolve(skill_id)
