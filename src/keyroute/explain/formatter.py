"""Human-readable rendering of resolver outputs."""

from __future__ import annotations

from keyroute.catalog.types import Catalog, StrategyId
from keyroute.explain.messages import DEFAULT_LOCALE, Locale, message
from keyroute.resolution.types import (
    FallbackChain,
    FallbackResolution,
    FallbackTier,
    ModelTier,
    ResolvedModel,
    UserStrategyConfig,
)

_TIER_MESSAGE_KEYS: dict[ModelTier, str] = {
    ModelTier.USER_SPECIFIED: "tier_user_specified",
    ModelTier.OWN_KEY: "tier_own_key",
    ModelTier.PLATFORM_CREDIT: "tier_platform_credit",
}


class ExplanationFormatter:
    """Render resolutions as localized text without making decisions."""

    def __init__(self, catalog: Catalog, *, locale: Locale = DEFAULT_LOCALE) -> None:
        """Bind catalog and locale.

        Args:
            catalog: Catalog used to look up display names.
            locale: Output language.
        """
        self._catalog = catalog
        self._locale = locale

    def _t(self, key: str, **values: object) -> str:
        return message(self._locale, key, **values)

    def explain_fallback(
        self, resolution: FallbackResolution, chain: FallbackChain
    ) -> str:
        """Render the matched tier and the full priority chain.

        Args:
            resolution: Output of ``FallbackResolver.resolve``.
            chain: Output of ``FallbackResolver.chain`` for the same skill.

        Returns:
            Multi-line explanation.
        """
        lines = [self._t("skill_header", skill_id=chain.skill_id)]
        if resolution.tier == FallbackTier.SKILL_API:
            lines.append(self._t("current_tier_1", env_var=resolution.env_var))
        elif resolution.tier == FallbackTier.USER_LLM:
            provider = self._catalog.provider(resolution.provider)
            lines.append(
                self._t(
                    "current_tier_2",
                    provider=provider.name if provider else resolution.provider,
                    env_var=resolution.env_var,
                )
            )
        else:
            lines.append(self._t("current_tier_3"))
        lines.append(self._t("strategy_line", text=resolution.strategy_text))
        lines.append("")
        lines.extend(self._chain_lines(chain))

        if resolution.tier != FallbackTier.SKILL_API and chain.key_configs:
            keys = ", ".join(config.env_var for config in chain.key_configs)
            lines.append("")
            lines.append(self._t("upgrade_hint", keys=keys))
        return "\n".join(lines)

    def _chain_lines(self, chain: FallbackChain) -> list[str]:
        lines = [self._t("chain_header")]
        if chain.key_configs:
            keys = ", ".join(
                f"{config.env_var} ({self._status(config.env_var in chain.configured_env_vars)})"
                for config in chain.key_configs
            )
            lines.append(self._t("chain_tier_1", keys=keys))
        else:
            lines.append(self._t("chain_tier_1_none"))

        if chain.candidates:
            for candidate in chain.candidates:
                names = ", ".join(
                    f"{provider.name} ({self._status(provider.id in candidate.configured_ids)})"
                    for provider in candidate.providers
                ) or self._t("chain_tier_2_empty")
                lines.append(
                    self._t(
                        "chain_tier_2",
                        capability=candidate.capability,
                        providers=names,
                    )
                )
        else:
            lines.append(self._t("chain_tier_2_none"))

        lines.append(self._t("chain_tier_3", text=chain.free_fallback))
        return lines

    def _status(self, configured: bool) -> str:
        return self._t("configured" if configured else "not_configured")

    def explain_resolved_model(self, resolved: ResolvedModel) -> str:
        """Render which model serves a chat request and how it is paid for.

        Args:
            resolved: Output of ``ModelStrategyResolver.resolve``.

        Returns:
            Explanation text.
        """
        lines = [
            self._t(
                _TIER_MESSAGE_KEYS[resolved.tier],
                provider=selection.provider,
                model=selection.model,
            )
            for selection in resolved.selected_models
        ]
        budget = (resolved.extra_params or {}).get("thinkingBudget")
        if budget is not None:
            lines.append(self._t("thinking_budget", budget=budget))
        return "\n".join(lines)

    def explain_strategy(self, config: UserStrategyConfig) -> str:
        """Summarize a user's strategy configuration.

        Args:
            config: Strategy input as stored for the user.

        Returns:
            Summary text, or the unknown-strategy message.
        """
        if config.strategy not in {strategy.value for strategy in StrategyId}:
            return self._t("unknown_strategy")
        strategy_id = StrategyId(config.strategy)
        definition = self._catalog.strategy(strategy_id)
        lines = [
            self._t("strategy_header", name=definition.name),
            self._t("strategy_description", description=definition.description),
            "",
        ]
        if config.subscribed_providers:
            lines.append(self._t("registered_keys"))
            for provider_id in config.subscribed_providers:
                models = self._catalog.models_of(provider_id)
                provider = self._catalog.provider(provider_id)
                name = (
                    models.display_name
                    if models
                    else provider.name if provider else provider_id
                )
                if models is None:
                    lines.append(self._t("registered_provider_unmapped", provider=name))
                    continue
                lines.append(
                    self._t(
                        "registered_provider",
                        provider=name,
                        model=models.for_strategy(strategy_id),
                    )
                )
            lines.append(self._t("registered_footer"))
        else:
            credit = self._catalog.credit_model(strategy_id)
            lines.append(self._t("credit_header"))
            lines.append(self._t("credit_model", model=credit.display_name))
            budget = (credit.extra_params or {}).get("thinkingBudget")
            if budget is not None:
                lines.append(self._t("thinking_budget", budget=budget))
            lines.append(self._t("credit_footer"))
        return "\n".join(lines)

    def key_setup_instructions(self, skill_id: str) -> str:
        """Explain how to register each key a skill can use.

        Args:
            skill_id: Skill identifier.

        Returns:
            Setup instructions, or a not-found message for unknown skills.
        """
        configs = self._catalog.skill_key_configs(skill_id)
        if not configs:
            return self._t("setup_unknown", skill_id=skill_id)
        lines = [self._t("setup_header", skill_id=skill_id), ""]
        for config in configs:
            lines.append(self._t("setup_key", env_var=config.env_var))
            lines.append(self._t("setup_benefit", description=config.description))
            lines.append(self._t("setup_export", env_var=config.env_var))
            if config.free_fallback:
                lines.append(self._t("setup_free", text=config.free_fallback))
            lines.append(
                self._t("setup_required" if config.required else "setup_optional")
            )
            lines.append("")
        return "\n".join(lines).rstrip("\n")
