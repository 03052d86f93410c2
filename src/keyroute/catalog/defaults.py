"""Built-in catalog of skills, providers, models and strategies."""

from __future__ import annotations

from functools import cache

from keyroute.catalog.types import (
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

_HF_TOKEN_PATTERN = r"^hf_[a-zA-Z0-9]{30,}$"

SKILL_KEYS: dict[str, tuple[SkillKeyConfig, ...]] = {
    "brave-search": (
        SkillKeyConfig(
            env_var="BRAVE_SEARCH_API_KEY",
            description="Enables Brave Search API for web search results",
            free_fallback="DuckDuckGo via curl (no API key needed)",
            validate_pattern=r"^BSA[a-zA-Z0-9_-]{20,}$",
        ),
    ),
    "perplexity": (
        SkillKeyConfig(
            env_var="PERPLEXITY_API_KEY",
            description="Enables Perplexity AI for research-grade answers",
            free_fallback="brave-search + web fetch (cascading fallback)",
            validate_pattern=r"^pplx-[a-zA-Z0-9]{40,}$",
        ),
    ),
    "gamma": (
        SkillKeyConfig(
            env_var="GAMMA_API_KEY",
            description="Enables Gamma for slide/presentation generation",
            free_fallback="Local HTML generation with reveal.js templates",
        ),
    ),
    "transcriptapi": (
        SkillKeyConfig(
            env_var="TRANSCRIPT_API_KEY",
            description="Enables TranscriptAPI for YouTube transcript extraction",
            free_fallback="yt-dlp --write-auto-sub (requires yt-dlp binary)",
        ),
    ),
    "audiopod": (
        SkillKeyConfig(
            env_var="AUDIOPOD_API_KEY",
            description="Enables Audiopod for podcast-style audio generation",
            free_fallback="Local ffmpeg + whisper pipeline",
        ),
    ),
    "hugging-face-model-trainer": (
        SkillKeyConfig(
            env_var="HF_TOKEN",
            description="Enables Hugging Face Hub for model upload and training",
            free_fallback="Local Unsloth/Ollama for fine-tuning without Hub access",
            validate_pattern=_HF_TOKEN_PATTERN,
        ),
    ),
    "hugging-face-evaluation": (
        SkillKeyConfig(
            env_var="HF_TOKEN",
            description="Enables Hugging Face Hub for model evaluation and benchmarks",
            free_fallback="Local Unsloth/Ollama for evaluation without Hub access",
            validate_pattern=_HF_TOKEN_PATTERN,
        ),
    ),
    "api-gateway": (
        SkillKeyConfig(
            env_var="API_GATEWAY_KEYS",
            description="Centrally managed per-service API keys for the gateway",
            free_fallback="Individual per-skill key configuration",
        ),
    ),
    "summarize": (
        SkillKeyConfig(
            env_var="GEMINI_API_KEY",
            description="Enables Gemini long-context summarization",
            free_fallback="Local extractive summarization (no API key needed)",
        ),
    ),
    "fal-ai": (
        SkillKeyConfig(
            env_var="FAL_KEY",
            description="Enables fal.ai for image and video generation",
            free_fallback="Local Stable Diffusion via ComfyUI (requires GPU)",
        ),
    ),
    "gemini": (
        SkillKeyConfig(
            env_var="GEMINI_API_KEY",
            description="Enables the Gemini CLI for coding and long-context tasks",
            free_fallback="Local Ollama coding model",
        ),
    ),
    "slack-api": (
        SkillKeyConfig(
            env_var="SLACK_BOT_TOKEN",
            description="Enables the Slack Web API for channel messaging",
            free_fallback="Slack incoming webhook (no bot token needed)",
            validate_pattern=r"^xoxb-[a-zA-Z0-9-]{20,}$",
        ),
    ),
}

SKILL_CAPABILITIES: dict[str, tuple[Capability, ...]] = {
    "brave-search": (Capability.WEB_SEARCH,),
    "perplexity": (Capability.WEB_SEARCH, Capability.SUMMARIZATION),
    "gamma": (Capability.TEXT_GENERATION,),
    "transcriptapi": (Capability.AUDIO_TRANSCRIPTION,),
    "summarize": (Capability.SUMMARIZATION, Capability.LONG_CONTEXT),
    "fal-ai": (Capability.IMAGE_GENERATION, Capability.VIDEO_GENERATION),
    "gemini": (Capability.CODE_GENERATION, Capability.LONG_CONTEXT),
}

# Declaration order is the tier-2 priority order.
PROVIDERS: tuple[ProviderConfig, ...] = (
    ProviderConfig(
        id="openai",
        name="OpenAI",
        env_var="OPENAI_API_KEY",
        capabilities=frozenset(
            {
                Capability.TEXT_GENERATION,
                Capability.SUMMARIZATION,
                Capability.WEB_SEARCH,
                Capability.IMAGE_GENERATION,
                Capability.IMAGE_ANALYSIS,
                Capability.AUDIO_TRANSCRIPTION,
                Capability.CODE_GENERATION,
                Capability.TRANSLATION,
                Capability.VIDEO_GENERATION,
                Capability.EMBEDDING,
            }
        ),
        validate_pattern=r"^sk-[a-zA-Z0-9_-]{20,}$",
    ),
    ProviderConfig(
        id="anthropic",
        name="Anthropic (Claude)",
        env_var="ANTHROPIC_API_KEY",
        capabilities=frozenset(
            {
                Capability.TEXT_GENERATION,
                Capability.SUMMARIZATION,
                Capability.IMAGE_ANALYSIS,
                Capability.CODE_GENERATION,
                Capability.TRANSLATION,
                Capability.LONG_CONTEXT,
            }
        ),
        validate_pattern=r"^sk-ant-[a-zA-Z0-9_-]{20,}$",
    ),
    ProviderConfig(
        id="gemini",
        name="Google Gemini",
        env_var="GEMINI_API_KEY",
        capabilities=frozenset(
            {
                Capability.TEXT_GENERATION,
                Capability.SUMMARIZATION,
                Capability.WEB_SEARCH,
                Capability.IMAGE_ANALYSIS,
                Capability.AUDIO_TRANSCRIPTION,
                Capability.CODE_GENERATION,
                Capability.TRANSLATION,
                Capability.LONG_CONTEXT,
                Capability.EMBEDDING,
            }
        ),
    ),
    ProviderConfig(
        id="xai",
        name="xAI (Grok)",
        env_var="XAI_API_KEY",
        capabilities=frozenset(
            {
                Capability.TEXT_GENERATION,
                Capability.WEB_SEARCH,
                Capability.IMAGE_ANALYSIS,
                Capability.CODE_GENERATION,
            }
        ),
    ),
    ProviderConfig(
        id="deepseek",
        name="DeepSeek",
        env_var="DEEPSEEK_API_KEY",
        capabilities=frozenset(
            {
                Capability.TEXT_GENERATION,
                Capability.SUMMARIZATION,
                Capability.CODE_GENERATION,
                Capability.TRANSLATION,
            }
        ),
    ),
    ProviderConfig(
        id="mistral",
        name="Mistral AI",
        env_var="MISTRAL_API_KEY",
        capabilities=frozenset(
            {
                Capability.TEXT_GENERATION,
                Capability.SUMMARIZATION,
                Capability.CODE_GENERATION,
                Capability.TRANSLATION,
                Capability.EMBEDDING,
            }
        ),
    ),
    ProviderConfig(
        id="groq",
        name="Groq (Kimi K2)",
        env_var="GROQ_API_KEY",
        capabilities=frozenset(
            {
                Capability.TEXT_GENERATION,
                Capability.AUDIO_TRANSCRIPTION,
                Capability.CODE_GENERATION,
            }
        ),
    ),
)

PROVIDER_MODELS: dict[str, ProviderModels] = {
    "anthropic": ProviderModels(
        cost_efficient="claude-haiku-4-5",
        max_performance="claude-opus-4-6",
        display_name="Anthropic (Claude)",
    ),
    "openai": ProviderModels(
        cost_efficient="gpt-4o-mini",
        max_performance="gpt-5.2",
        display_name="OpenAI",
    ),
    "gemini": ProviderModels(
        cost_efficient="gemini-2.5-flash",
        max_performance="gemini-3-pro",
        display_name="Google Gemini",
    ),
    "xai": ProviderModels(
        cost_efficient="grok-3-mini",
        max_performance="grok-3",
        display_name="xAI (Grok)",
    ),
    "deepseek": ProviderModels(
        cost_efficient="deepseek-chat",
        max_performance="deepseek-r1",
        display_name="DeepSeek",
    ),
    "groq": ProviderModels(
        cost_efficient="kimi-k2-0905",
        max_performance="kimi-k2-0905",
        display_name="Groq (Kimi K2)",
    ),
    "mistral": ProviderModels(
        cost_efficient="mistral-small-latest",
        max_performance="mistral-large-latest",
        display_name="Mistral AI",
    ),
}

CREDIT_MODELS: dict[StrategyId, CreditModel] = {
    StrategyId.COST_EFFICIENT: CreditModel(
        provider="gemini",
        model="gemini-2.5-flash-thinking",
        display_name="Gemini 2.5 Flash (Thinking)",
        extra_params={"thinkingBudget": -1},
    ),
    StrategyId.MAX_PERFORMANCE: CreditModel(
        provider="anthropic",
        model="claude-opus-4-6",
        display_name="Claude Opus 4.6",
    ),
}


def _own_key_models(strategy: StrategyId) -> tuple[str, ...]:
    return tuple(
        f"{provider}/{models.for_strategy(strategy)}"
        for provider, models in PROVIDER_MODELS.items()
    )


def _credit_label(strategy: StrategyId) -> str:
    credit = CREDIT_MODELS[strategy]
    return f"{credit.provider}/{credit.model}"


STRATEGIES: dict[StrategyId, StrategyDefinition] = {
    StrategyId.COST_EFFICIENT: StrategyDefinition(
        id=StrategyId.COST_EFFICIENT,
        name="Cost-efficient",
        description=(
            "Uses the most affordable capable model of a provider you hold a key "
            "for; otherwise Gemini 2.5 Flash (Thinking) on platform credit."
        ),
        tiers=(
            StrategyTier(
                priority=1,
                label="user holding own key",
                description="Cheapest capable model on your own subscription",
                models=_own_key_models(StrategyId.COST_EFFICIENT),
            ),
            StrategyTier(
                priority=2,
                label="platform credit (default)",
                description="Gemini 2.5 Flash (Thinking), dynamic thinking budget",
                models=(_credit_label(StrategyId.COST_EFFICIENT),),
            ),
        ),
    ),
    StrategyId.MAX_PERFORMANCE: StrategyDefinition(
        id=StrategyId.MAX_PERFORMANCE,
        name="Max performance",
        description=(
            "Uses the newest top model of a provider you hold a key for; "
            "otherwise Claude Opus 4.6 on platform credit."
        ),
        tiers=(
            StrategyTier(
                priority=1,
                label="user holding own key",
                description="Strongest model on your own subscription",
                models=_own_key_models(StrategyId.MAX_PERFORMANCE),
            ),
            StrategyTier(
                priority=2,
                label="platform credit (default)",
                description="Claude Opus 4.6 for coding, legal and reasoning work",
                models=(_credit_label(StrategyId.MAX_PERFORMANCE),),
            ),
        ),
    ),
}


@cache
def default_catalog() -> Catalog:
    """Return the built-in catalog.

    Returns:
        Shared immutable catalog instance.
    """
    return Catalog(
        skill_keys=SKILL_KEYS,
        skill_capabilities=SKILL_CAPABILITIES,
        providers=PROVIDERS,
        provider_models=PROVIDER_MODELS,
        strategies=STRATEGIES,
        credit_models=CREDIT_MODELS,
    )
