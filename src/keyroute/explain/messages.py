"""Localized message tables for user-facing explanations."""

from __future__ import annotations

from enum import StrEnum


class Locale(StrEnum):
    """Supported explanation locales."""

    EN = "en"
    KO = "ko"


DEFAULT_LOCALE = Locale.EN

_EN: dict[str, str] = {
    "skill_header": "Skill: {skill_id}",
    "current_tier_1": "Current: Tier 1 - dedicated API ({env_var})",
    "current_tier_2": "Current: Tier 2 - your paid LLM {provider} ({env_var})",
    "current_tier_3": "Current: Tier 3 - free alternative",
    "strategy_line": "  {text}",
    "chain_header": "Priority chain:",
    "chain_tier_1": "  1. Dedicated API: {keys}",
    "chain_tier_1_none": "  1. Dedicated API: none declared",
    "chain_tier_2": "  2. Paid LLM ({capability}): {providers}",
    "chain_tier_2_none": "  2. Paid LLM: no capability mapping",
    "chain_tier_2_empty": "none",
    "chain_tier_3": "  3. Free alternative: {text}",
    "configured": "set",
    "not_configured": "not set",
    "upgrade_hint": "Hint: register a dedicated API key ({keys}) for the best result.",
    "tier_user_specified": "Using your chosen model {provider}/{model}",
    "tier_own_key": "Using your own key: {provider}/{model} (no platform credit used)",
    "tier_platform_credit": "Using platform credit: {provider}/{model}",
    "thinking_budget": "  Dynamic thinking budget (thinkingBudget: {budget})",
    "strategy_header": "Model strategy: {name}",
    "strategy_description": "  {description}",
    "registered_keys": "Registered API keys:",
    "registered_provider": "  - {provider} -> {model}",
    "registered_provider_unmapped": "  - {provider} (no model mapping)",
    "registered_footer": "  Your existing subscription is used, so no extra cost applies.",
    "credit_header": "Using platform credit (no API key registered)",
    "credit_model": "  -> {model}",
    "credit_footer": "  Credits are deducted per request (free credits on sign-up).",
    "unknown_strategy": "Unknown strategy",
    "setup_header": 'API key setup for "{skill_id}":',
    "setup_key": "  Key: {env_var}",
    "setup_benefit": "  Benefit: {description}",
    "setup_export": '  Set it: export {env_var}="your-key-here"',
    "setup_free": "  Free alternative: {text}",
    "setup_required": "  Status: REQUIRED (no free fallback available)",
    "setup_optional": "  Status: Optional (free fallback available)",
    "setup_unknown": 'No API key configuration found for skill "{skill_id}".',
}

_KO: dict[str, str] = {
    "skill_header": "스킬: {skill_id}",
    "current_tier_1": "현재: Tier 1 - 전용 API ({env_var})",
    "current_tier_2": "현재: Tier 2 - 유료 LLM {provider} ({env_var})",
    "current_tier_3": "현재: Tier 3 - 무료 대안",
    "strategy_line": "  {text}",
    "chain_header": "우선순위 체인:",
    "chain_tier_1": "  1️⃣ 전용 API: {keys}",
    "chain_tier_1_none": "  1️⃣ 전용 API: 없음",
    "chain_tier_2": "  2️⃣ 유료 LLM ({capability}): {providers}",
    "chain_tier_2_none": "  2️⃣ 유료 LLM: 해당 기능 없음",
    "chain_tier_2_empty": "없음",
    "chain_tier_3": "  3️⃣ 무료 대안: {text}",
    "configured": "등록됨",
    "not_configured": "미등록",
    "upgrade_hint": "팁: 전용 API key ({keys})를 등록하면 최적의 결과를 얻을 수 있습니다.",
    "tier_user_specified": "사용자 지정 모델 {provider}/{model} 사용",
    "tier_own_key": "내 API 키 사용: {provider}/{model} (크레딧 차감 없음)",
    "tier_platform_credit": "플랫폼 크레딧 사용: {provider}/{model}",
    "thinking_budget": "  Thinking 동적 할당 (thinkingBudget: {budget})",
    "strategy_header": "모델 전략: {name}",
    "strategy_description": "  {description}",
    "registered_keys": "등록된 API 키:",
    "registered_provider": "  - {provider} -> {model}",
    "registered_provider_unmapped": "  - {provider} (모델 매핑 없음)",
    "registered_footer": "  이미 구독 중인 LLM을 사용하므로 추가 비용 없음",
    "credit_header": "플랫폼 크레딧 사용 (API 키 미등록)",
    "credit_model": "  -> {model}",
    "credit_footer": "  크레딧 차감 방식 (최초 가입 시 무료 크레딧 제공)",
    "unknown_strategy": "알 수 없는 전략",
    "setup_header": '"{skill_id}" API 키 설정:',
    "setup_key": "  키: {env_var}",
    "setup_benefit": "  효과: {description}",
    "setup_export": '  설정: export {env_var}="your-key-here"',
    "setup_free": "  무료 대안: {text}",
    "setup_required": "  상태: 필수 (무료 대안 없음)",
    "setup_optional": "  상태: 선택 (무료 대안 있음)",
    "setup_unknown": '스킬 "{skill_id}"의 API 키 설정이 없습니다.',
}

MESSAGES: dict[Locale, dict[str, str]] = {Locale.EN: _EN, Locale.KO: _KO}


def message(locale: Locale, key: str, **values: object) -> str:
    """Render one message template.

    Args:
        locale: Target locale.
        key: Message key.
        **values: Template values.

    Returns:
        Rendered text.
    """
    return MESSAGES[locale][key].format(**values)
