"""Non-blocking resolution with a single bounded timeout.

Key checks may block when credentials come from a remote secret manager.
These wrappers run the synchronous resolvers off the event loop and, when the
whole call exceeds its budget or the infrastructure fails, answer with the
lowest tier instead of failing the request.
"""

from __future__ import annotations

import asyncio
import logging

from keyroute.resolution.fallback import FallbackResolver
from keyroute.resolution.strategy import ModelStrategyResolver, normalize_strategy
from keyroute.resolution.types import (
    FallbackResolution,
    ResolutionError,
    ResolvedModel,
    UserStrategyConfig,
)

_LOGGER = logging.getLogger(__name__)

DEFAULT_RESOLUTION_TIMEOUT_SECONDS = 2.0


async def resolve_fallback_async(
    resolver: FallbackResolver,
    skill_id: str,
    *,
    timeout: float = DEFAULT_RESOLUTION_TIMEOUT_SECONDS,
) -> FallbackResolution:
    """Resolve a skill without blocking the event loop.

    Args:
        resolver: Synchronous fallback resolver.
        skill_id: Skill identifier.
        timeout: Budget in seconds for the whole resolution.

    Returns:
        Resolution from the normal tier order, or the free fallback on
        timeout or infrastructure failure.

    Raises:
        ResolutionError: If ``skill_id`` is structurally invalid.
    """
    try:
        return await asyncio.wait_for(
            asyncio.to_thread(resolver.resolve, skill_id), timeout=timeout
        )
    except ResolutionError:
        raise
    except TimeoutError:
        _LOGGER.warning(
            "Fallback resolution for %s timed out after %ss; using free tier",
            skill_id,
            timeout,
        )
    except Exception:
        _LOGGER.exception(
            "Fallback resolution for %s failed; using free tier", skill_id
        )
    return resolver.free_fallback(skill_id)


async def resolve_model_strategy_async(
    resolver: ModelStrategyResolver,
    config: UserStrategyConfig,
    *,
    timeout: float = DEFAULT_RESOLUTION_TIMEOUT_SECONDS,
) -> ResolvedModel:
    """Resolve a chat model without blocking the event loop.

    Args:
        resolver: Synchronous model strategy resolver.
        config: Per-request strategy input.
        timeout: Budget in seconds for the whole resolution.

    Returns:
        Resolution from the normal tier order, or the platform-credit model on
        timeout or infrastructure failure.

    Raises:
        ResolutionError: If ``config`` is structurally invalid.
    """
    if not isinstance(config, UserStrategyConfig):
        raise ResolutionError(
            "resolve_model_strategy_async() requires a UserStrategyConfig, "
            f"got {type(config).__name__}."
        )
    try:
        return await asyncio.wait_for(
            asyncio.to_thread(resolver.resolve, config), timeout=timeout
        )
    except TimeoutError:
        _LOGGER.warning(
            "Model resolution timed out after %ss; using platform credit", timeout
        )
    except Exception:
        _LOGGER.exception("Model resolution failed; using platform credit")
    return resolver.platform_credit(normalize_strategy(config.strategy))
