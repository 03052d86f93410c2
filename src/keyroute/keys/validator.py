"""Credential presence and format validation."""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Protocol

from pydantic import BaseModel, ConfigDict

from keyroute.catalog.types import Catalog, ProviderConfig, SkillKeyConfig
from keyroute.keys.store import EnvKeyStore, KeyStore

_LOGGER = logging.getLogger(__name__)


class KeyChecker(Protocol):
    """Answer whether a named credential is usable."""

    def has_key(self, env_var: str, pattern: str | None = None) -> bool:
        """Return whether ``env_var`` is set and matches ``pattern``.

        Args:
            env_var: Credential name.
            pattern: Optional declared format pattern.
        """


@lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)


class KeyValidator:
    """Live key checks against a credential store."""

    def __init__(self, store: KeyStore | None = None) -> None:
        """Bind the credential store.

        Args:
            store: Credential store; defaults to the process environment.
        """
        self._store = store if store is not None else EnvKeyStore()

    def has_key(self, env_var: str, pattern: str | None = None) -> bool:
        """Return whether a credential is present and well-formed.

        Blank and non-string values count as absent. Store failures are logged
        and count as absent.

        Args:
            env_var: Credential name.
            pattern: Optional regular expression the whole value must match.

        Returns:
            True when the credential is usable.
        """
        try:
            value = self._store.get(env_var)
        except Exception as exc:  # pragma: no cover - defensive store boundary
            _LOGGER.warning("Key lookup failed for %s: %s", env_var, exc)
            return False
        if not isinstance(value, str) or not value.strip():
            return False
        if pattern is None:
            return True
        try:
            matcher = _compile(pattern)
        except re.error as exc:
            _LOGGER.warning("Invalid key pattern for %s: %s", env_var, exc)
            return False
        return matcher.fullmatch(value) is not None

    def snapshot(self, catalog: Catalog) -> KeySnapshot:
        """Evaluate every credential the catalog declares, once.

        Args:
            catalog: Catalog whose skill keys and providers are checked.

        Returns:
            Point-in-time key snapshot.
        """
        return KeySnapshot.capture(self, catalog)


class KeySnapshot(BaseModel):
    """Frozen result of checking all catalog credentials at one instant."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    valid: frozenset[tuple[str, str | None]] = frozenset()

    @classmethod
    def capture(cls, checker: KeyChecker, catalog: Catalog) -> KeySnapshot:
        """Build a snapshot from a live checker.

        Args:
            checker: Live key checker.
            catalog: Catalog declaring the credentials to check.

        Returns:
            Snapshot of valid ``(env_var, pattern)`` pairs.
        """
        pairs: set[tuple[str, str | None]] = set()
        for configs in catalog.skill_keys.values():
            pairs.update((config.env_var, config.validate_pattern) for config in configs)
        pairs.update(
            (provider.env_var, provider.validate_pattern)
            for provider in catalog.providers
        )
        return cls(
            valid=frozenset(pair for pair in pairs if checker.has_key(*pair))
        )

    def has_key(self, env_var: str, pattern: str | None = None) -> bool:
        """Return whether the pair validated when the snapshot was taken."""
        return (env_var, pattern) in self.valid


def has_skill_key(
    keys: KeyChecker, catalog: Catalog, skill_id: str, env_var: str
) -> bool:
    """Check one skill credential using the skill's declared pattern.

    Args:
        keys: Key checker or snapshot.
        catalog: Catalog declaring the skill.
        skill_id: Skill identifier.
        env_var: Credential name.

    Returns:
        True when the credential is usable for that skill.
    """
    return keys.has_key(env_var, catalog.key_pattern(skill_id, env_var))


def has_config_key(keys: KeyChecker, config: SkillKeyConfig) -> bool:
    """Check the credential named by a skill key config."""
    return keys.has_key(config.env_var, config.validate_pattern)


def has_provider_key(keys: KeyChecker, provider: ProviderConfig) -> bool:
    """Check the credential of an LLM provider."""
    return keys.has_key(provider.env_var, provider.validate_pattern)


class ConfiguredKey(BaseModel):
    """Status row for one declared skill credential."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    skill: str
    env_var: str
    configured: bool


def configured_keys(keys: KeyChecker, catalog: Catalog) -> tuple[ConfiguredKey, ...]:
    """List every declared skill credential with its current status.

    Args:
        keys: Key checker or snapshot.
        catalog: Catalog declaring the skills.

    Returns:
        Rows in catalog declaration order.
    """
    return tuple(
        ConfiguredKey(
            skill=skill_id,
            env_var=config.env_var,
            configured=has_config_key(keys, config),
        )
        for skill_id, configs in catalog.skill_keys.items()
        for config in configs
    )
