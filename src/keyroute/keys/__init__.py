"""Key validation package."""

from keyroute.keys.store import EnvKeyStore, KeyLookupError, KeyStore, MappingKeyStore
from keyroute.keys.validator import (
    ConfiguredKey,
    KeyChecker,
    KeySnapshot,
    KeyValidator,
    configured_keys,
    has_config_key,
    has_provider_key,
    has_skill_key,
)

__all__ = [
    "ConfiguredKey",
    "EnvKeyStore",
    "KeyChecker",
    "KeyLookupError",
    "KeySnapshot",
    "KeyStore",
    "KeyValidator",
    "MappingKeyStore",
    "configured_keys",
    "has_config_key",
    "has_provider_key",
    "has_skill_key",
]
