"""Engine and user settings models and loading helpers."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from keyroute.catalog.defaults import default_catalog
from keyroute.catalog.loader import load_catalog
from keyroute.catalog.types import DEFAULT_STRATEGY, Catalog
from keyroute.documents import decode_payload
from keyroute.explain.messages import DEFAULT_LOCALE, Locale
from keyroute.keys.validator import KeyChecker, has_provider_key
from keyroute.resolution.guarded import DEFAULT_RESOLUTION_TIMEOUT_SECONDS
from keyroute.resolution.strategy import detect_subscribed_providers
from keyroute.resolution.types import UserStrategyConfig


class EngineSettings(BaseModel):
    """Process-level engine configuration."""

    model_config = ConfigDict(extra="forbid")

    catalog_path: Path | None = None
    locale: Locale = DEFAULT_LOCALE
    resolution_timeout_seconds: float = Field(
        default=DEFAULT_RESOLUTION_TIMEOUT_SECONDS, gt=0, le=60
    )

    def build_catalog(self) -> Catalog:
        """Return the configured catalog, or the built-in one.

        Returns:
            Immutable catalog.

        Raises:
            CatalogError: If a configured catalog file is invalid.
        """
        if self.catalog_path is None:
            return default_catalog()
        return load_catalog(self.catalog_path)


class UserSettings(BaseModel):
    """Persisted per-user model preferences."""

    model_config = ConfigDict(extra="forbid")

    strategy: str = DEFAULT_STRATEGY.value
    primary_override: str | None = None
    provider_order: tuple[str, ...] = ()

    def to_strategy_config(
        self, keys: KeyChecker, catalog: Catalog
    ) -> UserStrategyConfig:
        """Combine stored preferences with a live key re-check.

        Providers in the stored order whose key no longer validates are
        dropped. Without a stored order, catalog order is used.

        Args:
            keys: Live key validator or snapshot.
            catalog: Catalog declaring providers.

        Returns:
            Per-request strategy input.
        """
        if self.provider_order:
            subscribed = tuple(
                provider_id
                for provider_id in self.provider_order
                if (provider := catalog.provider(provider_id)) is not None
                and has_provider_key(keys, provider)
            )
        else:
            subscribed = detect_subscribed_providers(catalog, keys)
        return UserStrategyConfig(
            strategy=self.strategy,
            subscribed_providers=subscribed,
            primary_override=self.primary_override,
        )


class KeyrouteSettings(BaseModel):
    """Root settings document."""

    model_config = ConfigDict(extra="forbid")

    engine: EngineSettings = EngineSettings()
    user: UserSettings = UserSettings()


class SettingsError(RuntimeError):
    """Raised when settings cannot be decoded or validated."""


def load_settings(path: Path) -> KeyrouteSettings:
    """Load settings from disk, defaulting when missing.

    Args:
        path: Settings file path.

    Returns:
        Parsed settings, or defaults when the file does not exist.

    Raises:
        SettingsError: If payload decode or validation fails.
    """
    if not path.exists():
        return KeyrouteSettings()
    payload = decode_payload(path, kind="settings", error_cls=SettingsError)
    try:
        return KeyrouteSettings.model_validate(payload)
    except ValidationError as exc:
        raise SettingsError(f"Invalid settings payload: {exc}") from exc
