"""Credential store ports."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Protocol


class KeyLookupError(RuntimeError):
    """Raised by a credential store that cannot answer a lookup."""


class KeyStore(Protocol):
    """Read-only named credential source."""

    def get(self, name: str) -> str | None:
        """Return the raw credential value for ``name``, if any.

        Args:
            name: Credential name (environment variable style).
        """


class EnvKeyStore:
    """Credential store backed by process environment variables."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        """Bind the environment mapping to read from.

        Args:
            environ: Optional mapping; defaults to ``os.environ`` read live.
        """
        self._environ = environ

    def get(self, name: str) -> str | None:
        """Return the environment value for ``name``.

        Args:
            name: Environment variable name.

        Returns:
            Raw value, or ``None`` when unset.
        """
        environ = os.environ if self._environ is None else self._environ
        return environ.get(name)


class MappingKeyStore:
    """Credential store over a fixed mapping (snapshots, fixtures)."""

    def __init__(self, values: Mapping[str, str]) -> None:
        """Copy values into the store.

        Args:
            values: Credential name to value mapping.
        """
        self._values = dict(values)

    def get(self, name: str) -> str | None:
        """Return the stored value for ``name``.

        Args:
            name: Credential name.

        Returns:
            Raw value, or ``None`` when absent.
        """
        return self._values.get(name)
