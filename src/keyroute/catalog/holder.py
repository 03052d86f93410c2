"""Atomic holder for the active catalog."""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from keyroute.catalog.loader import load_catalog
from keyroute.catalog.types import Catalog

_LOGGER = logging.getLogger(__name__)


class CatalogHolder:
    """Publish one catalog at a time and replace it wholesale on reload.

    Readers take ``current()`` once per resolution and keep using that
    reference, so a concurrent ``swap`` never exposes a half-updated catalog.
    """

    def __init__(self, catalog: Catalog) -> None:
        """Store the initial catalog.

        Args:
            catalog: Catalog published to readers.
        """
        self._catalog = catalog
        self._lock = threading.Lock()
        self._generation = 0

    @property
    def generation(self) -> int:
        """Number of swaps performed since construction."""
        return self._generation

    def current(self) -> Catalog:
        """Return the catalog published at call time."""
        return self._catalog

    def swap(self, catalog: Catalog) -> Catalog:
        """Replace the published catalog.

        Args:
            catalog: New catalog to publish.

        Returns:
            The catalog that was replaced.
        """
        with self._lock:
            previous = self._catalog
            self._catalog = catalog
            self._generation += 1
        _LOGGER.info(
            "Catalog swapped (generation=%s, skills=%s, providers=%s)",
            self._generation,
            len(catalog.skill_keys),
            len(catalog.providers),
        )
        return previous

    def reload(self, path: Path) -> Catalog:
        """Load a catalog document and publish it.

        The published catalog is left untouched when loading fails.

        Args:
            path: Catalog file path.

        Returns:
            The newly published catalog.

        Raises:
            CatalogError: If the document cannot be decoded or validated.
        """
        catalog = load_catalog(path)
        self.swap(catalog)
        return catalog
