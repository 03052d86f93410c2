"""Catalog document loading helpers."""

from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError

from keyroute.catalog.types import Catalog
from keyroute.documents import decode_payload


class CatalogError(RuntimeError):
    """Raised when a catalog document cannot be decoded or validated."""


def load_catalog(path: Path) -> Catalog:
    """Load a full catalog document from disk.

    Unlike settings, a catalog has no implicit defaults: every strategy and
    credit model must be declared by the document.

    Args:
        path: Catalog file path (``.json``, ``.yaml`` or ``.yml``).

    Returns:
        Validated immutable catalog.

    Raises:
        CatalogError: If decode or validation fails.
    """
    payload = decode_payload(path, kind="catalog", error_cls=CatalogError)
    try:
        return Catalog.model_validate(payload)
    except ValidationError as exc:
        raise CatalogError(f"Invalid catalog payload: {exc}") from exc
