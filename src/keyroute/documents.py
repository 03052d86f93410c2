"""Shared JSON/YAML document decoding."""

from __future__ import annotations

import json
from pathlib import Path

import yaml


def decode_payload(
    path: Path, *, kind: str, error_cls: type[Exception]
) -> dict[str, object]:
    """Decode a mapping payload from JSON or YAML.

    ``.json`` files are parsed as JSON; anything else as YAML. An empty
    document decodes to an empty mapping.

    Args:
        path: Document path.
        kind: Document name used in error messages, e.g. ``"settings"``.
        error_cls: Exception type raised on failure.

    Returns:
        Parsed mapping payload.

    Raises:
        Exception: ``error_cls`` when the file is unreadable, decode fails, or
            the payload is not an object.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise error_cls(f"Unable to read {kind} {path}: {exc}") from exc
    if path.suffix.lower() == ".json":
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise error_cls(f"Invalid {kind} JSON: {exc}") from exc
    else:
        try:
            payload = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise error_cls(f"Invalid {kind} YAML: {exc}") from exc
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise error_cls(f"Invalid {kind} payload: root must be an object")
    return payload
