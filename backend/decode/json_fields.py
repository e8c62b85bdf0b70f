"""
Defensive decoding for JSON-encoded catalog fields.

Catalog records store `variants` (legacy name: `colors`) and `options` either
as a JSON string or as an already-decoded value, depending on which endpoint
produced them. Decoding happens in two steps:

  1. decode_json_field() returns a DecodeResult carrying either the decoded
     value or the reason it could not be decoded.
  2. decode_variants() / decode_options() collapse that result to a plain
     collection at the model boundary, logging the failure. Callers never see
     an exception for malformed data.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecodeResult:
    value: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def decode_json_field(raw: object) -> DecodeResult:
    """Decode a value that may be a JSON string; non-string values are returned as-is."""
    if raw is None:
        return DecodeResult(value=None)
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8", errors="replace")
    if not isinstance(raw, str):
        return DecodeResult(value=raw)

    text = raw.strip()
    if not text:
        return DecodeResult(value=None)
    try:
        return DecodeResult(value=json.loads(text))
    except json.JSONDecodeError as exc:
        return DecodeResult(error=f"invalid JSON at position {exc.pos}: {exc.msg}")


def decode_variants(raw: object) -> list[dict[str, Any]]:
    """Return the variant records in `raw`, or [] when it cannot be decoded."""
    result = decode_json_field(raw)
    if not result.ok:
        logger.warning("Discarding malformed variants field: %s", result.error)
        return []
    if result.value is None:
        return []
    if not isinstance(result.value, list):
        logger.warning(
            "Discarding variants field: expected a list, got %s",
            type(result.value).__name__,
        )
        return []

    variants: list[dict[str, Any]] = []
    for item in result.value:
        if isinstance(item, dict):
            variants.append(item)
        elif hasattr(item, "model_dump"):
            variants.append(item.model_dump())
        else:
            logger.warning("Skipping non-object variant entry: %r", item)
    return variants


def decode_options(raw: object) -> dict[str, str]:
    """Return the specification pairs in `raw`, or {} when it cannot be decoded."""
    result = decode_json_field(raw)
    if not result.ok:
        logger.warning("Discarding malformed options field: %s", result.error)
        return {}
    if result.value is None:
        return {}
    if not isinstance(result.value, dict):
        logger.warning(
            "Discarding options field: expected an object, got %s",
            type(result.value).__name__,
        )
        return {}
    return {
        str(key): "" if value is None else str(value)
        for key, value in result.value.items()
    }
