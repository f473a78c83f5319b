"""Disk allocation settings parsing.

Elasticsearch accepts disk watermarks either as a percentage (``"85%"``), a
ratio (``"0.85"``) or an absolute byte size (``"500mb"``), and mixing kinds
across the three watermarks is rejected by the cluster itself. Each watermark
therefore resolves to exactly one of (bytes, pct).
"""
from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from ..utils.exceptions import SnapshotError
from .models import AllocationSettings

logger = logging.getLogger(__name__)

_PREFIX = "cluster.routing.allocation.disk."
THRESHOLD_ENABLED = _PREFIX + "threshold_enabled"
WATERMARK_LOW = _PREFIX + "watermark.low"
WATERMARK_HIGH = _PREFIX + "watermark.high"
WATERMARK_FLOOD_STAGE = _PREFIX + "watermark.flood_stage"

_BYTE_UNITS = {
    "b": 1,
    "k": 1024, "kb": 1024,
    "m": 1024 ** 2, "mb": 1024 ** 2,
    "g": 1024 ** 3, "gb": 1024 ** 3,
    "t": 1024 ** 4, "tb": 1024 ** 4,
    "p": 1024 ** 5, "pb": 1024 ** 5,
}
_BYTE_SIZE = re.compile(r"^(\d+(?:\.\d+)?)\s*([a-z]+)$")


def parse_watermark(value: Any) -> tuple[float | None, float | None]:
    """Return ``(bytes, pct)`` for one watermark setting; one side is always None."""
    if value is None:
        return None, None
    raw = str(value).strip().lower()
    if not raw:
        return None, None
    if raw.endswith("%"):
        try:
            return None, float(raw[:-1])
        except ValueError:
            raise SnapshotError(f"invalid percentage watermark {value!r}") from None
    try:
        ratio = float(raw)
    except ValueError:
        pass
    else:
        return None, ratio * 100.0
    m = _BYTE_SIZE.match(raw)
    if not m or m.group(2) not in _BYTE_UNITS:
        raise SnapshotError(f"invalid watermark {value!r}")
    return float(m.group(1)) * _BYTE_UNITS[m.group(2)], None


def _parse_bool(value: Any) -> bool | None:
    if value is None or isinstance(value, bool):
        return value
    norm = str(value).strip().lower()
    if norm in {"true", "false"}:
        return norm == "true"
    raise SnapshotError(f"invalid boolean setting {value!r}")


def flatten_settings(settings: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    """Flatten nested settings objects into dotted keys."""
    flat: dict[str, Any] = {}
    for key, value in settings.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, Mapping):
            flat.update(flatten_settings(value, dotted + "."))
        else:
            flat[dotted] = value
    return flat


def merge_cluster_settings(document: Mapping[str, Any]) -> dict[str, Any]:
    """Effective settings: defaults, overridden by persistent, overridden by transient.

    A document without any of those three sections is taken as plain settings.
    """
    layers = ("defaults", "persistent", "transient")
    if not any(layer in document for layer in layers):
        return flatten_settings(document)
    merged: dict[str, Any] = {}
    for layer in layers:
        merged.update(flatten_settings(document.get(layer) or {}))
    return merged


def allocation_settings_from_cluster_settings(document: Mapping[str, Any]) -> AllocationSettings:
    if not isinstance(document, Mapping):
        raise SnapshotError(f"cluster settings: expected a JSON object, got {type(document).__name__}")
    settings = merge_cluster_settings(document)
    low_bytes, low_pct = parse_watermark(settings.get(WATERMARK_LOW))
    high_bytes, high_pct = parse_watermark(settings.get(WATERMARK_HIGH))
    flood_bytes, flood_pct = parse_watermark(settings.get(WATERMARK_FLOOD_STAGE))
    result = AllocationSettings(
        threshold_enabled=_parse_bool(settings.get(THRESHOLD_ENABLED)),
        disk_low_in_bytes=low_bytes,
        disk_high_in_bytes=high_bytes,
        flood_stage_in_bytes=flood_bytes,
        disk_low_in_pct=low_pct,
        disk_high_in_pct=high_pct,
        flood_stage_in_pct=flood_pct,
    )
    logger.debug("allocation settings resolved: %s", result)
    return result


__all__ = [
    "parse_watermark",
    "flatten_settings",
    "merge_cluster_settings",
    "allocation_settings_from_cluster_settings",
]
