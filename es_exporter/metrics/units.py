"""Unit conversions applied to raw statistics before they are exported.

Every helper passes ``None`` through untouched so a field the source did not
report stays unreported.
"""
from __future__ import annotations

MILLIS_PER_SECOND = 1e3
MICROS_PER_SECOND = 1e6
NANOS_PER_SECOND = 1e9
BYTES_PER_KILOBYTE = 1024


def millis_to_seconds(value: float | None) -> float | None:
    return None if value is None else value / MILLIS_PER_SECOND


def micros_to_seconds(value: float | None) -> float | None:
    return None if value is None else value / MICROS_PER_SECOND


def nanos_to_seconds(value: float | None) -> float | None:
    return None if value is None else value / NANOS_PER_SECOND


def kilobytes_to_bytes(value: float | None) -> float | None:
    return None if value is None else value * BYTES_PER_KILOBYTE


def percent_to_ratio(value: float | None) -> float | None:
    return None if value is None else value / 100.0


def as_flag(value: bool | None) -> int | None:
    """Render a boolean as 1/0 for ``*_bool`` gauges."""
    return None if value is None else (1 if value else 0)


def parse_number(value: object) -> float | None:
    """Parse numeric strings such as cgroup byte counters; unparseable means unreported."""
    if value is None:
        return None
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None


def supported(value: float | None) -> float | None:
    """Negative values are the source's "-1 if not supported" marker; treat them as unreported."""
    if value is None or value < 0:
        return None
    return value


def total(*values: float | None) -> float | None:
    """Sum of the reported values, ``None`` when any part is missing."""
    if any(v is None for v in values):
        return None
    return sum(values)  # type: ignore[arg-type]


__all__ = [
    "millis_to_seconds",
    "micros_to_seconds",
    "nanos_to_seconds",
    "kilobytes_to_bytes",
    "percent_to_ratio",
    "as_flag",
    "parse_number",
    "supported",
    "total",
]
