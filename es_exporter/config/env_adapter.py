from __future__ import annotations

"""Environment adapter.

Consistent helpers to parse environment variables with defaults and shared
truthy semantics, so settings code never calls ``os.getenv`` directly.
"""
import logging
import os

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on", "y"}
_FALSY = {"0", "false", "no", "off", "n"}


def get_str(name: str, default: str = "") -> str:
    v = os.getenv(name)
    if v is None:
        return default
    return v


def get_bool(name: str, default: bool = False) -> bool:
    v = os.getenv(name)
    if v is None or v.strip() == "":
        return default
    norm = v.strip().lower()
    if norm in _TRUTHY:
        return True
    if norm in _FALSY:
        return False
    logger.warning("%s=%r is not a boolean; using default %s", name, v, default)
    return default


__all__ = [
    "get_str",
    "get_bool",
]
