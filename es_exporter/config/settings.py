"""Exporter settings.

A small, typed, frozen snapshot of the environment-driven switches the
exporter consults once per scrape. ``get_settings()`` caches the snapshot;
pass ``refresh=True`` after changing the environment.

Environment:
  ES_EXPORTER_INDICES              per-index metrics (default true)
  ES_EXPORTER_CLUSTER_SETTINGS     disk allocation settings metrics (default true)
  ES_EXPORTER_METRIC_PREFIX        prefix of scoped metric names (default "es_")
  ES_EXPORTER_RUNTIME_COLLECTORS   add the client's platform / gc collectors (default false)
  ES_EXPORTER_LOG_LEVEL            root log level for the CLI (default INFO)
  ES_EXPORTER_ENABLE_METRIC_GROUPS / ES_EXPORTER_DISABLE_METRIC_GROUPS
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace
from typing import Any

from ..metrics.catalog import DEFAULT_METRIC_PREFIX
from ..metrics.groups import GroupFilters, load_group_filters
from ..utils.exceptions import ConfigError
from .env_adapter import get_bool, get_str

__all__ = [
    "ExporterSettings",
    "build_settings",
    "get_settings",
]

logger = logging.getLogger(__name__)

_PREFIX_RE = re.compile(r"^([a-zA-Z_:][a-zA-Z0-9_:]*)?$")
_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class ExporterSettings:
    indices_enabled: bool = True
    cluster_settings_enabled: bool = True
    metric_prefix: str = DEFAULT_METRIC_PREFIX
    runtime_collectors: bool = False
    group_filters: GroupFilters = field(default_factory=GroupFilters)
    log_level: str = "INFO"

    def with_overrides(self, **changes: Any) -> ExporterSettings:
        return validate(replace(self, **changes))


_singleton: ExporterSettings | None = None


def validate(settings: ExporterSettings) -> ExporterSettings:
    if not _PREFIX_RE.match(settings.metric_prefix):
        raise ConfigError(f"invalid metric prefix {settings.metric_prefix!r}")
    if settings.log_level.upper() not in _LOG_LEVELS:
        raise ConfigError(f"invalid log level {settings.log_level!r}")
    unknown = settings.group_filters.unknown()
    if unknown:
        logger.warning("ignoring unknown metric groups: %s", ", ".join(sorted(unknown)))
    return settings


def build_settings() -> ExporterSettings:
    return validate(
        ExporterSettings(
            indices_enabled=get_bool("ES_EXPORTER_INDICES", True),
            cluster_settings_enabled=get_bool("ES_EXPORTER_CLUSTER_SETTINGS", True),
            metric_prefix=get_str("ES_EXPORTER_METRIC_PREFIX", DEFAULT_METRIC_PREFIX),
            runtime_collectors=get_bool("ES_EXPORTER_RUNTIME_COLLECTORS", False),
            group_filters=load_group_filters(),
            log_level=get_str("ES_EXPORTER_LOG_LEVEL", "INFO").strip().upper() or "INFO",
        )
    )


def get_settings(refresh: bool = False) -> ExporterSettings:
    global _singleton
    if _singleton is None or refresh:
        _singleton = build_settings()
    return _singleton
