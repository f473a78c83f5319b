from __future__ import annotations

"""Metric group taxonomy + group filtering helpers.

Each collector sub-pass belongs to exactly one group. Groups can be switched
off (or an allow-list applied) through environment variables; a disabled
group registers no families and is skipped during updates.
"""

from dataclasses import dataclass
from enum import Enum

from ..config.env_adapter import get_str


class MetricGroup(str, Enum):
    CLUSTER = "cluster"
    NODE = "node"
    INDICES = "indices"
    PER_INDEX = "per_index"
    TRANSPORT = "transport"
    HTTP = "http"
    THREADPOOL = "threadpool"
    INGEST = "ingest"
    CIRCUIT_BREAKER = "circuit_breaker"
    SCRIPT = "script"
    PROCESS = "process"
    JVM = "jvm"
    OS = "os"
    FS = "fs"
    INDEXING_PRESSURE = "indexing_pressure"
    CLUSTER_SETTINGS = "cluster_settings"
    DEPRECATED_ALIASES = "deprecated_aliases"


ALWAYS_ON = {
    MetricGroup.CLUSTER,
    MetricGroup.NODE,
}

ENABLE_ENV = "ES_EXPORTER_ENABLE_METRIC_GROUPS"
DISABLE_ENV = "ES_EXPORTER_DISABLE_METRIC_GROUPS"


@dataclass(frozen=True)
class GroupFilters:
    enabled_raw: str = ""
    disabled_raw: str = ""
    enabled: frozenset[str] | None = None
    disabled: frozenset[str] = frozenset()

    def allowed(self, group: MetricGroup | str) -> bool:
        name = group.value if isinstance(group, MetricGroup) else group
        if name in {g.value for g in ALWAYS_ON}:
            return True
        if self.disabled and name in self.disabled:
            return False
        if self.enabled is not None:
            return name in self.enabled
        return True

    def unknown(self) -> set[str]:
        """Names in either list that are not a known group."""
        known = {g.value for g in MetricGroup}
        return (set(self.enabled or ()) | set(self.disabled)) - known


def parse_group_filters(enabled_raw: str = "", disabled_raw: str = "") -> GroupFilters:
    enabled = frozenset(g.strip() for g in enabled_raw.split(",") if g.strip()) if enabled_raw.strip() else None
    disabled = frozenset(g.strip() for g in disabled_raw.split(",") if g.strip())
    return GroupFilters(enabled_raw, disabled_raw, enabled, disabled)


def load_group_filters() -> GroupFilters:
    """Load group filters from environment."""
    return parse_group_filters(get_str(ENABLE_ENV, ""), get_str(DISABLE_ENV, ""))


__all__ = [
    "MetricGroup",
    "ALWAYS_ON",
    "GroupFilters",
    "parse_group_filters",
    "load_group_filters",
]
