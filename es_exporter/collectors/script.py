"""Script compilation and cache metrics."""
from __future__ import annotations

from ..metrics.groups import MetricGroup
from ..metrics.spec import COUNTER, MetricDef
from ..stats.models import ScriptStats
from .base import NodeSection


class ScriptMetrics(NodeSection):
    group = MetricGroup.SCRIPT
    node_attr = "script"
    SPECS = [
        MetricDef("cache_evictions", "script_cache_evictions_count", "Total number of times the script cache has evicted old data"),
        MetricDef("compilations", "script_compilations_count", "Total number of inline script compilations performed by the node"),
        MetricDef("compilations_limit_triggered", "script_compilations_limit_triggered",
                  "Total number of times the script compilation circuit breaker has limited inline script compilations.",
                  COUNTER),
    ]

    def populate(self, script: ScriptStats) -> None:
        self.cache_evictions.set(script.cache_evictions)
        self.compilations.set(script.compilations)
        self.compilations_limit_triggered.inc(script.compilation_limit_triggered)
