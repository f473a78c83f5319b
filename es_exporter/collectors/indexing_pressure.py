"""Indexing pressure (memory held by in-flight indexing requests)."""
from __future__ import annotations

from ..metrics.groups import MetricGroup
from ..metrics.spec import COUNTER, MetricDef
from ..metrics.units import total
from ..stats.models import IndexingPressureStats
from .base import NodeSection, unavailable

_B = "bytes"
_COMBINED_NOTE = ("This value is not the sum of coordinating and primary as a node can reuse the coordinating "
                  "memory if the primary stage is executed locally")


class IndexingPressureMetrics(NodeSection):
    group = MetricGroup.INDEXING_PRESSURE
    node_attr = "indexing_pressure"
    SPECS = [
        MetricDef("current_combined", "indexing_pressure_memory_current_combined_coordinating_and_primary",
                  f"Memory consumed, in bytes, by indexing requests in the coordinating or primary stage. {_COMBINED_NOTE}",
                  unit=_B),
        MetricDef("current_coordinating", "indexing_pressure_memory_current_coordinating",
                  "Memory consumed, in bytes, by indexing requests in the coordinating stage", unit=_B),
        MetricDef("current_primary", "indexing_pressure_memory_current_primary",
                  "Memory consumed, in bytes, by indexing requests in the primary stage", unit=_B),
        MetricDef("current_replica", "indexing_pressure_memory_current_replica",
                  "Memory consumed, in bytes, by indexing requests in the replica stage", unit=_B),
        MetricDef("current_all", "indexing_pressure_memory_current_all",
                  "Memory consumed, in bytes, by indexing requests in the coordinating, primary, or replica stage", unit=_B),
        MetricDef("total_combined", "indexing_pressure_memory_combined_coordinating_and_primary",
                  f"Total memory consumed, in bytes, by indexing requests in the coordinating or primary stage. {_COMBINED_NOTE}",
                  COUNTER, unit=_B),
        MetricDef("total_coordinating", "indexing_pressure_memory_coordinating",
                  "Total cumulative memory consumed, in bytes, by indexing requests in the coordinating stage ",
                  COUNTER, unit=_B),
        MetricDef("total_primary", "indexing_pressure_memory_primary",
                  "Total cumulative Memory consumed, in bytes, by indexing requests in the primary stage", COUNTER, unit=_B),
        MetricDef("total_replica", "indexing_pressure_memory_replica",
                  "Total cumulative Memory consumed, in bytes, by indexing requests in the replica stage", COUNTER, unit=_B),
        MetricDef("total_all", "indexing_pressure_memory_all",
                  "Total cumulative Memory consumed, in bytes, by indexing requests in the coordinating, primary, "
                  "or replica stage", COUNTER, unit=_B),
        MetricDef("coordinating_rejections", "indexing_pressure_memory_coordinating_rejections",
                  "Total number of indexing requests rejected in the coordinating stage", COUNTER),
        MetricDef("primary_rejections", "indexing_pressure_memory_primary_rejections",
                  "Total number of indexing requests rejected in the primary stage", COUNTER),
        MetricDef("replica_rejections", "indexing_pressure_memory_replica_rejections",
                  "Total number of indexing requests rejected in the replica stage", COUNTER),
        MetricDef("limit", "indexing_pressure_memory",
                  "Configured memory limit, in bytes, for the indexing requests. Replica requests have an automatic "
                  "limit that is 1.5x this value", unit=_B),
    ]

    def populate(self, ips: IndexingPressureStats) -> None:
        cur = ips.memory.current
        self.current_combined.set(cur.combined_coordinating_and_primary_in_bytes)
        self.current_coordinating.set(cur.coordinating_in_bytes)
        self.current_primary.set(cur.primary_in_bytes)
        self.current_replica.set(cur.replica_in_bytes)
        # combined already covers coordinating and primary, so "all" adds only replica
        self.current_all.set(total(cur.replica_in_bytes, cur.combined_coordinating_and_primary_in_bytes))

        tot = ips.memory.total
        self.total_combined.inc(tot.combined_coordinating_and_primary_in_bytes)
        self.total_coordinating.inc(tot.coordinating_in_bytes)
        self.total_primary.inc(tot.primary_in_bytes)
        self.total_replica.inc(tot.replica_in_bytes)
        self.total_all.inc(total(tot.replica_in_bytes, tot.combined_coordinating_and_primary_in_bytes))
        self.coordinating_rejections.inc(tot.coordinating_rejections)
        self.primary_rejections.inc(tot.primary_rejections)
        self.replica_rejections.inc(tot.replica_rejections)

        if ips.memory.limit_in_bytes is None:
            unavailable(self.group, "indexing_pressure.memory.limit_in_bytes")
        else:
            self.limit.set(ips.memory.limit_in_bytes)
