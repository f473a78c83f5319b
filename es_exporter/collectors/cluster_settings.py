"""Disk allocation settings of the cluster.

Watermarks are either absolute (``*_bytes``) or relative (``*_pct``); only
the form the cluster is configured with is reported.
"""
from __future__ import annotations

from ..metrics.groups import MetricGroup
from ..metrics.spec import CLUSTER, MetricDef
from ..stats.models import AllocationSettings, StatisticsSnapshot
from .base import StatsSection

_PREFIX = "cluster_routing_allocation_disk_"


class ClusterSettingsMetrics(StatsSection):
    group = MetricGroup.CLUSTER_SETTINGS
    SPECS = [
        MetricDef("threshold_enabled", _PREFIX + "threshold_enabled", "Disk allocation decider is enabled", scope=CLUSTER),
        MetricDef("low_bytes", _PREFIX + "watermark_low_bytes", "Low watermark for disk usage in bytes", scope=CLUSTER),
        MetricDef("high_bytes", _PREFIX + "watermark_high_bytes", "High watermark for disk usage in bytes", scope=CLUSTER),
        MetricDef("flood_stage_bytes", _PREFIX + "watermark_flood_stage_bytes", "Flood stage for disk usage in bytes",
                  scope=CLUSTER),
        MetricDef("low_pct", _PREFIX + "watermark_low_pct", "Low watermark for disk usage in pct", scope=CLUSTER),
        MetricDef("high_pct", _PREFIX + "watermark_high_pct", "High watermark for disk usage in pct", scope=CLUSTER),
        MetricDef("flood_stage_pct", _PREFIX + "watermark_flood_stage_pct", "Flood stage watermark for disk usage in pct",
                  scope=CLUSTER),
    ]

    def extract(self, snapshot: StatisticsSnapshot) -> AllocationSettings | None:
        return snapshot.allocation_settings

    def populate(self, settings: AllocationSettings) -> None:
        # unset counts as disabled
        self.threshold_enabled.set(1 if settings.threshold_enabled is True else 0)
        self.low_bytes.set(settings.disk_low_in_bytes)
        self.high_bytes.set(settings.disk_high_in_bytes)
        self.flood_stage_bytes.set(settings.flood_stage_in_bytes)
        self.low_pct.set(settings.disk_low_in_pct)
        self.high_pct.set(settings.disk_high_in_pct)
        self.flood_stage_pct.set(settings.flood_stage_in_pct)
