"""Cluster health metrics."""
from __future__ import annotations

from ..metrics.groups import MetricGroup
from ..metrics.spec import CLUSTER, ENUM, MetricDef
from ..metrics.units import as_flag, millis_to_seconds, percent_to_ratio
from ..stats.models import ClusterHealth, HealthStatus, StatisticsSnapshot
from .base import StatsSection


class ClusterHealthMetrics(StatsSection):
    group = MetricGroup.CLUSTER
    SPECS = [
        MetricDef("status", "cluster_status",
                  "Health status of the cluster, based on the state of its primary and replica shards", scope=CLUSTER),
        MetricDef("health_status", "cluster_health_status",
                  "Health status of the cluster, based on the state of its primary and replica shards as enumeration",
                  ENUM, CLUSTER, states=tuple(s.name for s in HealthStatus)),
        MetricDef("nodes", "cluster_nodes_number", "The number of nodes within the cluster", scope=CLUSTER),
        MetricDef("data_nodes", "cluster_datanodes_number", "The number of nodes that are dedicated data nodes", scope=CLUSTER),
        MetricDef("shards_active_percent", "cluster_shards_active_percent",
                  "The ratio of active shards in the cluster expressed as a percentage", scope=CLUSTER),
        MetricDef("shards_active", "cluster_shards_active", "The ratio of active shards in the cluster",
                  scope=CLUSTER, unit="ratio"),
        MetricDef("shards", "cluster_shards_number", "The number of shards by type", scope=CLUSTER, labels=("type",)),
        MetricDef("pending_tasks", "cluster_pending_tasks_number", "Number of pending tasks", scope=CLUSTER),
        MetricDef("task_max_waiting_time", "cluster_task_max_waiting_time",
                  "The time expressed in seconds since the earliest initiated task is waiting for being performed",
                  scope=CLUSTER, unit="seconds"),
        MetricDef("timed_out", "cluster_is_timedout_bool",
                  "If false the response returned within the period of time that is specified by the timeout parameter (30s by default)",
                  scope=CLUSTER),
        MetricDef("inflight_fetch", "cluster_inflight_fetch_number", "The number of unfinished fetches", scope=CLUSTER),
    ]

    def extract(self, snapshot: StatisticsSnapshot) -> ClusterHealth | None:
        return snapshot.cluster_health

    def populate(self, health: ClusterHealth) -> None:
        if health.status is not None:
            self.status.set(int(health.status))
            self.health_status.state(health.status.name)
        self.nodes.set(health.number_of_nodes)
        self.data_nodes.set(health.number_of_data_nodes)
        self.shards_active_percent.set(health.active_shards_percent_as_number)
        self.shards_active.set(percent_to_ratio(health.active_shards_percent_as_number))
        for shard_type, value in (
            ("active", health.active_shards),
            ("active_primary", health.active_primary_shards),
            ("delayed_unassigned", health.delayed_unassigned_shards),
            ("initializing", health.initializing_shards),
            ("relocating", health.relocating_shards),
            ("unassigned", health.unassigned_shards),
        ):
            self.shards.set(value, shard_type)
        self.pending_tasks.set(health.number_of_pending_tasks)
        self.task_max_waiting_time.set(millis_to_seconds(health.task_max_waiting_in_queue_millis))
        self.timed_out.set(as_flag(health.timed_out))
        self.inflight_fetch.set(health.number_of_in_flight_fetch)
