"""Node identity metrics: roles and build information."""
from __future__ import annotations

import logging

from ..metrics.groups import MetricGroup
from ..metrics.labels import NODE_BUILD
from ..metrics.spec import INFO, MetricDef
from ..stats.models import NodeStats, StatisticsSnapshot
from .base import StatsSection

logger = logging.getLogger(__name__)

# Always exported, 0 unless the node carries the role
BASE_ROLES = ("master", "data", "ingest")


class NodeMetrics(StatsSection):
    group = MetricGroup.NODE
    SPECS = [
        MetricDef("role", "node_role_bool", "Node role", labels=("role",)),
        MetricDef("version", "node_version", "Node version", INFO, labels=NODE_BUILD),
    ]

    def extract(self, snapshot: StatisticsSnapshot) -> NodeStats | None:
        return snapshot.node_stats

    def populate(self, node: NodeStats) -> None:
        roles = dict.fromkeys(BASE_ROLES, 0)
        for role in node.roles:
            roles[role] = 1
        for role, flag in roles.items():
            self.role.set(flag, role)

        build = node.build
        if build is None:
            logger.debug("node build information not reported; node_version skipped")
            return
        self.version.info(
            build.version or "",
            build.build_flavor or "",
            build.build_type or "",
            build.build_hash or "",
            build.build_date or "",
        )
