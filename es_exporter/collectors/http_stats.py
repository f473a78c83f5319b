"""HTTP layer metrics."""
from __future__ import annotations

from ..metrics.groups import MetricGroup
from ..metrics.spec import COUNTER, MetricDef
from ..stats.models import HttpStats
from .base import NodeSection


class HttpMetrics(NodeSection):
    group = MetricGroup.HTTP
    node_attr = "http"
    SPECS = [
        MetricDef("open_server", "http_open_server_number", "Current number of open HTTP connections for the node"),
        MetricDef("opened", "http_opened", "Total number of HTTP connections opened for the node", COUNTER),
    ]

    def populate(self, http: HttpStats) -> None:
        self.open_server.set(http.current_open)
        self.opened.inc(http.total_opened)
