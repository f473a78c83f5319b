"""Transport layer (internal cluster communication) metrics."""
from __future__ import annotations

from ..metrics.groups import MetricGroup
from ..metrics.spec import COUNTER, MetricDef
from ..stats.models import TransportStats
from .base import NodeSection, unavailable


class TransportMetrics(NodeSection):
    group = MetricGroup.TRANSPORT
    node_attr = "transport"
    SPECS = [
        MetricDef("server_open", "transport_server_open_number",
                  "Current number of inbound TCP connections used for internal communication between nodes"),
        MetricDef("outbound_connections", "transport_outbound_connections",
                  "The cumulative number of outbound transport connections that this node has opened since it started.",
                  COUNTER),
        MetricDef("rx_packets", "transport_rx_packets",
                  "Total number of RX (receive) packets received by the node during internal cluster communication", COUNTER),
        MetricDef("tx_packets", "transport_tx_packets",
                  "Total number of TX (transmit) packets sent by the node during internal cluster communication", COUNTER),
        MetricDef("rx_bytes", "transport_rx",
                  "Size, in bytes, of RX packets received by the node during internal cluster communication",
                  COUNTER, unit="bytes"),
        MetricDef("tx_bytes", "transport_tx",
                  "Size, in bytes, of TX packets sent by the node during internal cluster communication",
                  COUNTER, unit="bytes"),
    ]

    def populate(self, ts: TransportStats) -> None:
        self.server_open.set(ts.server_open)
        if ts.total_outbound_connections is None:
            unavailable(self.group, "transport.total_outbound_connections")
        else:
            self.outbound_connections.inc(ts.total_outbound_connections)
        self.rx_packets.inc(ts.rx_count)
        self.tx_packets.inc(ts.tx_count)
        self.rx_bytes.inc(ts.rx_size_in_bytes)
        self.tx_bytes.inc(ts.tx_size_in_bytes)
