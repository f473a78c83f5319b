"""Backward-compatible aliases for renamed metrics.

Several series were renamed (gauges that really were counters, thread pool
gauges split per statistic). Dashboards built on the old names keep working
because each legacy name is registered as a gauge that mirrors every write
made to its canonical family: both names are emitted with the same value.

Mapping rows: (canonical_name, legacy_name, legacy_help, legacy_type_label)
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..utils.exceptions import CatalogError
from .families import CounterFamily, GaugeFamily
from .labels import LabelScope, MetricLabel

if TYPE_CHECKING:  # pragma: no cover
    from .catalog import MetricsCatalog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MetricAlias:
    canonical: str
    legacy: str
    doc: str
    legacy_type: str | None = None  # value of the extra trailing ``type`` label


_THREADS_DOC = "DEPRECATED: Number of threads in the thread pool"
_THREADS_COUNT_DOC = "DEPRECATED: Count of threads in thread pool"
_TASKS_DOC = "DEPRECATED: Number of tasks in thread pool"

DEPRECATED_ALIASES: list[MetricAlias] = [
    MetricAlias("transport_rx_packets", "transport_rx_packets_count",
                "DEPRECATED: Total number of RX (receive) packets received by the node during internal cluster communication"),
    MetricAlias("transport_tx_packets", "transport_tx_packets_count",
                "DEPRECATED: Total number of TX (transmit) packets sent by the node during internal cluster communication"),
    MetricAlias("transport_rx", "transport_rx_bytes_count",
                "DEPRECATED: Size, in bytes, of RX packets received by the node during internal cluster communication"),
    MetricAlias("transport_tx", "transport_tx_bytes_count",
                "DEPRECATED: Size, in bytes, of TX packets sent by the node during internal cluster communication"),
    MetricAlias("http_opened", "http_open_total_count",
                "Total number of HTTP connections opened for the node"),
    MetricAlias("threadpool_threads", "threadpool_threads_number", _THREADS_DOC, "threads"),
    MetricAlias("threadpool_active", "threadpool_threads_number", _THREADS_DOC, "active"),
    MetricAlias("threadpool_largest", "threadpool_threads_number", _THREADS_DOC, "largest"),
    MetricAlias("threadpool_queue", "threadpool_tasks_number", _TASKS_DOC, "queue"),
    MetricAlias("threadpool_completed", "threadpool_threads_count", _THREADS_COUNT_DOC, "completed"),
    MetricAlias("threadpool_rejected", "threadpool_threads_count", _THREADS_COUNT_DOC, "rejected"),
]


def _register_legacy(catalog: MetricsCatalog, alias: MetricAlias, source: CounterFamily | GaugeFamily) -> GaugeFamily:
    labels = source.label_names + ((MetricLabel.type.value,) if alias.legacy_type else ())
    if source.scope is LabelScope.NODE:
        return catalog.register_node_gauge(alias.legacy, alias.doc, *labels)
    if source.scope is LabelScope.CLUSTER:
        return catalog.register_cluster_gauge(alias.legacy, alias.doc, *labels)
    return catalog.register_gauge(alias.legacy, alias.doc, *labels)


def register_aliases(catalog: MetricsCatalog, aliases: Sequence[MetricAlias] = DEPRECATED_ALIASES) -> dict[str, GaugeFamily]:
    """Register legacy gauges and wire them as mirrors of their canonical families.

    Rows whose canonical family is not registered (its group is disabled) are
    skipped. Returns the legacy families keyed by legacy name.
    """
    legacy: dict[str, GaugeFamily] = {}
    for alias in aliases:
        if alias.canonical not in catalog:
            logger.debug("alias %s skipped: %s not registered", alias.legacy, alias.canonical)
            continue
        source = catalog.family(alias.canonical)
        if not isinstance(source, (CounterFamily, GaugeFamily)):
            raise CatalogError(f"alias source {alias.canonical!r} must be a counter or gauge")
        target = legacy.get(alias.legacy)
        if target is None:
            target = _register_legacy(catalog, alias, source)
            legacy[alias.legacy] = target
        source.mirror_to(target, (alias.legacy_type,) if alias.legacy_type else ())
    return legacy


__all__ = ["MetricAlias", "DEPRECATED_ALIASES", "register_aliases"]
