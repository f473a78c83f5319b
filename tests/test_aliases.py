from __future__ import annotations

import pytest

from _helpers import NODE, node_labels, value
from es_exporter.metrics.aliases import DEPRECATED_ALIASES, MetricAlias, register_aliases
from es_exporter.metrics.catalog import MetricsCatalog
from es_exporter.metrics.labels import Topology
from es_exporter.utils.exceptions import CatalogError

TOPO = Topology("prod", "node-1", "n1abc")


def test_counter_alias_mirrors_increments():
    catalog = MetricsCatalog(TOPO)
    rx = catalog.register_node_counter("transport_rx", "RX", unit="bytes")
    legacy = register_aliases(catalog)
    assert set(legacy) == {"transport_rx_bytes_count"}
    rx.inc(2048)
    assert value(catalog, "es_transport_rx_bytes_total", NODE) == 2048.0
    assert value(catalog, "es_transport_rx_bytes_count", NODE) == 2048.0


def test_threadpool_aliases_share_one_family_split_by_type():
    catalog = MetricsCatalog(TOPO)
    threads = catalog.register_node_gauge("threadpool_threads", "Threads", "name")
    active = catalog.register_node_gauge("threadpool_active", "Active", "name")
    catalog.register_node_gauge("threadpool_largest", "Largest", "name")
    rejected = catalog.register_node_counter("threadpool_rejected", "Rejected", "name")
    legacy = register_aliases(catalog)
    assert legacy["threadpool_threads_number"].label_names == ("name", "type")

    threads.set(7, "search")
    active.set(1, "search")
    rejected.inc(2, "search")
    assert value(catalog, "es_threadpool_threads_number", node_labels(name="search", type="threads")) == 7.0
    assert value(catalog, "es_threadpool_threads_number", node_labels(name="search", type="active")) == 1.0
    assert value(catalog, "es_threadpool_threads_count", node_labels(name="search", type="rejected")) == 2.0


def test_aliases_for_unregistered_canonicals_are_skipped():
    catalog = MetricsCatalog(TOPO)
    assert register_aliases(catalog) == {}
    assert len(catalog) == 0


def test_alias_source_must_be_counter_or_gauge():
    catalog = MetricsCatalog(TOPO)
    catalog.register_cluster_enum("cluster_health_status", "Health", ["GREEN"])
    bad = [MetricAlias("cluster_health_status", "cluster_health_legacy", "Legacy")]
    with pytest.raises(CatalogError):
        register_aliases(catalog, bad)


def test_every_alias_row_has_distinct_canonical():
    canonicals = [a.canonical for a in DEPRECATED_ALIASES]
    assert len(canonicals) == len(set(canonicals))
