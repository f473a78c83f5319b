"""Collector lifecycle, settings gates and metric group filters."""
from __future__ import annotations

import pytest

from _helpers import cluster_labels, node_labels, value
from es_exporter.collectors import SECTION_TYPES, CollectorState, PrometheusMetricsCollector
from es_exporter.collectors.base import StatsSection
from es_exporter.config.settings import ExporterSettings
from es_exporter.metrics.catalog import MetricsCatalog
from es_exporter.metrics.groups import MetricGroup, parse_group_filters
from es_exporter.stats.loader import load_snapshot
from es_exporter.utils.exceptions import CollectorStateError


def _collector(snapshot, settings=None):
    catalog = MetricsCatalog(snapshot.topology())
    return catalog, PrometheusMetricsCollector(catalog, settings)


def test_state_machine(snapshot):
    catalog, collector = _collector(snapshot)
    assert collector.state is CollectorState.UNREGISTERED
    with pytest.raises(CollectorStateError):
        collector.update_all(snapshot)
    collector.register_all()
    assert collector.state is CollectorState.REGISTERED
    with pytest.raises(CollectorStateError):
        collector.register_all()
    collector.update_all(snapshot)
    assert collector.state is CollectorState.UPDATED
    with pytest.raises(CollectorStateError):
        collector.update_all(snapshot)
    assert value(catalog, "es_metrics_generate_time_seconds_count", node_labels()) == 1.0


def test_every_section_populated_from_full_snapshot(snapshot):
    _catalog, collector = _collector(snapshot)
    collector.register_all()
    populated = collector.update_all(snapshot)
    assert populated == [cls.group for cls in SECTION_TYPES]


def test_absent_sections_are_skipped_but_registered():
    snapshot = load_snapshot({"cluster_health": {"cluster_name": "prod", "status": "green", "number_of_nodes": 1}})
    catalog, collector = _collector(snapshot)
    collector.register_all()
    assert collector.update_all(snapshot) == [MetricGroup.CLUSTER]
    assert "fs_total_total" in catalog
    assert value(catalog, "es_cluster_status", cluster_labels()) == 0.0


def test_node_without_fs_skips_only_fs(document):
    del document["node_stats"]["nodes"]["n1abc"]["fs"]
    snapshot = load_snapshot(document)
    catalog, collector = _collector(snapshot)
    collector.register_all()
    populated = collector.update_all(snapshot)
    assert MetricGroup.FS not in populated
    assert MetricGroup.JVM in populated
    assert value(catalog, "es_fs_total_total_bytes", node_labels()) is None


def test_failed_pass_consumes_collector(snapshot, monkeypatch):
    def boom(self, section):
        raise RuntimeError("populate failed")

    _catalog, collector = _collector(snapshot)
    collector.register_all()
    monkeypatch.setattr(type(collector.sections[0]), "populate", boom)
    with pytest.raises(RuntimeError):
        collector.update_all(snapshot)
    assert collector.state is CollectorState.UPDATED


def test_indices_gate_registers_but_skips_update(snapshot):
    settings = ExporterSettings(indices_enabled=False, cluster_settings_enabled=False)
    catalog, collector = _collector(snapshot, settings)
    collector.register_all()
    populated = collector.update_all(snapshot)
    assert "index_doc_number" in catalog
    assert "cluster_routing_allocation_disk_threshold_enabled" in catalog
    assert MetricGroup.PER_INDEX not in populated
    assert MetricGroup.CLUSTER_SETTINGS not in populated
    assert value(catalog, "es_index_doc_number", cluster_labels(index="logs", context="total")) is None
    assert value(catalog, "es_indices_doc_number", node_labels()) == 1000.0


def test_disabled_groups_register_nothing(snapshot):
    filters = parse_group_filters(disabled_raw="jvm,deprecated_aliases")
    catalog, collector = _collector(snapshot, ExporterSettings(group_filters=filters))
    collector.register_all()
    collector.update_all(snapshot)
    assert "jvm_uptime_seconds" not in catalog
    assert "transport_rx_bytes_count" not in catalog
    assert value(catalog, "es_transport_rx_bytes_total", node_labels()) == 2048.0


def test_enable_list_keeps_always_on_groups(snapshot):
    filters = parse_group_filters(enabled_raw="fs")
    _catalog, collector = _collector(snapshot, ExporterSettings(group_filters=filters))
    assert {s.group for s in collector.sections} == {MetricGroup.CLUSTER, MetricGroup.NODE, MetricGroup.FS}


def test_unregistered_handle_access_raises():
    section = SECTION_TYPES[0]()
    assert isinstance(section, StatsSection)
    with pytest.raises(AttributeError, match="not registered"):
        section.status  # noqa: B018
