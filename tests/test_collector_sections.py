"""Per-section population from the sample snapshot.

Each test reads rendered samples back from the scrape registry so names,
units, label vectors and converted values are all checked together.
"""
from __future__ import annotations

import pytest

from _helpers import cluster_labels, node_labels, sample_document, value
from es_exporter.config.settings import ExporterSettings
from es_exporter.orchestrator.scrape import scrape, scrape_document
from es_exporter.stats.loader import load_snapshot


@pytest.fixture
def catalog(snapshot):
    return scrape(snapshot, ExporterSettings()).catalog


def _scrape_modified(mutate):
    doc = sample_document()
    mutate(doc)
    return scrape_document(doc, ExporterSettings()).catalog


def _node(doc):
    return doc["node_stats"]["nodes"]["n1abc"]


def test_cluster_health(catalog):
    assert value(catalog, "es_cluster_status", cluster_labels()) == 1.0
    labels = cluster_labels(es_cluster_health_status="YELLOW")
    assert value(catalog, "es_cluster_health_status", labels) == 1.0
    assert value(catalog, "es_cluster_nodes_number", cluster_labels()) == 3.0
    assert value(catalog, "es_cluster_shards_active_percent", cluster_labels()) == 72.5
    assert value(catalog, "es_cluster_shards_active_ratio", cluster_labels()) == 0.725
    assert value(catalog, "es_cluster_shards_number", cluster_labels(type="unassigned")) == 2.0
    assert value(catalog, "es_cluster_task_max_waiting_time_seconds", cluster_labels()) == 1.5
    assert value(catalog, "es_cluster_is_timedout_bool", cluster_labels()) == 0.0


def test_node_roles_and_version(catalog):
    assert value(catalog, "es_node_role_bool", node_labels(role="master")) == 1.0
    assert value(catalog, "es_node_role_bool", node_labels(role="ml")) == 1.0
    build = node_labels(
        version="8.11.1",
        build_flavor="default",
        build_type="tar",
        build_hash="6f9ff581fbcde658e6f69d6ce03050f060d1fd0c",
        build_date="",
    )
    assert value(catalog, "es_node_version_info", build) == 1.0


def test_node_without_roles_reports_base_roles_as_zero():
    def mutate(doc):
        _node(doc)["roles"] = []
        del _node(doc)["version"]

    catalog = _scrape_modified(mutate)
    for role in ("master", "data", "ingest"):
        assert value(catalog, "es_node_role_bool", node_labels(role=role)) == 0.0
    assert value(catalog, "es_node_role_bool", node_labels(role="ml")) is None
    assert not [m for m in catalog.registry.collect() if m.name == "es_node_version" and m.samples]


def test_node_indices(catalog):
    assert value(catalog, "es_indices_doc_number", node_labels()) == 1000.0
    assert value(catalog, "es_indices_shards_stats_total_count", node_labels()) == 5.0
    assert value(catalog, "es_indices_indexing_index_time_seconds", node_labels()) == 2.5
    assert value(catalog, "es_indices_flush_periodic_total", node_labels()) == 2.0
    assert value(catalog, "es_indices_warmer_total", node_labels()) == 12.0
    assert value(catalog, "es_indices_warmer_time_seconds_total", node_labels()) == 1.5
    assert value(catalog, "es_indices_segments_memory_bytes", node_labels(type="terms")) == 400.0
    assert value(catalog, "es_indices_recovery_current_number", node_labels(type="target")) == 1.0
    assert value(catalog, "es_indices_translog_earliest_last_modified_age", node_labels()) == 4.0


def test_shard_count_absent_when_not_exposed():
    catalog = _scrape_modified(lambda doc: _node(doc)["indices"].pop("shard_stats"))
    assert value(catalog, "es_indices_shards_stats_total_count", node_labels()) is None
    assert value(catalog, "es_indices_doc_number", node_labels()) == 1000.0


def test_per_index(catalog):
    assert value(catalog, "es_index_status", cluster_labels(index="events")) == 2.0
    assert value(catalog, "es_index_replicas_number", cluster_labels(index="logs")) == 1.0
    assert value(catalog, "es_index_shards_number", cluster_labels(type="unassigned", index="metrics")) == 1.0
    assert value(catalog, "es_index_doc_number", cluster_labels(index="logs", context="total")) == 100.0
    assert value(catalog, "es_index_doc_number", cluster_labels(index="logs", context="primaries")) == 50.0
    assert value(catalog, "es_index_warmer_time_seconds", cluster_labels(index="logs", context="total")) == 1.5
    typed = cluster_labels(type="all", index="logs", context="total")
    assert value(catalog, "es_index_segments_memory_bytes", typed) == 1000.0
    source = cluster_labels(type="source", index="events", context="primaries")
    assert value(catalog, "es_index_recovery_current_number", source) == 0.0


def test_index_without_health_entry_keeps_statistics():
    catalog = _scrape_modified(lambda doc: doc["cluster_health"]["indices"].pop("logs"))
    assert value(catalog, "es_index_status", cluster_labels(index="logs")) is None
    assert value(catalog, "es_index_doc_number", cluster_labels(index="logs", context="total")) == 100.0
    assert value(catalog, "es_index_status", cluster_labels(index="metrics")) == 1.0


def test_transport_and_http(catalog):
    assert value(catalog, "es_transport_server_open_number", node_labels()) == 13.0
    assert value(catalog, "es_transport_outbound_connections_total", node_labels()) == 7.0
    assert value(catalog, "es_transport_rx_packets_total", node_labels()) == 100.0
    assert value(catalog, "es_transport_rx_bytes_total", node_labels()) == 2048.0
    assert value(catalog, "es_transport_tx_bytes_total", node_labels()) == 1024.0
    assert value(catalog, "es_transport_rx_packets_count", node_labels()) == 100.0
    assert value(catalog, "es_http_open_server_number", node_labels()) == 4.0
    assert value(catalog, "es_http_opened_total", node_labels()) == 40.0
    assert value(catalog, "es_http_open_total_count", node_labels()) == 40.0


def test_outbound_connections_absent_when_not_exposed():
    catalog = _scrape_modified(lambda doc: _node(doc)["transport"].pop("total_outbound_connections"))
    assert value(catalog, "es_transport_outbound_connections_total", node_labels()) is None
    assert value(catalog, "es_transport_server_open_number", node_labels()) == 13.0


def test_thread_pool_rejected_and_completed_not_swapped(catalog):
    search = node_labels(name="search")
    assert value(catalog, "es_threadpool_threads", search) == 7.0
    assert value(catalog, "es_threadpool_rejected_total", search) == 2.0
    assert value(catalog, "es_threadpool_completed_total", search) == 1000.0
    assert value(catalog, "es_threadpool_threads_count", node_labels(name="search", type="rejected")) == 2.0
    assert value(catalog, "es_threadpool_threads_count", node_labels(name="search", type="completed")) == 1000.0
    assert value(catalog, "es_threadpool_tasks_number", node_labels(name="write", type="queue")) == 3.0


def test_ingest(catalog):
    assert value(catalog, "es_ingest_total_count", node_labels()) == 10.0
    assert value(catalog, "es_ingest_total_time_seconds", node_labels()) == 0.25
    assert value(catalog, "es_ingest_pipeline_total_count", node_labels(pipeline="geoip")) == 5.0
    processor = node_labels(pipeline="geoip", processor="set")
    assert value(catalog, "es_ingest_pipeline_processor_total_time_seconds", processor) == 0.02


def test_breakers_and_script(catalog):
    assert value(catalog, "es_circuitbreaker_limit_bytes", node_labels(name="request")) == 1000.0
    assert value(catalog, "es_circuitbreaker_tripped_count", node_labels(name="fielddata")) == 1.0
    assert value(catalog, "es_circuitbreaker_overhead_ratio", node_labels(name="fielddata")) == 1.03
    assert value(catalog, "es_script_compilations_count", node_labels()) == 3.0
    assert value(catalog, "es_script_compilations_limit_triggered_total", node_labels()) == 1.0


def test_process_metrics_include_unscoped_standard_names(catalog):
    assert value(catalog, "process_cpu_seconds_total") == 12.5
    assert value(catalog, "process_open_fds") == 300.0
    assert value(catalog, "process_max_fds") == 65535.0
    assert value(catalog, "es_process_cpu_time_seconds", node_labels()) == 12.5
    assert value(catalog, "es_process_mem_total_virtual_bytes", node_labels()) == 5000000.0
    assert value(catalog, "es_process_file_descriptors_open_number", node_labels()) == 300.0


def test_process_not_supported_markers_leave_scrape_intact():
    def unsupported(doc):
        process = _node(doc)["process"]
        process["cpu"]["total_in_millis"] = -1
        process["open_file_descriptors"] = -1
        process["max_file_descriptors"] = -1

    catalog = _scrape_modified(unsupported)
    assert value(catalog, "process_cpu_seconds_total") is None
    assert value(catalog, "process_open_fds") is None
    assert value(catalog, "process_max_fds") is None
    assert value(catalog, "es_process_cpu_time_seconds", node_labels()) == -0.001
    assert value(catalog, "es_process_file_descriptors_open_number", node_labels()) == -1.0
    assert value(catalog, "es_jvm_uptime_seconds", node_labels()) == 60.0
    assert value(catalog, "es_transport_rx_bytes_total", node_labels()) == 2048.0


def test_jvm(catalog):
    assert value(catalog, "es_jvm_uptime_seconds", node_labels()) == 60.0
    assert value(catalog, "es_jvm_mem_pool_peak_used_bytes", node_labels(pool="young")) == 20.0
    assert value(catalog, "es_jvm_gc_collection_time_seconds", node_labels(gc="young")) == 0.35
    assert value(catalog, "es_jvm_bufferpool_used_bytes", node_labels(bufferpool="direct")) == 300.0
    assert value(catalog, "es_jvm_classes_loaded_number", node_labels()) == 1000.0


def test_jvm_without_class_stats():
    catalog = _scrape_modified(lambda doc: _node(doc)["jvm"].pop("classes"))
    assert value(catalog, "es_jvm_classes_loaded_number", node_labels()) is None
    assert value(catalog, "es_jvm_threads_number", node_labels()) == 40.0


def test_os_and_cgroup(catalog):
    assert value(catalog, "es_os_cpu_percent", node_labels()) == 12.0
    assert value(catalog, "es_os_load_average_one_minute", node_labels()) == 0.5
    assert value(catalog, "es_os_load_average_fifteen_minutes", node_labels()) == 0.3
    assert value(catalog, "es_os_mem_used_bytes", node_labels()) == 6000.0
    assert value(catalog, "es_os_cgroup_control_group_info", node_labels(group="cpuacct", path="/")) == 1.0
    assert value(catalog, "es_os_cgroup_cpuacct_usage_seconds", node_labels()) == 2.0
    assert value(catalog, "es_os_cgroup_cpu_cfs_period_seconds", node_labels()) == 0.1
    assert value(catalog, "es_os_cgroup_memory_limit_bytes", node_labels()) == float("9223372036854771712")
    assert value(catalog, "es_os_cgroup_memory_usage_bytes", node_labels()) == 1048576.0


def test_partial_load_average_is_not_exported():
    catalog = _scrape_modified(lambda doc: _node(doc)["os"]["cpu"].update(load_average={"1m": 0.5}))
    assert value(catalog, "es_os_load_average_one_minute", node_labels()) is None
    assert value(catalog, "es_os_cpu_percent", node_labels()) == 12.0


def test_cgroup_without_control_group_path():
    def mutate(doc):
        cgroup = _node(doc)["os"]["cgroup"]
        for key in ("cpuacct", "cpu", "memory"):
            cgroup[key].pop("control_group")

    catalog = _scrape_modified(mutate)
    assert value(catalog, "es_os_cgroup_control_group_info", node_labels(group="cpuacct", path="/")) is None
    assert value(catalog, "es_os_cgroup_cpuacct_usage_seconds", node_labels()) == 2.0


def test_fs(catalog):
    assert value(catalog, "es_fs_total_available_bytes", node_labels()) == 35000.0
    path = node_labels(path="/var/lib/elasticsearch", mount="/ (/dev/sda1)", type="ext4")
    assert value(catalog, "es_fs_path_free_bytes", path) == 40000.0
    assert value(catalog, "es_fs_io_total_operations", node_labels()) == 10.0
    assert value(catalog, "es_fs_io_total_read_bytes", node_labels()) == 2048.0
    assert value(catalog, "es_fs_io_total_io_time_seconds_total", node_labels()) == 1.5
    assert value(catalog, "es_fs_io_device_read_bytes_total", node_labels(device="sda1")) == 2048.0
    assert value(catalog, "es_fs_io_device_write_operations_total", node_labels(device="sda1")) == 6.0


def test_fs_device_without_name_is_skipped():
    catalog = _scrape_modified(lambda doc: _node(doc)["fs"]["io_stats"]["devices"][0].pop("device_name"))
    device_series = [
        s for m in catalog.registry.collect() if m.name.startswith("es_fs_io_device") for s in m.samples
    ]
    assert device_series == []
    assert value(catalog, "es_fs_io_total_operations", node_labels()) == 10.0


def test_indexing_pressure(catalog):
    assert value(catalog, "es_indexing_pressure_memory_current_all_bytes", node_labels()) == 350.0
    assert value(catalog, "es_indexing_pressure_memory_current_coordinating_bytes", node_labels()) == 200.0
    assert value(catalog, "es_indexing_pressure_memory_all_bytes_total", node_labels()) == 10000.0
    assert value(catalog, "es_indexing_pressure_memory_coordinating_rejections_total", node_labels()) == 1.0
    assert value(catalog, "es_indexing_pressure_memory_bytes", node_labels()) == 1073741824.0


def test_indexing_pressure_limit_absent():
    catalog = _scrape_modified(lambda doc: _node(doc)["indexing_pressure"]["memory"].pop("limit_in_bytes"))
    assert value(catalog, "es_indexing_pressure_memory_bytes", node_labels()) is None
    assert value(catalog, "es_indexing_pressure_memory_current_all_bytes", node_labels()) == 350.0


def test_cluster_settings(catalog):
    prefix = "es_cluster_routing_allocation_disk_"
    assert value(catalog, prefix + "threshold_enabled", cluster_labels()) == 1.0
    assert value(catalog, prefix + "watermark_low_pct", cluster_labels()) == 80.0
    assert value(catalog, prefix + "watermark_flood_stage_pct", cluster_labels()) == 95.0
    assert value(catalog, prefix + "watermark_low_bytes", cluster_labels()) is None


def test_cluster_settings_threshold_unset_reports_disabled():
    doc = sample_document()
    doc["cluster_settings"] = {"cluster.routing.allocation.disk.watermark.low": "10gb"}
    catalog = scrape(load_snapshot(doc), ExporterSettings()).catalog
    prefix = "es_cluster_routing_allocation_disk_"
    assert value(catalog, prefix + "threshold_enabled", cluster_labels()) == 0.0
    assert value(catalog, prefix + "watermark_low_bytes", cluster_labels()) == 10.0 * 1024 ** 3


def test_per_index_samples_split_by_context(catalog):
    seen = [
        (s.labels["index"], s.labels["context"])
        for metric in catalog.registry.collect()
        if metric.name == "es_index_doc_number"
        for s in metric.samples
    ]
    assert sorted(seen) == sorted(
        (index, context) for index in ("logs", "metrics", "events") for context in ("total", "primaries")
    )
