"""StatisticsSnapshot data model.

Plain dataclasses mirroring the Elasticsearch REST responses the exporter
reads (cluster health, local node stats, indices stats, allocation
settings). Every leaf is optional: ``None`` means the source did not report
it. Top-level node sections (``NodeStats.fs`` and friends) are ``None`` when
absent so the matching collector sub-pass is skipped; inner blocks default to
an empty instance whose leaves are all unreported.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from ..metrics.labels import Topology
from ..utils.exceptions import SnapshotError
from .mapping import collection, from_mapping, listed_entries, named_entries, section, stat


class HealthStatus(IntEnum):
    """Cluster / index health; the integer value is the exported status code."""

    GREEN = 0
    YELLOW = 1
    RED = 2

    @classmethod
    def parse(cls, raw: Any) -> HealthStatus:
        if isinstance(raw, cls):
            return raw
        try:
            return cls[str(raw).strip().upper()]
        except KeyError:
            raise SnapshotError(f"unknown health status {raw!r}") from None


# ---------------------------------------------------------------------------
# Cluster health
# ---------------------------------------------------------------------------
@dataclass
class IndexHealth:
    status: HealthStatus | None = stat(load=HealthStatus.parse)
    number_of_shards: int | None = None
    number_of_replicas: int | None = None
    active_primary_shards: int | None = None
    active_shards: int | None = None
    relocating_shards: int | None = None
    initializing_shards: int | None = None
    unassigned_shards: int | None = None


def _index_health(raw: Any) -> dict[str, IndexHealth]:
    if not isinstance(raw, dict):
        raise SnapshotError(f"cluster health indices: expected a JSON object, got {type(raw).__name__}")
    return {name: from_mapping(IndexHealth, body or {}) for name, body in raw.items()}


@dataclass
class ClusterHealth:
    cluster_name: str | None = None
    status: HealthStatus | None = stat(load=HealthStatus.parse)
    timed_out: bool | None = None
    number_of_nodes: int | None = None
    number_of_data_nodes: int | None = None
    active_primary_shards: int | None = None
    active_shards: int | None = None
    relocating_shards: int | None = None
    initializing_shards: int | None = None
    unassigned_shards: int | None = None
    delayed_unassigned_shards: int | None = None
    number_of_pending_tasks: int | None = None
    number_of_in_flight_fetch: int | None = None
    task_max_waiting_in_queue_millis: int | None = None
    active_shards_percent_as_number: float | None = None
    indices: dict[str, IndexHealth] = field(default_factory=dict, metadata={"load": _index_health})


# ---------------------------------------------------------------------------
# Common (node-level and per-index) indices statistics
# ---------------------------------------------------------------------------
@dataclass
class DocsStats:
    count: int | None = None
    deleted: int | None = None


@dataclass
class StoreStats:
    size_in_bytes: int | None = None
    total_data_set_size_in_bytes: int | None = None
    reserved_in_bytes: int | None = None


@dataclass
class IndexingStats:
    index_total: int | None = None
    index_time_in_millis: int | None = None
    index_current: int | None = None
    index_failed: int | None = None
    delete_total: int | None = None
    delete_time_in_millis: int | None = None
    delete_current: int | None = None
    noop_update_total: int | None = None
    is_throttled: bool | None = None
    throttle_time_in_millis: int | None = None


@dataclass
class GetStats:
    total: int | None = None
    time_in_millis: int | None = None
    exists_total: int | None = None
    exists_time_in_millis: int | None = None
    missing_total: int | None = None
    missing_time_in_millis: int | None = None
    current: int | None = None


@dataclass
class SearchStats:
    open_contexts: int | None = None
    query_total: int | None = None
    query_time_in_millis: int | None = None
    query_current: int | None = None
    fetch_total: int | None = None
    fetch_time_in_millis: int | None = None
    fetch_current: int | None = None
    scroll_total: int | None = None
    scroll_time_in_millis: int | None = None
    scroll_current: int | None = None
    suggest_total: int | None = None
    suggest_time_in_millis: int | None = None
    suggest_current: int | None = None


@dataclass
class MergeStats:
    current: int | None = None
    current_docs: int | None = None
    current_size_in_bytes: int | None = None
    total: int | None = None
    total_time_in_millis: int | None = None
    total_docs: int | None = None
    total_size_in_bytes: int | None = None
    total_stopped_time_in_millis: int | None = None
    total_throttled_time_in_millis: int | None = None
    total_auto_throttle_in_bytes: int | None = None


@dataclass
class RefreshStats:
    total: int | None = None
    total_time_in_millis: int | None = None
    external_total: int | None = None
    external_total_time_in_millis: int | None = None
    listeners: int | None = None


@dataclass
class FlushStats:
    total: int | None = None
    periodic: int | None = None
    total_time_in_millis: int | None = None


@dataclass
class WarmerStats:
    current: int | None = None
    total: int | None = None
    total_time_in_millis: int | None = None


@dataclass
class QueryCacheStats:
    memory_size_in_bytes: int | None = None
    total_count: int | None = None
    hit_count: int | None = None
    miss_count: int | None = None
    cache_size: int | None = None
    cache_count: int | None = None
    evictions: int | None = None


@dataclass
class FielddataStats:
    memory_size_in_bytes: int | None = None
    evictions: int | None = None


@dataclass
class CompletionStats:
    size_in_bytes: int | None = None


@dataclass
class SegmentsStats:
    count: int | None = None
    memory_in_bytes: int | None = None
    terms_memory_in_bytes: int | None = None
    stored_fields_memory_in_bytes: int | None = None
    term_vectors_memory_in_bytes: int | None = None
    norms_memory_in_bytes: int | None = None
    points_memory_in_bytes: int | None = None
    doc_values_memory_in_bytes: int | None = None
    index_writer_memory_in_bytes: int | None = None
    version_map_memory_in_bytes: int | None = None
    fixed_bit_set_memory_in_bytes: int | None = None
    max_unsafe_auto_id_timestamp: int | None = None

    def memory_by_type(self) -> list[tuple[str, int | None]]:
        """Segment memory keyed by the ``type`` label values used on export."""
        return [
            ("all", self.memory_in_bytes),
            ("bitset", self.fixed_bit_set_memory_in_bytes),
            ("docvalues", self.doc_values_memory_in_bytes),
            ("indexwriter", self.index_writer_memory_in_bytes),
            ("norms", self.norms_memory_in_bytes),
            ("storefields", self.stored_fields_memory_in_bytes),
            ("terms", self.terms_memory_in_bytes),
            ("termvectors", self.term_vectors_memory_in_bytes),
            ("versionmap", self.version_map_memory_in_bytes),
            ("points", self.points_memory_in_bytes),
        ]


@dataclass
class TranslogStats:
    operations: int | None = None
    size_in_bytes: int | None = None
    uncommitted_operations: int | None = None
    uncommitted_size_in_bytes: int | None = None
    earliest_last_modified_age: int | None = None


@dataclass
class RequestCacheStats:
    memory_size_in_bytes: int | None = None
    evictions: int | None = None
    hit_count: int | None = None
    miss_count: int | None = None


@dataclass
class RecoveryStats:
    current_as_source: int | None = None
    current_as_target: int | None = None
    throttle_time_in_millis: int | None = None


@dataclass
class ShardStats:
    # Not part of every release's public response; absent means unavailable.
    total_count: int | None = None


@dataclass
class CommonStats:
    docs: DocsStats = section(DocsStats)
    store: StoreStats = section(StoreStats)
    indexing: IndexingStats = section(IndexingStats)
    get: GetStats = section(GetStats)
    search: SearchStats = section(SearchStats)
    merges: MergeStats = section(MergeStats)
    refresh: RefreshStats = section(RefreshStats)
    flush: FlushStats = section(FlushStats)
    warmer: WarmerStats = section(WarmerStats)
    query_cache: QueryCacheStats = section(QueryCacheStats)
    fielddata: FielddataStats = section(FielddataStats)
    completion: CompletionStats = section(CompletionStats)
    segments: SegmentsStats = section(SegmentsStats)
    translog: TranslogStats = section(TranslogStats)
    request_cache: RequestCacheStats = section(RequestCacheStats)
    recovery: RecoveryStats = section(RecoveryStats)
    shard_stats: ShardStats | None = None


@dataclass
class IndexStats:
    name: str = ""
    primaries: CommonStats = section(CommonStats)
    total: CommonStats = section(CommonStats)


@dataclass
class IndicesStats:
    indices: list[IndexStats] = collection(named_entries(IndexStats))

    def names(self) -> list[str]:
        return [i.name for i in self.indices]


# ---------------------------------------------------------------------------
# Node statistics
# ---------------------------------------------------------------------------
@dataclass
class NodeBuild:
    version: str | None = None
    build_flavor: str | None = None
    build_type: str | None = None
    build_hash: str | None = None
    build_date: str | None = None


@dataclass
class TransportStats:
    server_open: int | None = None
    total_outbound_connections: int | None = None
    rx_count: int | None = None
    rx_size_in_bytes: int | None = None
    tx_count: int | None = None
    tx_size_in_bytes: int | None = None


@dataclass
class HttpStats:
    current_open: int | None = None
    total_opened: int | None = None


@dataclass
class ThreadPoolStats:
    name: str = ""
    threads: int | None = None
    queue: int | None = None
    active: int | None = None
    rejected: int | None = None
    largest: int | None = None
    completed: int | None = None


@dataclass
class IngestCounters:
    count: int | None = None
    time_in_millis: int | None = None
    current: int | None = None
    failed: int | None = None


@dataclass
class IngestProcessorStats:
    name: str = ""
    type: str | None = None
    stats: IngestCounters = section(IngestCounters)


def _ingest_processors(raw: Any) -> list[IngestProcessorStats]:
    # [{"set": {"type": "set", "stats": {...}}}, ...]
    out: list[IngestProcessorStats] = []
    for item in raw or []:
        out.extend(named_entries(IngestProcessorStats)(item))
    return out


@dataclass
class IngestPipelineStats:
    id: str = ""
    count: int | None = None
    time_in_millis: int | None = None
    current: int | None = None
    failed: int | None = None
    processors: list[IngestProcessorStats] = collection(_ingest_processors)


@dataclass
class IngestStats:
    total: IngestCounters = section(IngestCounters)
    pipelines: list[IngestPipelineStats] = collection(named_entries(IngestPipelineStats, "id"))


@dataclass
class BreakerStats:
    name: str = ""
    limit_size_in_bytes: int | None = None
    estimated_size_in_bytes: int | None = None
    overhead: float | None = None
    tripped: int | None = None


@dataclass
class ScriptStats:
    compilations: int | None = None
    cache_evictions: int | None = None
    compilation_limit_triggered: int | None = None


@dataclass
class ProcessCpu:
    percent: float | None = None
    total_in_millis: int | None = None


@dataclass
class ProcessMem:
    total_virtual_in_bytes: int | None = None


@dataclass
class ProcessStats:
    open_file_descriptors: int | None = None
    max_file_descriptors: int | None = None
    cpu: ProcessCpu = section(ProcessCpu)
    mem: ProcessMem = section(ProcessMem)


@dataclass
class JvmMemoryPool:
    name: str = ""
    used_in_bytes: int | None = None
    max_in_bytes: int | None = None
    peak_used_in_bytes: int | None = None
    peak_max_in_bytes: int | None = None


@dataclass
class JvmMem:
    heap_used_in_bytes: int | None = None
    heap_used_percent: float | None = None
    heap_committed_in_bytes: int | None = None
    heap_max_in_bytes: int | None = None
    non_heap_used_in_bytes: int | None = None
    non_heap_committed_in_bytes: int | None = None
    pools: list[JvmMemoryPool] = collection(named_entries(JvmMemoryPool))


@dataclass
class JvmThreads:
    count: int | None = None
    peak_count: int | None = None


@dataclass
class JvmGarbageCollector:
    name: str = ""
    collection_count: int | None = None
    collection_time_in_millis: int | None = None


def _gc_collectors(raw: Any) -> list[JvmGarbageCollector]:
    return named_entries(JvmGarbageCollector)(raw.get("collectors") or {})


@dataclass
class JvmBufferPool:
    name: str = ""
    count: int | None = None
    used_in_bytes: int | None = None
    total_capacity_in_bytes: int | None = None


@dataclass
class JvmClasses:
    current_loaded_count: int | None = None
    total_loaded_count: int | None = None
    total_unloaded_count: int | None = None


@dataclass
class JvmStats:
    uptime_in_millis: int | None = None
    mem: JvmMem = section(JvmMem)
    threads: JvmThreads = section(JvmThreads)
    gc_collectors: list[JvmGarbageCollector] = collection(_gc_collectors, key="gc")
    buffer_pools: list[JvmBufferPool] = collection(named_entries(JvmBufferPool))
    classes: JvmClasses | None = None


def _load_average(raw: Any) -> list[float]:
    # ES reports {"1m": .., "5m": .., "15m": ..}; any key may be missing on some platforms
    if isinstance(raw, list):
        return [float(v) for v in raw]
    return [float(raw[k]) for k in ("1m", "5m", "15m") if raw.get(k) is not None]


@dataclass
class OsCpu:
    percent: float | None = None
    load_average: list[float] | None = stat(load=_load_average)


@dataclass
class OsMem:
    total_in_bytes: int | None = None
    free_in_bytes: int | None = None
    used_in_bytes: int | None = None
    free_percent: float | None = None
    used_percent: float | None = None


@dataclass
class OsSwap:
    total_in_bytes: int | None = None
    free_in_bytes: int | None = None
    used_in_bytes: int | None = None


@dataclass
class CgroupCpuAcct:
    control_group: str | None = None
    usage_nanos: int | None = None


@dataclass
class CgroupCpuStat:
    number_of_elapsed_periods: int | None = None
    number_of_times_throttled: int | None = None
    time_throttled_nanos: int | None = None


@dataclass
class CgroupCpu:
    control_group: str | None = None
    cfs_period_micros: int | None = None
    cfs_quota_micros: int | None = None
    stat: CgroupCpuStat = section(CgroupCpuStat)


@dataclass
class CgroupMemory:
    control_group: str | None = None
    # reported as strings: the value may exceed a signed 64-bit integer
    limit_in_bytes: str | None = None
    usage_in_bytes: str | None = None


@dataclass
class OsCgroup:
    cpuacct: CgroupCpuAcct = section(CgroupCpuAcct)
    cpu: CgroupCpu = section(CgroupCpu)
    memory: CgroupMemory = section(CgroupMemory)


@dataclass
class OsStats:
    cpu: OsCpu | None = None
    mem: OsMem | None = None
    swap: OsSwap | None = None
    cgroup: OsCgroup | None = None


@dataclass
class FsTotal:
    total_in_bytes: int | None = None
    free_in_bytes: int | None = None
    available_in_bytes: int | None = None


@dataclass
class FsPath:
    path: str | None = None
    mount: str | None = None
    type: str | None = None
    total_in_bytes: int | None = None
    free_in_bytes: int | None = None
    available_in_bytes: int | None = None


@dataclass
class FsIoTotals:
    operations: int | None = None
    read_operations: int | None = None
    write_operations: int | None = None
    read_kilobytes: int | None = None
    write_kilobytes: int | None = None
    io_time_in_millis: int | None = None


@dataclass
class FsDevice(FsIoTotals):
    # Some releases omit the device name; such devices cannot be labelled.
    device_name: str | None = None


@dataclass
class FsIoStats:
    devices: list[FsDevice] = collection(listed_entries(FsDevice))
    total: FsIoTotals = section(FsIoTotals)


@dataclass
class FsStats:
    total: FsTotal = section(FsTotal)
    data: list[FsPath] = collection(listed_entries(FsPath))
    io_stats: FsIoStats | None = None


@dataclass
class IndexingPressureCurrent:
    combined_coordinating_and_primary_in_bytes: int | None = None
    coordinating_in_bytes: int | None = None
    primary_in_bytes: int | None = None
    replica_in_bytes: int | None = None


@dataclass
class IndexingPressureTotal(IndexingPressureCurrent):
    coordinating_rejections: int | None = None
    primary_rejections: int | None = None
    replica_rejections: int | None = None


@dataclass
class IndexingPressureMemory:
    current: IndexingPressureCurrent = section(IndexingPressureCurrent)
    total: IndexingPressureTotal = section(IndexingPressureTotal)
    # Configured limit; only some releases expose it.
    limit_in_bytes: int | None = None


@dataclass
class IndexingPressureStats:
    memory: IndexingPressureMemory = section(IndexingPressureMemory)


@dataclass
class NodeStats:
    name: str | None = None
    node_id: str | None = None
    roles: list[str] = collection(lambda raw: [str(r) for r in raw])
    build: NodeBuild | None = None
    indices: CommonStats | None = None
    transport: TransportStats | None = None
    http: HttpStats | None = None
    thread_pool: list[ThreadPoolStats] | None = stat(load=named_entries(ThreadPoolStats))
    ingest: IngestStats | None = None
    breakers: list[BreakerStats] | None = stat(load=named_entries(BreakerStats))
    script: ScriptStats | None = None
    process: ProcessStats | None = None
    jvm: JvmStats | None = None
    os: OsStats | None = None
    fs: FsStats | None = None
    indexing_pressure: IndexingPressureStats | None = None

    @classmethod
    def from_dict(cls, data: Any, node_id: str | None = None) -> NodeStats:
        node = from_mapping(cls, data)
        if node_id is not None:
            node.node_id = node_id
        if node.build is None and isinstance(data, dict) and data.get("version") is not None:
            node.build = from_mapping(NodeBuild, data)
        return node


# ---------------------------------------------------------------------------
# Allocation settings and the snapshot itself
# ---------------------------------------------------------------------------
@dataclass
class AllocationSettings:
    threshold_enabled: bool | None = None
    disk_low_in_bytes: float | None = None
    disk_high_in_bytes: float | None = None
    flood_stage_in_bytes: float | None = None
    disk_low_in_pct: float | None = None
    disk_high_in_pct: float | None = None
    flood_stage_in_pct: float | None = None


@dataclass
class StatisticsSnapshot:
    cluster_name: str | None = None
    node_name: str | None = None
    node_id: str | None = None
    cluster_health: ClusterHealth | None = None
    node_stats: NodeStats | None = None
    indices_stats: IndicesStats | None = None
    allocation_settings: AllocationSettings | None = None

    def topology(self) -> Topology:
        """Topology labels, preferring explicit names over those in the sections."""
        cluster = self.cluster_name
        if cluster is None and self.cluster_health is not None:
            cluster = self.cluster_health.cluster_name
        node = self.node_name
        node_id = self.node_id
        if self.node_stats is not None:
            node = node if node is not None else self.node_stats.name
            node_id = node_id if node_id is not None else self.node_stats.node_id
        return Topology(cluster or "", node or "", node_id or "")


__all__ = [
    "HealthStatus",
    "IndexHealth",
    "ClusterHealth",
    "CommonStats",
    "SegmentsStats",
    "IndexStats",
    "IndicesStats",
    "NodeBuild",
    "TransportStats",
    "HttpStats",
    "ThreadPoolStats",
    "IngestCounters",
    "IngestProcessorStats",
    "IngestPipelineStats",
    "IngestStats",
    "BreakerStats",
    "ScriptStats",
    "ProcessStats",
    "JvmStats",
    "OsStats",
    "FsStats",
    "FsDevice",
    "IndexingPressureStats",
    "NodeStats",
    "AllocationSettings",
    "StatisticsSnapshot",
]
