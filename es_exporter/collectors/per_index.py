"""Per-index health and statistics.

Every index in the indices stats response gets its health series (status,
replicas, shard counts by type) and the full statistics set twice, once per
context (``total`` across all copies, ``primaries`` only).
"""
from __future__ import annotations

import logging

from ..metrics.groups import MetricGroup
from ..metrics.labels import PER_INDEX, TYPED_PER_INDEX, IndexContext
from ..metrics.spec import CLUSTER, MetricDef
from ..metrics.units import as_flag, millis_to_seconds
from ..stats.models import ClusterHealth, CommonStats, IndexHealth, IndicesStats, StatisticsSnapshot
from .base import StatsSection

logger = logging.getLogger(__name__)


def _ctx(attr: str, name: str, doc: str) -> MetricDef:
    return MetricDef(attr, name, doc, scope=CLUSTER, labels=PER_INDEX)


class PerIndexMetrics(StatsSection):
    group = MetricGroup.PER_INDEX
    SPECS = [
        MetricDef("status", "index_status", "Index status", scope=CLUSTER, labels=("index",)),
        MetricDef("replicas", "index_replicas_number", "Number of replicas", scope=CLUSTER, labels=("index",)),
        MetricDef("shards", "index_shards_number", "Number of shards", scope=CLUSTER, labels=("type", "index")),
        _ctx("doc_count", "index_doc_number", "Total number of documents"),
        _ctx("doc_deleted", "index_doc_deleted_number", "Number of deleted documents"),
        _ctx("store_size", "index_store_size_bytes", "Store size of the indices in bytes"),
        _ctx("delete_count", "index_indexing_delete_count", "Count of documents deleted"),
        _ctx("delete_current", "index_indexing_delete_current_number", "Current rate of documents deleted"),
        _ctx("delete_time", "index_indexing_delete_time_seconds", "Time spent while deleting documents"),
        _ctx("index_count", "index_indexing_index_count", "Count of documents indexed"),
        _ctx("index_current", "index_indexing_index_current_number", "Current rate of documents indexed"),
        _ctx("index_failed", "index_indexing_index_failed_count", "Count of failed to index documents"),
        _ctx("index_time", "index_indexing_index_time_seconds", "Time spent while indexing documents"),
        _ctx("noop_update", "index_indexing_noop_update_count", "Count of noop document updates"),
        _ctx("is_throttled", "index_indexing_is_throttled_bool", "Is indexing throttling ?"),
        _ctx("throttle_time", "index_indexing_throttle_time_seconds", "Time spent while throttling"),
        _ctx("get_count", "index_get_count", "Count of get commands"),
        _ctx("get_time", "index_get_time_seconds", "Time spent while get commands"),
        _ctx("get_exists_count", "index_get_exists_count", "Count of existing documents when get command"),
        _ctx("get_exists_time", "index_get_exists_time_seconds", "Time spent while existing documents get command"),
        _ctx("get_missing_count", "index_get_missing_count", "Count of missing documents when get command"),
        _ctx("get_missing_time", "index_get_missing_time_seconds", "Time spent while missing documents get command"),
        _ctx("get_current", "index_get_current_number", "Current rate of get commands"),
        _ctx("open_contexts", "index_search_open_contexts_number", "Number of search open contexts"),
        _ctx("fetch_count", "index_search_fetch_count", "Count of search fetches"),
        _ctx("fetch_current", "index_search_fetch_current_number", "Current rate of search fetches"),
        _ctx("fetch_time", "index_search_fetch_time_seconds", "Time spent while search fetches"),
        _ctx("query_count", "index_search_query_count", "Count of search queries"),
        _ctx("query_current", "index_search_query_current_number", "Current rate of search queries"),
        _ctx("query_time", "index_search_query_time_seconds", "Time spent while search queries"),
        _ctx("scroll_count", "index_search_scroll_count", "Count of search scrolls"),
        _ctx("scroll_current", "index_search_scroll_current_number", "Current rate of search scrolls"),
        _ctx("scroll_time", "index_search_scroll_time_seconds", "Time spent while search scrolls"),
        _ctx("merges_current", "index_merges_current_number", "Current rate of merges"),
        _ctx("merges_current_docs", "index_merges_current_docs_number", "Current rate of documents merged"),
        _ctx("merges_current_size", "index_merges_current_size_bytes", "Current rate of bytes merged"),
        _ctx("merges_total", "index_merges_total_number", "Count of merges"),
        _ctx("merges_total_time", "index_merges_total_time_seconds", "Time spent while merging"),
        _ctx("merges_total_docs", "index_merges_total_docs_count", "Count of documents merged"),
        _ctx("merges_total_size", "index_merges_total_size_bytes", "Count of bytes of merged documents"),
        _ctx("merges_stopped_time", "index_merges_total_stopped_time_seconds", "Time spent while merge process stopped"),
        _ctx("merges_throttled_time", "index_merges_total_throttled_time_seconds", "Time spent while merging when throttling"),
        _ctx("merges_auto_throttle", "index_merges_total_auto_throttle_bytes", "Bytes merged while throttling"),
        _ctx("refresh_total", "index_refresh_total_count", "Count of refreshes"),
        _ctx("refresh_time", "index_refresh_total_time_seconds", "Time spent while refreshes"),
        _ctx("refresh_listeners", "index_refresh_listeners_number", "Number of refresh listeners"),
        _ctx("flush_total", "index_flush_total_count", "Count of flushes"),
        _ctx("flush_time", "index_flush_total_time_seconds", "Total time spent while flushes"),
        _ctx("querycache_cache_count", "index_querycache_cache_count", "Count of queries in cache"),
        _ctx("querycache_cache_size", "index_querycache_cache_size_bytes", "Query cache size"),
        _ctx("querycache_evictions", "index_querycache_evictions_count", "Count of evictions in query cache"),
        _ctx("querycache_hit", "index_querycache_hit_count", "Count of hits in query cache"),
        _ctx("querycache_memory", "index_querycache_memory_size_bytes", "Memory usage of query cache"),
        _ctx("querycache_miss", "index_querycache_miss_number", "Count of misses in query cache"),
        _ctx("querycache_total", "index_querycache_total_number", "Count of usages of query cache"),
        _ctx("fielddata_memory", "index_fielddata_memory_size_bytes", "Memory usage of field date cache"),
        _ctx("fielddata_evictions", "index_fielddata_evictions_count", "Count of evictions in field data cache"),
        _ctx("completion_size", "index_completion_size_bytes", "Size of completion suggest statistics"),
        _ctx("segments_count", "index_segments_number", "Current number of segments"),
        MetricDef("segments_memory", "index_segments_memory_bytes", "Memory used by segments",
                  scope=CLUSTER, labels=TYPED_PER_INDEX),
        _ctx("suggest_current", "index_suggest_current_number", "Current rate of suggests"),
        _ctx("suggest_count", "index_suggest_count", "Count of suggests"),
        _ctx("suggest_time", "index_suggest_time_seconds", "Time spent while making suggests"),
        _ctx("requestcache_memory", "index_requestcache_memory_size_bytes", "Memory used for request cache"),
        _ctx("requestcache_hit", "index_requestcache_hit_count", "Number of hits in request cache"),
        _ctx("requestcache_miss", "index_requestcache_miss_count", "Number of misses in request cache"),
        _ctx("requestcache_evictions", "index_requestcache_evictions_count", "Number of evictions in request cache"),
        MetricDef("recovery_current", "index_recovery_current_number", "Current number of recoveries",
                  scope=CLUSTER, labels=TYPED_PER_INDEX),
        _ctx("recovery_throttle_time", "index_recovery_throttle_time_seconds", "Time spent while throttling recoveries"),
        _ctx("translog_operations", "index_translog_operations_number", "Current number of translog operations"),
        _ctx("translog_size", "index_translog_size_bytes", "Translog size"),
        _ctx("translog_uncommitted_operations", "index_translog_uncommitted_operations_number",
             "Current number of uncommitted translog operations"),
        _ctx("translog_uncommitted_size", "index_translog_uncommitted_size_bytes", "Translog uncommitted size"),
        _ctx("warmer_current", "index_warmer_current_number", "Current number of warmer"),
        _ctx("warmer_time", "index_warmer_time_seconds", "Time spent during warmers"),
        _ctx("warmer_count", "index_warmer_count", "Counter of warmers"),
    ]

    def extract(self, snapshot: StatisticsSnapshot) -> tuple[ClusterHealth, IndicesStats] | None:
        # Health and stats are joined by index name; both must be present
        if snapshot.cluster_health is None or snapshot.indices_stats is None:
            return None
        return snapshot.cluster_health, snapshot.indices_stats

    def populate(self, section: tuple[ClusterHealth, IndicesStats]) -> None:
        health, stats = section
        for index in stats.indices:
            index_health = health.indices.get(index.name)
            if index_health is None:
                logger.debug("index %s has statistics but no health entry; health series skipped", index.name)
            else:
                self._populate_health(index.name, index_health)
            self._populate_context(index.name, IndexContext.TOTAL.value, index.total)
            self._populate_context(index.name, IndexContext.PRIMARIES.value, index.primaries)

    def _populate_health(self, name: str, h: IndexHealth) -> None:
        if h.status is not None:
            self.status.set(int(h.status), name)
        self.replicas.set(h.number_of_replicas, name)
        for shard_type, value in (
            ("active", h.active_shards),
            ("shards", h.number_of_shards),
            ("active_primary", h.active_primary_shards),
            ("initializing", h.initializing_shards),
            ("relocating", h.relocating_shards),
            ("unassigned", h.unassigned_shards),
        ):
            self.shards.set(value, shard_type, name)

    def _populate_context(self, name: str, context: str, idx: CommonStats) -> None:
        labels = (name, context)
        self.doc_count.set(idx.docs.count, *labels)
        self.doc_deleted.set(idx.docs.deleted, *labels)
        self.store_size.set(idx.store.size_in_bytes, *labels)

        indexing = idx.indexing
        self.delete_count.set(indexing.delete_total, *labels)
        self.delete_current.set(indexing.delete_current, *labels)
        self.delete_time.set(millis_to_seconds(indexing.delete_time_in_millis), *labels)
        self.index_count.set(indexing.index_total, *labels)
        self.index_current.set(indexing.index_current, *labels)
        self.index_failed.set(indexing.index_failed, *labels)
        self.index_time.set(millis_to_seconds(indexing.index_time_in_millis), *labels)
        self.noop_update.set(indexing.noop_update_total, *labels)
        self.is_throttled.set(as_flag(indexing.is_throttled), *labels)
        self.throttle_time.set(millis_to_seconds(indexing.throttle_time_in_millis), *labels)

        get = idx.get
        self.get_count.set(get.total, *labels)
        self.get_time.set(millis_to_seconds(get.time_in_millis), *labels)
        self.get_exists_count.set(get.exists_total, *labels)
        self.get_exists_time.set(millis_to_seconds(get.exists_time_in_millis), *labels)
        self.get_missing_count.set(get.missing_total, *labels)
        self.get_missing_time.set(millis_to_seconds(get.missing_time_in_millis), *labels)
        self.get_current.set(get.current, *labels)

        search = idx.search
        self.open_contexts.set(search.open_contexts, *labels)
        self.fetch_count.set(search.fetch_total, *labels)
        self.fetch_current.set(search.fetch_current, *labels)
        self.fetch_time.set(millis_to_seconds(search.fetch_time_in_millis), *labels)
        self.query_count.set(search.query_total, *labels)
        self.query_current.set(search.query_current, *labels)
        self.query_time.set(millis_to_seconds(search.query_time_in_millis), *labels)
        self.scroll_count.set(search.scroll_total, *labels)
        self.scroll_current.set(search.scroll_current, *labels)
        self.scroll_time.set(millis_to_seconds(search.scroll_time_in_millis), *labels)
        self.suggest_current.set(search.suggest_current, *labels)
        self.suggest_count.set(search.suggest_total, *labels)
        self.suggest_time.set(millis_to_seconds(search.suggest_time_in_millis), *labels)

        merges = idx.merges
        self.merges_current.set(merges.current, *labels)
        self.merges_current_docs.set(merges.current_docs, *labels)
        self.merges_current_size.set(merges.current_size_in_bytes, *labels)
        self.merges_total.set(merges.total, *labels)
        self.merges_total_time.set(millis_to_seconds(merges.total_time_in_millis), *labels)
        self.merges_total_docs.set(merges.total_docs, *labels)
        self.merges_total_size.set(merges.total_size_in_bytes, *labels)
        self.merges_stopped_time.set(millis_to_seconds(merges.total_stopped_time_in_millis), *labels)
        self.merges_throttled_time.set(millis_to_seconds(merges.total_throttled_time_in_millis), *labels)
        self.merges_auto_throttle.set(merges.total_auto_throttle_in_bytes, *labels)

        self.refresh_total.set(idx.refresh.total, *labels)
        self.refresh_time.set(millis_to_seconds(idx.refresh.total_time_in_millis), *labels)
        self.refresh_listeners.set(idx.refresh.listeners, *labels)
        self.flush_total.set(idx.flush.total, *labels)
        self.flush_time.set(millis_to_seconds(idx.flush.total_time_in_millis), *labels)

        qc = idx.query_cache
        self.querycache_cache_count.set(qc.cache_count, *labels)
        self.querycache_cache_size.set(qc.cache_size, *labels)
        self.querycache_evictions.set(qc.evictions, *labels)
        self.querycache_hit.set(qc.hit_count, *labels)
        self.querycache_memory.set(qc.memory_size_in_bytes, *labels)
        self.querycache_miss.set(qc.miss_count, *labels)
        self.querycache_total.set(qc.total_count, *labels)

        self.fielddata_memory.set(idx.fielddata.memory_size_in_bytes, *labels)
        self.fielddata_evictions.set(idx.fielddata.evictions, *labels)
        self.completion_size.set(idx.completion.size_in_bytes, *labels)

        self.segments_count.set(idx.segments.count, *labels)
        for memory_type, value in idx.segments.memory_by_type():
            self.segments_memory.set(value, memory_type, *labels)

        rc = idx.request_cache
        self.requestcache_memory.set(rc.memory_size_in_bytes, *labels)
        self.requestcache_hit.set(rc.hit_count, *labels)
        self.requestcache_miss.set(rc.miss_count, *labels)
        self.requestcache_evictions.set(rc.evictions, *labels)

        self.recovery_current.set(idx.recovery.current_as_source, "source", *labels)
        self.recovery_current.set(idx.recovery.current_as_target, "target", *labels)
        self.recovery_throttle_time.set(millis_to_seconds(idx.recovery.throttle_time_in_millis), *labels)

        translog = idx.translog
        self.translog_operations.set(translog.operations, *labels)
        self.translog_size.set(translog.size_in_bytes, *labels)
        self.translog_uncommitted_operations.set(translog.uncommitted_operations, *labels)
        self.translog_uncommitted_size.set(translog.uncommitted_size_in_bytes, *labels)

        self.warmer_current.set(idx.warmer.current, *labels)
        self.warmer_time.set(millis_to_seconds(idx.warmer.total_time_in_millis), *labels)
        self.warmer_count.set(idx.warmer.total, *labels)
