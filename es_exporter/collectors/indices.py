"""Node-level indices statistics (aggregated over the shards on the local node)."""
from __future__ import annotations

from ..metrics.groups import MetricGroup
from ..metrics.spec import COUNTER, MetricDef
from ..metrics.units import as_flag, millis_to_seconds
from ..stats.models import CommonStats
from .base import NodeSection, unavailable

_S = "seconds"
_B = "bytes"


class IndicesMetrics(NodeSection):
    group = MetricGroup.INDICES
    node_attr = "indices"
    SPECS = [
        MetricDef("doc_count", "indices_doc_number",
                  "The number of documents across all local node primary shards. This excludes deleted documents and "
                  "counts any nested documents separately from their parents. It also excludes documents which were "
                  "indexed recently and do not yet belong to a segment"),
        MetricDef("doc_deleted", "indices_doc_deleted_number",
                  "The number of deleted documents across all local primary shards, which may be higher or lower than "
                  "the number of delete operations you have performed. This number excludes deletes that were performed "
                  "recently and do not yet belong to a segment"),
        MetricDef("shards_total", "indices_shards_stats_total_count", "The total(current) number of shards assigned to the node"),
        MetricDef("store_size", "indices_store_size", "Total size, in bytes, of all shards assigned to the node", unit=_B),
        MetricDef("store_data_set_size", "indices_store_data_set_size",
                  "Total data set size, in bytes, of all shards assigned to the node. This includes the size of shards "
                  "not stored fully on the node, such as the cache for partially mounted indices", unit=_B),
        MetricDef("store_reserved_size", "indices_store_reserved_size",
                  "A prediction, in bytes, of how much larger the shard stores on this node will eventually grow due to "
                  "ongoing peer recoveries, restoring snapshots, and similar activities. A value of -1 indicates that "
                  "this is not available", unit=_B),
        MetricDef("delete_count", "indices_indexing_delete_count", "Total number of deletion operations"),
        MetricDef("delete_current", "indices_indexing_delete_current_number", "Number of deletion operations currently running"),
        MetricDef("delete_time", "indices_indexing_delete_time", "Time in seconds spent performing deletion operations.", unit=_S),
        MetricDef("index_count", "indices_indexing_index_count", "Total number of indexing operations"),
        MetricDef("index_current", "indices_indexing_index_current_number", "Number of indexing operations currently running"),
        MetricDef("index_failed", "indices_indexing_index_failed_count", "Total number of failed indexing operations"),
        MetricDef("index_time", "indices_indexing_index_time", "Total time in seconds spent performing indexing operations", unit=_S),
        MetricDef("noop_update", "indices_indexing_noop_update_count", "Total number of noop operations"),
        MetricDef("is_throttled", "indices_indexing_is_throttled_bool", "Is indexing throttling ?"),
        MetricDef("throttle_time", "indices_indexing_throttle_time", "Total time in seconds spent throttling operations", unit=_S),
        MetricDef("get_count", "indices_get_count", "Total number of 'get' operations"),
        MetricDef("get_time", "indices_get_time", "Time in seconds spent performing 'get' operations", unit=_S),
        MetricDef("get_exists_count", "indices_get_exists_count", "Total number of successful 'get' operations"),
        MetricDef("get_exists_time", "indices_get_exists_time", "Time in seconds spent performing successful 'get' operations", unit=_S),
        MetricDef("get_missing_count", "indices_get_missing_count", "Total number of failed 'get' operations"),
        MetricDef("get_missing_time", "indices_get_missing_time", "Time in seconds spent performing failed 'get' operations", unit=_S),
        MetricDef("get_current", "indices_get_current_number", "Number of 'get' operations currently running"),
        MetricDef("open_contexts", "indices_search_open_contexts_number", "Number of search open contexts"),
        MetricDef("query_count", "indices_search_query_count", "Total number of query operations"),
        MetricDef("query_current", "indices_search_query_current_number", "Number of query operations currently running"),
        MetricDef("query_time", "indices_search_query_time", "Time in seconds spent performing query operations", unit=_S),
        MetricDef("fetch_count", "indices_search_fetch_count", "Total number of fetch operations"),
        MetricDef("fetch_current", "indices_search_fetch_current_number", "Number of fetch operations currently running"),
        MetricDef("fetch_time", "indices_search_fetch_time", "Time in seconds spent performing fetch operations", unit=_S),
        MetricDef("scroll_count", "indices_search_scroll_count", "Total number of scroll operations"),
        MetricDef("scroll_current", "indices_search_scroll_current_number", "Number of scroll operations currently running"),
        MetricDef("scroll_time", "indices_search_scroll_time", "Time in seconds spent performing scroll operations", unit=_S),
        MetricDef("suggest_count", "indices_search_suggest_count", "Total number of suggest operations"),
        MetricDef("suggest_current", "indices_search_suggest_current_number", "Number of suggest operations currently running"),
        MetricDef("suggest_time", "indices_search_suggest_time", "Time in seconds spent performing suggest operations", unit=_S),
        MetricDef("merges_current", "indices_merges_current_number", "Number of merge operations currently running"),
        MetricDef("merges_current_docs", "indices_merges_current_docs_number", "Number of document merges currently running"),
        MetricDef("merges_current_size", "indices_merges_current_size", "Memory, in bytes, used performing current document merges.", unit=_B),
        MetricDef("merges_total", "indices_merges_total_number", "Total number of merge operations"),
        MetricDef("merges_total_time", "indices_merges_total_time", "Total time in seconds spent performing merge operations", unit=_S),
        MetricDef("merges_total_docs", "indices_merges_total_docs_count", "Total number of merged documents"),
        MetricDef("merges_total_size", "indices_merges_total_size", "Total size of document merges in bytes", unit=_B),
        MetricDef("merges_stopped_time", "indices_merges_total_stopped_time", "Total time in seconds spent stopping merge operations", unit=_S),
        MetricDef("merges_throttled_time", "indices_merges_total_throttled_time", "Total time in seconds spent throttling merge operations.", unit=_S),
        MetricDef("merges_auto_throttle", "indices_merges_total_auto_throttle", "Size, in bytes, of automatically throttled merge operations", unit=_B),
        MetricDef("refresh_total", "indices_refresh_total_count", "Total number of refresh operations"),
        MetricDef("refresh_time", "indices_refresh_total_time", "Total time in seconds spent performing refresh operations", unit=_S),
        MetricDef("refresh_external_total", "indices_refresh_external_total_count", "Total number of external refresh operations"),
        MetricDef("refresh_external_time", "indices_refresh_external_total_time",
                  "Total time in seconds spent performing external refresh operations", unit=_S),
        MetricDef("refresh_listeners", "indices_refresh_listeners_number", "Number of refresh listeners"),
        MetricDef("flush_total", "indices_flush_total_count", "Total number of flush operations"),
        MetricDef("flush_periodic", "indices_flush_periodic", "Total number of periodic flush operations", COUNTER),
        MetricDef("flush_time", "indices_flush_total_time", "Total time in seconds spent performing flush operations.", unit=_S),
        MetricDef("warmer_current", "indices_warmer_current_number", "Number of active index warmers operations"),
        MetricDef("warmer_total", "indices_warmer", "Total number of index warmers operations", COUNTER),
        MetricDef("warmer_time", "indices_warmer_time", "Total time in seconds spent performing index warming operations",
                  COUNTER, unit=_S),
        MetricDef("querycache_memory", "indices_querycache_memory_size",
                  "Total amount of memory, in bytes, used for the query cache across all shards assigned to the node", unit=_B),
        MetricDef("querycache_total", "indices_querycache_total_number", "Total count of hits, misses, and cached queries in the query cache"),
        MetricDef("querycache_hit", "indices_querycache_hit_count", "Number of query cache hits"),
        MetricDef("querycache_miss", "indices_querycache_miss_number", "Number of query cache misses"),
        MetricDef("querycache_cache_size", "indices_querycache_cache_size", "Size, in bytes, of the query cache", unit=_B),
        MetricDef("querycache_cache_count", "indices_querycache_cache_count", "Count of queries in the query cache"),
        MetricDef("querycache_evictions", "indices_querycache_evictions_count", "Number of query cache evictions"),
        MetricDef("fielddata_memory", "indices_fielddata_memory_size",
                  "Total amount of memory, in bytes, used for the field data cache across all shards assigned to the node", unit=_B),
        MetricDef("fielddata_evictions", "indices_fielddata_evictions_count", "Total number of fielddata evictions"),
        MetricDef("completion_size", "indices_completion_size",
                  "Total amount of memory, in bytes, used for completion across all shards assigned to the node", unit=_B),
        MetricDef("segments_count", "indices_segments_number", "Current number of segments"),
        MetricDef("segments_memory", "indices_segments_memory",
                  "Total amount of memory, in bytes, used for segments across all shards assigned to the node",
                  labels=("type",), unit=_B),
        MetricDef("segments_max_unsafe_auto_id", "indices_segments_max_unsafe_auto_id_timestamp",
                  "Time of the most recently retried indexing request. Recorded in seconds since the Unix Epoch."),
        MetricDef("translog_operations", "indices_translog_operations_number", "Number of transaction log operations"),
        MetricDef("translog_size", "indices_translog_size", "Size, in bytes, of the transaction log", unit=_B),
        MetricDef("translog_uncommitted_operations", "indices_translog_uncommitted_operations_number",
                  "Number of uncommitted transaction log operations"),
        MetricDef("translog_uncommitted_size", "indices_translog_uncommitted_size",
                  "Size, in bytes, of uncommitted transaction log operations", unit=_B),
        MetricDef("translog_earliest_age", "indices_translog_earliest_last_modified_age",
                  "Earliest last modified age in seconds for the transaction log"),
        MetricDef("requestcache_memory", "indices_requestcache_memory_size_bytes", "Memory, in bytes, used by the request cache."),
        MetricDef("requestcache_hit", "indices_requestcache_hit_count", "Number of request cache hits."),
        MetricDef("requestcache_miss", "indices_requestcache_miss_count", "Number of request cache misses"),
        MetricDef("requestcache_evictions", "indices_requestcache_evictions_count", "Number of evictions in request cache"),
        MetricDef("recovery_current", "indices_recovery_current_number", "Current number of recoveries", labels=("type",)),
        MetricDef("recovery_throttle_time", "indices_recovery_throttle_time", "Time spent while throttling recoveries", unit=_S),
    ]

    def populate(self, idx: CommonStats) -> None:
        self.doc_count.set(idx.docs.count)
        self.doc_deleted.set(idx.docs.deleted)
        if idx.shard_stats is None or idx.shard_stats.total_count is None:
            unavailable(self.group, "indices.shard_stats.total_count")
        else:
            self.shards_total.set(idx.shard_stats.total_count)
        self.store_size.set(idx.store.size_in_bytes)
        self.store_data_set_size.set(idx.store.total_data_set_size_in_bytes)
        self.store_reserved_size.set(idx.store.reserved_in_bytes)

        indexing = idx.indexing
        self.delete_count.set(indexing.delete_total)
        self.delete_current.set(indexing.delete_current)
        self.delete_time.set(millis_to_seconds(indexing.delete_time_in_millis))
        self.index_count.set(indexing.index_total)
        self.index_current.set(indexing.index_current)
        self.index_failed.set(indexing.index_failed)
        self.index_time.set(millis_to_seconds(indexing.index_time_in_millis))
        self.noop_update.set(indexing.noop_update_total)
        self.is_throttled.set(as_flag(indexing.is_throttled))
        self.throttle_time.set(millis_to_seconds(indexing.throttle_time_in_millis))

        get = idx.get
        self.get_count.set(get.total)
        self.get_time.set(millis_to_seconds(get.time_in_millis))
        self.get_exists_count.set(get.exists_total)
        self.get_exists_time.set(millis_to_seconds(get.exists_time_in_millis))
        self.get_missing_count.set(get.missing_total)
        self.get_missing_time.set(millis_to_seconds(get.missing_time_in_millis))
        self.get_current.set(get.current)

        search = idx.search
        self.open_contexts.set(search.open_contexts)
        self.query_count.set(search.query_total)
        self.query_current.set(search.query_current)
        self.query_time.set(millis_to_seconds(search.query_time_in_millis))
        self.fetch_count.set(search.fetch_total)
        self.fetch_current.set(search.fetch_current)
        self.fetch_time.set(millis_to_seconds(search.fetch_time_in_millis))
        self.scroll_count.set(search.scroll_total)
        self.scroll_current.set(search.scroll_current)
        self.scroll_time.set(millis_to_seconds(search.scroll_time_in_millis))
        self.suggest_count.set(search.suggest_total)
        self.suggest_current.set(search.suggest_current)
        self.suggest_time.set(millis_to_seconds(search.suggest_time_in_millis))

        merges = idx.merges
        self.merges_current.set(merges.current)
        self.merges_current_docs.set(merges.current_docs)
        self.merges_current_size.set(merges.current_size_in_bytes)
        self.merges_total.set(merges.total)
        self.merges_total_time.set(millis_to_seconds(merges.total_time_in_millis))
        self.merges_total_docs.set(merges.total_docs)
        self.merges_total_size.set(merges.total_size_in_bytes)
        self.merges_stopped_time.set(millis_to_seconds(merges.total_stopped_time_in_millis))
        self.merges_throttled_time.set(millis_to_seconds(merges.total_throttled_time_in_millis))
        self.merges_auto_throttle.set(merges.total_auto_throttle_in_bytes)

        refresh = idx.refresh
        self.refresh_total.set(refresh.total)
        self.refresh_time.set(millis_to_seconds(refresh.total_time_in_millis))
        self.refresh_external_total.set(refresh.external_total)
        self.refresh_external_time.set(millis_to_seconds(refresh.external_total_time_in_millis))
        self.refresh_listeners.set(refresh.listeners)

        self.flush_total.set(idx.flush.total)
        self.flush_periodic.inc(idx.flush.periodic)
        self.flush_time.set(millis_to_seconds(idx.flush.total_time_in_millis))

        self.warmer_current.set(idx.warmer.current)
        self.warmer_total.inc(idx.warmer.total)
        self.warmer_time.inc(millis_to_seconds(idx.warmer.total_time_in_millis))

        qc = idx.query_cache
        self.querycache_memory.set(qc.memory_size_in_bytes)
        self.querycache_total.set(qc.total_count)
        self.querycache_hit.set(qc.hit_count)
        self.querycache_miss.set(qc.miss_count)
        self.querycache_cache_size.set(qc.cache_size)
        self.querycache_cache_count.set(qc.cache_count)
        self.querycache_evictions.set(qc.evictions)

        self.fielddata_memory.set(idx.fielddata.memory_size_in_bytes)
        self.fielddata_evictions.set(idx.fielddata.evictions)
        self.completion_size.set(idx.completion.size_in_bytes)

        self.segments_count.set(idx.segments.count)
        for memory_type, value in idx.segments.memory_by_type():
            self.segments_memory.set(value, memory_type)
        self.segments_max_unsafe_auto_id.set(millis_to_seconds(idx.segments.max_unsafe_auto_id_timestamp))

        translog = idx.translog
        self.translog_operations.set(translog.operations)
        self.translog_size.set(translog.size_in_bytes)
        self.translog_uncommitted_operations.set(translog.uncommitted_operations)
        self.translog_uncommitted_size.set(translog.uncommitted_size_in_bytes)
        self.translog_earliest_age.set(millis_to_seconds(translog.earliest_last_modified_age))

        rc = idx.request_cache
        self.requestcache_memory.set(rc.memory_size_in_bytes)
        self.requestcache_hit.set(rc.hit_count)
        self.requestcache_miss.set(rc.miss_count)
        self.requestcache_evictions.set(rc.evictions)

        self.recovery_current.set(idx.recovery.current_as_source, "source")
        self.recovery_current.set(idx.recovery.current_as_target, "target")
        self.recovery_throttle_time.set(millis_to_seconds(idx.recovery.throttle_time_in_millis))
