"""JVM metrics: memory, pools, threads, garbage collectors, buffer pools, classes."""
from __future__ import annotations

from ..metrics.groups import MetricGroup
from ..metrics.spec import MetricDef
from ..metrics.units import millis_to_seconds
from ..stats.models import JvmStats
from .base import NodeSection


class JvmMetrics(NodeSection):
    group = MetricGroup.JVM
    node_attr = "jvm"
    SPECS = [
        MetricDef("uptime", "jvm_uptime_seconds", "JVM uptime"),
        MetricDef("heap_max", "jvm_mem_heap_max_bytes", "Maximum used memory in heap"),
        MetricDef("heap_used", "jvm_mem_heap_used_bytes", "Memory used in heap"),
        MetricDef("heap_used_percent", "jvm_mem_heap_used_percent", "Percentage of memory used in heap"),
        MetricDef("nonheap_used", "jvm_mem_nonheap_used_bytes", "Memory used apart from heap"),
        MetricDef("heap_committed", "jvm_mem_heap_committed_bytes", "Committed bytes in heap"),
        MetricDef("nonheap_committed", "jvm_mem_nonheap_committed_bytes", "Committed bytes apart from heap"),
        MetricDef("pool_max", "jvm_mem_pool_max_bytes", "Maximum usage of memory pool", labels=("pool",)),
        MetricDef("pool_peak_max", "jvm_mem_pool_peak_max_bytes", "Maximum usage peak of memory pool", labels=("pool",)),
        MetricDef("pool_used", "jvm_mem_pool_used_bytes", "Used memory in memory pool", labels=("pool",)),
        MetricDef("pool_peak_used", "jvm_mem_pool_peak_used_bytes", "Used memory peak in memory pool", labels=("pool",)),
        MetricDef("threads", "jvm_threads_number", "Number of threads"),
        MetricDef("threads_peak", "jvm_threads_peak_number", "Peak number of threads"),
        MetricDef("gc_count", "jvm_gc_collection_count", "Count of GC collections", labels=("gc",)),
        MetricDef("gc_time", "jvm_gc_collection_time_seconds", "Time spent for GC collections", labels=("gc",)),
        MetricDef("bufferpool_count", "jvm_bufferpool_number", "Number of buffer pools", labels=("bufferpool",)),
        MetricDef("bufferpool_capacity", "jvm_bufferpool_total_capacity_bytes", "Total capacity provided by buffer pools",
                  labels=("bufferpool",)),
        MetricDef("bufferpool_used", "jvm_bufferpool_used_bytes", "Used memory in buffer pools", labels=("bufferpool",)),
        MetricDef("classes_loaded", "jvm_classes_loaded_number", "Count of loaded classes"),
        MetricDef("classes_total_loaded", "jvm_classes_total_loaded_number", "Total count of loaded classes"),
        MetricDef("classes_unloaded", "jvm_classes_unloaded_number", "Count of unloaded classes"),
    ]

    def populate(self, jvm: JvmStats) -> None:
        self.uptime.set(millis_to_seconds(jvm.uptime_in_millis))
        mem = jvm.mem
        self.heap_max.set(mem.heap_max_in_bytes)
        self.heap_used.set(mem.heap_used_in_bytes)
        self.heap_used_percent.set(mem.heap_used_percent)
        self.nonheap_used.set(mem.non_heap_used_in_bytes)
        self.heap_committed.set(mem.heap_committed_in_bytes)
        self.nonheap_committed.set(mem.non_heap_committed_in_bytes)
        for pool in mem.pools:
            self.pool_max.set(pool.max_in_bytes, pool.name)
            self.pool_peak_max.set(pool.peak_max_in_bytes, pool.name)
            self.pool_used.set(pool.used_in_bytes, pool.name)
            self.pool_peak_used.set(pool.peak_used_in_bytes, pool.name)

        self.threads.set(jvm.threads.count)
        self.threads_peak.set(jvm.threads.peak_count)

        for gc in jvm.gc_collectors:
            self.gc_count.set(gc.collection_count, gc.name)
            self.gc_time.set(millis_to_seconds(gc.collection_time_in_millis), gc.name)

        for bp in jvm.buffer_pools:
            self.bufferpool_count.set(bp.count, bp.name)
            self.bufferpool_capacity.set(bp.total_capacity_in_bytes, bp.name)
            self.bufferpool_used.set(bp.used_in_bytes, bp.name)

        if jvm.classes is not None:
            self.classes_loaded.set(jvm.classes.current_loaded_count)
            self.classes_total_loaded.set(jvm.classes.total_loaded_count)
            self.classes_unloaded.set(jvm.classes.total_unloaded_count)
