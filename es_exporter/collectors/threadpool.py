"""Thread pool metrics, one series per pool name."""
from __future__ import annotations

from ..metrics.groups import MetricGroup
from ..metrics.spec import COUNTER, MetricDef
from ..stats.models import ThreadPoolStats
from .base import NodeSection


class ThreadPoolMetrics(NodeSection):
    group = MetricGroup.THREADPOOL
    node_attr = "thread_pool"
    SPECS = [
        MetricDef("threads", "threadpool_threads", "Number of threads in the thread pool", labels=("name",)),
        MetricDef("queue", "threadpool_queue", "Number of tasks in queue for the thread pool", labels=("name",)),
        MetricDef("active", "threadpool_active", "Number of active threads in the thread pool", labels=("name",)),
        MetricDef("largest", "threadpool_largest", "Highest number of active threads in the thread pool", labels=("name",)),
        MetricDef("rejected", "threadpool_rejected", "Total number of tasks rejected by the thread pool executor",
                  COUNTER, labels=("name",)),
        MetricDef("completed", "threadpool_completed", "Total Number of tasks completed by the thread pool executor",
                  COUNTER, labels=("name",)),
    ]

    def populate(self, pools: list[ThreadPoolStats]) -> None:
        for pool in pools:
            self.threads.set(pool.threads, pool.name)
            self.queue.set(pool.queue, pool.name)
            self.active.set(pool.active, pool.name)
            self.largest.set(pool.largest, pool.name)
            self.rejected.inc(pool.rejected, pool.name)
            self.completed.inc(pool.completed, pool.name)
