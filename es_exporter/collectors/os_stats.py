"""Operating system metrics: CPU, load, memory, swap and cgroup accounting."""
from __future__ import annotations

import logging

from ..metrics.groups import MetricGroup
from ..metrics.spec import INFO, MetricDef
from ..metrics.units import micros_to_seconds, nanos_to_seconds, parse_number
from ..stats.models import OsStats
from .base import NodeSection

logger = logging.getLogger(__name__)

_B = "bytes"
_S = "seconds"
_CGROUP = "cgroup as the Elasticsearch process"


class OsMetrics(NodeSection):
    group = MetricGroup.OS
    node_attr = "os"
    SPECS = [
        MetricDef("cpu_percent", "os_cpu_percent", "Recent CPU usage for the whole system"),
        MetricDef("load_1m", "os_load_average_one_minute", "One-minute load average on the system"),
        MetricDef("load_5m", "os_load_average_five_minutes", "Five-minute load average on the system"),
        MetricDef("load_15m", "os_load_average_fifteen_minutes", "Fifteen-minute load average on the system"),
        MetricDef("mem_free", "os_mem_free", "Amount of free physical memory in bytes", unit=_B),
        MetricDef("mem_free_percent", "os_mem_free_percent", "Percentage of free memory"),
        MetricDef("mem_used", "os_mem_used", "Amount of used physical memory in bytes", unit=_B),
        MetricDef("mem_used_percent", "os_mem_used_percent", "Percentage of used memory"),
        MetricDef("mem_total", "os_mem_total", "Total amount of physical memory in bytes", unit=_B),
        MetricDef("swap_free", "os_swap_free", "Amount of free swap space in bytes", unit=_B),
        MetricDef("swap_used", "os_swap_used", "Amount of used swap space in bytes", unit=_B),
        MetricDef("swap_total", "os_swap_total", "Total amount of swap space in bytes", unit=_B),
        MetricDef("control_group", "os_cgroup_control_group",
                  "The cpuacct control group to which the Elasticsearch process belongs", INFO, labels=("group", "path")),
        MetricDef("cpuacct_usage", "os_cgroup_cpuacct_usage",
                  f"The total CPU time (in seconds) consumed by all tasks in the same {_CGROUP}", unit=_S),
        MetricDef("cfs_period", "os_cgroup_cpu_cfs_period",
                  f"The period of time (in seconds) for how regularly all tasks in the same {_CGROUP} "
                  "should have their access to CPU resources reallocated", unit=_S),
        MetricDef("cfs_quota", "os_cgroup_cpu_cfs_quota",
                  f"The total amount of time (in seconds) for which all tasks in the same {_CGROUP} "
                  "can run during one period cfs_period_micros", unit=_S),
        MetricDef("cfs_elapsed_periods", "os_cgroup_cpu_cfs_stat_number_of_elapsed_periods",
                  "The number of reporting periods (as specified by cfs_period_micros) that have elapsed"),
        MetricDef("cfs_times_throttled", "os_cgroup_cpu_cfs_stat_number_of_times_throttled",
                  f"The number of times all tasks in the same {_CGROUP} have been throttled"),
        MetricDef("cfs_time_throttled", "os_cgroup_cpu_cfs_stat_time_throttled",
                  f"The total amount of time (in seconds) for which all tasks in the same {_CGROUP} have been throttled",
                  unit=_S),
        MetricDef("memory_limit", "os_cgroup_memory_limit",
                  f"The maximum amount of user memory (including file cache) allowed for all tasks in the same {_CGROUP}",
                  unit=_B),
        MetricDef("memory_usage", "os_cgroup_memory_usage",
                  f"The total current memory usage by processes in the cgroup (in bytes) by all tasks in the same {_CGROUP}",
                  unit=_B),
    ]

    def populate(self, os_stats: OsStats) -> None:
        cpu = os_stats.cpu
        if cpu is not None:
            self.cpu_percent.set(cpu.percent)
            load = cpu.load_average
            if load is not None and len(load) == 3:
                self.load_1m.set(load[0])
                self.load_5m.set(load[1])
                self.load_15m.set(load[2])
            elif load:
                logger.debug("partial load average %s reported; load series skipped", load)

        mem = os_stats.mem
        if mem is not None:
            self.mem_free.set(mem.free_in_bytes)
            self.mem_free_percent.set(mem.free_percent)
            self.mem_used.set(mem.used_in_bytes)
            self.mem_used_percent.set(mem.used_percent)
            self.mem_total.set(mem.total_in_bytes)

        swap = os_stats.swap
        if swap is not None:
            self.swap_free.set(swap.free_in_bytes)
            self.swap_used.set(swap.used_in_bytes)
            self.swap_total.set(swap.total_in_bytes)

        cgroup = os_stats.cgroup
        if cgroup is None:
            return
        for group_name, path in (
            ("cpuacct", cgroup.cpuacct.control_group),
            ("cpu", cgroup.cpu.control_group),
            ("memory", cgroup.memory.control_group),
        ):
            if path is not None:
                self.control_group.info(group_name, path)
        self.cpuacct_usage.set(nanos_to_seconds(cgroup.cpuacct.usage_nanos))
        self.cfs_period.set(micros_to_seconds(cgroup.cpu.cfs_period_micros))
        self.cfs_quota.set(micros_to_seconds(cgroup.cpu.cfs_quota_micros))
        self.cfs_elapsed_periods.set(cgroup.cpu.stat.number_of_elapsed_periods)
        self.cfs_times_throttled.set(cgroup.cpu.stat.number_of_times_throttled)
        self.cfs_time_throttled.set(nanos_to_seconds(cgroup.cpu.stat.time_throttled_nanos))
        self.memory_limit.set(parse_number(cgroup.memory.limit_in_bytes))
        self.memory_usage.set(parse_number(cgroup.memory.usage_in_bytes))
