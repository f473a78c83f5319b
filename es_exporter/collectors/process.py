"""Process metrics of the Elasticsearch node.

``process_cpu_seconds`` and the file descriptor pair are exported without a
prefix or topology labels, under the standard Prometheus process metric names.
"""
from __future__ import annotations

from ..metrics.groups import MetricGroup
from ..metrics.spec import COUNTER, UNSCOPED, MetricDef
from ..metrics.units import millis_to_seconds, supported
from ..stats.models import ProcessStats
from .base import NodeSection, unavailable


class ProcessMetrics(NodeSection):
    group = MetricGroup.PROCESS
    node_attr = "process"
    SPECS = [
        MetricDef("cpu_seconds", "process_cpu_seconds", "Total user and system CPU time spent in seconds.",
                  COUNTER, UNSCOPED),
        MetricDef("open_fds", "process_open_fds", "Number of open file descriptors.", scope=UNSCOPED),
        MetricDef("max_fds", "process_max_fds", "Maximum number of open file descriptors.", scope=UNSCOPED),
        MetricDef("cpu_percent", "process_cpu_percent",
                  "CPU usage in percent, or -1 if not known at the time the stats are computed."),
        MetricDef("cpu_time", "process_cpu_time",
                  "CPU time (in seconds) used by the process on which the Java virtual machine is running, "
                  "or -1 if not supported.", unit="seconds"),
        MetricDef("mem_total_virtual", "process_mem_total_virtual",
                  "Size in bytes of virtual memory that is guaranteed to be available to the running process",
                  unit="bytes"),
        MetricDef("fds_open", "process_file_descriptors_open_number",
                  "Number of opened file descriptors associated with the current or -1 if not supported"),
        MetricDef("fds_max", "process_file_descriptors_max_number",
                  "Maximum number of file descriptors allowed on the system, or -1 if not supported"),
    ]

    def populate(self, ps: ProcessStats) -> None:
        cpu_seconds = millis_to_seconds(ps.cpu.total_in_millis)
        if ps.cpu.total_in_millis is not None and ps.cpu.total_in_millis < 0:
            unavailable(self.group, "process.cpu.total_in_millis")
        self.cpu_seconds.inc(supported(cpu_seconds))
        self.open_fds.set(supported(ps.open_file_descriptors))
        self.max_fds.set(supported(ps.max_file_descriptors))
        self.cpu_percent.set(ps.cpu.percent)
        self.cpu_time.set(cpu_seconds)
        self.mem_total_virtual.set(ps.mem.total_virtual_in_bytes)
        self.fds_open.set(ps.open_file_descriptors)
        self.fds_max.set(ps.max_file_descriptors)
