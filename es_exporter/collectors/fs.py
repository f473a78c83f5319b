"""Filesystem metrics: totals, data paths and I/O statistics."""
from __future__ import annotations

from ..metrics.groups import MetricGroup
from ..metrics.labels import FS_PATH
from ..metrics.spec import COUNTER, MetricDef
from ..metrics.units import kilobytes_to_bytes, millis_to_seconds
from ..stats.models import FsIoStats, FsStats
from .base import NodeSection, unavailable

_B = "bytes"
_S = "seconds"
_SINCE = "since starting Elasticsearch"


class FsMetrics(NodeSection):
    group = MetricGroup.FS
    node_attr = "fs"
    SPECS = [
        MetricDef("total_total", "fs_total_total", "Total size of all file stores (mount points)", unit=_B),
        MetricDef("total_available", "fs_total_available",
                  "Total number of bytes available to this Java virtual machine on all file stores. Depending on OS or "
                  "process level restrictions, this might appear less than free_in_bytes. This is the actual amount of "
                  "free disk space the Elasticsearch node can utilise (mount points)", unit=_B),
        MetricDef("total_free", "fs_total_free", "Total number of unallocated bytes in all file stores.", unit=_B),
        MetricDef("path_total", "fs_path_total", "Total size (in bytes) of the file store", labels=FS_PATH, unit=_B),
        MetricDef("path_available", "fs_path_available",
                  "Total number of bytes available to this Java virtual machine on this file store", labels=FS_PATH, unit=_B),
        MetricDef("path_free", "fs_path_free", "Total number of unallocated bytes in the file store", labels=FS_PATH, unit=_B),
        MetricDef("io_operations", "fs_io_total_operations",
                  f"The total number of read and write operations across all devices used by Elasticsearch completed {_SINCE}"),
        MetricDef("io_read_operations", "fs_io_total_read_operations",
                  f"The total number of read operations for across all devices used by Elasticsearch completed {_SINCE}"),
        MetricDef("io_write_operations", "fs_io_total_write_operations",
                  f"The total number of write operations across all devices used by Elasticsearch completed {_SINCE}"),
        MetricDef("io_read", "fs_io_total_read",
                  f"The total number of bytes read across all devices used by Elasticsearch {_SINCE}.", unit=_B),
        MetricDef("io_write", "fs_io_total_write",
                  f"The total number of bytes written across all devices used by Elasticsearch {_SINCE}", unit=_B),
        MetricDef("io_time", "fs_io_total_io_time",
                  f"The total time in seconds spent performing I/O operations across all devices used by Elasticsearch {_SINCE}",
                  COUNTER, unit=_S),
        MetricDef("device_operations", "fs_io_device_operations",
                  f"The total number of read and write operations for the device completed {_SINCE}",
                  COUNTER, labels=("device",)),
        MetricDef("device_read_operations", "fs_io_device_read_operations",
                  f"The total number of read operations for the device completed {_SINCE}", COUNTER, labels=("device",)),
        MetricDef("device_write_operations", "fs_io_device_write_operations",
                  f"The total number of write operations for the device completed {_SINCE}", COUNTER, labels=("device",)),
        MetricDef("device_read", "fs_io_device_read", f"The total number of bytes read for the device {_SINCE}",
                  COUNTER, labels=("device",), unit=_B),
        MetricDef("device_write", "fs_io_device_write", f"The total number of bytes written for the device {_SINCE}",
                  COUNTER, labels=("device",), unit=_B),
        MetricDef("device_io_time", "fs_io_device_io_time",
                  "The total time in seconds spent performing I/O operations across all devices",
                  COUNTER, labels=("device",), unit=_S),
    ]

    def populate(self, fs: FsStats) -> None:
        self.total_total.set(fs.total.total_in_bytes)
        self.total_available.set(fs.total.available_in_bytes)
        self.total_free.set(fs.total.free_in_bytes)
        for path in fs.data:
            labels = (path.path or "", path.mount or "", path.type or "")
            self.path_total.set(path.total_in_bytes, *labels)
            self.path_available.set(path.available_in_bytes, *labels)
            self.path_free.set(path.free_in_bytes, *labels)
        if fs.io_stats is not None:
            self._populate_io(fs.io_stats)

    def _populate_io(self, io: FsIoStats) -> None:
        self.io_operations.set(io.total.operations)
        self.io_read_operations.set(io.total.read_operations)
        self.io_write_operations.set(io.total.write_operations)
        self.io_read.set(kilobytes_to_bytes(io.total.read_kilobytes))
        self.io_write.set(kilobytes_to_bytes(io.total.write_kilobytes))
        self.io_time.inc(millis_to_seconds(io.total.io_time_in_millis))
        for device in io.devices:
            name = device.device_name
            if name is None:
                unavailable(self.group, "fs.io_stats.devices[].device_name")
                continue
            self.device_operations.inc(device.operations, name)
            self.device_read_operations.inc(device.read_operations, name)
            self.device_write_operations.inc(device.write_operations, name)
            self.device_read.inc(kilobytes_to_bytes(device.read_kilobytes), name)
            self.device_write.inc(kilobytes_to_bytes(device.write_kilobytes), name)
            self.device_io_time.inc(millis_to_seconds(device.io_time_in_millis), name)
