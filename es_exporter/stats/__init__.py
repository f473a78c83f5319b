"""Statistics snapshot model and loaders."""
from .loader import load_node_stats, load_snapshot, load_snapshot_file
from .models import AllocationSettings, HealthStatus, NodeStats, StatisticsSnapshot
from .watermarks import parse_watermark

__all__ = [
    "AllocationSettings",
    "HealthStatus",
    "NodeStats",
    "StatisticsSnapshot",
    "load_node_stats",
    "load_snapshot",
    "load_snapshot_file",
    "parse_watermark",
]
