"""Elasticsearch statistics to Prometheus exposition."""

from .metrics.catalog import MetricsCatalog
from .metrics.labels import Topology
from .orchestrator.scrape import ScrapeResult, scrape, scrape_document
from .stats.loader import load_snapshot, load_snapshot_file

__version__ = "1.0.0"

__all__ = [
    "MetricsCatalog",
    "Topology",
    "ScrapeResult",
    "scrape",
    "scrape_document",
    "load_snapshot",
    "load_snapshot_file",
    "__version__",
]
