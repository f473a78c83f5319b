"""Collector: registers every metric family, then populates them from a snapshot.

One collector serves one catalog for one scrape and moves through three
states::

    UNREGISTERED --register_all()--> REGISTERED --update_all()--> UPDATED

Any other call order raises ``CollectorStateError``.
"""
from __future__ import annotations

import logging
from enum import Enum

from ..config.settings import ExporterSettings
from ..metrics.aliases import register_aliases
from ..metrics.catalog import MetricsCatalog
from ..metrics.families import SummaryFamily
from ..metrics.groups import MetricGroup
from ..stats.models import StatisticsSnapshot
from ..utils.exceptions import CollectorStateError
from .base import StatsSection
from .breakers import CircuitBreakerMetrics
from .cluster import ClusterHealthMetrics
from .cluster_settings import ClusterSettingsMetrics
from .fs import FsMetrics
from .http_stats import HttpMetrics
from .indexing_pressure import IndexingPressureMetrics
from .indices import IndicesMetrics
from .ingest import IngestMetrics
from .jvm import JvmMetrics
from .node import NodeMetrics
from .os_stats import OsMetrics
from .per_index import PerIndexMetrics
from .process import ProcessMetrics
from .script import ScriptMetrics
from .threadpool import ThreadPoolMetrics
from .transport import TransportMetrics

logger = logging.getLogger(__name__)

TIMER_NAME = "metrics_generate_time"
TIMER_HELP = "Time spent while generating metrics"

# Update order
SECTION_TYPES: tuple[type[StatsSection], ...] = (
    ClusterHealthMetrics,
    NodeMetrics,
    IndicesMetrics,
    PerIndexMetrics,
    TransportMetrics,
    HttpMetrics,
    ThreadPoolMetrics,
    IngestMetrics,
    CircuitBreakerMetrics,
    ScriptMetrics,
    ProcessMetrics,
    JvmMetrics,
    OsMetrics,
    FsMetrics,
    IndexingPressureMetrics,
    ClusterSettingsMetrics,
)


class CollectorState(str, Enum):
    UNREGISTERED = "unregistered"
    REGISTERED = "registered"
    UPDATED = "updated"


class PrometheusMetricsCollector:
    def __init__(self, catalog: MetricsCatalog, settings: ExporterSettings | None = None) -> None:
        self.catalog = catalog
        self.settings = settings if settings is not None else ExporterSettings()
        filters = self.settings.group_filters
        self.sections: list[StatsSection] = [cls() for cls in SECTION_TYPES if filters.allowed(cls.group)]
        skipped = [cls.group.value for cls in SECTION_TYPES if not filters.allowed(cls.group)]
        if skipped:
            logger.debug("metric groups disabled: %s", ", ".join(skipped))
        self._timer: SummaryFamily | None = None
        self._state = CollectorState.UNREGISTERED

    @property
    def state(self) -> CollectorState:
        return self._state

    def register_all(self) -> None:
        """Register the scrape timer, every enabled sub-pass and the legacy aliases."""
        if self._state is not CollectorState.UNREGISTERED:
            raise CollectorStateError(f"register_all() called in state {self._state.value}; families are already registered")
        self._timer = self.catalog.register_summary_timer(TIMER_NAME, TIMER_HELP, unit="seconds")
        for section in self.sections:
            section.register(self.catalog)
        if self.settings.group_filters.allowed(MetricGroup.DEPRECATED_ALIASES):
            register_aliases(self.catalog)
        self._state = CollectorState.REGISTERED
        logger.debug("registered %d metric families", len(self.catalog))

    def _gate_open(self, group: MetricGroup) -> bool:
        if group is MetricGroup.PER_INDEX:
            return self.settings.indices_enabled
        if group is MetricGroup.CLUSTER_SETTINGS:
            return self.settings.cluster_settings_enabled
        return True

    def update_all(self, snapshot: StatisticsSnapshot) -> list[MetricGroup]:
        """Populate every registered family from ``snapshot``.

        Returns the groups whose sub-structure was present and written.
        """
        if self._state is CollectorState.UNREGISTERED:
            raise CollectorStateError("update_all() requires register_all() first")
        if self._state is CollectorState.UPDATED:
            raise CollectorStateError("update_all() already ran; build a new catalog for the next scrape")
        # consumed even if a sub-pass fails midway
        self._state = CollectorState.UPDATED
        populated: list[MetricGroup] = []
        with self._timer.time():
            for section in self.sections:
                if not self._gate_open(section.group):
                    logger.debug("%s: disabled by settings", section.group.value)
                    continue
                if section.update(snapshot):
                    populated.append(section.group)
        return populated


__all__ = ["CollectorState", "PrometheusMetricsCollector", "SECTION_TYPES", "TIMER_NAME"]
