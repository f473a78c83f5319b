"""Scrape orchestration.

One scrape = one fresh catalog: capture topology from the snapshot, register
every family, populate from the snapshot, render in the negotiated format.
Nothing survives between scrapes, so concurrent scrapes never share state.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..collectors.collector import PrometheusMetricsCollector
from ..config.settings import ExporterSettings, get_settings
from ..metrics.catalog import MetricsCatalog
from ..metrics.groups import MetricGroup
from ..stats.loader import load_snapshot
from ..stats.models import StatisticsSnapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScrapeResult:
    text: str
    content_type: str
    catalog: MetricsCatalog = field(repr=False)
    populated: tuple[MetricGroup, ...] = ()


def scrape(
    snapshot: StatisticsSnapshot,
    settings: ExporterSettings | None = None,
    accept_header: str | None = None,
) -> ScrapeResult:
    """Render ``snapshot`` as a Prometheus exposition payload.

    Catalog and collector errors propagate; a failed scrape yields no payload.
    """
    if settings is None:
        settings = get_settings()
    topology = snapshot.topology()
    catalog = MetricsCatalog(
        topology,
        settings.metric_prefix,
        runtime_collectors=settings.runtime_collectors,
    )
    collector = PrometheusMetricsCollector(catalog, settings)
    collector.register_all()
    populated = collector.update_all(snapshot)
    text, content_type = catalog.render(accept_header)
    logger.debug(
        "scrape for %s/%s: %d families, %d groups populated, %d bytes as %s",
        topology.cluster, topology.node, len(catalog), len(populated), len(text), content_type,
    )
    return ScrapeResult(text, content_type, catalog, tuple(populated))


def scrape_document(
    document: Mapping[str, Any],
    settings: ExporterSettings | None = None,
    accept_header: str | None = None,
) -> ScrapeResult:
    return scrape(load_snapshot(document), settings, accept_header)


__all__ = ["ScrapeResult", "scrape", "scrape_document"]
