"""Metrics package public interface.

Stable import surfaces:
	from es_exporter.metrics import MetricsCatalog, Topology, LabelScope
	from es_exporter.metrics.groups import load_group_filters
	from es_exporter.metrics.aliases import register_aliases
"""

from __future__ import annotations

from .catalog import DEFAULT_METRIC_PREFIX, MetricsCatalog
from .families import (
	CounterFamily,
	EnumFamily,
	GaugeFamily,
	InfoFamily,
	MetricFamily,
	MetricKind,
	SummaryFamily,
	TimerHandle,
)
from .labels import LabelScope, MetricLabel, Topology

__all__ = [
	"DEFAULT_METRIC_PREFIX",
	"MetricsCatalog",
	"MetricFamily",
	"MetricKind",
	"CounterFamily",
	"GaugeFamily",
	"EnumFamily",
	"InfoFamily",
	"SummaryFamily",
	"TimerHandle",
	"LabelScope",
	"MetricLabel",
	"Topology",
]
