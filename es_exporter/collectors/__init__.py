"""Collector sub-passes and the collector that drives them."""
from .collector import SECTION_TYPES, CollectorState, PrometheusMetricsCollector

__all__ = ["SECTION_TYPES", "CollectorState", "PrometheusMetricsCollector"]
