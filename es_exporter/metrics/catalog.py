"""Per-scrape metric catalog.

The catalog owns one ``CollectorRegistry`` and the mapping from metric name
to typed family handle. It is built for a single scrape and discarded after
rendering; nothing in it is shared between scrapes.

Usage::

    catalog = MetricsCatalog(Topology("prod", "node-1", "abc123"))
    docs = catalog.register_node_gauge("indices_doc_number", "Documents")
    docs.set(42)
    text = catalog.render_text()

Registration must happen exactly once per name before any update. The
name-keyed setters (``set_gauge`` and friends) resolve the handle from the
registered name and exist for callers that do not keep handles around.
"""
from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from typing import Any, TypeVar

from prometheus_client import CollectorRegistry, Counter, Enum, Gauge, Info, Summary
from prometheus_client.gc_collector import GCCollector
from prometheus_client.platform_collector import PlatformCollector

from ..utils.exceptions import CatalogError, DuplicateMetricError, MetricKindError, UnknownMetricError
from .exposition import render_registry, resolve_content_type
from .families import (
    FAMILY_TYPES,
    CounterFamily,
    EnumFamily,
    GaugeFamily,
    InfoFamily,
    MetricFamily,
    MetricKind,
    SummaryFamily,
    TimerHandle,
)
from .labels import LabelScope, Topology, compose_label_names

logger = logging.getLogger(__name__)

DEFAULT_METRIC_PREFIX = "es_"

_TYPE_MAP: dict[MetricKind, Any] = {
    MetricKind.COUNTER: Counter,
    MetricKind.GAUGE: Gauge,
    MetricKind.SUMMARY: Summary,
    MetricKind.ENUM: Enum,
    MetricKind.INFO: Info,
}

# Kinds prometheus_client accepts a unit for
_UNIT_KINDS = {MetricKind.COUNTER, MetricKind.GAUGE, MetricKind.SUMMARY}

F = TypeVar("F", bound=MetricFamily)


def exposed_name(prefix: str, name: str, unit: str | None = None) -> str:
    """Name as rendered (before any ``_total`` counter suffix)."""
    full = f"{prefix}{name}"
    if unit and not full.endswith(f"_{unit}"):
        full = f"{full}_{unit}"
    return full


class MetricsCatalog:
    def __init__(
        self,
        topology: Topology,
        metric_prefix: str = DEFAULT_METRIC_PREFIX,
        registry: CollectorRegistry | None = None,
        runtime_collectors: bool = False,
    ) -> None:
        self.topology = topology
        self.metric_prefix = metric_prefix
        self.registry = registry if registry is not None else CollectorRegistry()
        self._families: dict[str, MetricFamily] = {}
        if runtime_collectors:
            PlatformCollector(registry=self.registry)
            GCCollector(registry=self.registry)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    def _register(
        self,
        kind: MetricKind,
        name: str,
        documentation: str,
        labels: Sequence[str],
        scope: LabelScope,
        unit: str | None = None,
        states: Sequence[str] | None = None,
    ) -> MetricFamily:
        if name in self._families:
            raise DuplicateMetricError(f"metric {name!r} already registered")
        prefix = self.metric_prefix if scope is not LabelScope.NONE else ""
        schema = compose_label_names(scope, labels)
        kwargs: dict[str, Any] = {"labelnames": schema, "registry": self.registry}
        if unit and kind in _UNIT_KINDS:
            kwargs["unit"] = unit
        if kind is MetricKind.ENUM:
            kwargs["states"] = list(states or ())
        try:
            collector = _TYPE_MAP[kind](f"{prefix}{name}", documentation, **kwargs)
        except ValueError as exc:
            if "Duplicated" in str(exc):
                raise DuplicateMetricError(f"metric {name!r} collides with a registered series: {exc}") from exc
            raise CatalogError(f"invalid definition for {name!r}: {exc}") from exc
        family_cls = FAMILY_TYPES[kind]
        extra: dict[str, Any] = {"states": tuple(states or ())} if kind is MetricKind.ENUM else {}
        family = family_cls(
            name,
            exposed_name(prefix, name, unit if kind in _UNIT_KINDS else None),
            documentation,
            scope,
            labels,
            self.topology,
            collector,
            unit=unit,
            **extra,
        )
        self._families[name] = family
        logger.debug("Registered %s %s %s", scope.value, kind.value, family.full_name)
        return family

    def register_counter(self, name: str, documentation: str, *labels: str) -> CounterFamily:
        return self._register(MetricKind.COUNTER, name, documentation, labels, LabelScope.NONE)  # type: ignore[return-value]

    def register_gauge(self, name: str, documentation: str, *labels: str) -> GaugeFamily:
        return self._register(MetricKind.GAUGE, name, documentation, labels, LabelScope.NONE)  # type: ignore[return-value]

    def register_cluster_counter(self, name: str, documentation: str, *labels: str, unit: str | None = None) -> CounterFamily:
        return self._register(MetricKind.COUNTER, name, documentation, labels, LabelScope.CLUSTER, unit)  # type: ignore[return-value]

    def register_cluster_gauge(self, name: str, documentation: str, *labels: str, unit: str | None = None) -> GaugeFamily:
        return self._register(MetricKind.GAUGE, name, documentation, labels, LabelScope.CLUSTER, unit)  # type: ignore[return-value]

    def register_node_counter(self, name: str, documentation: str, *labels: str, unit: str | None = None) -> CounterFamily:
        return self._register(MetricKind.COUNTER, name, documentation, labels, LabelScope.NODE, unit)  # type: ignore[return-value]

    def register_node_gauge(self, name: str, documentation: str, *labels: str, unit: str | None = None) -> GaugeFamily:
        return self._register(MetricKind.GAUGE, name, documentation, labels, LabelScope.NODE, unit)  # type: ignore[return-value]

    def register_enum(
        self,
        name: str,
        documentation: str,
        states: Sequence[str],
        *labels: str,
        scope: LabelScope = LabelScope.CLUSTER,
    ) -> EnumFamily:
        if not states:
            raise CatalogError(f"enum {name!r} needs at least one state")
        return self._register(MetricKind.ENUM, name, documentation, labels, scope, states=states)  # type: ignore[return-value]

    def register_cluster_enum(self, name: str, documentation: str, states: Sequence[str], *labels: str) -> EnumFamily:
        return self.register_enum(name, documentation, states, *labels, scope=LabelScope.CLUSTER)

    def register_info(self, name: str, documentation: str, *labels: str, scope: LabelScope = LabelScope.NODE) -> InfoFamily:
        return self._register(MetricKind.INFO, name, documentation, labels, scope)  # type: ignore[return-value]

    def register_node_info(self, name: str, documentation: str, *labels: str) -> InfoFamily:
        return self.register_info(name, documentation, *labels, scope=LabelScope.NODE)

    def register_summary_timer(self, name: str, documentation: str, *labels: str, unit: str | None = None) -> SummaryFamily:
        return self._register(MetricKind.SUMMARY, name, documentation, labels, LabelScope.NODE, unit)  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Lookup and name-keyed setters
    # ------------------------------------------------------------------
    def __contains__(self, name: object) -> bool:
        return name in self._families

    def __iter__(self) -> Iterator[MetricFamily]:
        return iter(self._families.values())

    def __len__(self) -> int:
        return len(self._families)

    def family(self, name: str) -> MetricFamily:
        try:
            return self._families[name]
        except KeyError:
            raise UnknownMetricError(f"metric {name!r} was never registered") from None

    def _typed(self, name: str, cls: type[F]) -> F:
        family = self.family(name)
        if not isinstance(family, cls):
            raise MetricKindError(f"metric {name!r} is a {family.kind.value}, not a {cls.kind.value}")
        return family

    def set_counter(self, name: str, delta: float | None, *values: object) -> None:
        self._typed(name, CounterFamily).inc(delta, *values)

    def set_gauge(self, name: str, value: float | None, *values: object) -> None:
        self._typed(name, GaugeFamily).set(value, *values)

    def set_enum(self, name: str, state: str, *values: object) -> None:
        self._typed(name, EnumFamily).state(state, *values)

    def set_info(self, name: str, *values: object) -> None:
        self._typed(name, InfoFamily).info(*values)

    def start_timer(self, name: str, *values: object) -> TimerHandle:
        return self._typed(name, SummaryFamily).time(*values)

    # ------------------------------------------------------------------
    # Exposition
    # ------------------------------------------------------------------
    def resolve_content_type(self, accept_header: str | None) -> str:
        return resolve_content_type(accept_header)

    def render_text(self, content_type: str | None = None) -> str:
        return render_registry(self.registry, content_type)

    def render(self, accept_header: str | None = None) -> tuple[str, str]:
        """Negotiate the format for ``accept_header`` and render in it."""
        content_type = self.resolve_content_type(accept_header)
        return self.render_text(content_type), content_type


__all__ = ["DEFAULT_METRIC_PREFIX", "MetricsCatalog", "exposed_name"]
