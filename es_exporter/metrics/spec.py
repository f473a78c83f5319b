"""Declarative metric specification layer.

Collector sub-passes describe the families they populate as ``MetricDef``
rows instead of registering them inline. Registration walks the rows once,
binding each returned handle to ``attr`` on the owning object, so the update
half writes through typed handles (``self.doc_count.set(...)``) rather than
looking names up in the catalog.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .families import MetricFamily, MetricKind
from .labels import LabelScope

if TYPE_CHECKING:  # pragma: no cover
    from .catalog import MetricsCatalog

COUNTER = MetricKind.COUNTER
GAUGE = MetricKind.GAUGE
ENUM = MetricKind.ENUM
INFO = MetricKind.INFO

NODE = LabelScope.NODE
CLUSTER = LabelScope.CLUSTER
UNSCOPED = LabelScope.NONE


@dataclass(frozen=True)
class MetricDef:
    attr: str                      # Attribute name on the owning sub-pass
    name: str                      # Metric name before prefix / unit suffix
    doc: str                       # Help text
    kind: MetricKind = GAUGE
    scope: LabelScope = NODE
    labels: Sequence[str] = ()
    unit: str | None = None
    states: Sequence[str] | None = None  # Enum only

    def register(self, catalog: MetricsCatalog) -> MetricFamily:
        labels = tuple(self.labels)
        if self.kind is ENUM:
            return catalog.register_enum(self.name, self.doc, tuple(self.states or ()), *labels, scope=self.scope)
        if self.kind is INFO:
            return catalog.register_info(self.name, self.doc, *labels, scope=self.scope)
        if self.kind is COUNTER:
            if self.scope is UNSCOPED:
                return catalog.register_counter(self.name, self.doc, *labels)
            if self.scope is CLUSTER:
                return catalog.register_cluster_counter(self.name, self.doc, *labels, unit=self.unit)
            return catalog.register_node_counter(self.name, self.doc, *labels, unit=self.unit)
        if self.kind is GAUGE:
            if self.scope is UNSCOPED:
                return catalog.register_gauge(self.name, self.doc, *labels)
            if self.scope is CLUSTER:
                return catalog.register_cluster_gauge(self.name, self.doc, *labels, unit=self.unit)
            return catalog.register_node_gauge(self.name, self.doc, *labels, unit=self.unit)
        raise ValueError(f"unsupported metric kind for declarative registration: {self.kind}")


def register_specs(owner: Any, specs: Iterable[MetricDef], catalog: MetricsCatalog) -> list[MetricFamily]:
    """Register every spec and bind the handle on ``owner`` under ``spec.attr``."""
    families = []
    for spec in specs:
        family = spec.register(catalog)
        setattr(owner, spec.attr, family)
        families.append(family)
    return families


__all__ = [
    "MetricDef",
    "register_specs",
    "COUNTER",
    "GAUGE",
    "ENUM",
    "INFO",
    "NODE",
    "CLUSTER",
    "UNSCOPED",
]
