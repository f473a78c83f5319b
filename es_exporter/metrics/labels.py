"""
Label names and topology label composition for exporter metrics.

Every cluster or node scoped family carries a fixed topology prefix ahead of
its own labels. The helpers here build that prefix; they are pure functions
and safe to call from concurrent scrapes.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from ..utils.exceptions import LabelArityError


class LabelScope(str, Enum):
    NONE = "none"
    CLUSTER = "cluster"
    NODE = "node"


class MetricLabel(str, Enum):
    cluster = "cluster"
    node = "node"
    nodeid = "nodeid"
    type = "type"
    role = "role"
    index = "index"
    context = "context"
    name = "name"
    pipeline = "pipeline"
    processor = "processor"
    pool = "pool"
    gc = "gc"
    bufferpool = "bufferpool"
    group = "group"
    path = "path"
    mount = "mount"
    device = "device"
    version = "version"
    build_flavor = "build_flavor"
    build_type = "build_type"
    build_hash = "build_hash"
    build_date = "build_date"


class IndexContext(str, Enum):
    TOTAL = "total"
    PRIMARIES = "primaries"


@dataclass(frozen=True)
class Topology:
    """Cluster name, node name and node id captured once per scrape."""

    cluster: str
    node: str
    node_id: str


_SCOPE_NAMES: dict[LabelScope, tuple[str, ...]] = {
    LabelScope.NONE: (),
    LabelScope.CLUSTER: (MetricLabel.cluster.value,),
    LabelScope.NODE: (MetricLabel.cluster.value, MetricLabel.node.value, MetricLabel.nodeid.value),
}

# Convenience bundles
PER_INDEX = (MetricLabel.index.value, MetricLabel.context.value)
TYPED_PER_INDEX = (MetricLabel.type.value, MetricLabel.index.value, MetricLabel.context.value)
FS_PATH = (MetricLabel.path.value, MetricLabel.mount.value, MetricLabel.type.value)
NODE_BUILD = (
    MetricLabel.version.value,
    MetricLabel.build_flavor.value,
    MetricLabel.build_type.value,
    MetricLabel.build_hash.value,
    MetricLabel.build_date.value,
)


def scope_label_names(scope: LabelScope) -> tuple[str, ...]:
    return _SCOPE_NAMES[scope]


def scope_label_values(scope: LabelScope, topology: Topology) -> tuple[str, ...]:
    if scope is LabelScope.NONE:
        return ()
    if scope is LabelScope.CLUSTER:
        return (topology.cluster,)
    return (topology.cluster, topology.node, topology.node_id)


def compose_label_names(scope: LabelScope, names: Sequence[str]) -> tuple[str, ...]:
    return scope_label_names(scope) + tuple(names)


def compose_label_values(scope: LabelScope, topology: Topology, values: Sequence[object]) -> tuple[str, ...]:
    return scope_label_values(scope, topology) + tuple(str(v) for v in values)


def compose_labels(
    scope: LabelScope,
    names: Sequence[str],
    values: Sequence[object],
    topology: Topology,
) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """Prepend the scope's topology labels to a caller label name/value list.

    Raises LabelArityError when the caller supplies a different number of
    names and values.
    """
    if len(names) != len(values):
        raise LabelArityError(
            f"label names {tuple(names)!r} and values {tuple(values)!r} differ in length"
        )
    return compose_label_names(scope, names), compose_label_values(scope, topology, values)


__all__ = [
    "LabelScope",
    "MetricLabel",
    "IndexContext",
    "Topology",
    "PER_INDEX",
    "TYPED_PER_INDEX",
    "FS_PATH",
    "NODE_BUILD",
    "scope_label_names",
    "scope_label_values",
    "compose_label_names",
    "compose_label_values",
    "compose_labels",
]
