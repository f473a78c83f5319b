"""Common shape of a collector sub-pass.

A sub-pass owns one metric group. Its registration half is the class-level
``SPECS`` table; registering binds each family handle as an attribute. Its
update half pulls one sub-structure out of the snapshot (``extract``) and, if
present, writes it through those handles (``populate``).
"""
from __future__ import annotations

import logging
from typing import Any, ClassVar

from ..metrics.catalog import MetricsCatalog
from ..metrics.families import MetricFamily
from ..metrics.groups import MetricGroup
from ..metrics.spec import MetricDef, register_specs
from ..stats.models import NodeStats, StatisticsSnapshot

logger = logging.getLogger(__name__)


class StatsSection:
    group: ClassVar[MetricGroup]
    SPECS: ClassVar[list[MetricDef]] = []

    def __init__(self) -> None:
        self.families: list[MetricFamily] = []

    def __getattr__(self, item: str) -> Any:
        # Only reached for handles that were never bound
        raise AttributeError(f"{type(self).__name__}.{item} is not registered; call register() first")

    def register(self, catalog: MetricsCatalog) -> list[MetricFamily]:
        self.families = register_specs(self, self.SPECS, catalog)
        return self.families

    def extract(self, snapshot: StatisticsSnapshot) -> Any:
        raise NotImplementedError

    def populate(self, section: Any) -> None:
        raise NotImplementedError

    def update(self, snapshot: StatisticsSnapshot) -> bool:
        """Populate from ``snapshot``; False when the sub-structure is absent."""
        section = self.extract(snapshot)
        if section is None:
            logger.debug("%s: sub-structure absent; sub-pass skipped", self.group.value)
            return False
        self.populate(section)
        return True


class NodeSection(StatsSection):
    """Sub-pass fed by one attribute of the local node's stats."""

    node_attr: ClassVar[str]

    def extract(self, snapshot: StatisticsSnapshot) -> Any:
        node: NodeStats | None = snapshot.node_stats
        if node is None:
            return None
        return getattr(node, self.node_attr)


def unavailable(group: MetricGroup, field: str) -> None:
    """Diagnostic for a field the statistics source does not expose."""
    logger.debug("%s: %s not exposed by the statistics source; series not reported", group.value, field)


__all__ = ["StatsSection", "NodeSection", "unavailable"]
