"""Typed metric family handles.

A family wraps one prometheus_client collector registered on a scrape
registry. Handles are returned by the catalog's ``register_*`` methods and
are the only way values reach the registry: the collector keeps the handle
and calls ``set`` / ``inc`` / ``state`` / ``info`` / ``observe`` on it with
the caller-supplied label values. The topology prefix is composed here.
"""
from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable, Sequence
from enum import Enum
from typing import Any, ClassVar

from ..utils.exceptions import (
    InvalidEnumStateError,
    LabelArityError,
    NegativeCounterIncrementError,
    TimerStateError,
)
from .labels import LabelScope, Topology, compose_label_names, compose_label_values

logger = logging.getLogger(__name__)


class MetricKind(str, Enum):
    COUNTER = "counter"
    GAUGE = "gauge"
    SUMMARY = "summary"
    ENUM = "enum"
    INFO = "info"


class MetricFamily:
    kind: ClassVar[MetricKind]

    def __init__(
        self,
        name: str,
        full_name: str,
        documentation: str,
        scope: LabelScope,
        label_names: Sequence[str],
        topology: Topology,
        collector: Any,
        unit: str | None = None,
    ) -> None:
        self.name = name
        self.full_name = full_name
        self.documentation = documentation
        self.scope = scope
        self.label_names = tuple(label_names)
        self.label_schema = compose_label_names(scope, label_names)
        self.unit = unit or None
        self._topology = topology
        self._collector = collector

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.full_name} labels={self.label_schema}>"

    @property
    def collector(self) -> Any:
        return self._collector

    def _child(self, values: Sequence[object]) -> Any:
        if len(values) != len(self.label_names):
            raise LabelArityError(
                f"{self.name}: expected {len(self.label_names)} label values "
                f"{self.label_names!r}, got {len(values)} {tuple(values)!r}"
            )
        if not self.label_schema:
            return self._collector
        return self._collector.labels(*compose_label_values(self.scope, self._topology, values))


def _unreported(value: float | None) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


class _MirroredFamily(MetricFamily):
    """Counter/gauge base that can forward each write to legacy alias gauges."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._mirrors: list[tuple[GaugeFamily, tuple[str, ...]]] = []

    def mirror_to(self, target: GaugeFamily, extra_values: Sequence[str] = ()) -> None:
        expected = len(self.label_names) + len(extra_values)
        if len(target.label_names) != expected:
            raise LabelArityError(
                f"alias {target.name} has {len(target.label_names)} labels, "
                f"{self.name} supplies {expected}"
            )
        self._mirrors.append((target, tuple(extra_values)))

    @property
    def mirrors(self) -> tuple[GaugeFamily, ...]:
        return tuple(m for m, _ in self._mirrors)


class CounterFamily(_MirroredFamily):
    kind = MetricKind.COUNTER

    def inc(self, delta: float | None, *values: object) -> None:
        """Increment by a non-negative delta; ``None`` means not reported."""
        if _unreported(delta):
            logger.debug("%s%s not reported; skipped", self.name, values)
            return
        if delta < 0:  # type: ignore[operator]
            raise NegativeCounterIncrementError(
                f"{self.name}{values}: counters can only increase, got delta {delta}"
            )
        self._child(values).inc(delta)
        for target, extra in self._mirrors:
            target.inc(delta, *values, *extra)


class GaugeFamily(_MirroredFamily):
    kind = MetricKind.GAUGE

    def set(self, value: float | None, *values: object) -> None:
        """Overwrite the sample; ``None`` means not reported."""
        if _unreported(value):
            logger.debug("%s%s not reported; skipped", self.name, values)
            return
        self._child(values).set(float(value))  # type: ignore[arg-type]
        for target, extra in self._mirrors:
            target.set(value, *values, *extra)

    def inc(self, delta: float | None, *values: object) -> None:
        if _unreported(delta):
            return
        self._child(values).inc(float(delta))  # type: ignore[arg-type]
        for target, extra in self._mirrors:
            target.inc(delta, *values, *extra)


class EnumFamily(MetricFamily):
    kind = MetricKind.ENUM

    def __init__(self, *args: Any, states: Sequence[str], **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.states = tuple(states)

    def state(self, state: str, *values: object) -> None:
        """Make ``state`` the single active state for this label vector."""
        if state not in self.states:
            raise InvalidEnumStateError(
                f"{self.name}: state {state!r} not in {self.states!r}"
            )
        self._child(values).state(state)


class InfoFamily(MetricFamily):
    kind = MetricKind.INFO

    def info(self, *values: object) -> None:
        """Record the label vector itself as the descriptive payload."""
        self._child(values).info({})


class SummaryFamily(MetricFamily):
    kind = MetricKind.SUMMARY

    def observe(self, amount: float, *values: object) -> None:
        self._child(values).observe(amount)

    def time(self, *values: object, clock: Callable[[], float] = time.perf_counter) -> TimerHandle:
        # resolve the child now so an arity mismatch fails before any work is timed
        self._child(values)
        return TimerHandle(self, values, clock)


class TimerHandle:
    """Running wall-clock timer bound to one summary label vector."""

    def __init__(self, family: SummaryFamily, values: Sequence[object], clock: Callable[[], float]) -> None:
        self._family = family
        self._values = tuple(values)
        self._clock = clock
        self._start = clock()
        self._elapsed: float | None = None

    @property
    def stopped(self) -> bool:
        return self._elapsed is not None

    @property
    def elapsed(self) -> float | None:
        return self._elapsed

    def stop(self) -> float:
        """Observe the elapsed seconds on the summary. Only valid once."""
        if self._elapsed is not None:
            raise TimerStateError(f"timer for {self._family.name} already stopped")
        self._elapsed = max(self._clock() - self._start, 0.0)
        self._family.observe(self._elapsed, *self._values)
        return self._elapsed

    def __enter__(self) -> TimerHandle:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if not self.stopped:
            self.stop()


FAMILY_TYPES: dict[MetricKind, type[MetricFamily]] = {
    MetricKind.COUNTER: CounterFamily,
    MetricKind.GAUGE: GaugeFamily,
    MetricKind.SUMMARY: SummaryFamily,
    MetricKind.ENUM: EnumFamily,
    MetricKind.INFO: InfoFamily,
}


__all__ = [
    "MetricKind",
    "MetricFamily",
    "CounterFamily",
    "GaugeFamily",
    "EnumFamily",
    "InfoFamily",
    "SummaryFamily",
    "TimerHandle",
    "FAMILY_TYPES",
]
