"""Circuit breaker metrics, one series per breaker name."""
from __future__ import annotations

from ..metrics.groups import MetricGroup
from ..metrics.spec import MetricDef
from ..stats.models import BreakerStats
from .base import NodeSection


class CircuitBreakerMetrics(NodeSection):
    group = MetricGroup.CIRCUIT_BREAKER
    node_attr = "breakers"
    SPECS = [
        MetricDef("estimated", "circuitbreaker_estimated", "Estimated memory used, in bytes, for the operation",
                  labels=("name",), unit="bytes"),
        MetricDef("limit", "circuitbreaker_limit", "Memory limit, in bytes, for the circuit breaker",
                  labels=("name",), unit="bytes"),
        MetricDef("overhead", "circuitbreaker_overhead_ratio",
                  "A constant that all estimates for the circuit breaker are multiplied with to calculate a final estimate",
                  labels=("name",)),
        MetricDef("tripped", "circuitbreaker_tripped_count",
                  "Total number of times the circuit breaker has been triggered and prevented an out of memory error",
                  labels=("name",)),
    ]

    def populate(self, breakers: list[BreakerStats]) -> None:
        for breaker in breakers:
            self.estimated.set(breaker.estimated_size_in_bytes, breaker.name)
            self.limit.set(breaker.limit_size_in_bytes, breaker.name)
            self.overhead.set(breaker.overhead, breaker.name)
            self.tripped.set(breaker.tripped, breaker.name)
