"""Exporter exception hierarchy.

Two families of failures exist. Catalog and collector errors are programming
errors: registration and update passes disagree, and the scrape must abort with
a clear diagnostic. Configuration and snapshot errors describe bad input handed
to the exporter from outside.
"""
from __future__ import annotations


class ExporterError(Exception):
    """Base class for all exporter exceptions."""


class CatalogError(ExporterError):
    """Metric catalog misuse (registration/update passes out of sync)."""


class DuplicateMetricError(CatalogError):
    """A metric name was registered twice on the same catalog."""


class UnknownMetricError(CatalogError):
    """An update referenced a metric name that was never registered."""


class LabelArityError(CatalogError):
    """Label value count does not match the registered label schema."""


class InvalidEnumStateError(CatalogError):
    """Enum update with a state outside the declared closed set."""


class NegativeCounterIncrementError(CatalogError):
    """Counter update with a negative delta."""


class MetricKindError(CatalogError):
    """Name-keyed setter used against a family of a different kind."""


class TimerStateError(CatalogError):
    """Timer handle stopped more than once."""


class CollectorStateError(ExporterError):
    """Collector lifecycle violated (register twice, update before register, update twice)."""


class ConfigError(ExporterError):
    """Configuration-related issues (invalid values, bad prefix)."""


class SnapshotError(ExporterError):
    """Statistics snapshot input is malformed."""


__all__ = [
    "ExporterError",
    "CatalogError",
    "DuplicateMetricError",
    "UnknownMetricError",
    "LabelArityError",
    "InvalidEnumStateError",
    "NegativeCounterIncrementError",
    "MetricKindError",
    "TimerStateError",
    "CollectorStateError",
    "ConfigError",
    "SnapshotError",
]
