# Utils module for the exporter
from .exceptions import ExporterError

__all__ = ["ExporterError"]
