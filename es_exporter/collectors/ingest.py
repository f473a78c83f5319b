"""Ingest pipeline metrics: node totals, per pipeline and per processor."""
from __future__ import annotations

from ..metrics.groups import MetricGroup
from ..metrics.spec import MetricDef
from ..metrics.units import millis_to_seconds
from ..stats.models import IngestStats
from .base import NodeSection

_PIPELINE = ("pipeline",)
_PROCESSOR = ("pipeline", "processor")


class IngestMetrics(NodeSection):
    group = MetricGroup.INGEST
    node_attr = "ingest"
    SPECS = [
        MetricDef("total_count", "ingest_total_count", "Total number of documents ingested during the lifetime of this node"),
        MetricDef("total_time", "ingest_total_time",
                  "Total time, in seconds, spent preprocessing ingest documents during the lifetime of this node", unit="seconds"),
        MetricDef("total_current", "ingest_total_current", "Total number of documents currently being ingested"),
        MetricDef("total_failed", "ingest_total_failed_count",
                  "Total number of failed ingest operations during the lifetime of this node"),
        MetricDef("pipeline_count", "ingest_pipeline_total_count",
                  "Total Number of documents preprocessed by the ingest pipeline", labels=_PIPELINE),
        MetricDef("pipeline_time", "ingest_pipeline_total_time",
                  "Total time, in seconds, spent preprocessing documents in the ingest pipeline",
                  labels=_PIPELINE, unit="seconds"),
        MetricDef("pipeline_current", "ingest_pipeline_total_current",
                  "Number of documents currently being ingested by the ingest pipeline", labels=_PIPELINE),
        MetricDef("pipeline_failed", "ingest_pipeline_total_failed_count",
                  "Total number of failed operations for the ingest pipeline", labels=_PIPELINE),
        MetricDef("processor_count", "ingest_pipeline_processor_total_count",
                  "Total Number of documents transformed by the processor", labels=_PROCESSOR),
        MetricDef("processor_time", "ingest_pipeline_processor_total_time",
                  "Total time, in seconds, spent by the processor transforming documents",
                  labels=_PROCESSOR, unit="seconds"),
        MetricDef("processor_current", "ingest_pipeline_processor_total_current",
                  "Number of documents currently being transformed by the processor", labels=_PROCESSOR),
        MetricDef("processor_failed", "ingest_pipeline_processor_total_failed_count",
                  "Total number of failed operations for the processor", labels=_PROCESSOR),
    ]

    def populate(self, ingest: IngestStats) -> None:
        self.total_count.set(ingest.total.count)
        self.total_time.set(millis_to_seconds(ingest.total.time_in_millis))
        self.total_current.set(ingest.total.current)
        self.total_failed.set(ingest.total.failed)
        for pipeline in ingest.pipelines:
            self.pipeline_count.set(pipeline.count, pipeline.id)
            self.pipeline_time.set(millis_to_seconds(pipeline.time_in_millis), pipeline.id)
            self.pipeline_current.set(pipeline.current, pipeline.id)
            self.pipeline_failed.set(pipeline.failed, pipeline.id)
            for processor in pipeline.processors:
                stats = processor.stats
                self.processor_count.set(stats.count, pipeline.id, processor.name)
                self.processor_time.set(millis_to_seconds(stats.time_in_millis), pipeline.id, processor.name)
                self.processor_current.set(stats.current, pipeline.id, processor.name)
                self.processor_failed.set(stats.failed, pipeline.id, processor.name)
