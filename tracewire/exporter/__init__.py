"""In-process span stores and the exporter that feeds them."""

from tracewire.exporter.base import SpanStore
from tracewire.exporter.running_span_store import RunningSpanStore
from tracewire.exporter.sampled_error_span_store import SampledErrorSpanStore
from tracewire.exporter.sampled_latency_span_store import SampledLatencySpanStore
from tracewire.exporter.store_exporter import StoreSpanExporter

__all__ = [
    "SpanStore",
    "RunningSpanStore",
    "SampledErrorSpanStore",
    "SampledLatencySpanStore",
    "StoreSpanExporter",
]
