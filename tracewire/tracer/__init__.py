"""Trace data types: contexts, tracestate lists and span records."""

from tracewire.tracer.span import SpanKind, SpanRecord, Status, StatusCode
from tracewire.tracer.span_context import TraceContextData
from tracewire.tracer.trace_state import AddResult, Entry, TraceStateList

__all__ = [
    "AddResult",
    "Entry",
    "SpanKind",
    "SpanRecord",
    "Status",
    "StatusCode",
    "TraceContextData",
    "TraceStateList",
]
