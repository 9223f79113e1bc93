"""Utility functions for tracewire."""

from tracewire.utils.helpers import (
    SPAN_ID_BYTES,
    TRACE_ID_BYTES,
    get_duration_ns,
    format_trace_id,
    format_span_id,
    parse_trace_id,
    parse_span_id,
)

__all__ = [
    "SPAN_ID_BYTES",
    "TRACE_ID_BYTES",
    "get_duration_ns",
    "format_trace_id",
    "format_span_id",
    "parse_trace_id",
    "parse_span_id",
]
