"""Context utilities for tracewire."""

from tracewire.context.context import get_span_context, set_span_context, unset_span_context
from tracewire.context.propagators import (
    default_trace_formatters,
    default_tracestate_formatters,
    extract_trace_context,
    extract_tracestate,
    from_otel_span_context,
    from_otel_trace_state,
    inject_trace_context,
    inject_tracestate,
    to_otel_span_context,
    to_otel_trace_state,
)

__all__ = [
    "get_span_context",
    "set_span_context",
    "unset_span_context",
    "default_trace_formatters",
    "default_tracestate_formatters",
    "extract_trace_context",
    "extract_tracestate",
    "inject_trace_context",
    "inject_tracestate",
    "to_otel_span_context",
    "from_otel_span_context",
    "to_otel_trace_state",
    "from_otel_trace_state",
]
