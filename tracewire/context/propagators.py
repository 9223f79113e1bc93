"""Trace context propagation across process boundaries, with an OpenTelemetry bridge."""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional, Sequence

from opentelemetry.trace import SpanContext as OTelSpanContext, TraceFlags, TraceState

from tracewire import runtime_config
from tracewire.formatters.b3 import B3Formatter
from tracewire.formatters.tracestate import TracestateFormatter
from tracewire.tracer.span_context import TraceContextData
from tracewire.tracer.trace_state import TraceStateList
from tracewire.utils.helpers import format_span_id, format_trace_id, parse_span_id, parse_trace_id

logger = logging.getLogger(__name__)

_FORMAT_FACTORIES = {
    "b3": B3Formatter.single_header,
    "b3multi": B3Formatter.multi_headers,
}


def default_trace_formatters() -> List[B3Formatter]:
    """Build the ordered list of inbound trace context formatters from runtime config."""
    return [_FORMAT_FACTORIES[name]() for name in runtime_config.get_trace_formats()]


def default_tracestate_formatters() -> List[TracestateFormatter]:
    return [TracestateFormatter()]


def _probe(environ: Mapping[str, str], formatters: Sequence):
    for formatter in formatters:
        if formatter.environ_header_name in environ:
            return formatter
    return None


def extract_trace_context(
    environ: Mapping[str, str],
    formatters: Optional[Sequence] = None,
) -> Optional[TraceContextData]:
    """
    Extract the incoming trace context from a WSGI-style environ.

    The first formatter whose header is present is used. Returns None when
    no header matches or the matching header does not parse, so the request
    can proceed as a new trace.
    """
    if formatters is None:
        formatters = default_trace_formatters()
    formatter = _probe(environ, formatters)
    if formatter is None:
        return None
    trace_context = formatter.deserialize_environ(environ)
    if trace_context is None:
        logger.debug("Ignoring unparseable %s header", formatter.environ_header_name)
    return trace_context


def extract_tracestate(
    environ: Mapping[str, str],
    formatters: Optional[Sequence] = None,
) -> Optional[TraceStateList]:
    """Extract the incoming tracestate list from a WSGI-style environ."""
    if formatters is None:
        formatters = default_tracestate_formatters()
    formatter = _probe(environ, formatters)
    if formatter is None:
        return None
    trace_state = formatter.deserialize_environ(environ)
    if trace_state is None:
        logger.debug("Ignoring unparseable %s header", formatter.environ_header_name)
    return trace_state


def inject_trace_context(
    headers: Dict[str, str],
    trace_context: TraceContextData,
    formatter: Optional[B3Formatter] = None,
) -> None:
    """Write outbound trace context headers into `headers`."""
    formatter = formatter or B3Formatter.multi_headers()
    headers.update(formatter.serialize(trace_context))


def inject_tracestate(
    headers: Dict[str, str],
    trace_state: Optional[TraceStateList],
    formatter: Optional[TracestateFormatter] = None,
) -> None:
    """Write the tracestate header if the list has any entries."""
    if trace_state is None or trace_state.is_empty():
        return
    formatter = formatter or TracestateFormatter()
    headers[formatter.header_name] = formatter.serialize(trace_state)


# Helper functions for OpenTelemetry conversion

def to_otel_trace_state(trace_state: Optional[TraceStateList]) -> TraceState:
    """Convert a TraceStateList into an OTel TraceState, keeping list order."""
    if not trace_state:
        return TraceState()
    return TraceState([(entry.key, entry.value) for entry in trace_state])


def from_otel_trace_state(otel_trace_state: Optional[TraceState]) -> TraceStateList:
    """Convert an OTel TraceState into a TraceStateList, keeping its order."""
    trace_state = TraceStateList()
    if otel_trace_state:
        # Adding inserts at the front, so walk backwards.
        for key, value in reversed(list(otel_trace_state.items())):
            trace_state.add(key, value)
    return trace_state


def to_otel_span_context(
    trace_context: TraceContextData,
    trace_state: Optional[TraceStateList] = None,
    is_remote: bool = True,
) -> OTelSpanContext:
    """Convert TraceContextData (plus optional tracestate) to an OTel SpanContext."""
    return OTelSpanContext(
        trace_id=parse_trace_id(trace_context.trace_id),
        span_id=parse_span_id(trace_context.span_id),
        is_remote=is_remote,
        trace_flags=TraceFlags(trace_context.trace_options & 0xFF),
        trace_state=to_otel_trace_state(trace_state),
    )


def from_otel_span_context(otel_context: OTelSpanContext) -> TraceContextData:
    """Convert an OTel SpanContext to TraceContextData."""
    return TraceContextData(
        trace_id=format_trace_id(otel_context.trace_id),
        span_id=format_span_id(otel_context.span_id),
        trace_options=int(otel_context.trace_flags),
    )
