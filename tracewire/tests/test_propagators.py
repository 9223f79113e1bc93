"""Tests for inbound extraction, outbound injection and the OpenTelemetry bridge."""

import pytest
from opentelemetry.trace import TraceFlags

from tracewire import runtime_config
from tracewire.context import (
    default_trace_formatters,
    extract_trace_context,
    extract_tracestate,
    from_otel_span_context,
    from_otel_trace_state,
    inject_trace_context,
    inject_tracestate,
    to_otel_span_context,
    to_otel_trace_state,
)
from tracewire.formatters import B3Formatter
from tracewire.tracer import TraceContextData, TraceStateList

TRACE_ID = "ff000000000000000000000000000041"
SPAN_ID = "0000000000000041"


@pytest.fixture(autouse=True)
def reset_config():
    runtime_config.reset()
    yield
    runtime_config.reset()


class TestExtract:

    def test_single_header_is_probed_first(self):
        environ = {
            "HTTP_B3": f"{TRACE_ID}-{SPAN_ID}-0",
            "HTTP_X_B3_TRACEID": "aa" * 16,
            "HTTP_X_B3_SPANID": "bb" * 8,
        }
        assert extract_trace_context(environ) == TraceContextData(TRACE_ID, SPAN_ID, 0)

    def test_multi_headers(self):
        environ = {"HTTP_X_B3_TRACEID": TRACE_ID, "HTTP_X_B3_SPANID": SPAN_ID}
        assert extract_trace_context(environ) == TraceContextData(TRACE_ID, SPAN_ID, 1)

    def test_explicit_formatter_list(self):
        environ = {
            "HTTP_B3": f"{TRACE_ID}-{SPAN_ID}-0",
            "HTTP_X_B3_TRACEID": TRACE_ID,
            "HTTP_X_B3_SPANID": SPAN_ID,
        }
        data = extract_trace_context(environ, [B3Formatter.multi_headers(), B3Formatter.single_header()])
        assert data.trace_options == 1

    def test_unparseable_header_yields_none(self):
        assert extract_trace_context({"HTTP_B3": "garbage"}) is None

    def test_configured_formats(self):
        runtime_config.set_trace_formats(["b3multi"])
        assert [f.header_name for f in default_trace_formatters()] == ["X-B3-TraceId"]
        assert extract_trace_context({"HTTP_B3": f"{TRACE_ID}-{SPAN_ID}"}) is None

    def test_tracestate(self):
        trace_state = extract_tracestate({"HTTP_TRACESTATE": "foo=bar,test=test"})
        assert [e.key for e in trace_state] == ["test", "foo"]

    def test_invalid_tracestate(self):
        assert extract_tracestate({"HTTP_TRACESTATE": "foo"}) is None


class TestInject:

    def test_trace_context(self):
        headers = {}
        inject_trace_context(headers, TraceContextData(TRACE_ID, SPAN_ID, 1))
        assert headers == {"X-B3-TraceId": TRACE_ID, "X-B3-SpanId": SPAN_ID, "X-B3-Sampled": "1"}

    def test_tracestate(self):
        trace_state = TraceStateList()
        trace_state.add("key1", "val1")
        trace_state.add("key2", "val2")
        headers = {}
        inject_tracestate(headers, trace_state)
        assert headers == {"tracestate": "key2=val2,key1=val1"}

    def test_empty_tracestate_is_skipped(self):
        headers = {}
        inject_tracestate(headers, TraceStateList())
        inject_tracestate(headers, None)
        assert headers == {}


class TestOTelBridge:

    def test_span_context_round_trip(self):
        data = TraceContextData(TRACE_ID, SPAN_ID, 1)
        otel_context = to_otel_span_context(data)
        assert otel_context.is_valid
        assert otel_context.is_remote
        assert otel_context.trace_flags == TraceFlags.SAMPLED
        assert from_otel_span_context(otel_context) == data

    def test_trace_state_keeps_order(self):
        trace_state = TraceStateList()
        trace_state.add("key1", "val1")
        trace_state.add("key2", "val2")

        otel_state = to_otel_trace_state(trace_state)
        assert list(otel_state.keys()) == ["key2", "key1"]

        back = from_otel_trace_state(otel_state)
        assert [(e.key, e.value) for e in back] == [("key2", "val2"), ("key1", "val1")]

    def test_span_context_carries_trace_state(self):
        trace_state = TraceStateList()
        trace_state.add("vendor", "abc")
        otel_context = to_otel_span_context(TraceContextData(TRACE_ID, SPAN_ID, 0), trace_state)
        assert otel_context.trace_state.get("vendor") == "abc"
        assert not otel_context.trace_flags.sampled
