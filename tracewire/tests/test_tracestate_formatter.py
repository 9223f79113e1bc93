"""Tests for the W3C tracestate header formatter."""

import pytest

from tracewire.formatters.tracestate import TracestateFormatter
from tracewire.tracer.trace_state import TraceStateList


@pytest.fixture
def formatter():
    return TracestateFormatter()


class TestDeserialize:

    def test_invalid_format(self, formatter):
        assert formatter.deserialize("badvalue") is None

    def test_valid_format_is_reversed(self, formatter):
        tracestate = formatter.deserialize("foo=bar,test=test")
        assert tracestate is not None
        assert len(tracestate) == 2
        assert (tracestate[0].key, tracestate[0].value) == ("test", "test")
        assert (tracestate[1].key, tracestate[1].value) == ("foo", "bar")

    def test_wrong_delimiter(self, formatter):
        assert formatter.deserialize("foo=bar;test=test") is None

    def test_missing_key_value_delimiter(self, formatter):
        assert formatter.deserialize("test-test") is None

    def test_tolerates_whitespace_around_delimiters(self, formatter):
        tracestate = formatter.deserialize("foo=bar , \ttest=test")
        assert [e.key for e in tracestate] == ["test", "foo"]

    def test_splits_on_first_equal_sign_only(self, formatter):
        # "bar=baz" is not a valid value, so the whole header is rejected.
        assert formatter.deserialize("foo=bar=baz") is None

    def test_one_invalid_member_rejects_header(self, formatter):
        assert formatter.deserialize("foo=bar,BAD=value") is None

    def test_trailing_comma_is_ignored(self, formatter):
        tracestate = formatter.deserialize("foo=bar,")
        assert tracestate is not None
        assert len(tracestate) == 1
        assert tracestate.get_value("foo") == "bar"
        assert len(formatter.deserialize("foo=bar, ,")) == 1

    def test_leading_comma_rejects_header(self, formatter):
        assert formatter.deserialize(",foo=bar") is None
        assert formatter.deserialize("foo=bar,,test=test") is None

    def test_only_delimiters(self, formatter):
        assert formatter.deserialize(",") is None

    def test_empty_header(self, formatter):
        assert formatter.deserialize("") is None
        assert formatter.deserialize(None) is None

    def test_max_entries(self, formatter):
        header = ",".join(f"key{i}=val{i}" for i in range(32))
        tracestate = formatter.deserialize(header)
        assert len(tracestate) == 32

    def test_too_many_entries(self, formatter):
        header = ",".join(f"key{i}=val{i}" for i in range(33))
        assert formatter.deserialize(header) is None

    def test_environ(self, formatter):
        tracestate = formatter.deserialize_environ({"HTTP_TRACESTATE": "foo=bar"})
        assert tracestate.get_value("foo") == "bar"
        assert formatter.deserialize_environ({}) is None


class TestSerialize:

    def test_serialize(self, formatter):
        tracestate = TraceStateList()
        tracestate.add("key1", "val1")
        tracestate.add("key2", "val2")
        tracestate.add("key3", "val3")
        assert formatter.serialize(tracestate) == "key3=val3,key2=val2,key1=val1"

    def test_serialize_empty(self, formatter):
        assert formatter.serialize(TraceStateList()) == ""

    def test_round_trip_reverses_header_order(self, formatter):
        header = "a=1,b=2,c=3"
        assert formatter.serialize(formatter.deserialize(header)) == "c=3,b=2,a=1"
