"""Tests for tracestate entries and TraceStateList."""

import string

import pytest

from tracewire.errors import InvalidEntryError, ValidationError
from tracewire.tracer.trace_state import AddResult, Entry, TraceStateList


class TestEntry:
    """Key and value validation of tracestate entries."""

    def test_valid_entry(self):
        entry = Entry("key", "value")
        assert entry.key == "key"
        assert entry.value == "value"
        assert entry.is_valid()

    def test_all_allowed_key_chars(self):
        key = string.ascii_lowercase + string.digits + "_-*/"
        assert Entry(key, "value").is_valid()

    @pytest.mark.parametrize(
        "key",
        [None, "", "a" * 257, "1aaAbB", "AaaAbB", "aaAbB", "key{", "key value", "kéy"],
    )
    def test_invalid_keys(self, key):
        assert not Entry(key, "value").is_valid()

    def test_key_at_max_length(self):
        assert Entry("a" * 256, "value").is_valid()

    def test_all_printable_value_chars(self):
        value = "".join(chr(c) for c in range(0x21, 0x7F) if chr(c) not in ",=")
        assert Entry("key", value).is_valid()

    def test_value_with_inner_space(self):
        assert Entry("key", "two words").is_valid()

    @pytest.mark.parametrize(
        "value",
        [None, "", "v" * 257, " value", "value ", "value=5", "value,5", "val\tue", "val\nue", "val\x7fue"],
    )
    def test_invalid_values(self, value):
        assert not Entry("key", value).is_valid()

    def test_construction_never_raises(self):
        entry = Entry("Bad Key", " bad value")
        assert entry.key == "Bad Key"
        assert not entry.is_valid()

    def test_create_raises_for_invalid_key(self):
        with pytest.raises(InvalidEntryError):
            Entry.create("1key", "value")

    def test_create_raises_for_invalid_value(self):
        with pytest.raises(ValidationError):
            Entry.create("key", "a,b")

    def test_create_returns_valid_entry(self):
        assert Entry.create("key", "value") == Entry("key", "value")


class TestTraceStateList:
    """Ordering, capacity and validity of TraceStateList."""

    def test_new_list_is_empty_and_not_yet_valid(self):
        trace_state = TraceStateList()
        assert trace_state.is_empty()
        assert len(trace_state) == 0
        assert not trace_state.is_valid()

    def test_add_new_entry(self):
        trace_state = TraceStateList()
        assert trace_state.add("key", "val")
        assert len(trace_state) == 1
        assert trace_state.get_value("key") == "val"
        assert trace_state.is_valid()

    def test_add_inserts_at_front(self):
        trace_state = TraceStateList()
        trace_state.add("key1", "val1")
        trace_state.add("key2", "val2")
        assert trace_state[0].key == "key2"
        assert [e.key for e in trace_state] == ["key2", "key1"]

    def test_update_moves_entry_to_front(self):
        trace_state = TraceStateList()
        trace_state.add("key1", "val1")
        trace_state.add("key2", "val2")
        trace_state.add("key1", "val-1")

        assert len(trace_state) == 2
        assert trace_state[0].key == "key1"
        assert trace_state[0].value == "val-1"

    def test_capacity_exceeded(self):
        trace_state = TraceStateList()
        for i in range(32):
            assert trace_state.add(f"key{i + 1}", f"val{i + 1}") is AddResult.ADDED
        assert trace_state.is_valid()

        result = trace_state.add("key33", "val33")
        assert result is AddResult.CAPACITY_EXCEEDED
        assert not result
        assert len(trace_state) == 32
        assert trace_state.get_value("key33") is None
        assert not trace_state.is_valid()

    def test_invalid_entry_marks_list_invalid(self):
        trace_state = TraceStateList()
        result = trace_state.add("Key33", "val33 ")
        assert result is AddResult.INVALID_ENTRY
        assert result == AddResult.INVALID_ENTRY
        assert not trace_state.is_valid()
        assert trace_state.is_empty()

    def test_invalidity_is_sticky(self):
        trace_state = TraceStateList()
        trace_state.add("key1", "val1")
        trace_state.add("BAD", "val")
        assert trace_state.add("key2", "val2")
        assert not trace_state.is_valid()
        assert len(trace_state) == 2

    def test_invalid_update_removes_previous_entry(self):
        trace_state = TraceStateList()
        trace_state.add("key1", "val1")
        assert not trace_state.add("key1", "bad,value")
        assert trace_state.get_value("key1") is None

    def test_delete(self):
        trace_state = TraceStateList()
        trace_state.add("key1", "val1")
        trace_state.add("key2", "val2")

        trace_state.delete("key2")
        assert len(trace_state) == 1
        assert trace_state.get_value("key2") is None

    def test_delete_missing_key_is_noop(self):
        trace_state = TraceStateList()
        trace_state.add("key1", "val1")
        trace_state.delete("nope")
        assert len(trace_state) == 1

    def test_copy_is_independent(self):
        trace_state = TraceStateList()
        trace_state.add("key1", "val1")
        clone = trace_state.copy()
        clone.add("key2", "val2")

        assert len(trace_state) == 1
        assert len(clone) == 2
        assert clone.is_valid()
