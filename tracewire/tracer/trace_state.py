"""W3C tracestate entries and the bounded, ordered list that holds them."""

from __future__ import annotations

import re
from enum import Enum
from typing import Iterator, List, Optional

from tracewire.errors import InvalidEntryError

MAX_KEY_SIZE = 256
MAX_VALUE_SIZE = 256

# Lowercase letter first, then lowercase letters, digits, '-', '_', '*', '/'.
KEY_FORMAT = re.compile(r"\A[a-z][a-z0-9\-_*/]*\Z")


def _validate_key(key: Optional[str]) -> bool:
    return (
        isinstance(key, str)
        and len(key) <= MAX_KEY_SIZE
        and KEY_FORMAT.match(key) is not None
    )


def _validate_value(value: Optional[str]) -> bool:
    if not isinstance(value, str) or not value or len(value) > MAX_VALUE_SIZE:
        return False
    if value[0] == " " or value[-1] == " ":
        return False
    return all(" " <= c <= "~" and c not in ",=" for c in value)


class Entry:
    """
    A single tracestate key/value pair.

    Construction never raises; use is_valid() to check the pair, or
    Entry.create() to fail fast with InvalidEntryError.
    """

    __slots__ = ("_key", "_value")

    def __init__(self, key: str, value: str) -> None:
        self._key = key
        self._value = value

    @classmethod
    def create(cls, key: str, value: str) -> "Entry":
        entry = cls(key, value)
        if not _validate_key(key):
            raise InvalidEntryError("Invalid tracestate key", {"key": key})
        if not _validate_value(value):
            raise InvalidEntryError("Invalid tracestate value", {"key": key, "value": value})
        return entry

    @property
    def key(self) -> str:
        return self._key

    @property
    def value(self) -> str:
        return self._value

    def is_valid(self) -> bool:
        return _validate_key(self._key) and _validate_value(self._value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entry):
            return NotImplemented
        return self._key == other._key and self._value == other._value

    def __hash__(self) -> int:
        return hash((self._key, self._value))

    def __repr__(self) -> str:
        return f"Entry(key={self._key!r}, value={self._value!r})"


class AddResult(Enum):
    """Outcome of TraceStateList.add(); truthy only when the entry was stored."""

    ADDED = "added"
    INVALID_ENTRY = "invalid_entry"
    CAPACITY_EXCEEDED = "capacity_exceeded"

    def __bool__(self) -> bool:
        return self is AddResult.ADDED


class TraceStateList:
    """
    Ordered list of tracestate entries with a maximum of 32 members.

    The most recently added or updated entry is always first. Once an add
    fails the list stays invalid; later successful adds do not clear it.
    A fresh list is not valid until its first successful add.
    """

    MAX_ENTRIES = 32

    def __init__(self) -> None:
        self._entries: List[Entry] = []
        self._valid: Optional[bool] = None

    def add(self, key: str, value: str) -> AddResult:
        """Add or update an entry, moving it to the front of the list."""
        if len(self._entries) >= self.MAX_ENTRIES:
            self._valid = False
            return AddResult.CAPACITY_EXCEEDED

        self._entries = [e for e in self._entries if e.key != key]
        entry = Entry(key, value)
        if not entry.is_valid():
            self._valid = False
            return AddResult.INVALID_ENTRY

        self._entries.insert(0, entry)
        if self._valid is None:
            self._valid = True
        return AddResult.ADDED

    def delete(self, key: str) -> None:
        self._entries = [e for e in self._entries if e.key != key]

    def get_value(self, key: str) -> Optional[str]:
        for entry in self._entries:
            if entry.key == key:
                return entry.value
        return None

    def is_valid(self) -> bool:
        return bool(self._valid)

    def is_empty(self) -> bool:
        return not self._entries

    def copy(self) -> "TraceStateList":
        """Return an independent copy, e.g. to hand across a task boundary."""
        clone = TraceStateList()
        clone._entries = list(self._entries)
        clone._valid = self._valid
        return clone

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(list(self._entries))

    def __getitem__(self, index: int) -> Entry:
        return self._entries[index]

    def __repr__(self) -> str:
        return f"TraceStateList({self._entries!r}, valid={self.is_valid()})"
