"""Tags: validated key/value pairs with a propagation TTL."""

from __future__ import annotations

from typing import Optional

from tracewire.errors import InvalidTagError

MAX_LENGTH = 255

# Propagate without limit.
TTL_UNLIMITED = -1


def _is_printable(value: str) -> bool:
    return all(32 <= ord(c) <= 126 for c in value)


class Tag:
    """
    A tag consists of a key, a value and a TTL (number of hops it may propagate).

    Raises:
        InvalidTagError: if the key is empty, or key/value is longer than 255
            characters or contains non-printable characters
    """

    __slots__ = ("key", "value", "ttl")

    def __init__(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        if not key or len(key) > MAX_LENGTH or not _is_printable(key):
            raise InvalidTagError("Invalid tag key", {"key": key})
        if value is None or len(value) > MAX_LENGTH or not _is_printable(value):
            raise InvalidTagError("Invalid tag value", {"key": key, "value": value})
        self.key = key
        self.value = value
        self.ttl = ttl

    def propagates(self) -> bool:
        """True if the tag may cross another process boundary."""
        return self.ttl is not None and (self.ttl == TTL_UNLIMITED or self.ttl > 0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tag):
            return NotImplemented
        return (self.key, self.value, self.ttl) == (other.key, other.value, other.ttl)

    def __hash__(self) -> int:
        return hash((self.key, self.value, self.ttl))

    def __repr__(self) -> str:
        return f"Tag(key={self.key!r}, value={self.value!r}, ttl={self.ttl!r})"
