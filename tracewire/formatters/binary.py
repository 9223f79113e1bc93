"""
Binary trace context encoding.

Layout (29 bytes, field order fixed):

    [version][0][trace_id: 16 bytes][1][span_id: 8 bytes][2][trace_options: 1 byte]
"""

from __future__ import annotations

import logging
import struct
from typing import Optional

from tracewire.errors import ValidationError
from tracewire.tracer.span_context import TraceContextData
from tracewire.utils.helpers import (
    SPAN_ID_BYTES,
    TRACE_ID_BYTES,
    format_span_id,
    format_trace_id,
    parse_span_id,
    parse_trace_id,
)

logger = logging.getLogger(__name__)

BINARY_FORMAT = struct.Struct(f">BB{TRACE_ID_BYTES}sB{SPAN_ID_BYTES}sBB")

VERSION = 0
TRACE_ID_FIELD_ID = 0
SPAN_ID_FIELD_ID = 1
TRACE_OPTION_FIELD_ID = 2


class BinaryFormatter:
    """Serializes and deserializes TraceContextData in the binary encoding."""

    def deserialize(self, binary: bytes) -> Optional[TraceContextData]:
        """Return the decoded context, or None if the input is not well formed."""
        if not isinstance(binary, (bytes, bytearray)) or len(binary) != BINARY_FORMAT.size:
            logger.debug("Rejected binary trace context of unexpected size")
            return None

        version, trace_field, trace_id, span_field, span_id, option_field, options = (
            BINARY_FORMAT.unpack(bytes(binary))
        )
        if (
            version != VERSION
            or trace_field != TRACE_ID_FIELD_ID
            or span_field != SPAN_ID_FIELD_ID
            or option_field != TRACE_OPTION_FIELD_ID
        ):
            logger.debug("Rejected binary trace context with bad version or field ids")
            return None

        return TraceContextData(
            trace_id=format_trace_id(int.from_bytes(trace_id, "big")),
            span_id=format_span_id(int.from_bytes(span_id, "big")),
            trace_options=options,
        )

    def serialize(self, trace_context: TraceContextData) -> bytes:
        """
        Encode a context; a missing span id is written as zero bytes.

        Raises:
            ValidationError: if an id is not hex of the expected length
        """
        trace_id = _id_bytes("trace_id", trace_context.trace_id, TRACE_ID_BYTES, parse_trace_id)
        span_id = _id_bytes("span_id", trace_context.span_id, SPAN_ID_BYTES, parse_span_id)
        return BINARY_FORMAT.pack(
            VERSION,
            TRACE_ID_FIELD_ID,
            trace_id,
            SPAN_ID_FIELD_ID,
            span_id,
            TRACE_OPTION_FIELD_ID,
            trace_context.trace_options & 0xFF,
        )


def _id_bytes(field: str, hex_string: Optional[str], size: int, parse) -> bytes:
    if hex_string and len(hex_string) != size * 2:
        raise ValidationError(
            f"{field} must be {size * 2} hex characters",
            {field: hex_string},
        )
    try:
        return parse(hex_string).to_bytes(size, "big")
    except ValueError as e:
        raise ValidationError(f"{field} is not hexadecimal", {field: hex_string}) from e
