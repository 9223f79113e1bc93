"""
B3 trace context propagation.

See https://github.com/openzipkin/b3-propagation for the header encodings.
Inbound parsing reads WSGI-style environ keys (HTTP_B3, HTTP_X_B3_*).
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Mapping, Optional

from tracewire.tracer.span_context import TraceContextData
from tracewire.utils.helpers import format_span_id

logger = logging.getLogger(__name__)

SINGLE_HEADER_NAME = "b3"

MULTI_HEADER_NAMES = {
    "trace_id": "X-B3-TraceId",
    "span_id": "X-B3-SpanId",
    "parent_span_id": "X-B3-ParentSpanId",
    "sampled": "X-B3-Sampled",
}

ENVIRON_SINGLE_HEADER_NAME = "HTTP_B3"

ENVIRON_MULTI_HEADER_NAMES = {
    "trace_id": "HTTP_X_B3_TRACEID",
    "span_id": "HTTP_X_B3_SPANID",
    "parent_span_id": "HTTP_X_B3_PARENTSPANID",
    "sampled": "HTTP_X_B3_SAMPLED",
}

NOT_SAMPLED_VALUE = 0x00
SAMPLED_VALUE = 0x01
DEBUG_SAMPLED_VALUE = "d"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _parse_sampled(value: Optional[str]) -> int:
    if value is None or value == DEBUG_SAMPLED_VALUE:
        return SAMPLED_VALUE
    # Leading integer wins; anything non-numeric is "not sampled".
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else NOT_SAMPLED_VALUE


class B3Formatter:
    """
    Serializes and deserializes trace contexts using B3 headers.

    Use `single_header()` or `multi_headers()` rather than the constructor.
    Both configurations serialize to the multi-header form.
    """

    def __init__(self, header_name: str, environ_header_name: str) -> None:
        self.header_name = header_name
        self.environ_header_name = environ_header_name

    @classmethod
    def single_header(cls) -> "B3Formatter":
        return cls(SINGLE_HEADER_NAME, ENVIRON_SINGLE_HEADER_NAME)

    @classmethod
    def multi_headers(cls) -> "B3Formatter":
        return cls(MULTI_HEADER_NAMES["trace_id"], ENVIRON_MULTI_HEADER_NAMES["trace_id"])

    @property
    def is_single_header(self) -> bool:
        return self.environ_header_name == ENVIRON_SINGLE_HEADER_NAME

    def deserialize(self, fields: Mapping[str, Optional[str]]) -> Optional[TraceContextData]:
        """
        Build a context from extracted B3 fields.

        Args:
            fields: mapping with trace_id, span_id and optional sampled /
                parent_span_id values

        Returns:
            TraceContextData, or None when trace id or span id is missing
        """
        trace_id = fields.get("trace_id")
        span_id = fields.get("span_id")
        if not trace_id or not span_id:
            logger.debug("Rejected B3 context without trace id or span id")
            return None

        return TraceContextData(
            trace_id=trace_id,
            span_id=span_id,
            trace_options=_parse_sampled(fields.get("sampled")),
        )

    def serialize(self, trace_context: TraceContextData) -> Dict[str, str]:
        """Return the outbound multi-header form; a missing span id is written as zeros."""
        return {
            MULTI_HEADER_NAMES["trace_id"]: trace_context.trace_id,
            MULTI_HEADER_NAMES["span_id"]: trace_context.span_id or format_span_id(0),
            MULTI_HEADER_NAMES["sampled"]: str(trace_context.trace_options),
        }

    def deserialize_environ(self, environ: Mapping[str, str]) -> Optional[TraceContextData]:
        """Parse the B3 header(s) this formatter was configured for."""
        if self.is_single_header:
            fields = self._single_header_fields(environ)
        else:
            fields = self._multi_header_fields(environ)
        return self.deserialize(fields)

    def _single_header_fields(self, environ: Mapping[str, str]) -> Dict[str, Optional[str]]:
        # {TraceId}-{SpanId}-{SamplingState}-{ParentSpanId}
        header = (environ.get(self.environ_header_name) or "").strip()
        parts = [p or None for p in header.split("-")] if header else []
        parts += [None] * (4 - len(parts))
        return {
            "trace_id": parts[0],
            "span_id": parts[1],
            "sampled": parts[2],
            "parent_span_id": parts[3],
        }

    def _multi_header_fields(self, environ: Mapping[str, str]) -> Dict[str, Optional[str]]:
        return {field: environ.get(name) for field, name in ENVIRON_MULTI_HEADER_NAMES.items()}
