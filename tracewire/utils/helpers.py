"""Helper functions for trace/span id conversion and OpenTelemetry interop."""

from __future__ import annotations

from typing import Optional

from opentelemetry.sdk.trace import ReadableSpan

TRACE_ID_BYTES = 16
SPAN_ID_BYTES = 8


def get_duration_ns(span: ReadableSpan) -> Optional[int]:
    """
    Get span duration in nanoseconds.

    Args:
        span: OpenTelemetry ReadableSpan instance

    Returns:
        Duration in nanoseconds, or None if span hasn't ended
    """
    if span.end_time is None or span.start_time is None:
        return None
    return span.end_time - span.start_time


def format_trace_id(trace_id: int) -> str:
    """
    Format an integer trace id as a 32-character lowercase hex string.
    """
    return format(trace_id, '032x')


def format_span_id(span_id: int) -> str:
    """
    Format an integer span id as a 16-character lowercase hex string.
    """
    return format(span_id, '016x')


def parse_trace_id(hex_string: Optional[str]) -> int:
    """
    Parse a hex trace id into an integer.

    Args:
        hex_string: 32-character hex string

    Returns:
        Trace id as int (0 when missing)

    Raises:
        ValueError: if the string is not hexadecimal
    """
    if not hex_string:
        return 0
    return int(hex_string, 16)


def parse_span_id(hex_string: Optional[str]) -> int:
    """
    Parse a hex span id into an integer.

    Args:
        hex_string: 16-character hex string

    Returns:
        Span id as int (0 when missing)

    Raises:
        ValueError: if the string is not hexadecimal
    """
    if not hex_string:
        return 0
    return int(hex_string, 16)
