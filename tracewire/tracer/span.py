"""Read-only span records consumed by the in-process span stores."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional

from opentelemetry.sdk.trace import ReadableSpan
from opentelemetry.trace import SpanKind as OTelSpanKind
from opentelemetry.trace import StatusCode as OTelStatusCode

from tracewire.utils.helpers import get_duration_ns

NANOS_PER_SECOND = 1e9


class StatusCode(IntEnum):
    """Canonical status codes."""

    OK = 0
    CANCELLED = 1
    UNKNOWN = 2
    INVALID_ARGUMENT = 3
    DEADLINE_EXCEEDED = 4
    NOT_FOUND = 5
    ALREADY_EXISTS = 6
    PERMISSION_DENIED = 7
    RESOURCE_EXHAUSTED = 8
    FAILED_PRECONDITION = 9
    ABORTED = 10
    OUT_OF_RANGE = 11
    UNIMPLEMENTED = 12
    INTERNAL = 13
    UNAVAILABLE = 14
    DATA_LOSS = 15
    UNAUTHENTICATED = 16


_HTTP_STATUS_CODES = {
    400: StatusCode.INVALID_ARGUMENT,
    401: StatusCode.UNAUTHENTICATED,
    403: StatusCode.PERMISSION_DENIED,
    404: StatusCode.NOT_FOUND,
    409: StatusCode.ALREADY_EXISTS,
    429: StatusCode.RESOURCE_EXHAUSTED,
    499: StatusCode.CANCELLED,
    501: StatusCode.UNIMPLEMENTED,
    503: StatusCode.UNAVAILABLE,
    504: StatusCode.DEADLINE_EXCEEDED,
}


class SpanKind(Enum):
    UNSPECIFIED = 0
    SERVER = 1
    CLIENT = 2


@dataclass(frozen=True)
class Status:
    code: StatusCode
    message: Optional[str] = None

    def is_error(self) -> bool:
        return self.code != StatusCode.OK

    @classmethod
    def from_http_status(cls, http_status: int, message: Optional[str] = None) -> "Status":
        """Map an HTTP response status to a canonical status."""
        if 200 <= http_status < 400:
            return cls(StatusCode.OK, message)
        return cls(_HTTP_STATUS_CODES.get(http_status, StatusCode.UNKNOWN), message)


@dataclass(frozen=True)
class SpanRecord:
    """
    Snapshot of a single timed operation.

    Times are seconds since the epoch. `status` is None when the span never
    had a status set.
    """

    name: str
    status: Optional[Status]
    start_time: float
    end_time: float
    kind: SpanKind = SpanKind.UNSPECIFIED

    @property
    def latency(self) -> float:
        return self.end_time - self.start_time

    def is_error(self) -> bool:
        return self.status is not None and self.status.is_error()

    @classmethod
    def from_otel(cls, span: ReadableSpan) -> "SpanRecord":
        """
        Build a record from a finished OpenTelemetry span.

        OTel only distinguishes UNSET/OK/ERROR: UNSET maps to no status and
        ERROR maps to UNKNOWN.
        """
        otel_status = span.status
        status: Optional[Status] = None
        if otel_status is not None and otel_status.status_code == OTelStatusCode.OK:
            status = Status(StatusCode.OK, otel_status.description)
        elif otel_status is not None and otel_status.status_code == OTelStatusCode.ERROR:
            status = Status(StatusCode.UNKNOWN, otel_status.description)

        if span.kind == OTelSpanKind.SERVER:
            kind = SpanKind.SERVER
        elif span.kind == OTelSpanKind.CLIENT:
            kind = SpanKind.CLIENT
        else:
            kind = SpanKind.UNSPECIFIED

        start_ns = span.start_time or 0
        duration_ns = get_duration_ns(span) or 0
        start_time = start_ns / NANOS_PER_SECOND
        return cls(
            name=span.name,
            status=status,
            start_time=start_time,
            end_time=start_time + duration_ns / NANOS_PER_SECOND,
            kind=kind,
        )
