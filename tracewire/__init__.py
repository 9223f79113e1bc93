"""tracewire: trace context propagation codecs and in-process span stores."""

from tracewire.errors import (
    ConfigError,
    InvalidEntryError,
    InvalidTagError,
    TracewireError,
    ValidationError,
)
from tracewire.exporter import (
    RunningSpanStore,
    SampledErrorSpanStore,
    SampledLatencySpanStore,
    SpanStore,
    StoreSpanExporter,
)
from tracewire.formatters import B3Formatter, BinaryFormatter, TracestateFormatter
from tracewire.tags import Tag, TagMap
from tracewire.tracer import (
    AddResult,
    Entry,
    SpanKind,
    SpanRecord,
    Status,
    StatusCode,
    TraceContextData,
    TraceStateList,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "TracewireError",
    "ConfigError",
    "ValidationError",
    "InvalidEntryError",
    "InvalidTagError",
    "TraceContextData",
    "Entry",
    "AddResult",
    "TraceStateList",
    "SpanKind",
    "SpanRecord",
    "Status",
    "StatusCode",
    "BinaryFormatter",
    "B3Formatter",
    "TracestateFormatter",
    "SpanStore",
    "RunningSpanStore",
    "SampledErrorSpanStore",
    "SampledLatencySpanStore",
    "StoreSpanExporter",
    "Tag",
    "TagMap",
]
