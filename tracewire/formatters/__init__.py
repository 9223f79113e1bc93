"""Wire formatters for trace context and tracestate propagation."""

from tracewire.formatters.b3 import B3Formatter
from tracewire.formatters.binary import BinaryFormatter
from tracewire.formatters.tracestate import TracestateFormatter

__all__ = [
    "B3Formatter",
    "BinaryFormatter",
    "TracestateFormatter",
]
