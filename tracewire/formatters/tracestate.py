"""
W3C tracestate header encoding.

See https://w3c.github.io/trace-context/#tracestate-header
"""

from __future__ import annotations

import logging
import re
from typing import Mapping, Optional

from tracewire.tracer.trace_state import TraceStateList

logger = logging.getLogger(__name__)

HEADER_NAME = "tracestate"
ENVIRON_HEADER_NAME = "HTTP_TRACESTATE"

ENTRY_DELIMITER = ","
ENTRY_DELIMITER_FORMAT = re.compile(r"[ \t]*,[ \t]*")
KEY_VALUE_DELIMITER = "="


class TracestateFormatter:
    """Serializes and deserializes TraceStateList objects."""

    header_name = HEADER_NAME
    environ_header_name = ENVIRON_HEADER_NAME

    def deserialize(self, header: Optional[str]) -> Optional[TraceStateList]:
        """
        Parse a tracestate header.

        Entries are added left to right, each moving to the front, so the
        resulting list is in reverse header order. Any malformed or invalid
        member rejects the whole header.
        """
        if header is None:
            return None

        entries = ENTRY_DELIMITER_FORMAT.split(header.strip())
        # Trailing empty members are ignored; leading or inner ones are malformed.
        while entries and entries[-1] == "":
            entries.pop()
        if len(entries) > TraceStateList.MAX_ENTRIES:
            logger.debug("Rejected tracestate with %d entries", len(entries))
            return None

        trace_state = TraceStateList()
        for member in entries:
            key_value = member.strip().split(KEY_VALUE_DELIMITER, 1)
            if len(key_value) != 2:
                logger.debug("Rejected tracestate member without delimiter: %r", member)
                return None
            trace_state.add(key_value[0], key_value[1])

        if not trace_state.is_valid():
            logger.debug("Rejected tracestate with invalid members: %r", header)
            return None
        return trace_state

    def serialize(self, trace_state: TraceStateList) -> str:
        return ENTRY_DELIMITER.join(
            f"{entry.key}{KEY_VALUE_DELIMITER}{entry.value}" for entry in trace_state
        )

    def deserialize_environ(self, environ: Mapping[str, str]) -> Optional[TraceStateList]:
        return self.deserialize(environ.get(self.environ_header_name))
