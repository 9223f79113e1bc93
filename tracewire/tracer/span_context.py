"""Immutable trace metadata carried across process boundaries."""

from dataclasses import dataclass
from typing import Optional

SAMPLED_FLAG = 0x01


@dataclass(frozen=True)
class TraceContextData:
    trace_id: str
    span_id: Optional[str]
    trace_options: int = SAMPLED_FLAG  # bit 0 = sampled

    def is_valid(self) -> bool:
        return bool(self.trace_id and self.span_id)

    def is_sampled(self) -> bool:
        return bool(self.trace_options & SAMPLED_FLAG)
