"""In-process view of all spans that are still running."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Callable, Dict, Iterator, List, Optional

from tracewire.context.context import get_span_context
from tracewire.exporter.base import SpanStore
from tracewire.tracer.span import SpanRecord

logger = logging.getLogger(__name__)


class RunningSpanStore(SpanStore):
    """
    Lets users inspect running spans, e.g. to debug stuck or long-lived operations.

    Nothing is stored: every query walks the active span context and all of
    its ancestors, collecting each unfinished span builder once. A span
    context is expected to expose `parent` and `contained_span_builders`;
    builders expose `finished` and `to_span()`.
    """

    def __init__(self, span_context_getter: Optional[Callable[[], Any]] = None) -> None:
        super().__init__()
        self._get_span_context = span_context_getter or get_span_context

    def _store(self, spans: List[SpanRecord]) -> None:
        # Running spans come from the live context, not from exported batches.
        logger.debug("RunningSpanStore ignores %d exported spans", len(spans))

    def _running_builders(self) -> List[Any]:
        builders = []
        seen = set()
        span_context = self._get_span_context()
        while span_context is not None:
            for builder in span_context.contained_span_builders:
                if id(builder) in seen or builder.finished:
                    continue
                seen.add(id(builder))
                builders.append(builder)
            span_context = span_context.parent
        return builders

    @property
    def spans(self) -> List[SpanRecord]:
        """Snapshots of every running span reachable from the active context."""
        with self._lock:
            return [builder.to_span() for builder in self._running_builders()]

    def __getitem__(self, span_name: str) -> List[SpanRecord]:
        return [span for span in self.spans if span.name == span_name]

    def __iter__(self) -> Iterator[SpanRecord]:
        return iter(self.spans)

    def filter(self, span_name: str, limit: Optional[int] = None) -> List[SpanRecord]:
        """Running spans with the given name, at most `limit` of them."""
        result = self[span_name]
        return result if limit is None else result[:limit]

    def summary(self) -> Dict[str, int]:
        """Number of running spans per span name."""
        return dict(Counter(span.name for span in self.spans))
