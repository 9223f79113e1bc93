"""In-process store of sampled spans grouped by latency bucket."""

from __future__ import annotations

import bisect
import math
from typing import Dict, List, Optional, Sequence, Tuple

from tracewire import runtime_config
from tracewire.exporter.base import SpanStore
from tracewire.tracer.span import SpanRecord


class SampledLatencySpanStore(SpanStore):
    """
    Keeps successful spans in latency buckets.

    N ascending boundaries define N+1 buckets; bucket i holds latencies in
    [boundaries[i-1], boundaries[i]). The first bucket starts at 0 and the
    last one is unbounded. Spans with no status or an error status are
    dropped.
    """

    def __init__(self, bucket_boundaries: Optional[Sequence[float]] = None) -> None:
        super().__init__()
        if bucket_boundaries is None:
            bucket_boundaries = runtime_config.get_latency_bucket_boundaries()
        self.bucket_boundaries: Tuple[float, ...] = tuple(bucket_boundaries)
        self._buckets: List[List[SpanRecord]] = [[] for _ in range(len(self.bucket_boundaries) + 1)]

    def _store(self, spans: List[SpanRecord]) -> None:
        for span in spans:
            if span.status is None or span.status.is_error():
                continue
            index = bisect.bisect_right(self.bucket_boundaries, span.latency)
            self._buckets[index].append(span)

    @property
    def spans(self) -> List[SpanRecord]:
        with self._lock:
            return [span for bucket in self._buckets for span in bucket]

    def clear(self) -> None:
        with self._lock:
            for bucket in self._buckets:
                bucket.clear()

    def filter(
        self,
        min: Optional[float] = None,
        max: Optional[float] = None,
        span_name: Optional[str] = None,
    ) -> List[SpanRecord]:
        """
        Filter stored spans by latency range and name.

        Args:
            min: inclusive lower latency bound in seconds (default 0)
            max: exclusive upper latency bound in seconds (default infinity)
            span_name: only spans with this name; None matches every name

        Returns:
            Matching spans; all stored spans when no argument is given
        """
        if min is None and max is None and span_name is None:
            return self.spans

        lower = 0 if min is None else min
        upper = math.inf if max is None else max
        if lower > upper:
            return []

        return [
            span
            for span in self.spans
            if (span_name is None or span.name == span_name) and lower <= span.latency < upper
        ]

    def summary(self) -> List[Dict[str, float]]:
        """Per-bucket bounds and span counts, in ascending latency order."""
        with self._lock:
            counts = [len(bucket) for bucket in self._buckets]
        result = []
        for index, count in enumerate(counts):
            lower, upper = self._bucket_bounds(index)
            result.append({"min": lower, "max": upper, "count": count})
        return result

    def _bucket_bounds(self, index: int) -> Tuple[float, float]:
        lower = 0 if index == 0 else self.bucket_boundaries[index - 1]
        upper = math.inf if index == len(self.bucket_boundaries) else self.bucket_boundaries[index]
        return lower, upper
