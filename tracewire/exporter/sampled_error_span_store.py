"""In-process store of sampled spans grouped by error code."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, List

from tracewire.exporter.base import SpanStore
from tracewire.tracer.span import SpanRecord, StatusCode


class SampledErrorSpanStore(SpanStore):
    """
    Keeps exported error spans bucketed by status code.

    Spans without an error status are dropped.
    """

    def __init__(self) -> None:
        super().__init__()
        self._store_by_code: Dict[StatusCode, List[SpanRecord]] = defaultdict(list)

    def _store(self, spans: List[SpanRecord]) -> None:
        for span in spans:
            if span.is_error():
                self._store_by_code[span.status.code].append(span)

    def __getitem__(self, code: StatusCode) -> List[SpanRecord]:
        with self._lock:
            return list(self._store_by_code[code])

    @property
    def spans(self) -> List[SpanRecord]:
        with self._lock:
            return [span for bucket in self._store_by_code.values() for span in bucket]

    def summary(self) -> Dict[StatusCode, int]:
        """Number of stored spans per error code."""
        with self._lock:
            return {code: len(bucket) for code, bucket in self._store_by_code.items()}

    def clear(self) -> None:
        with self._lock:
            self._store_by_code.clear()
