"""Base class for in-process span stores."""

from __future__ import annotations

import threading
from typing import Iterable

from tracewire.tracer.span import SpanRecord


class SpanStore:
    """
    Base span store interface.

    Stores receive batches of finished spans through export() and serve
    read-only queries. A stopped store ignores exported spans until resumed.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._stopped = False

    def stop(self) -> None:
        self._stopped = True

    def resume(self) -> None:
        self._stopped = False

    @property
    def stopped(self) -> bool:
        return self._stopped

    def export(self, spans: Iterable[SpanRecord]) -> None:
        """Pass a batch of captured spans to the store."""
        if self._stopped:
            return
        spans = list(spans)
        with self._lock:
            self._store(spans)

    def _store(self, spans: list) -> None:
        raise NotImplementedError
