"""OpenTelemetry span exporter that feeds finished spans into in-process span stores."""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from opentelemetry.sdk.trace import ReadableSpan
from opentelemetry.sdk.trace.export import SpanExporter as OTelSpanExporter, SpanExportResult

from tracewire.exporter.base import SpanStore
from tracewire.tracer.span import SpanRecord

logger = logging.getLogger(__name__)


class StoreSpanExporter(OTelSpanExporter):
    """
    Converts OTel spans into SpanRecords and exports them to every store.

    Register it with an OTel SimpleSpanProcessor or BatchSpanProcessor.
    Store export never fails, so the result is always SUCCESS.
    """

    def __init__(self, stores: Iterable[SpanStore]) -> None:
        self.stores: List[SpanStore] = list(stores)
        self._shutdown = False

    def export(self, spans: Sequence[ReadableSpan]) -> SpanExportResult:
        if self._shutdown:
            return SpanExportResult.SUCCESS

        records = []
        for span in spans:
            try:
                records.append(SpanRecord.from_otel(span))
            except (AttributeError, TypeError) as e:
                logger.warning("Skipping span that could not be converted: %s", e)

        for store in self.stores:
            store.export(records)
        return SpanExportResult.SUCCESS

    def shutdown(self) -> None:
        self._shutdown = True

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        return True
