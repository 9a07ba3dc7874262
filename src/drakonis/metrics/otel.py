from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from drakonis.core.ports import MetricsSink

try:
    from opentelemetry.metrics import get_meter  # type: ignore
except Exception:  # pragma: no cover
    get_meter = None  # type: ignore

logger = logging.getLogger("drakonis.metrics.otel")


class OpenTelemetryMetrics(MetricsSink):
    """OpenTelemetry-based MetricsSink.

    Creates:
      - Counter: drakonis_decisions_total (attribute: decision)
      - Histogram: drakonis_decision_seconds (unit: s)
    """

    _counter: Optional[Any]
    _hist: Optional[Any]

    def __init__(self, *, meter: Any | None = None) -> None:
        self._counter = None
        self._hist = None

        if meter is None:
            if get_meter is None:
                logger.debug("Drakonis: opentelemetry-api not installed; metrics disabled")
                return
            meter = get_meter("drakonis.metrics")

        try:
            self._counter = meter.create_counter(
                name="drakonis_decisions_total",
                description="Total Drakonis decisions by outcome.",
            )
        except Exception:  # pragma: no cover
            self._counter = None

        create_hist = getattr(meter, "create_histogram", None)
        if create_hist is not None:
            try:
                self._hist = create_hist(
                    name="drakonis_decision_seconds",
                    description="Drakonis decision evaluation duration in seconds.",
                    unit="s",
                )
            except Exception:  # pragma: no cover
                self._hist = None

    # -- MetricsSink ------------------------------------------------------------

    def inc(self, name: str, labels: Dict[str, str] | None = None) -> None:
        if self._counter is None:
            return
        decision = (labels or {}).get("decision", "unknown")
        try:
            self._counter.add(1, {"decision": decision})
        except Exception:  # pragma: no cover
            logger.debug("Drakonis: otel counter add failed", exc_info=True)

    def observe(self, name: str, value: float, labels: Dict[str, str] | None = None) -> None:
        if self._hist is None:
            return
        decision = (labels or {}).get("decision", "unknown")
        try:
            self._hist.record(float(value), {"decision": decision})
        except Exception:  # pragma: no cover
            logger.debug("Drakonis: otel histogram record failed", exc_info=True)


__all__ = ["OpenTelemetryMetrics"]
