from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from drakonis.core.ports import MetricsSink

try:
    from prometheus_client import Counter, Histogram  # type: ignore
except Exception:  # pragma: no cover
    Counter = Histogram = None  # type: ignore

logger = logging.getLogger("drakonis.metrics.prometheus")


class PrometheusMetrics(MetricsSink):
    """Prometheus-based MetricsSink.

    Exposes:
      - drakonis_decisions_total{decision="grant|deny|error"}
      - drakonis_decision_seconds{decision=...} (Histogram)

    Instruments are registered in *registry* (the global default registry when
    omitted). Without ``prometheus_client`` installed the sink is a no-op.
    """

    _counter: Optional[Any]
    _hist: Optional[Any]

    def __init__(self, *, registry: Any | None = None, namespace: str = "") -> None:
        self._counter = None
        self._hist = None

        if Counter is None or Histogram is None:
            logger.debug("Drakonis: prometheus_client not installed; metrics disabled")
            return

        kwargs: Dict[str, Any] = {"namespace": namespace}
        if registry is not None:
            kwargs["registry"] = registry
        self._counter = Counter(
            "drakonis_decisions_total",
            "Total Drakonis decisions by outcome.",
            labelnames=("decision",),
            **kwargs,
        )
        self._hist = Histogram(
            "drakonis_decision_seconds",
            "Drakonis decision evaluation duration in seconds.",
            labelnames=("decision",),
            **kwargs,
        )

    # -- MetricsSink ------------------------------------------------------------

    def inc(self, name: str, labels: Dict[str, str] | None = None) -> None:
        """Increment the decisions counter.

        *name* is accepted for interface compatibility; this sink always counts
        into ``drakonis_decisions_total``.
        """
        if self._counter is None:
            return
        decision = (labels or {}).get("decision", "unknown")
        try:
            self._counter.labels(decision=decision).inc()
        except Exception:  # pragma: no cover
            logger.debug("Drakonis: prometheus inc failed", exc_info=True)

    def observe(self, name: str, value: float, labels: Dict[str, str] | None = None) -> None:
        if self._hist is None:
            return
        decision = (labels or {}).get("decision", "unknown")
        try:
            self._hist.labels(decision=decision).observe(float(value))
        except Exception:  # pragma: no cover
            logger.debug("Drakonis: prometheus observe failed", exc_info=True)


__all__ = ["PrometheusMetrics"]
