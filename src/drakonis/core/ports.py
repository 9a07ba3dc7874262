from __future__ import annotations

from typing import Any, Dict, Protocol, runtime_checkable


class MetricsSink(Protocol):
    def inc(self, name: str, labels: Dict[str, str] | None = None) -> None: ...


@runtime_checkable
class MetricsObserve(Protocol):
    """Optional extension of :class:`MetricsSink` for latency histograms."""

    def observe(self, name: str, value: float, labels: Dict[str, str] | None = None) -> None: ...


class DecisionLogSink(Protocol):
    def log(self, payload: Dict[str, Any]) -> None: ...


__all__ = ["MetricsSink", "MetricsObserve", "DecisionLogSink"]
