from __future__ import annotations

__all__ = ["PrometheusMetrics", "OpenTelemetryMetrics"]


def __getattr__(name: str):
    if name == "PrometheusMetrics":
        from .prometheus import PrometheusMetrics

        return PrometheusMetrics
    if name == "OpenTelemetryMetrics":
        from .otel import OpenTelemetryMetrics

        return OpenTelemetryMetrics
    raise AttributeError(name)
