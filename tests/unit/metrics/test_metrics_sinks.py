import pytest

from drakonis.core.engine import AccessControl


def test_prometheus_sink_counts_decisions():
    prometheus_client = pytest.importorskip("prometheus_client")
    from drakonis.metrics.prometheus import PrometheusMetrics

    registry = prometheus_client.CollectorRegistry()
    m = PrometheusMetrics(registry=registry)
    ac = AccessControl({"admin": {"doc": {"read": True}}}, metrics=m)
    ac.is_allowed({"roles": ["admin"]}, "doc", "read")
    ac.is_allowed({"roles": ["admin"]}, "doc", "read")
    ac.is_allowed({"roles": ["guest"]}, "doc", "read")

    assert registry.get_sample_value("drakonis_decisions_total", {"decision": "grant"}) == 2.0
    assert registry.get_sample_value("drakonis_decisions_total", {"decision": "deny"}) == 1.0
    assert registry.get_sample_value("drakonis_decision_seconds_count", {"decision": "grant"}) == 2.0


def test_prometheus_sink_missing_labels_use_unknown():
    prometheus_client = pytest.importorskip("prometheus_client")
    from drakonis.metrics.prometheus import PrometheusMetrics

    registry = prometheus_client.CollectorRegistry()
    m = PrometheusMetrics(registry=registry)
    m.inc("drakonis_decisions_total")
    m.observe("drakonis_decision_seconds", 0.25)
    assert registry.get_sample_value("drakonis_decisions_total", {"decision": "unknown"}) == 1.0
    assert registry.get_sample_value("drakonis_decision_seconds_sum", {"decision": "unknown"}) == 0.25


class _FakeInstrument:
    def __init__(self):
        self.calls = []

    def add(self, amount, attributes=None):
        self.calls.append(("add", amount, attributes))

    def record(self, amount, attributes=None):
        self.calls.append(("record", amount, attributes))


class _FakeMeter:
    def __init__(self):
        self.counter = _FakeInstrument()
        self.hist = _FakeInstrument()

    def create_counter(self, name, description="", unit=""):
        assert name == "drakonis_decisions_total"
        return self.counter

    def create_histogram(self, name, description="", unit=""):
        assert name == "drakonis_decision_seconds"
        return self.hist


def test_otel_sink_records_with_injected_meter():
    from drakonis.metrics.otel import OpenTelemetryMetrics

    meter = _FakeMeter()
    m = OpenTelemetryMetrics(meter=meter)
    ac = AccessControl({"admin": {"doc": {"read": True}}}, metrics=m)
    ac.is_allowed({"roles": ["admin"]}, "doc", "read")
    assert meter.counter.calls == [("add", 1, {"decision": "grant"})]
    kind, value, attrs = meter.hist.calls[0]
    assert kind == "record" and value >= 0.0 and attrs == {"decision": "grant"}


def test_otel_sink_with_default_meter_does_not_raise():
    pytest.importorskip("opentelemetry.metrics")
    from drakonis.metrics.otel import OpenTelemetryMetrics

    m = OpenTelemetryMetrics()
    m.inc("drakonis_decisions_total", {"decision": "grant"})
    m.observe("drakonis_decision_seconds", 0.01, {"decision": "grant"})


def test_metrics_package_lazy_exports():
    import drakonis.metrics as metrics

    from drakonis.metrics.otel import OpenTelemetryMetrics

    assert metrics.OpenTelemetryMetrics is OpenTelemetryMetrics
    with pytest.raises(AttributeError):
        metrics.NoSuchSink  # noqa: B018
