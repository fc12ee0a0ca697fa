#!filepath: tests/observability/test_metrics.py
import threading

from mlscore.observability.metrics import MetricRecorder


def test_metric_record():
    m = MetricRecorder(enabled=True)
    m.record("latency_ms", 123)

    assert "latency_ms" in m.metrics
    assert m.metrics["latency_ms"] == 123


def test_metric_disabled():
    m = MetricRecorder(enabled=False)
    m.record("x", 1)
    m.incr("y")

    # Nothing should be recorded
    assert m.metrics == {}


def test_incr_from_many_threads():
    m = MetricRecorder()

    def work():
        for _ in range(1000):
            m.incr("cache.hits")

    threads = [threading.Thread(target=work) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert m.get("cache.hits") == 8000
    assert m.snapshot() == {"cache.hits": 8000}
