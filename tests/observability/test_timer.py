#!filepath: tests/observability/test_timer.py

import threading
import time

from mlscore.observability.timer import Timer


def test_timer_basic():
    t = Timer(enabled=True)
    t.start("task")
    time.sleep(0.01)
    elapsed = t.end("task")

    assert elapsed > 0
    assert isinstance(elapsed, float)


def test_timer_disabled():
    t = Timer(enabled=False)
    t.start("task")
    elapsed = t.end("task")

    assert elapsed == 0.0


def test_timer_unknown_span():
    assert Timer().end("never_started") == 0.0


def test_timer_spans_are_per_thread():
    t = Timer()
    t.start("load")
    other = []

    thread = threading.Thread(target=lambda: other.append(t.end("load")))
    thread.start()
    thread.join()

    assert other == [0.0]
    assert t.end("load") > 0
