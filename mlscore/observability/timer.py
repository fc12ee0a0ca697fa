#!filepath: mlscore/observability/timer.py
import threading
import time
from typing import Dict


class Timer:
    """
    High-resolution span timer
    - start(name)
    - end(name) -> elapsed seconds

    Spans are kept per thread, so concurrent callers timing the same
    name do not overwrite each other.
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._local = threading.local()

    @property
    def _start(self) -> Dict[str, float]:
        starts = getattr(self._local, "starts", None)
        if starts is None:
            starts = self._local.starts = {}
        return starts

    def start(self, name: str):
        if not self.enabled:
            return
        self._start[name] = time.perf_counter()

    def end(self, name: str) -> float:
        if not self.enabled:
            return 0.0
        if name not in self._start:
            return 0.0
        return time.perf_counter() - self._start.pop(name)
