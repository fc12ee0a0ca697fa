#!filepath: mlscore/observability/metrics.py
import threading
from dataclasses import dataclass, field
from typing import Any, Dict

from mlscore.utils.logger import logs


@dataclass
class MetricRecorder:
    enabled: bool = True
    metrics: Dict[str, Any] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def record(self, name: str, value: Any):
        if not self.enabled:
            return
        with self._lock:
            self.metrics[name] = value
        logs.debug(f"[Metric] {name} = {value}")

    def incr(self, name: str, amount: int = 1) -> None:
        if not self.enabled:
            return
        with self._lock:
            self.metrics[name] = self.metrics.get(name, 0) + amount

    def get(self, name: str, default: Any = 0) -> Any:
        with self._lock:
            return self.metrics.get(name, default)

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return dict(self.metrics)
