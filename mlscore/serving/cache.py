#!filepath: mlscore/serving/cache.py
from __future__ import annotations

"""
ModelCache

Content-addressable, bounded, thread-safe cache:
    sha256(model blob) -> deserialized Model

Semantics:
- hit: entry becomes most-recently-used, same Model instance returned
- miss: deserialize once per digest, insert, evict LRU entries so that
  len(cache) <= capacity at every point
- failed deserialization is never cached

Locking:
- _lock guards the entry table and the per-digest load locks
- a per-digest load lock serializes cold loads of the same blob;
  deserialization itself runs outside _lock so other digests are served
"""

import threading
from collections import OrderedDict
from typing import Callable, Dict, List, Optional, Union

from mlscore.models.base import Model
from mlscore.models.serialization import deserialize, model_digest
from mlscore.observability.metrics import MetricRecorder
from mlscore.observability.timer import Timer
from mlscore.utils.logger import logs

DEFAULT_CAPACITY = 5


class ModelCache:
    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        *,
        deserializer: Callable[[bytes], Model] = deserialize,
        metrics: Optional[MetricRecorder] = None,
    ):
        if capacity < 1:
            raise ValueError(f"ModelCache capacity must be >= 1, got {capacity}")

        self.capacity = capacity
        self._deserializer = deserializer
        self._entries: "OrderedDict[bytes, Model]" = OrderedDict()
        self._loading: Dict[bytes, threading.Lock] = {}
        self._lock = threading.Lock()
        self._timer = Timer()
        self.metrics = metrics if metrics is not None else MetricRecorder()

    @classmethod
    def from_config(cls, cfg, **kwargs) -> "ModelCache":
        return cls(capacity=cfg.capacity, **kwargs)

    # ------------------------------------------------------------------
    # resolve
    # ------------------------------------------------------------------
    def resolve(self, blob: bytes) -> Model:
        digest = model_digest(blob)

        model = self._lookup(digest)
        if model is not None:
            return model

        load_lock = self._load_lock(digest)
        try:
            with load_lock:
                # another thread may have installed it while we waited
                model = self._lookup(digest, count_miss=False)
                if model is not None:
                    return model
                return self._install(digest, self._load(digest, blob))
        finally:
            self._release_load_lock(digest, load_lock)

    def _load(self, digest: bytes, blob: bytes) -> Model:
        self.metrics.incr("cache.loads")
        self._timer.start("deserialize")
        try:
            model = self._deserializer(blob)
        except Exception:
            self.metrics.incr("cache.load_failures")
            logs.warning(f"[ModelCache] load failed digest={digest.hex()[:12]}")
            raise
        finally:
            elapsed = self._timer.end("deserialize")

        logs.info(
            f"[ModelCache] loaded {model!r} digest={digest.hex()[:12]} "
            f"in {elapsed * 1000:.2f}ms"
        )
        return model

    def _lookup(self, digest: bytes, *, count_miss: bool = True) -> Optional[Model]:
        with self._lock:
            model = self._entries.get(digest)
            if model is not None:
                self._entries.move_to_end(digest)
        if model is not None:
            self.metrics.incr("cache.hits")
            logs.debug(f"[ModelCache] hit digest={digest.hex()[:12]}")
        elif count_miss:
            self.metrics.incr("cache.misses")
            logs.debug(f"[ModelCache] miss digest={digest.hex()[:12]}")
        return model

    def _load_lock(self, digest: bytes) -> threading.Lock:
        with self._lock:
            lock = self._loading.get(digest)
            if lock is None:
                lock = self._loading[digest] = threading.Lock()
            return lock

    def _release_load_lock(self, digest: bytes, load_lock: threading.Lock) -> None:
        with self._lock:
            # keep it while another thread is still holding it
            if self._loading.get(digest) is load_lock and not load_lock.locked():
                del self._loading[digest]

    def _install(self, digest: bytes, model: Model) -> Model:
        """
        Insert model under digest and return the resident instance.
        """
        evicted: List[bytes] = []
        with self._lock:
            resident = self._entries.get(digest)
            if resident is not None:
                self._entries.move_to_end(digest)
                return resident
            while len(self._entries) >= self.capacity:
                old, _ = self._entries.popitem(last=False)
                evicted.append(old)
            self._entries[digest] = model

        for old in evicted:
            self.metrics.incr("cache.evictions")
            logs.info(f"[ModelCache] evicted digest={old.hex()[:12]}")
        return model

    # ------------------------------------------------------------------
    # introspection
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: Union[bytes, bytearray]) -> bool:
        """
        Accepts either a 32-byte digest or a model blob.
        """
        key = bytes(key)
        with self._lock:
            if key in self._entries:
                return True
        return model_digest(key) in self.digests()

    def digests(self) -> List[bytes]:
        """
        Resident digests, least- to most-recently used.
        """
        with self._lock:
            return list(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def stats(self) -> Dict[str, int]:
        snap = self.metrics.snapshot()
        out = {
            name: int(snap.get(f"cache.{name}", 0))
            for name in ("hits", "misses", "loads", "load_failures", "evictions")
        }
        out["size"] = len(self)
        out["capacity"] = self.capacity
        return out
