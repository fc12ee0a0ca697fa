#!filepath: mlscore/functions.py
from __future__ import annotations

"""
Scalar functions exposed to the query engine.

    features(v1 .. vn)      n = 1..10   -> feature-vector blob
    classify(features, model)           -> int label
    regress(features, model)            -> float

One ScoringDispatcher (and so one ModelCache) serves the whole process.
It is built on first use from AppConfig, or injected with
reset_dispatcher() for isolated tests and embedding.
"""

import threading
from typing import Callable, Dict, Optional, Tuple

from mlscore.config.app_config import AppConfig
from mlscore.features.codec import encode
from mlscore.serving.cache import ModelCache
from mlscore.serving.dispatch import Blob, ScoringDispatcher
from mlscore.utils.errors import ArityError
from mlscore.utils.logger import logs

_dispatcher: Optional[ScoringDispatcher] = None
_dispatcher_lock = threading.Lock()


def build_dispatcher(cfg: AppConfig | None = None) -> ScoringDispatcher:
    cfg = cfg or AppConfig.load()
    cache = ModelCache.from_config(cfg.cache)
    logs.info(f"[functions] model cache ready capacity={cache.capacity}")
    return ScoringDispatcher(cache)


def get_dispatcher() -> ScoringDispatcher:
    global _dispatcher
    if _dispatcher is None:
        with _dispatcher_lock:
            if _dispatcher is None:
                _dispatcher = build_dispatcher()
    return _dispatcher


def reset_dispatcher(dispatcher: ScoringDispatcher | None = None) -> None:
    """
    Replace the process-wide dispatcher. None means rebuild lazily.
    """
    global _dispatcher
    with _dispatcher_lock:
        _dispatcher = dispatcher


# ============================================================
# entry points
# ============================================================
def classify(features_blob: Blob, model_blob: bytes) -> int:
    return get_dispatcher().classify(features_blob, model_blob)


def regress(features_blob: Blob, model_blob: bytes) -> float:
    return get_dispatcher().regress(features_blob, model_blob)


def features(*values: float) -> str:
    # pure encoding; never builds the dispatcher
    return encode(values)


def _features_of_arity(n: int) -> Callable[..., str]:
    def forward(*values: float) -> str:
        if len(values) != n:
            raise ArityError(f"features_{n}() takes exactly {n} values, got {len(values)}")
        return features(*values)

    forward.__name__ = f"features_{n}"
    forward.__qualname__ = forward.__name__
    forward.__doc__ = f"features() overload for exactly {n} values."
    return forward


features_1 = _features_of_arity(1)
features_2 = _features_of_arity(2)
features_3 = _features_of_arity(3)
features_4 = _features_of_arity(4)
features_5 = _features_of_arity(5)
features_6 = _features_of_arity(6)
features_7 = _features_of_arity(7)
features_8 = _features_of_arity(8)
features_9 = _features_of_arity(9)
features_10 = _features_of_arity(10)

_FEATURE_OVERLOADS = (
    features_1, features_2, features_3, features_4, features_5,
    features_6, features_7, features_8, features_9, features_10,
)


# ============================================================
# registry: (name, arity) -> callable
# ============================================================
SCALAR_FUNCTIONS: Dict[Tuple[str, int], Callable] = {
    ("classify", 2): classify,
    ("regress", 2): regress,
}
SCALAR_FUNCTIONS.update(
    {("features", n): fn for n, fn in enumerate(_FEATURE_OVERLOADS, start=1)}
)


def resolve_scalar_function(name: str, arity: int) -> Callable:
    key = (name, arity)
    if key in SCALAR_FUNCTIONS:
        return SCALAR_FUNCTIONS[key]

    arities = sorted(a for n, a in SCALAR_FUNCTIONS if n == name)
    if not arities:
        available = ", ".join(sorted({n for n, _ in SCALAR_FUNCTIONS}))
        raise LookupError(f"No scalar function {name!r}. Available: {available}")
    raise ArityError(f"{name}() accepts {arities} arguments, got {arity}")
