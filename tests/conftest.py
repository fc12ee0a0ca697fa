# tests/conftest.py
from __future__ import annotations

import threading

import numpy as np
import pytest
from loguru import logger
from sklearn.linear_model import LinearRegression, LogisticRegression

from mlscore.models.serialization import deserialize, serialize
from mlscore.serving.cache import ModelCache
from mlscore.serving.dispatch import ScoringDispatcher


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)
    yield


# ============================================================
# fitted estimators
# ============================================================
@pytest.fixture(scope="session")
def classifier_estimator():
    """
    3 features, label = 1 iff feature 0 > 0
    """
    X = np.array(
        [
            [-3.0, 0.0, 0.0],
            [-2.0, 1.0, 0.0],
            [-1.0, 0.0, 1.0],
            [1.0, 0.0, 1.0],
            [2.0, 1.0, 0.0],
            [3.0, 0.0, 0.0],
        ]
    )
    y = np.array([0, 0, 0, 1, 1, 1])
    return LogisticRegression().fit(X, y)


@pytest.fixture(scope="session")
def regressor_estimator():
    """
    3 features, y = 2*x0 + x1 - x2 + 0.5 (exact)
    """
    rng = np.random.default_rng(7)
    X = rng.integers(-5, 5, size=(30, 3)).astype(float)
    y = 2 * X[:, 0] + X[:, 1] - X[:, 2] + 0.5
    return LinearRegression().fit(X, y)


# ============================================================
# model blobs
# ============================================================
@pytest.fixture(scope="session")
def classifier_blob(classifier_estimator) -> bytes:
    return serialize("classifier", classifier_estimator, name="sign_clf")


@pytest.fixture(scope="session")
def regressor_blob(regressor_estimator) -> bytes:
    return serialize("regressor", regressor_estimator, name="linear_reg")


@pytest.fixture(scope="session")
def make_regressor_blobs(regressor_estimator):
    """
    n distinct blobs (distinct digests) of the same estimator.
    """

    def _make(n: int):
        return [
            serialize("regressor", regressor_estimator, name=f"reg_{i}")
            for i in range(n)
        ]

    return _make


# ============================================================
# counting deserializer / isolated cache
# ============================================================
class CountingDeserializer:
    def __init__(self, delay: float = 0.0):
        self.calls = 0
        self.delay = delay
        self._lock = threading.Lock()

    def __call__(self, blob: bytes):
        with self._lock:
            self.calls += 1
        if self.delay:
            threading.Event().wait(self.delay)
        return deserialize(blob)


@pytest.fixture
def counting_deserializer() -> CountingDeserializer:
    return CountingDeserializer()


@pytest.fixture
def cache(counting_deserializer) -> ModelCache:
    return ModelCache(capacity=5, deserializer=counting_deserializer)


@pytest.fixture
def dispatcher(cache) -> ScoringDispatcher:
    return ScoringDispatcher(cache)


@pytest.fixture
def slow_deserializer():
    def _make(delay: float) -> CountingDeserializer:
        return CountingDeserializer(delay=delay)

    return _make
