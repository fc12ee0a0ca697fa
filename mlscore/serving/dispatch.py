#!filepath: mlscore/serving/dispatch.py
from __future__ import annotations

"""
ScoringDispatcher

classify / regress:
    features blob --decode--> FeatureVector
    model blob    --cache---> Model
    match model.kind against the requested operation, then score

Failures travel inside a ScoreResult until the entry-point boundary,
where unwrap() raises them to the caller.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union

from mlscore.features.codec import FeatureVector, decode, encode
from mlscore.models.base import ModelKind
from mlscore.serving.cache import ModelCache
from mlscore.utils.errors import KindMismatchError, ScoringError

T = TypeVar("T")

Blob = Union[str, bytes, bytearray]


@dataclass(frozen=True)
class ScoreResult(Generic[T]):
    value: Optional[T] = None
    error: Optional[ScoringError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value

    @classmethod
    def success(cls, value: T) -> "ScoreResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ScoringError) -> "ScoreResult[T]":
        return cls(error=error)


class ScoringDispatcher:
    def __init__(self, cache: ModelCache):
        self.cache = cache

    # ---------- result-returning core ----------
    def try_classify(self, features_blob: Blob, model_blob: bytes) -> ScoreResult[int]:
        return self._score(ModelKind.CLASSIFIER, features_blob, model_blob)

    def try_regress(self, features_blob: Blob, model_blob: bytes) -> ScoreResult[float]:
        return self._score(ModelKind.REGRESSOR, features_blob, model_blob)

    def _score(self, requested: ModelKind, features_blob: Blob, model_blob: bytes) -> ScoreResult:
        try:
            # decode first: a bad feature blob must not touch the cache
            features: FeatureVector = decode(features_blob)
            model = self.cache.resolve(model_blob)
        except ScoringError as e:
            return ScoreResult.failure(e)

        if requested is ModelKind.CLASSIFIER and model.kind is ModelKind.CLASSIFIER:
            return ScoreResult.success(model.as_classifier().classify(features))
        if requested is ModelKind.REGRESSOR and model.kind is ModelKind.REGRESSOR:
            return ScoreResult.success(model.as_regressor().regress(features))
        return ScoreResult.failure(KindMismatchError(requested, model.kind))

    # ---------- raising entry points ----------
    def classify(self, features_blob: Blob, model_blob: bytes) -> int:
        return self.try_classify(features_blob, model_blob).unwrap()

    def regress(self, features_blob: Blob, model_blob: bytes) -> float:
        return self.try_regress(features_blob, model_blob).unwrap()

    def features(self, *values: float) -> str:
        return encode(values)
