#!filepath: mlscore/models/base.py
from __future__ import annotations

"""
Model (FINAL / FROZEN)

A Model is an immutable, kind-tagged wrapper around a fitted estimator.

Variants:
- Classifier: classify(features) -> int label
- Regressor:  regress(features)  -> float

Responsibilities:
- Densify a sparse FeatureVector into the estimator's input row
- Run exactly one prediction

Non-responsibilities:
- Training
- Deserialization (see serialization.py)
- Caching (see mlscore.serving.cache)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Optional

from mlscore.features.codec import FeatureVector
from mlscore.utils.errors import KindMismatchError


class ModelKind(str, Enum):
    CLASSIFIER = "classifier"
    REGRESSOR = "regressor"


@dataclass(frozen=True, eq=False)
class Model:
    """
    Tagged model value. Equality is identity: two resolutions of the same
    cached entry return the same object.
    """

    kind: ClassVar[ModelKind]

    estimator: Any
    n_features: int
    name: Optional[str] = None

    def as_classifier(self) -> "Classifier":
        raise KindMismatchError(ModelKind.CLASSIFIER, self.kind)

    def as_regressor(self) -> "Regressor":
        raise KindMismatchError(ModelKind.REGRESSOR, self.kind)

    def _predict_one(self, features: FeatureVector):
        X = features.to_array(self.n_features)
        return self.estimator.predict(X)[0]

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, "
            f"n_features={self.n_features}, estimator={type(self.estimator).__name__})"
        )


@dataclass(frozen=True, eq=False, repr=False)
class Classifier(Model):
    kind: ClassVar[ModelKind] = ModelKind.CLASSIFIER

    def as_classifier(self) -> "Classifier":
        return self

    def classify(self, features: FeatureVector) -> int:
        return int(self._predict_one(features))


@dataclass(frozen=True, eq=False, repr=False)
class Regressor(Model):
    kind: ClassVar[ModelKind] = ModelKind.REGRESSOR

    def as_regressor(self) -> "Regressor":
        return self

    def regress(self, features: FeatureVector) -> float:
        return float(self._predict_one(features))


MODEL_TYPES = {
    ModelKind.CLASSIFIER: Classifier,
    ModelKind.REGRESSOR: Regressor,
}
