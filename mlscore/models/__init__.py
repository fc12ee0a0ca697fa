#!filepath: mlscore/models/__init__.py
from .base import Classifier, Model, ModelKind, Regressor
from .serialization import deserialize, model_digest, serialize

__all__ = [
    "Model", "ModelKind", "Classifier", "Regressor",
    "deserialize", "serialize", "model_digest",
]
