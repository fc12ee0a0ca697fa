#!filepath: mlscore/models/serialization.py
from __future__ import annotations

"""
Model blob <-> Model

Blob contract (producer-defined, consumed here):

    joblib payload of a dict
        {
            "format": 1,
            "kind": "classifier" | "regressor",
            "model": <fitted estimator with .predict>,
            "n_features": int,
            "name": str | None,
        }

deserialize() is pure: no shared state is read or written. It is also
expensive, which is why callers go through ModelCache.
"""

import hashlib
import io
from typing import Any, Optional

import joblib
import numpy as np

from mlscore.models.base import MODEL_TYPES, Model, ModelKind
from mlscore.utils.errors import ModelFormatError

FORMAT_VERSION = 1


def model_digest(blob: bytes) -> bytes:
    """
    SHA-256 over the raw blob bytes (cache key).
    """
    _check_blob_type(blob)
    return hashlib.sha256(blob).digest()


def _check_blob_type(blob) -> None:
    if not isinstance(blob, (bytes, bytearray, memoryview)):
        raise ModelFormatError(f"model blob must be bytes, got {type(blob).__name__}")


def serialize(
    kind: ModelKind | str,
    estimator: Any,
    *,
    n_features: Optional[int] = None,
    name: Optional[str] = None,
) -> bytes:
    """
    Produce a model blob from a fitted estimator.
    """
    kind = _parse_kind(kind)
    if n_features is None:
        n_features = getattr(estimator, "n_features_in_", None)
    if n_features is None:
        raise ValueError("n_features is required for estimators without n_features_in_")

    artifact = {
        "format": FORMAT_VERSION,
        "kind": kind.value,
        "model": estimator,
        "n_features": int(n_features),
        "name": name,
    }
    buf = io.BytesIO()
    joblib.dump(artifact, buf)
    return buf.getvalue()


def deserialize(blob: bytes) -> Model:
    _check_blob_type(blob)
    if len(blob) == 0:
        raise ModelFormatError("model blob is empty")

    try:
        artifact = joblib.load(io.BytesIO(bytes(blob)))
    except Exception as e:
        raise ModelFormatError(f"model blob cannot be loaded: {e!r}") from e

    if not isinstance(artifact, dict):
        raise ModelFormatError(
            f"model blob must hold an artifact dict, got {type(artifact).__name__}"
        )

    version = artifact.get("format")
    if version != FORMAT_VERSION:
        raise ModelFormatError(f"unsupported model format version: {version!r}")

    if "kind" not in artifact:
        raise ModelFormatError("model blob has no kind tag")
    try:
        kind = _parse_kind(artifact["kind"])
    except ValueError as e:
        raise ModelFormatError(str(e)) from e

    estimator = artifact.get("model")
    if not callable(getattr(estimator, "predict", None)):
        raise ModelFormatError("model blob estimator has no predict()")

    n_features = artifact.get("n_features")
    if isinstance(n_features, bool) or not isinstance(n_features, int) or n_features < 1:
        raise ModelFormatError(f"invalid n_features: {n_features!r}")

    if kind is ModelKind.CLASSIFIER:
        classes = getattr(estimator, "classes_", None)
        if classes is not None and not np.issubdtype(np.asarray(classes).dtype, np.integer):
            raise ModelFormatError(
                f"classifier labels must be integers, got dtype {np.asarray(classes).dtype}"
            )

    return MODEL_TYPES[kind](
        estimator=estimator,
        n_features=n_features,
        name=artifact.get("name"),
    )


def _parse_kind(kind) -> ModelKind:
    try:
        return ModelKind(kind)
    except ValueError:
        raise ValueError(f"unknown model kind: {kind!r}") from None
