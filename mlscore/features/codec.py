#!filepath: mlscore/features/codec.py
from __future__ import annotations

"""
Feature Codec

Wire format (caller visible):
    UTF-8 JSON object, keys = decimal feature index, values = number

        {"0":1.0,"1":2.0,"2":3.0}

- encode() always emits keys "0".."n-1" in ascending order
- decode() accepts any object of integer-string key -> number
"""

import json
import math
import re
from collections.abc import Mapping
from numbers import Real
from typing import Dict, Iterator, Sequence, Union

import numpy as np

from mlscore.utils.errors import ArityError, MalformedInputError

MAX_FEATURES = 10

# indices are 64-bit signed on the engine side
MAX_INDEX = 2**63 - 1

_INDEX_RE = re.compile(r"[0-9]+")


class FeatureVector(Mapping):
    """
    Immutable sparse feature vector: {index -> value}.

    Iteration is in ascending index order. Compares equal to any mapping
    with the same items, including a plain dict.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[int, float] | None = None):
        checked: Dict[int, float] = {}
        for index, value in (values or {}).items():
            if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index <= MAX_INDEX:
                raise MalformedInputError(f"feature index must be a non-negative int, got {index!r}")
            checked[index] = _as_real(value, index)
        self._values = dict(sorted(checked.items()))

    def __getitem__(self, index: int) -> float:
        return self._values[index]

    def __iter__(self) -> Iterator[int]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"FeatureVector({self._values!r})"

    def to_array(self, width: int) -> np.ndarray:
        """
        Dense single-row matrix of shape (1, width).

        Missing indices are 0.0; indices >= width are dropped.
        """
        row = np.zeros((1, width), dtype=np.float64)
        for index, value in self._values.items():
            if index < width:
                row[0, index] = value
        return row


def _as_real(value, index) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise MalformedInputError(f"feature {index} is not a number: {value!r}")
    try:
        value = float(value)
    except OverflowError as e:
        raise MalformedInputError(f"feature {index} is out of float range") from e
    if not math.isfinite(value):
        raise MalformedInputError(f"feature {index} is not finite: {value!r}")
    return value


def encode(values: Sequence[float]) -> str:
    """
    Encode positional values; the i-th value gets index i.
    """
    values = list(values)
    if not values:
        raise ArityError("features() needs at least one value")
    if len(values) > MAX_FEATURES:
        raise ArityError(
            f"features() supports at most {MAX_FEATURES} values, got {len(values)}"
        )

    payload = {str(i): _as_real(v, i) for i, v in enumerate(values)}
    return json.dumps(payload, separators=(",", ":"), allow_nan=False)


def decode(blob: Union[str, bytes, bytearray]) -> FeatureVector:
    if isinstance(blob, (bytes, bytearray)):
        try:
            blob = bytes(blob).decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedInputError(f"feature blob is not valid UTF-8: {e}") from e

    if not isinstance(blob, str):
        raise MalformedInputError(f"feature blob must be text, got {type(blob).__name__}")
    if not blob.strip():
        raise MalformedInputError("feature blob is empty")

    try:
        pairs = json.loads(
            blob,
            object_pairs_hook=_as_pairs,
            parse_constant=_reject_constant,
        )
    except json.JSONDecodeError as e:
        raise MalformedInputError(f"feature blob is not valid JSON: {e.msg}") from e
    except ValueError as e:
        # int conversion limit on huge integer literals
        raise MalformedInputError(f"feature blob has an unparseable number: {e}") from e

    if not isinstance(pairs, _Pairs):
        raise MalformedInputError(
            f"feature blob must be a JSON object, got {type(pairs).__name__}"
        )

    values: Dict[int, float] = {}
    for key, value in pairs:
        if not _INDEX_RE.fullmatch(key):
            raise MalformedInputError(f"feature key is not a non-negative integer: {key!r}")
        try:
            index = int(key)
        except ValueError as e:
            raise MalformedInputError(f"feature key is too large: {key[:20]}...") from e
        if index > MAX_INDEX:
            raise MalformedInputError(f"feature index exceeds {MAX_INDEX}: {key[:20]}...")
        if index in values:
            raise MalformedInputError(f"duplicate feature index {index}")
        values[index] = _as_real(value, index)

    return FeatureVector(values)


class _Pairs(list):
    """Raw (key, value) pairs of the top-level JSON object."""


def _as_pairs(pairs):
    # nested objects also land here and are rejected as values later
    return _Pairs(pairs)


def _reject_constant(name: str):
    raise MalformedInputError(f"feature blob contains non-finite number {name}")
