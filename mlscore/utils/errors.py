# mlscore/utils/errors.py
"""
Scoring error taxonomy.

Every error is scoped to a single scoring call and is reported to the
caller of the failing entry point. None of them is retried here.
"""


class ScoringError(RuntimeError):
    """Base class for all failures raised by the scoring runtime."""


class ArityError(ScoringError):
    """
    Raised when a feature vector is built from more positional values
    than supported (or from none).
    """


class MalformedInputError(ScoringError):
    """
    Raised when a feature-vector blob is not a JSON object of
    non-negative integer keys to numbers.
    """


class ModelFormatError(ScoringError):
    """
    Raised when a model blob cannot be turned into a known model kind.
    Never cached: the same blob is re-attempted on the next call.
    """


class KindMismatchError(ScoringError):
    """
    Raised when the resolved model is not of the kind the scoring
    operation requires.
    """

    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"model is not a {_kind_name(expected)} "
            f"(expected kind={_kind_name(expected)}, actual kind={_kind_name(actual)})"
        )


def _kind_name(kind) -> str:
    return getattr(kind, "value", str(kind))
