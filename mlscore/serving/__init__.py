#!filepath: mlscore/serving/__init__.py
from .cache import ModelCache
from .dispatch import ScoreResult, ScoringDispatcher

__all__ = ["ModelCache", "ScoreResult", "ScoringDispatcher"]
