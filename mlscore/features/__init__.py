#!filepath: mlscore/features/__init__.py
from .codec import MAX_FEATURES, FeatureVector, decode, encode

__all__ = ["MAX_FEATURES", "FeatureVector", "decode", "encode"]
