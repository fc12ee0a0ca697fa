#!filepath: mlscore/config/cache_config.py
from pydantic import BaseModel, Field


class CacheConfig(BaseModel):
    """
    Model cache sizing.

    capacity is the maximum number of resident deserialized models.
    """

    capacity: int = Field(default=5, ge=1)
