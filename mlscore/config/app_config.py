#!filepath: mlscore/config/app_config.py
import os

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .cache_config import CacheConfig
from .log_config import LogConfig

# environment variable -> (section, key)
ENV_OVERRIDES = {
    "MLSCORE_CACHE_CAPACITY": ("cache", "capacity"),
    "MLSCORE_LOG_LEVEL": ("log", "level"),
    "MLSCORE_LOG_DIR": ("log", "dir"),
}


def project_root() -> str:
    """
    mlscore/config/app_config.py -> mlscore/config -> mlscore -> project_root
    """
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "../../"))


def default_config_path() -> str:
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), "base.yml")


class AppConfig(BaseModel):
    log: LogConfig = Field(default_factory=LogConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)

    @classmethod
    def load(cls, path: str | None = None) -> "AppConfig":
        """
        Load YAML config + .env

        - default: mlscore/config/base.yml
        - .env at project root is loaded first (existing env wins)
        - MLSCORE_* variables override YAML values
        """
        load_dotenv(os.path.join(project_root(), ".env"))

        if path is None:
            path = default_config_path()

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        for env_name, (section, key) in ENV_OVERRIDES.items():
            value = os.getenv(env_name)
            if value is not None:
                raw.setdefault(section, {})
                raw[section][key] = value

        return cls(**raw)
