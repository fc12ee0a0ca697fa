#!filepath: mlscore/__init__.py

from .utils.logger import Logging, logs
from .config.app_config import AppConfig
from .utils.errors import (
    ArityError,
    KindMismatchError,
    MalformedInputError,
    ModelFormatError,
    ScoringError,
)

__version__ = "0.1.0"


def configure_logging(cfg: AppConfig | None = None) -> Logging:
    """
    Rebuild the global loguru sinks from config.
    """
    cfg = cfg or AppConfig.load()
    return Logging.from_config(cfg.log)


__all__ = [
    "logs", "Logging", "configure_logging",
    "AppConfig",
    "ScoringError", "ArityError", "MalformedInputError",
    "ModelFormatError", "KindMismatchError",
    "__version__",
]
