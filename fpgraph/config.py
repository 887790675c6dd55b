"""
Settings for fpgraph.

The library itself needs no configuration; settings only control how its
loggers are set up by ``fpgraph.logging.setup_logging``.
"""
import logging
import os
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """Logging settings."""
    log_level: str = "WARNING"
    log_file: Optional[str] = None

    def __post_init__(self):
        level = self.log_level.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got '{self.log_level}'")
        object.__setattr__(self, 'log_level', level)


def load_settings() -> Settings:
    """Load settings from FPGRAPH_LOG_LEVEL and FPGRAPH_LOG_FILE."""
    settings = Settings(
        log_level=os.getenv("FPGRAPH_LOG_LEVEL", "WARNING").strip(),
        log_file=os.getenv("FPGRAPH_LOG_FILE") or None,
    )
    logger.debug("Settings loaded: level=%s, file=%s", settings.log_level, settings.log_file)
    return settings
