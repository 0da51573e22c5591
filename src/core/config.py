"""
Runtime settings for a replay, and the logging set-up that goes with them.

Settings are read once (usually from the environment) and then passed explicitly to the layers that need them.
"""

import logging
import os
from typing import Self

from pydantic import BaseModel, field_validator

ENV_PREFIX = "PGN_REPLAY_"
LOGGER_NAME = "pgn_replay"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_TRUTHY = ("1", "true", "yes", "on")


class ReplaySettings(BaseModel):
    log_level: str = "WARNING"
    # A symbol / number cut off by the end of input is dropped unless this is switched on
    flush_trailing_token: bool = False

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LEVEL_NAMES:
            raise ValueError(
                f"Unknown log level {value!r}. Pick one from {','.join(_LEVEL_NAMES)}"
            )
        return level

    @classmethod
    def from_env(cls) -> Self:
        """Read PGN_REPLAY_LOG_LEVEL and PGN_REPLAY_FLUSH_TRAILING_TOKEN (both optional)."""
        log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "WARNING")
        flush = os.getenv(f"{ENV_PREFIX}FLUSH_TRAILING_TOKEN", "false")
        return cls(
            log_level=log_level,
            flush_trailing_token=flush.strip().lower() in _TRUTHY,
        )


def setup_logging(settings: ReplaySettings) -> logging.Logger:
    """Configures the logging format and level based on the settings."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format=LOG_FORMAT,
    )
    return logging.getLogger(LOGGER_NAME)
