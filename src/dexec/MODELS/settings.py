"""
Runtime settings for dexec.
"""
import logging
from pydantic import BaseModel, Field, field_validator


class DexecSettings(BaseModel):
    """
    Settings read from ``DEXEC_*`` environment variables.
    """
    docker_bin: str = "docker"
    pull_attempts: int = Field(default=3, ge=1)
    pull_backoff: float = Field(default=1.0, ge=0)
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value}")
        return level
