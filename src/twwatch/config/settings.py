"""Application settings using Pydantic Settings."""

import re
from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_MARKER_PATTERN = r"^\s*\[start:([^\]\s]+)\]"


def compile_marker(pattern: str) -> "re.Pattern[str]":
    """Compile a step marker; it must capture exactly the step reference."""
    try:
        compiled = re.compile(pattern)
    except re.error as e:
        raise ValueError(f"invalid step marker pattern '{pattern}': {e}")
    if compiled.groups != 1:
        raise ValueError(
            f"step marker pattern must have exactly one capture group, got {compiled.groups}: '{pattern}'"
        )
    return compiled


class Settings(BaseSettings):
    """Configuration read from TWWATCH_* environment variables."""

    # Logging Configuration
    log_level: str = "WARNING"
    log_file: Optional[Path] = None

    # Rendering
    color: bool = True
    marker_pattern: str = DEFAULT_MARKER_PATTERN  # Step-boundary hint in raw logs

    # Hint printed after a watch; "{id}" is replaced with the execution id
    details_command: str = "kubectl testkube get twe {id}"

    model_config = SettingsConfigDict(
        env_prefix="TWWATCH_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"log_level must be a logging level name, got '{v}'")
        return level

    @field_validator("marker_pattern")
    @classmethod
    def validate_marker_pattern(cls, v: str) -> str:
        compile_marker(v)
        return v

    def marker(self) -> "re.Pattern[str]":
        return compile_marker(self.marker_pattern)


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached instance so the environment is read again."""
    global _settings
    _settings = None
