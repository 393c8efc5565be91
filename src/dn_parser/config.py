"""
Configuration — typed, validated settings loaded from environment/.env.

Uses pydantic-settings so the command-line tool is configured the same
way as the services that embed the library:
  - environment variables prefixed with DN_PARSER_ (e.g. DN_PARSER_LOG_LEVEL)
  - fall back to a .env file in the project root
  - validated at startup, defaults for everything

The parsing engine itself takes no configuration: its attribute-type
registry and character tables are fixed.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve the .env file relative to the project root (two levels above this file),
# so settings load correctly regardless of the working directory at runtime.
_ENV_FILE = Path(__file__).parent.parent.parent / ".env"


class AppSettings(BaseSettings):
    """
    Root application settings.

    Load order (highest priority first):
      1. Environment variables
      2. .env file
      3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="DN_PARSER_",
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(default="WARNING", description="Minimum level for structured logs")
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="console: human-readable, json: one JSON object per line",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Reject names the logging module does not know."""
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return level
