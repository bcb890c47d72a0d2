"""
Configuration data models for moi-identifiers.

These models define the structure of .moi-id.json and
~/.config/moi-identifiers/config.json files, with validation and type safety
via Pydantic.
"""

import logging
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

OutputFormat = Literal["text", "json"]

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class OutputConfig(BaseModel):
    """
    How the CLI renders identifiers.
    """
    format: OutputFormat = Field(
        default="text",
        description="Default output format for inspect and generate commands"
    )


class LoggingConfig(BaseModel):
    """
    Logging settings for the CLI.

    --debug always wins over the configured level.
    """
    level: str = Field(
        default="WARNING",
        description="Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: object) -> object:
        """Accept level names in any case."""
        if isinstance(v, str):
            v = v.strip().upper()
            if v not in LOG_LEVELS:
                raise ValueError(f"level must be one of {', '.join(LOG_LEVELS)}, got {v!r}")
        return v

    def as_int(self) -> int:
        """Numeric level for logging.basicConfig."""
        return logging.getLevelName(self.level)


class MoiIdConfig(BaseModel):
    """
    Top-level moi-identifiers configuration.

    Loaded from defaults, user config, project config, and env vars.

    Example:
        >>> config = MoiIdConfig(output=OutputConfig(format="json"))
        >>> config.output.format
        'json'
        >>> config.logging.level
        'WARNING'
    """
    output: OutputConfig = Field(
        default_factory=OutputConfig,
        description="CLI output settings"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging settings"
    )

    model_config = ConfigDict(
        extra="allow",  # Allow extra fields for forward compatibility
        validate_assignment=True,
    )

    @field_validator("output", mode="before")
    @classmethod
    def validate_output(cls, v: str | dict | OutputConfig) -> dict | OutputConfig:
        """Convert a bare format name to OutputConfig."""
        if isinstance(v, str):
            return {"format": v}
        return v
