# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: unifiedflux
"""
Configuration for the unifiedflux logging system.

Settings are read from ``UNIFIEDFLUX_LOGGING_*`` environment variables, e.g.
``UNIFIEDFLUX_LOGGING_LEVEL=debug`` or ``UNIFIEDFLUX_LOGGING_JSON_FORMAT=true``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from unifiedflux.logging.level import LogLevel


class LoggingSettings(BaseSettings):
    """Environment-driven settings for unifiedflux loggers."""

    model_config = SettingsConfigDict(
        env_prefix="UNIFIEDFLUX_LOGGING_",
        extra="ignore",
        case_sensitive=False,
    )

    level: LogLevel = Field(default=LogLevel.INFO, description="Minimum level emitted")
    json_format: bool = Field(default=False, description="One JSON object per record")
    include_timestamp: bool = Field(default=True)
    include_level: bool = Field(default=True)
    console_enabled: bool = Field(default=True, description="Write records to a console stream")
    console_stream: Literal["stdout", "stderr"] = Field(default="stdout")
    file_enabled: bool = Field(default=False, description="Also append records to file_path")
    file_path: Path | None = Field(default=None)

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v: Any) -> LogLevel:
        return LogLevel.coerce(v)

    @model_validator(mode="after")
    def check_file_target(self) -> LoggingSettings:
        if self.file_enabled and self.file_path is None:
            raise ValueError("file_path is required when file_enabled is set")
        return self

    @classmethod
    def load(cls) -> LoggingSettings:
        """Load logging settings from environment variables or defaults."""
        return cls()
