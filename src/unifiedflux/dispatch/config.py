# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: unifiedflux
"""
Configuration for the dispatcher.

Settings are read from ``UNIFIEDFLUX_DISPATCH_*`` environment variables.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PublishFailureMode(str, Enum):
    """How ``publish`` reports handler failures once every handler finished."""

    AGGREGATE = "aggregate"
    FIRST = "first"


class DispatcherSettings(BaseSettings):
    """Environment-driven settings for ``Dispatcher``."""

    model_config = SettingsConfigDict(
        env_prefix="UNIFIEDFLUX_DISPATCH_",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    publish_failure_mode: PublishFailureMode = Field(
        default=PublishFailureMode.AGGREGATE,
        description=(
            "aggregate: raise NotificationPublishError with every failure; "
            "first: re-raise the first failure in submission order"
        ),
    )
    validate_responses: bool = Field(
        default=True,
        description="Check request handler results against the declared response type",
    )
    logger_name: str = Field(
        default="unifiedflux.dispatch", description="Name of the dispatcher logger"
    )

    @classmethod
    def load(cls) -> DispatcherSettings:
        """Load settings from environment variables or defaults."""
        return cls()
