# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: unifiedflux

"""
Public API for the unifiedflux logging system.
"""

from __future__ import annotations

from unifiedflux.logging.config import LoggingSettings
from unifiedflux.logging.level import LogLevel
from unifiedflux.logging.logger import (
    FluxJsonEncoder,
    FluxLogger,
    StructuredFormatter,
    get_logger,
)
from unifiedflux.logging.protocols import LoggerProtocol

__all__ = [
    "LoggerProtocol",
    "LogLevel",
    "FluxLogger",
    "FluxJsonEncoder",
    "StructuredFormatter",
    "LoggingSettings",
    "get_logger",
]
