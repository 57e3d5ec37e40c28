# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: unifiedflux
"""
Log levels for unifiedflux.
"""

from __future__ import annotations

import logging
from enum import Enum


class LogLevel(str, Enum):
    """The five stdlib levels under their canonical names."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_stdlib_level(self) -> int:
        return logging.getLevelNamesMapping()[self.value]

    @classmethod
    def coerce(cls, value: LogLevel | str | int) -> LogLevel:
        """Accept a member, a level name in any case, or a stdlib level number.

        Raises:
            ValueError: If ``value`` names no known level
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            name = logging.getLevelName(value)
        elif isinstance(value, str):
            name = value.strip().upper()
        else:
            raise ValueError(f"Invalid log level: {value!r}")
        if name == "WARN":
            name = "WARNING"
        try:
            return cls(name)
        except ValueError:
            raise ValueError(f"Invalid log level: {value!r}") from None
