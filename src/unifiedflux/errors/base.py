# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: unifiedflux
"""
Base error classes for the unifiedflux error handling system.

Every error raised by the package carries an error code, the code's category,
a severity and a free-form context dictionary, so hosts can log and route
failures without parsing messages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any, ClassVar, Final

from unifiedflux.errors.registry import registry


class ErrorSeverity(str, Enum):
    """Severity levels for unifiedflux errors."""

    CRITICAL = "critical"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class ErrorCategory:
    """A named group of error codes; categories may nest."""

    name: str
    parent: ErrorCategory | None = field(default=None, compare=False, repr=False)

    def __str__(self) -> str:
        return self.name

    def is_subcategory_of(self, category: ErrorCategory) -> bool:
        """True if this is ``category`` or nested anywhere below it."""
        current: ErrorCategory | None = self
        while current is not None:
            if current == category:
                return True
            current = current.parent
        return False

    @classmethod
    def get_or_create(cls, name: str, parent: ErrorCategory | None = None) -> ErrorCategory:
        return registry.category(name, parent)

    @classmethod
    def get_by_name(cls, name: str) -> ErrorCategory | None:
        return registry.find_category(name)


INTERNAL: Final = ErrorCategory.get_or_create("INTERNAL")


@dataclass(frozen=True)
class ErrorCode:
    """A stable, machine-readable error identifier."""

    code: str
    category: ErrorCategory = field(default=INTERNAL, compare=False)

    def __str__(self) -> str:
        return self.code

    @classmethod
    def get_or_create(cls, name: str, category: ErrorCategory = INTERNAL) -> ErrorCode:
        return registry.code(name, category)

    @classmethod
    def get_by_code(cls, code: str, *, raise_if_missing: bool = True) -> ErrorCode | None:
        """Look up a registered code.

        Raises:
            ValueError: If the code is unknown and ``raise_if_missing`` is set
        """
        error_code = registry.find_code(code)
        if error_code is None and raise_if_missing:
            raise ValueError(f"Error code '{code}' not found in registry")
        return error_code

    @classmethod
    def filter_by_category(cls, category: ErrorCategory) -> list[ErrorCode]:
        """Every registered code within ``category`` or its subcategories."""
        return registry.codes(category)


INTERNAL_ERROR: Final = ErrorCode.get_or_create("INTERNAL_ERROR", INTERNAL)


class FluxError(Exception):
    """
    Base error class for unifiedflux errors.

    Subclasses set ``default_code`` (and optionally ``default_severity``);
    ``FluxError`` itself is never raised.
    """

    default_code: ClassVar[ErrorCode | None] = None
    default_severity: ClassVar[ErrorSeverity] = ErrorSeverity.ERROR

    message: str
    code: ErrorCode
    category: ErrorCategory
    severity: ErrorSeverity
    context: dict[str, Any]
    timestamp: datetime

    def __init__(
        self,
        message: str,
        code: ErrorCode | None = None,
        severity: ErrorSeverity | None = None,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        """
        Initialize the error.

        Args:
            message: Human-readable error message
            code: Error code; defaults to the class's ``default_code``
            severity: Severity; defaults to the class's ``default_severity``
            context: Additional contextual information
            **kwargs: Merged into the context

        Raises:
            TypeError: If raised as ``FluxError`` directly or without a valid code
        """
        if type(self) is FluxError:
            raise TypeError(
                "Do not instantiate FluxError directly; subclass it for specific errors."
            )
        code = code if code is not None else self.default_code
        if not isinstance(code, ErrorCode):
            raise TypeError(
                f"{type(self).__name__} needs an ErrorCode, got {type(code).__name__}"
            )

        super().__init__(message)
        self.message = message
        self.code = code
        self.category = code.category
        self.severity = severity or self.default_severity
        self.context = {**(context or {}), **kwargs}
        self.timestamp = datetime.now(UTC)

    def add_context(self, key: str, value: Any) -> FluxError:
        """Add a key-value pair to the error context and return self for chaining."""
        self.context[key] = value
        return self

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Return a dictionary representation of the error."""
        return {
            "error": type(self).__name__,
            "code": self.code.code,
            "message": self.message,
            "category": self.category.name,
            "severity": self.severity.name,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
        }
