# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: unifiedflux
"""
Errors raised by the dispatcher and its adapters.

Every error names the concrete message type it concerns, both in the message
and in the error context.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Final

from unifiedflux.errors.base import ErrorCategory, ErrorCode, ErrorSeverity, FluxError
from unifiedflux.utils import type_name

DISPATCH: Final = ErrorCategory.get_or_create("DISPATCH")

ARGUMENT_ABSENT: Final = ErrorCode.get_or_create("DISPATCH_ARGUMENT_ABSENT", DISPATCH)
HANDLER_NOT_FOUND: Final = ErrorCode.get_or_create(
    "DISPATCH_HANDLER_NOT_FOUND", DISPATCH
)
HANDLER_FAULT: Final = ErrorCode.get_or_create("DISPATCH_HANDLER_FAULT", DISPATCH)
ADAPTER_CONSTRUCTION: Final = ErrorCode.get_or_create(
    "DISPATCH_ADAPTER_CONSTRUCTION", DISPATCH
)
RESOLUTION_FAULT: Final = ErrorCode.get_or_create(
    "DISPATCH_RESOLUTION_FAULT", DISPATCH
)
CANCELLATION_UNSUPPORTED: Final = ErrorCode.get_or_create(
    "DISPATCH_CANCELLATION_UNSUPPORTED", DISPATCH
)
OPERATION_CANCELLED: Final = ErrorCode.get_or_create(
    "DISPATCH_OPERATION_CANCELLED", DISPATCH
)


class DispatchError(FluxError):
    """Base class for dispatcher errors."""

    default_code = HANDLER_FAULT

    def __init__(
        self,
        message: str,
        code: ErrorCode | None = None,
        severity: ErrorSeverity | None = None,
        **context: Any,
    ) -> None:
        super().__init__(message, code=code, severity=severity, context=context)


class ArgumentAbsentError(DispatchError, ValueError):
    """Raised when a request or notification argument is None."""

    default_code = ARGUMENT_ABSENT

    def __init__(self, argument: str, **context: Any) -> None:
        super().__init__(
            f"Argument '{argument}' must not be None", argument=argument, **context
        )
        self.argument = argument


class HandlerNotFoundError(DispatchError):
    """Raised when the resolver has no handler for a request type."""

    default_code = HANDLER_NOT_FOUND

    def __init__(self, request_type: type, handler_type: Any = None) -> None:
        super().__init__(
            f"No handler registered for {type_name(request_type)}",
            request_type=type_name(request_type),
            handler_type=type_name(handler_type) if handler_type is not None else None,
        )
        self.request_type = request_type
        self.handler_type = handler_type


class HandlerResolutionError(DispatchError):
    """Raised when the resolver fails or hands back something that is not a handler."""

    default_code = RESOLUTION_FAULT

    def __init__(self, message_type: type, handler_type: Any, reason: str) -> None:
        super().__init__(
            f"Could not resolve {type_name(handler_type)} for "
            f"{type_name(message_type)}: {reason}",
            message_type=type_name(message_type),
            handler_type=type_name(handler_type),
            reason=reason,
        )
        self.message_type = message_type
        self.handler_type = handler_type
        self.reason = reason


class AdapterConstructionError(DispatchError, TypeError):
    """Raised when the type pairing needed for an adapter cannot be satisfied."""

    default_code = ADAPTER_CONSTRUCTION

    def __init__(self, message_type: Any, reason: str, **context: Any) -> None:
        super().__init__(
            f"Cannot build adapter for {type_name(message_type)}: {reason}",
            message_type=type_name(message_type),
            reason=reason,
            **context,
        )
        self.message_type = message_type
        self.reason = reason


class ResponseTypeMismatchError(AdapterConstructionError):
    """Raised when an expected and an actual response type disagree."""

    def __init__(self, request_type: type, expected: Any, actual: Any) -> None:
        super().__init__(
            request_type,
            f"expected response type {type_name(expected)}, got {type_name(actual)}",
            expected=type_name(expected),
            actual=type_name(actual),
        )
        self.expected = expected
        self.actual = actual


class HandlerFaultError(DispatchError):
    """Base class for failures raised by handlers."""


class NotificationPublishError(HandlerFaultError):
    """Raised after a publish in which one or more handlers failed.

    ``failures`` holds every handler exception in submission order; the first
    one is also the ``__cause__``.
    """

    def __init__(
        self,
        notification_type: type,
        failures: Sequence[BaseException],
        handler_count: int,
    ) -> None:
        super().__init__(
            f"{len(failures)} of {handler_count} handler(s) failed for "
            f"{type_name(notification_type)}",
            notification_type=type_name(notification_type),
            failed=len(failures),
            handlers=handler_count,
            errors=[f"{type(f).__name__}: {f}" for f in failures],
        )
        self.notification_type = notification_type
        self.failures: tuple[BaseException, ...] = tuple(failures)
        self.handler_count = handler_count

    @property
    def first(self) -> BaseException:
        return self.failures[0]

    def as_exception_group(self) -> BaseExceptionGroup:
        """The failures as an exception group, for ``except*`` handling."""
        return BaseExceptionGroup(self.message, list(self.failures))


class OperationCancelledError(DispatchError):
    """Raised by ``CancellationToken.raise_if_cancelled`` once cancelled."""

    default_code = OPERATION_CANCELLED
    default_severity = ErrorSeverity.WARNING

    def __init__(self, reason: str | None = None) -> None:
        super().__init__(
            f"Operation was cancelled{': ' + reason if reason else ''}",
            reason=reason,
        )
        self.reason = reason


class CancellationNotSupportedError(DispatchError, RuntimeError):
    """Raised when ``cancel()`` is called on a ``CancellationToken.none()`` token."""

    default_code = CANCELLATION_UNSUPPORTED

    def __init__(self) -> None:
        super().__init__("CancellationToken.none() cannot be cancelled")
