# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: unifiedflux

"""
Error handling for unifiedflux.
"""

from __future__ import annotations

from unifiedflux.errors.base import (
    INTERNAL,
    INTERNAL_ERROR,
    ErrorCategory,
    ErrorCode,
    ErrorSeverity,
    FluxError,
)
from unifiedflux.errors.dispatch import (
    DISPATCH,
    AdapterConstructionError,
    CancellationNotSupportedError,
    ArgumentAbsentError,
    DispatchError,
    HandlerFaultError,
    HandlerNotFoundError,
    HandlerResolutionError,
    NotificationPublishError,
    OperationCancelledError,
    ResponseTypeMismatchError,
)
from unifiedflux.errors.registry import registry

__all__ = [
    # Categories and codes
    "ErrorCategory",
    "ErrorCode",
    "ErrorSeverity",
    "INTERNAL",
    "INTERNAL_ERROR",
    "DISPATCH",
    "registry",
    # Base error
    "FluxError",
    # Dispatch errors
    "DispatchError",
    "ArgumentAbsentError",
    "HandlerNotFoundError",
    "HandlerResolutionError",
    "AdapterConstructionError",
    "ResponseTypeMismatchError",
    "HandlerFaultError",
    "NotificationPublishError",
    "OperationCancelledError",
    "CancellationNotSupportedError",
]
