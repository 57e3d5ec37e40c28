# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: unifiedflux
"""
unifiedflux: an in-process mediator for requests and notifications.

Callers send requests and publish notifications through a ``Dispatcher``;
handlers are found at runtime through a resolver supplied by the host's
dependency-injection container.
"""

from unifiedflux.contracts import (
    CancellationToken,
    Notification,
    NotificationHandler,
    Request,
    RequestHandler,
    notification_handler_type,
    request_handler_type,
    response_type_of,
)
from unifiedflux.dispatch import (
    Dispatcher,
    DispatcherProtocol,
    DispatcherSettings,
    PublishFailureMode,
    get_dispatcher,
)
from unifiedflux.errors import (
    AdapterConstructionError,
    CancellationNotSupportedError,
    ArgumentAbsentError,
    DispatchError,
    FluxError,
    HandlerFaultError,
    HandlerNotFoundError,
    HandlerResolutionError,
    NotificationPublishError,
    OperationCancelledError,
    ResponseTypeMismatchError,
)
from unifiedflux.resolution import HandlerResolverProtocol, ServiceFactoryResolver

__version__ = "0.1.0"

__all__ = [
    # Contracts
    "Request",
    "RequestHandler",
    "Notification",
    "NotificationHandler",
    "CancellationToken",
    "request_handler_type",
    "notification_handler_type",
    "response_type_of",
    # Dispatch
    "Dispatcher",
    "DispatcherProtocol",
    "DispatcherSettings",
    "PublishFailureMode",
    "get_dispatcher",
    # Resolution
    "HandlerResolverProtocol",
    "ServiceFactoryResolver",
    # Errors
    "FluxError",
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
