# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: unifiedflux
"""
Message and handler contracts for unifiedflux.
"""

from unifiedflux.contracts.base import FluxBaseModel
from unifiedflux.contracts.cancellation import CancellationToken
from unifiedflux.contracts.notifications import (
    Notification,
    NotificationHandler,
    notification_handler_type,
)
from unifiedflux.contracts.requests import (
    Request,
    RequestHandler,
    request_handler_type,
    response_type_of,
)

__all__ = [
    "FluxBaseModel",
    "CancellationToken",
    "Request",
    "RequestHandler",
    "Notification",
    "NotificationHandler",
    "request_handler_type",
    "notification_handler_type",
    "response_type_of",
]
