# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: unifiedflux
"""
Request dispatch and notification publishing.
"""

from unifiedflux.dispatch.adapters import (
    NotificationAdapter,
    RequestAdapter,
    build_notification_adapter,
    build_request_adapter,
    conforms,
)
from unifiedflux.dispatch.cache import AdapterCache
from unifiedflux.dispatch.config import DispatcherSettings, PublishFailureMode
from unifiedflux.dispatch.dispatcher import Dispatcher, get_dispatcher
from unifiedflux.dispatch.protocols import DispatcherProtocol

__all__ = [
    # Protocols
    "DispatcherProtocol",
    # Core components
    "Dispatcher",
    "get_dispatcher",
    "AdapterCache",
    "RequestAdapter",
    "NotificationAdapter",
    "build_request_adapter",
    "build_notification_adapter",
    "conforms",
    # Settings
    "DispatcherSettings",
    "PublishFailureMode",
]
