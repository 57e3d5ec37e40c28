# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: unifiedflux
"""
Per-dispatcher cache of message adapters.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from unifiedflux.dispatch.adapters import NotificationAdapter, RequestAdapter


class AdapterCache:
    """
    Maps each concrete message type to its adapter.

    Entries are never replaced. Inserts use ``dict.setdefault`` so two callers
    racing to build the same adapter both end up with whichever was stored
    first.
    """

    def __init__(self) -> None:
        self._requests: dict[type, RequestAdapter[Any]] = {}
        self._notifications: dict[type, NotificationAdapter] = {}

    def get_request_adapter(
        self,
        request_type: type,
        factory: Callable[[type], RequestAdapter[Any]],
    ) -> RequestAdapter[Any]:
        """Return the cached adapter for ``request_type``, building it if absent."""
        adapter = self._requests.get(request_type)
        if adapter is None:
            adapter = self._requests.setdefault(request_type, factory(request_type))
        return adapter

    def get_notification_adapter(
        self,
        notification_type: type,
        factory: Callable[[type], NotificationAdapter],
    ) -> NotificationAdapter:
        """Return the cached adapter for ``notification_type``, building it if absent."""
        adapter = self._notifications.get(notification_type)
        if adapter is None:
            adapter = self._notifications.setdefault(
                notification_type, factory(notification_type)
            )
        return adapter

    def add_request_adapter(self, adapter: RequestAdapter[Any]) -> RequestAdapter[Any]:
        """Insert a prebuilt adapter unless one exists; return the stored one.

        Raises:
            ResponseTypeMismatchError: If the stored adapter was built for a
                different response type
        """
        stored = self._requests.setdefault(adapter.request_type, adapter)
        if stored is not adapter:
            stored.check_response_type(adapter.response_type)
        return stored

    def add_notification_adapter(
        self, adapter: NotificationAdapter
    ) -> NotificationAdapter:
        """Insert a prebuilt adapter unless one exists; return the stored one."""
        return self._notifications.setdefault(adapter.notification_type, adapter)

    def request_types(self) -> list[type]:
        return list(self._requests)

    def notification_types(self) -> list[type]:
        return list(self._notifications)

    def clear(self) -> None:
        """Drop every adapter. The dispatcher itself never calls this."""
        self._requests.clear()
        self._notifications.clear()

    def __contains__(self, message_type: object) -> bool:
        return message_type in self._requests or message_type in self._notifications

    def __len__(self) -> int:
        return len(self._requests) + len(self._notifications)
