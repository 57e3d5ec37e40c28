# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: unifiedflux
"""
Notification and notification handler contracts.

A notification has zero or more handlers and no result.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, TypeVar, runtime_checkable

from unifiedflux.contracts.base import FluxBaseModel

if TYPE_CHECKING:
    from unifiedflux.contracts.cancellation import CancellationToken

TNotification_contra = TypeVar("TNotification_contra", contravariant=True)


class Notification(FluxBaseModel):
    """Base class for notifications."""


@runtime_checkable
class NotificationHandler(Protocol[TNotification_contra]):
    """Reacts to one concrete notification type."""

    async def handle(
        self, notification: TNotification_contra, cancellation: CancellationToken
    ) -> None: ...


def notification_handler_type(notification_type: type) -> Any:
    """The descriptor a resolver is asked for when publishing ``notification_type``."""
    return NotificationHandler[notification_type]
