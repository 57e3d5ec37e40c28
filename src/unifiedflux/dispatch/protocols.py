# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: unifiedflux
"""
Protocol definitions for the dispatch package.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from unifiedflux.contracts.cancellation import CancellationToken
    from unifiedflux.contracts.notifications import Notification
    from unifiedflux.contracts.requests import Request

T = TypeVar("T")


@runtime_checkable
class DispatcherProtocol(Protocol):
    """
    Sends requests to their single handler and publishes notifications to
    all of theirs.
    """

    async def dispatch(
        self,
        request: Request[T],
        cancellation: CancellationToken | None = None,
        *,
        response_type: Any = None,
    ) -> T: ...

    async def publish(
        self,
        notification: Notification,
        cancellation: CancellationToken | None = None,
    ) -> None: ...
