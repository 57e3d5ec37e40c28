# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: unifiedflux
"""
Protocol for the handler lookup the dispatcher depends on.

The host's dependency-injection container implements this. Both methods may
be plain functions or coroutines.
"""

from __future__ import annotations

from collections.abc import Awaitable, Iterable
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class HandlerResolverProtocol(Protocol):
    """
    Looks up handler instances by handler type descriptor.

    Descriptors are parametrized handler protocols such as
    ``RequestHandler[Ping, str]`` or ``NotificationHandler[UserCreated]``.
    Results are used for a single call and never stored by the dispatcher.
    """

    def resolve_one(self, handler_type: Any) -> Any | Awaitable[Any]:
        """Return the single handler for ``handler_type`` or None."""
        ...

    def resolve_many(
        self, handler_type: Any
    ) -> Iterable[Any] | Awaitable[Iterable[Any]]:
        """Return every handler for ``handler_type`` in order; may be empty."""
        ...
