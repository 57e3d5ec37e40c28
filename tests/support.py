"""Messages, handlers and resolver doubles shared by the test suite."""

from __future__ import annotations

import asyncio
from typing import Any
from unittest.mock import Mock

from unifiedflux import (
    CancellationToken,
    Notification,
    NotificationHandler,
    Request,
    RequestHandler,
)


# --- Request/response ---


class Ping(Request[str]):
    message: str


class PingHandler(RequestHandler[Ping, str]):
    def __init__(self, prefix: str = "Pong") -> None:
        self.prefix = prefix
        self.tokens: list[CancellationToken] = []

    async def handle(self, request: Ping, cancellation: CancellationToken) -> str:
        self.tokens.append(cancellation)
        return f"{self.prefix}: {request.message}"


class SyncPingHandler:
    """Plain function handler; results are used directly."""

    def handle(self, request: Ping, cancellation: CancellationToken) -> str:
        return f"Sync: {request.message}"


class WrongTypePingHandler:
    async def handle(self, request: Ping, cancellation: CancellationToken) -> Any:
        return 42


class FailingPingHandler:
    def __init__(self, error: Exception) -> None:
        self.error = error

    async def handle(self, request: Ping, cancellation: CancellationToken) -> str:
        raise self.error


class CountUsers(Request[int | None]):
    active_only: bool = True


class UntypedRequest(Request):
    """Subclasses Request without declaring a response type."""


# --- Notifications ---


class UserCreated(Notification):
    user_id: int


class UserLogHandler(NotificationHandler[UserCreated]):
    def __init__(self) -> None:
        self.was_called = False
        self.tokens: list[CancellationToken] = []

    async def handle(
        self, notification: UserCreated, cancellation: CancellationToken
    ) -> None:
        self.was_called = True
        self.tokens.append(cancellation)


class UserEmailHandler(UserLogHandler):
    pass


class SlowNotificationHandler(NotificationHandler[UserCreated]):
    def __init__(self, delay: float = 0.05) -> None:
        self.delay = delay
        self.started = False
        self.completed = False

    async def handle(
        self, notification: UserCreated, cancellation: CancellationToken
    ) -> None:
        self.started = True
        await asyncio.sleep(self.delay)
        self.completed = True


class FailingNotificationHandler(NotificationHandler[UserCreated]):
    def __init__(self, error: BaseException, delay: float = 0) -> None:
        self.error = error
        self.delay = delay

    async def handle(
        self, notification: UserCreated, cancellation: CancellationToken
    ) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)
        raise self.error


class SyncNotificationHandler:
    def __init__(self) -> None:
        self.calls: list[int] = []

    def handle(self, notification: UserCreated, cancellation: CancellationToken) -> None:
        self.calls.append(notification.user_id)


def make_resolver(one: Any = None, many: Any = ()) -> Mock:
    """A resolver double; ``one`` and ``many`` are the lookup return values."""
    resolver = Mock(spec=["resolve_one", "resolve_many"])
    resolver.resolve_one.return_value = one
    resolver.resolve_many.return_value = list(many)
    return resolver
