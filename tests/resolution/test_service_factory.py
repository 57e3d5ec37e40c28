"""Tests for ServiceFactoryResolver driving a dispatcher."""

from __future__ import annotations

from collections import defaultdict
from typing import Any

import pytest

from support import (
    Ping,
    PingHandler,
    SlowNotificationHandler,
    UserCreated,
    UserEmailHandler,
    UserLogHandler,
)
from unifiedflux import (
    ArgumentAbsentError,
    Dispatcher,
    HandlerNotFoundError,
    HandlerResolverProtocol,
    NotificationHandler,
    RequestHandler,
    ServiceFactoryResolver,
)


class Container:
    """Minimal container keyed by handler descriptor."""

    def __init__(self) -> None:
        self.singles: dict[Any, Any] = {}
        self.multiples: dict[Any, list[Any]] = defaultdict(list)
        self.single_calls: list[Any] = []
        self.multi_calls: list[Any] = []

    def get(self, service_type: Any) -> Any:
        self.single_calls.append(service_type)
        return self.singles.get(service_type)

    def get_all(self, service_type: Any) -> list[Any]:
        self.multi_calls.append(service_type)
        return list(self.multiples.get(service_type, []))


@pytest.fixture
def container() -> Container:
    return Container()


def test_requires_both_lookups(container: Container) -> None:
    with pytest.raises(ArgumentAbsentError) as exc_info:
        ServiceFactoryResolver(None, container.get_all)  # type: ignore[arg-type]
    assert exc_info.value.argument == "factory"

    with pytest.raises(ArgumentAbsentError) as exc_info:
        ServiceFactoryResolver(container.get, None)  # type: ignore[arg-type]
    assert exc_info.value.argument == "factory_many"


def test_satisfies_resolver_protocol(container: Container) -> None:
    resolver = ServiceFactoryResolver(container.get, container.get_all)

    assert isinstance(resolver, HandlerResolverProtocol)


@pytest.mark.asyncio
async def test_dispatch_through_container(container: Container) -> None:
    container.singles[RequestHandler[Ping, str]] = PingHandler()
    dispatcher = Dispatcher(ServiceFactoryResolver(container.get, container.get_all))

    assert await dispatcher.dispatch(Ping(message="Test")) == "Pong: Test"
    assert container.single_calls == [RequestHandler[Ping, str]]
    assert container.multi_calls == []


@pytest.mark.asyncio
async def test_missing_registration(container: Container) -> None:
    dispatcher = Dispatcher(ServiceFactoryResolver(container.get, container.get_all))

    with pytest.raises(HandlerNotFoundError):
        await dispatcher.dispatch(Ping(message="Test"))


@pytest.mark.asyncio
async def test_publish_through_container(container: Container) -> None:
    handlers = [UserLogHandler(), UserEmailHandler(), SlowNotificationHandler(delay=0.01)]
    container.multiples[NotificationHandler[UserCreated]].extend(handlers)
    dispatcher = Dispatcher(ServiceFactoryResolver(container.get, container.get_all))

    await dispatcher.publish(UserCreated(user_id=1))

    assert handlers[0].was_called and handlers[1].was_called
    assert handlers[2].completed
    assert container.multi_calls == [NotificationHandler[UserCreated]]


@pytest.mark.asyncio
async def test_async_lookups(container: Container) -> None:
    container.singles[RequestHandler[Ping, str]] = PingHandler("Async")

    async def get(service_type: Any) -> Any:
        return container.get(service_type)

    async def get_all(service_type: Any) -> list[Any]:
        return container.get_all(service_type)

    dispatcher = Dispatcher(ServiceFactoryResolver(get, get_all))

    assert await dispatcher.dispatch(Ping(message="Test")) == "Async: Test"
    await dispatcher.publish(UserCreated(user_id=1))
