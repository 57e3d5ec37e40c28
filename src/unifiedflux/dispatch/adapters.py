# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: unifiedflux
"""
Type-erased adapters between the dispatcher and concrete handlers.

An adapter is built once per concrete message type. Building it fixes the
request/response pairing (or the notification type) and the handler
descriptor; the resulting closure is then called directly on every dispatch
without inspecting types again.
"""

from __future__ import annotations

import types
import typing
from collections.abc import Awaitable, Callable, Coroutine
from typing import Any, Generic, TypeVar

from unifiedflux.contracts.cancellation import CancellationToken
from unifiedflux.contracts.notifications import Notification, notification_handler_type
from unifiedflux.contracts.requests import request_handler_type, response_type_of
from unifiedflux.errors.dispatch import (
    AdapterConstructionError,
    HandlerNotFoundError,
    HandlerResolutionError,
    ResponseTypeMismatchError,
)
from unifiedflux.resolution.protocols import HandlerResolverProtocol
from unifiedflux.utils import maybe_await, type_name

TResponse = TypeVar("TResponse")

RequestInvoker = Callable[
    [Any, HandlerResolverProtocol, CancellationToken], Awaitable[Any]
]
NotificationCollector = Callable[
    [Any, HandlerResolverProtocol, CancellationToken],
    Awaitable[list[Coroutine[Any, Any, None]]],
]


def _normalize(tp: Any) -> Any:
    return type(None) if tp is None else tp


def conforms(value: Any, tp: Any) -> bool:
    """Best-effort runtime check of ``value`` against a type annotation.

    Annotations that cannot be checked at runtime are accepted.
    """
    tp = _normalize(tp)
    if tp is Any or isinstance(tp, TypeVar):
        return True
    if tp is type(None):
        return value is None

    origin = typing.get_origin(tp)
    if origin is typing.Union or origin is types.UnionType:
        return any(conforms(value, arg) for arg in typing.get_args(tp))
    if origin is typing.Literal:
        return value in typing.get_args(tp)
    if origin is typing.Annotated:
        return conforms(value, typing.get_args(tp)[0])
    if origin is not None:
        return not isinstance(origin, type) or isinstance(value, origin)

    if tp is float and isinstance(value, int) and not isinstance(value, bool):
        return True
    if isinstance(tp, type):
        try:
            return isinstance(value, tp)
        except TypeError:
            # Protocols that are not runtime_checkable
            return True
    return True


def _resolution_fault(
    message_type: type, handler_type: Any, error: Exception
) -> HandlerResolutionError:
    return HandlerResolutionError(
        message_type, handler_type, f"resolver raised {type(error).__name__}: {error}"
    )


async def _resolve_one(
    resolver: HandlerResolverProtocol, message_type: type, handler_type: Any
) -> Any:
    try:
        return await maybe_await(resolver.resolve_one(handler_type))
    except Exception as e:
        raise _resolution_fault(message_type, handler_type, e) from e


async def _resolve_many(
    resolver: HandlerResolverProtocol, message_type: type, handler_type: Any
) -> list[Any]:
    try:
        handlers = await maybe_await(resolver.resolve_many(handler_type))
        return list(handlers or ())
    except Exception as e:
        raise _resolution_fault(message_type, handler_type, e) from e


def _check_handler(handler: Any, message_type: type, handler_type: Any) -> None:
    if not callable(getattr(handler, "handle", None)):
        raise HandlerResolutionError(
            message_type,
            handler_type,
            f"resolved {type_name(type(handler))} has no callable handle()",
        )


class RequestAdapter(Generic[TResponse]):
    """Invokes the single handler of one concrete request type."""

    __slots__ = ("request_type", "response_type", "handler_type", "_invoke")

    def __init__(
        self,
        request_type: type,
        response_type: Any,
        handler_type: Any,
        invoke: RequestInvoker,
    ) -> None:
        self.request_type = request_type
        self.response_type = response_type
        self.handler_type = handler_type
        self._invoke = invoke

    def check_response_type(self, expected: Any) -> None:
        """Fail if a caller expects a different response type than declared."""
        if _normalize(expected) != _normalize(self.response_type):
            raise ResponseTypeMismatchError(
                self.request_type, expected, self.response_type
            )

    async def __call__(
        self,
        request: Any,
        resolver: HandlerResolverProtocol,
        cancellation: CancellationToken,
    ) -> TResponse:
        if type(request) is not self.request_type:
            raise AdapterConstructionError(
                type(request),
                f"adapter was built for {type_name(self.request_type)}",
            )
        return await self._invoke(request, resolver, cancellation)

    def __repr__(self) -> str:
        return (
            f"<RequestAdapter {type_name(self.request_type)} -> "
            f"{type_name(self.response_type)}>"
        )


class NotificationAdapter:
    """Collects the pending handler invocations for one notification type."""

    __slots__ = ("notification_type", "handler_type", "_collect")

    def __init__(
        self,
        notification_type: type,
        handler_type: Any,
        collect: NotificationCollector,
    ) -> None:
        self.notification_type = notification_type
        self.handler_type = handler_type
        self._collect = collect

    async def __call__(
        self,
        notification: Any,
        resolver: HandlerResolverProtocol,
        cancellation: CancellationToken,
    ) -> list[Coroutine[Any, Any, None]]:
        """Resolve the handlers and return one unstarted coroutine per handler.

        The coroutines are returned in resolver order; the caller schedules
        and awaits them.
        """
        if type(notification) is not self.notification_type:
            raise AdapterConstructionError(
                type(notification),
                f"adapter was built for {type_name(self.notification_type)}",
            )
        return await self._collect(notification, resolver, cancellation)

    def __repr__(self) -> str:
        return f"<NotificationAdapter {type_name(self.notification_type)}>"


def build_request_adapter(
    request_type: type,
    response_type: Any = None,
    *,
    validate_responses: bool = True,
) -> RequestAdapter[Any]:
    """Build the adapter for ``request_type``.

    Args:
        request_type: Concrete request class
        response_type: Optional explicit response type; must match what the
            class declares through ``Request[X]``
        validate_responses: Check handler results against the response type

    Raises:
        AdapterConstructionError: If the response type cannot be determined
            or disagrees with ``response_type``
    """
    declared = response_type_of(request_type)
    if response_type is not None and _normalize(response_type) != _normalize(declared):
        raise ResponseTypeMismatchError(request_type, response_type, declared)

    handler_type = request_handler_type(request_type, declared)

    async def invoke(
        request: Any,
        resolver: HandlerResolverProtocol,
        cancellation: CancellationToken,
    ) -> Any:
        handler = await _resolve_one(resolver, request_type, handler_type)
        if handler is None:
            raise HandlerNotFoundError(request_type, handler_type)
        _check_handler(handler, request_type, handler_type)

        result = await maybe_await(handler.handle(request, cancellation))
        if validate_responses and not conforms(result, declared):
            raise ResponseTypeMismatchError(request_type, declared, type(result))
        return result

    return RequestAdapter(request_type, declared, handler_type, invoke)


async def _run_handler(
    handler: Any, notification: Any, cancellation: CancellationToken
) -> None:
    await maybe_await(handler.handle(notification, cancellation))


def build_notification_adapter(notification_type: type) -> NotificationAdapter:
    """Build the adapter for ``notification_type``.

    Raises:
        AdapterConstructionError: If the type is not a Notification subclass
    """
    if not (
        isinstance(notification_type, type)
        and issubclass(notification_type, Notification)
    ):
        raise AdapterConstructionError(notification_type, "not a Notification subclass")

    handler_type = notification_handler_type(notification_type)

    async def collect(
        notification: Any,
        resolver: HandlerResolverProtocol,
        cancellation: CancellationToken,
    ) -> list[Coroutine[Any, Any, None]]:
        handlers = await _resolve_many(resolver, notification_type, handler_type)
        # Validate everything before creating coroutines so none is left unawaited.
        for handler in handlers:
            _check_handler(handler, notification_type, handler_type)
        return [_run_handler(h, notification, cancellation) for h in handlers]

    return NotificationAdapter(notification_type, handler_type, collect)
