# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: unifiedflux
"""
The dispatcher: the public entry point of unifiedflux.

``dispatch`` sends a request to its single handler and returns the result.
``publish`` runs every handler of a notification concurrently and waits for
all of them.
"""

from __future__ import annotations

import asyncio
import functools
from typing import TYPE_CHECKING, Any, TypeVar

from unifiedflux.contracts.cancellation import CancellationToken
from unifiedflux.dispatch.adapters import (
    NotificationAdapter,
    RequestAdapter,
    build_notification_adapter,
    build_request_adapter,
)
from unifiedflux.dispatch.cache import AdapterCache
from unifiedflux.dispatch.config import DispatcherSettings, PublishFailureMode
from unifiedflux.errors.dispatch import (
    ArgumentAbsentError,
    HandlerNotFoundError,
    NotificationPublishError,
)
from unifiedflux.logging.logger import get_logger

if TYPE_CHECKING:
    from unifiedflux.contracts.notifications import Notification
    from unifiedflux.contracts.requests import Request
    from unifiedflux.logging.protocols import LoggerProtocol
    from unifiedflux.resolution.protocols import HandlerResolverProtocol

T = TypeVar("T")


class Dispatcher:
    """
    Mediator between callers and handlers.

    Handlers are looked up through the resolver on every call and never
    kept. The only state kept across calls is the adapter cache, which belongs
    to this instance.
    """

    def __init__(
        self,
        resolver: HandlerResolverProtocol,
        settings: DispatcherSettings | None = None,
        logger: LoggerProtocol | None = None,
    ) -> None:
        """
        Initialize the dispatcher.

        Args:
            resolver: Handler lookup supplied by the host container
            settings: Optional settings (loads from environment if None)
            logger: Optional logger; defaults to ``settings.logger_name``
        """
        if resolver is None:
            raise ArgumentAbsentError("resolver")
        self._resolver = resolver
        self._settings = settings or DispatcherSettings.load()
        self.logger = logger or get_logger(self._settings.logger_name)
        self._adapters = AdapterCache()
        # Handler tasks still running after their publish call was cancelled.
        self._detached: set[asyncio.Future[Any]] = set()

    @property
    def resolver(self) -> HandlerResolverProtocol:
        return self._resolver

    @property
    def settings(self) -> DispatcherSettings:
        return self._settings

    @property
    def adapters(self) -> AdapterCache:
        return self._adapters

    def register_request(
        self, request_type: type[Request[T]], response_type: Any = None
    ) -> RequestAdapter[T]:
        """
        Build and cache the adapter for a request type ahead of first use.

        Args:
            request_type: Concrete request class
            response_type: Optional response type to check against the one the
                class declares

        Returns:
            The cached adapter

        Raises:
            AdapterConstructionError: If the type pairing cannot be satisfied
        """
        return self._adapters.add_request_adapter(
            self._build_request_adapter(request_type, response_type)
        )

    def register_notification(self, notification_type: type) -> NotificationAdapter:
        """
        Build and cache the adapter for a notification type ahead of first use.

        Raises:
            AdapterConstructionError: If the type is not a notification
        """
        return self._adapters.add_notification_adapter(
            self._build_notification_adapter(notification_type)
        )

    def _build_request_adapter(
        self, request_type: type, response_type: Any = None
    ) -> RequestAdapter[Any]:
        adapter = build_request_adapter(
            request_type,
            response_type,
            validate_responses=self._settings.validate_responses,
        )
        self.logger.debug(
            "Built request adapter",
            request_type=adapter.request_type,
            response_type=adapter.response_type,
        )
        return adapter

    def _build_notification_adapter(self, notification_type: type) -> NotificationAdapter:
        adapter = build_notification_adapter(notification_type)
        self.logger.debug(
            "Built notification adapter", notification_type=adapter.notification_type
        )
        return adapter

    async def dispatch(
        self,
        request: Request[T],
        cancellation: CancellationToken | None = None,
        *,
        response_type: Any = None,
    ) -> T:
        """
        Send a request to its handler and return the handler's result.

        Args:
            request: The request to send
            cancellation: Token forwarded to the handler
            response_type: Optional response type the caller expects

        Returns:
            The result of the request handler

        Raises:
            ArgumentAbsentError: If ``request`` is None
            AdapterConstructionError: If the request's response type cannot be
                determined or differs from ``response_type``
            HandlerNotFoundError: If the resolver has no handler
            HandlerResolutionError: If the resolver fails
            Exception: Whatever the handler raises, unchanged
        """
        if request is None:
            raise ArgumentAbsentError("request")

        request_type = type(request)
        adapter = self._adapters.get_request_adapter(
            request_type, self._build_request_adapter
        )
        if response_type is not None:
            adapter.check_response_type(response_type)

        if cancellation is None:
            cancellation = CancellationToken.none()

        self.logger.debug("Dispatching request", request_type=request_type)
        try:
            return await adapter(request, self._resolver, cancellation)
        except HandlerNotFoundError:
            self.logger.error(
                "No handler registered for request",
                request_type=request_type,
                handler_type=adapter.handler_type,
            )
            raise

    async def publish(
        self,
        notification: Notification,
        cancellation: CancellationToken | None = None,
    ) -> None:
        """
        Run every handler of a notification concurrently.

        Handlers are started in resolver order without waiting for one another.
        The call returns once all of them have finished. A failing handler does
        not stop its siblings; failures are reported after the last one ends.

        Raises:
            ArgumentAbsentError: If ``notification`` is None
            AdapterConstructionError: If the type is not a notification
            HandlerResolutionError: If the resolver fails
            NotificationPublishError: If any handler failed (aggregate mode)
            Exception: The first handler failure, unchanged (first mode, when
                that failure is an ``Exception``)
        """
        if notification is None:
            raise ArgumentAbsentError("notification")

        notification_type = type(notification)
        adapter = self._adapters.get_notification_adapter(
            notification_type, self._build_notification_adapter
        )

        if cancellation is None:
            cancellation = CancellationToken.none()

        invocations = await adapter(notification, self._resolver, cancellation)
        self.logger.debug(
            "Publishing notification",
            notification_type=notification_type,
            handlers=len(invocations),
        )
        if not invocations:
            return

        tasks = [asyncio.ensure_future(invocation) for invocation in invocations]
        gathered = asyncio.gather(*tasks, return_exceptions=True)
        try:
            outcomes = await asyncio.shield(gathered)
        except asyncio.CancelledError:
            # Handlers are never interrupted; keep them alive until they end.
            self._detached.add(gathered)
            gathered.add_done_callback(
                functools.partial(self._finish_detached, notification_type, len(tasks))
            )
            raise

        failures = [outcome for outcome in outcomes if isinstance(outcome, BaseException)]
        if not failures:
            return

        self.logger.warning(
            "Notification handlers failed",
            notification_type=notification_type,
            failed=len(failures),
            handlers=len(tasks),
            error=failures[0],
        )
        first = failures[0]
        if self._settings.publish_failure_mode is PublishFailureMode.FIRST and isinstance(
            first, Exception
        ):
            raise first
        # A handler that cancelled itself must not look like the caller's cancellation.
        raise NotificationPublishError(notification_type, failures, len(tasks)) from first

    def _finish_detached(
        self,
        notification_type: type,
        handler_count: int,
        gathered: asyncio.Future[list[Any]],
    ) -> None:
        """Report failures of handlers that outlived their cancelled publish call."""
        self._detached.discard(gathered)
        if gathered.cancelled():
            return
        failures = [o for o in gathered.result() if isinstance(o, BaseException)]
        if failures:
            self.logger.warning(
                "Notification handlers failed after publish was cancelled",
                notification_type=notification_type,
                failed=len(failures),
                handlers=handler_count,
                error=failures[0],
            )


def get_dispatcher(
    resolver: HandlerResolverProtocol,
    settings: DispatcherSettings | None = None,
    logger: LoggerProtocol | None = None,
) -> Dispatcher:
    """Create a dispatcher, loading settings from the environment if not given."""
    return Dispatcher(resolver, settings=settings or DispatcherSettings.load(), logger=logger)
