# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: unifiedflux
"""
Resolver built from two plain lookup callables.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from typing import Any

from unifiedflux.errors.dispatch import ArgumentAbsentError

ServiceFactory = Callable[[Any], Any | Awaitable[Any]]
ServiceFactoryMany = Callable[[Any], Iterable[Any] | Awaitable[Iterable[Any]]]


class ServiceFactoryResolver:
    """Adapts a container's single and multi lookup functions to a resolver.

    Example:
        resolver = ServiceFactoryResolver(container.get, container.get_all)
    """

    def __init__(
        self, factory: ServiceFactory, factory_many: ServiceFactoryMany
    ) -> None:
        if factory is None:
            raise ArgumentAbsentError("factory")
        if factory_many is None:
            raise ArgumentAbsentError("factory_many")
        self._factory = factory
        self._factory_many = factory_many

    def resolve_one(self, handler_type: Any) -> Any | Awaitable[Any]:
        return self._factory(handler_type)

    def resolve_many(
        self, handler_type: Any
    ) -> Iterable[Any] | Awaitable[Iterable[Any]]:
        return self._factory_many(handler_type)
