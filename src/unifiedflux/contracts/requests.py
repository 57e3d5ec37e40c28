# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: unifiedflux
"""
Request and request handler contracts.

A request is answered by exactly one handler with exactly one typed result.
Concrete requests declare their result type by subclassing ``Request[X]``:

    class Ping(Request[str]):
        message: str

    class PingHandler(RequestHandler[Ping, str]):
        async def handle(self, request: Ping, cancellation: CancellationToken) -> str:
            return f"Pong: {request.message}"
"""

from __future__ import annotations

import typing
from typing import TYPE_CHECKING, Any, Generic, Protocol, TypeVar, runtime_checkable

from unifiedflux.contracts.base import FluxBaseModel
from unifiedflux.errors.dispatch import AdapterConstructionError

if TYPE_CHECKING:
    from unifiedflux.contracts.cancellation import CancellationToken

TResponse = TypeVar("TResponse")
TRequest_contra = TypeVar("TRequest_contra", contravariant=True)
TResponse_co = TypeVar("TResponse_co", covariant=True)


class Request(FluxBaseModel, Generic[TResponse]):
    """Base class for requests that produce a ``TResponse``."""


@runtime_checkable
class RequestHandler(Protocol[TRequest_contra, TResponse_co]):
    """Handles one concrete request type and returns its result."""

    async def handle(
        self, request: TRequest_contra, cancellation: CancellationToken
    ) -> TResponse_co: ...


def _has_free_typevars(tp: Any) -> bool:
    if isinstance(tp, TypeVar):
        return True
    return any(_has_free_typevars(arg) for arg in typing.get_args(tp))


def _substitute(tp: Any, bindings: dict[Any, Any]) -> Any:
    seen: set[Any] = set()
    while isinstance(tp, TypeVar) and tp in bindings and tp not in seen:
        seen.add(tp)
        tp = bindings[tp]
    parameters = getattr(tp, "__parameters__", ())
    if parameters and not isinstance(tp, type):
        tp = tp[tuple(_substitute(p, bindings) for p in parameters)]
    return tp


def response_type_of(request_type: type) -> Any:
    """Return the response type a request class declares through ``Request[X]``.

    Raises:
        AdapterConstructionError: If the class is not a request, declares no
            response type, leaves it unbound, or declares conflicting ones.
    """
    if not (isinstance(request_type, type) and issubclass(request_type, Request)):
        raise AdapterConstructionError(request_type, "not a Request subclass")

    # Bindings made by parametrized generic request classes, e.g. Query[int],
    # most derived first.
    bindings: dict[Any, Any] = {}
    candidates: list[Any] = []
    for klass in request_type.__mro__:
        metadata = klass.__dict__.get("__pydantic_generic_metadata__")
        if not metadata or metadata.get("origin") is None:
            continue
        origin, args = metadata["origin"], metadata.get("args") or ()
        if origin is Request:
            if args:
                candidates.append(args[0])
            continue
        parameters = origin.__pydantic_generic_metadata__.get("parameters") or ()
        for parameter, arg in zip(parameters, args):
            bindings.setdefault(parameter, arg)

    declared: list[Any] = []
    unbound = False
    for candidate in candidates:
        candidate = _substitute(candidate, bindings)
        if _has_free_typevars(candidate):
            unbound = True
        elif candidate not in declared:
            declared.append(candidate)

    if len(declared) > 1:
        raise AdapterConstructionError(
            request_type,
            "declares conflicting response types "
            + ", ".join(repr(tp) for tp in declared),
        )
    if not declared:
        reason = (
            "response type is left as an unbound type variable"
            if unbound
            else "no response type declared; subclass Request[...]"
        )
        raise AdapterConstructionError(request_type, reason)
    return declared[0]


def request_handler_type(request_type: type, response_type: Any) -> Any:
    """The descriptor a resolver is asked for when handling ``request_type``."""
    return RequestHandler[request_type, response_type]
