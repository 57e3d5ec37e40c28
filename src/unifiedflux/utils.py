"""Small helpers shared across unifiedflux."""

from __future__ import annotations

import inspect
import typing
from collections.abc import Awaitable
from typing import Any, TypeVar

T = TypeVar("T")


def type_name(tp: Any) -> str:
    """Readable name for a class, generic alias or other annotation."""
    if typing.get_origin(tp) is None and isinstance(tp, type):
        return tp.__qualname__
    return repr(tp).replace("typing.", "")


async def maybe_await(value: T | Awaitable[T]) -> T:
    """Await ``value`` if it is awaitable, otherwise return it as is."""
    if inspect.isawaitable(value):
        return await value
    return value
