"""Tests for AdapterCache."""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from support import Ping, UserCreated
from unifiedflux import ResponseTypeMismatchError
from unifiedflux.dispatch import (
    AdapterCache,
    RequestAdapter,
    build_notification_adapter,
    build_request_adapter,
)


def test_factory_runs_only_on_miss() -> None:
    cache = AdapterCache()
    factory = Mock(side_effect=build_request_adapter)

    first = cache.get_request_adapter(Ping, factory)
    second = cache.get_request_adapter(Ping, factory)

    assert first is second
    factory.assert_called_once_with(Ping)


def test_first_stored_adapter_wins() -> None:
    cache = AdapterCache()
    stored = cache.add_request_adapter(build_request_adapter(Ping))

    assert cache.add_request_adapter(build_request_adapter(Ping)) is stored
    assert cache.get_request_adapter(Ping, build_request_adapter) is stored


def test_add_rejects_conflicting_response_type() -> None:
    cache = AdapterCache()
    cache.add_request_adapter(build_request_adapter(Ping))
    conflicting = RequestAdapter(Ping, int, None, Mock())

    with pytest.raises(ResponseTypeMismatchError):
        cache.add_request_adapter(conflicting)


def test_requests_and_notifications_are_kept_apart() -> None:
    cache = AdapterCache()
    cache.get_request_adapter(Ping, build_request_adapter)
    cache.get_notification_adapter(UserCreated, build_notification_adapter)

    assert cache.request_types() == [Ping]
    assert cache.notification_types() == [UserCreated]
    assert len(cache) == 2
    assert Ping in cache and UserCreated in cache


def test_clear() -> None:
    cache = AdapterCache()
    cache.get_request_adapter(Ping, build_request_adapter)

    cache.clear()

    assert len(cache) == 0
    assert Ping not in cache
