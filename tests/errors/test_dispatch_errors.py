"""Tests for the unifiedflux error types and registry."""

from __future__ import annotations

import pytest

from support import Ping, UserCreated
from unifiedflux.errors import (
    DISPATCH,
    INTERNAL,
    AdapterConstructionError,
    ArgumentAbsentError,
    DispatchError,
    ErrorCategory,
    ErrorCode,
    ErrorSeverity,
    FluxError,
    HandlerFaultError,
    HandlerNotFoundError,
    NotificationPublishError,
    OperationCancelledError,
    ResponseTypeMismatchError,
    registry,
)


class TestFluxErrorBase:
    """Tests for the base FluxError class."""

    def test_cannot_instantiate_directly(self) -> None:
        with pytest.raises(TypeError):
            FluxError("boom", code=ErrorCode.get_or_create("X", INTERNAL))

    def test_code_must_be_error_code(self) -> None:
        with pytest.raises(TypeError):
            DispatchError("boom", code="DISPATCH_HANDLER_FAULT")  # type: ignore[arg-type]

    def test_str_and_context(self) -> None:
        error = HandlerNotFoundError(Ping)

        assert str(error) == "DISPATCH_HANDLER_NOT_FOUND: No handler registered for Ping"
        assert error.message == "No handler registered for Ping"
        assert error.category == DISPATCH
        assert error.severity is ErrorSeverity.ERROR
        assert error.context["request_type"] == "Ping"

    def test_add_context_chains(self) -> None:
        error = HandlerNotFoundError(Ping)

        assert error.add_context("tenant", "acme").add_context("attempt", 2) is error
        assert error.context["tenant"] == "acme"
        assert error.context["attempt"] == 2

    def test_to_dict(self) -> None:
        error = OperationCancelledError("client went away")

        data = error.to_dict()

        assert data["error"] == "OperationCancelledError"
        assert data["code"] == "DISPATCH_OPERATION_CANCELLED"
        assert data["category"] == "DISPATCH"
        assert data["severity"] == "WARNING"
        assert data["context"] == {"reason": "client went away"}
        assert "timestamp" in data


class TestDispatchErrors:
    def test_builtin_bases(self) -> None:
        assert isinstance(ArgumentAbsentError("request"), ValueError)
        assert isinstance(AdapterConstructionError(Ping, "bad"), TypeError)
        assert isinstance(ResponseTypeMismatchError(Ping, int, str), AdapterConstructionError)
        assert isinstance(
            NotificationPublishError(UserCreated, [RuntimeError()], 1), HandlerFaultError
        )

    def test_publish_error_summary(self) -> None:
        failures = [RuntimeError("a"), KeyError("b")]

        error = NotificationPublishError(UserCreated, failures, 3)

        assert error.message == "2 of 3 handler(s) failed for UserCreated"
        assert error.context["errors"] == ["RuntimeError: a", "KeyError: 'b'"]
        assert error.first is failures[0]

    def test_exception_group(self) -> None:
        failures = [RuntimeError("a"), ValueError("b")]

        group = NotificationPublishError(UserCreated, failures, 2).as_exception_group()

        assert list(group.exceptions) == failures


class TestErrorRegistry:
    def test_dispatch_codes_registered(self) -> None:
        codes = {code.code for code in ErrorCode.filter_by_category(DISPATCH)}

        assert codes == {
            "DISPATCH_ARGUMENT_ABSENT",
            "DISPATCH_HANDLER_NOT_FOUND",
            "DISPATCH_HANDLER_FAULT",
            "DISPATCH_ADAPTER_CONSTRUCTION",
            "DISPATCH_RESOLUTION_FAULT",
            "DISPATCH_CANCELLATION_UNSUPPORTED",
            "DISPATCH_OPERATION_CANCELLED",
        }

    def test_lookup(self) -> None:
        code = ErrorCode.get_by_code("DISPATCH_HANDLER_NOT_FOUND")

        assert code is HandlerNotFoundError(Ping).code
        assert ErrorCode.get_by_code("NO_SUCH_CODE", raise_if_missing=False) is None
        with pytest.raises(ValueError):
            ErrorCode.get_by_code("NO_SUCH_CODE")

    def test_categories_are_interned(self) -> None:
        assert ErrorCategory.get_or_create("DISPATCH") is DISPATCH
        assert ErrorCategory.get_by_name("DISPATCH") is DISPATCH
        assert registry.category("DISPATCH") is DISPATCH
        assert "DISPATCH_HANDLER_FAULT" in registry

    def test_code_cannot_move_category(self) -> None:
        with pytest.raises(ValueError, match="already registered"):
            ErrorCode.get_or_create("DISPATCH_HANDLER_FAULT", INTERNAL)

    def test_subcategories(self) -> None:
        child = ErrorCategory.get_or_create("DISPATCH_TESTS", DISPATCH)

        assert child.is_subcategory_of(DISPATCH)
        assert not DISPATCH.is_subcategory_of(child)
