# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: unifiedflux
"""
Cooperative cancellation signal passed from callers to handlers.

The dispatcher only forwards the token; it never checks it and never stops a
running handler. Handlers decide when to observe it.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable

from unifiedflux.errors.dispatch import (
    CancellationNotSupportedError,
    OperationCancelledError,
)


class CancellationToken:
    """A one-shot, cooperative cancellation flag."""

    __slots__ = ("_cancelled", "_reason", "_event", "_callbacks", "_can_cancel")

    def __init__(self) -> None:
        self._cancelled = False
        self._reason: str | None = None
        self._event: asyncio.Event | None = None
        self._callbacks: list[Callable[[CancellationToken], None]] = []
        self._can_cancel = True

    @classmethod
    def none(cls) -> CancellationToken:
        """A token that can never be cancelled, used when callers pass none."""
        token = cls()
        token._can_cancel = False
        return token

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def can_be_cancelled(self) -> bool:
        return self._can_cancel

    @property
    def reason(self) -> str | None:
        return self._reason

    def cancel(self, reason: str | None = None) -> None:
        """Signal cancellation. Calling it again has no effect.

        Every registered callback runs even if earlier ones raise.

        Raises:
            CancellationNotSupportedError: On a ``CancellationToken.none()`` token
            ExceptionGroup: If one or more callbacks raised, after all have run
        """
        if not self._can_cancel:
            raise CancellationNotSupportedError()
        if self._cancelled:
            return
        self._cancelled = True
        self._reason = reason
        if self._event is not None:
            self._event.set()
        callbacks, self._callbacks = self._callbacks, []
        errors: list[Exception] = []
        for callback in callbacks:
            try:
                callback(self)
            except Exception as e:
                errors.append(e)
        if errors:
            raise ExceptionGroup("cancellation callbacks failed", errors)

    def cancel_after(self, delay: float) -> asyncio.TimerHandle:
        """Schedule ``cancel()`` on the running loop after ``delay`` seconds."""
        loop = asyncio.get_running_loop()
        return loop.call_later(delay, self.cancel, f"timed out after {delay}s")

    def register(self, callback: Callable[[CancellationToken], None]) -> None:
        """Run ``callback`` on cancellation, or right away if already cancelled."""
        if self._cancelled:
            callback(self)
        else:
            self._callbacks.append(callback)

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise OperationCancelledError(self._reason)

    async def wait(self) -> None:
        """Suspend until the token is cancelled."""
        if self._cancelled:
            return
        if self._event is None:
            self._event = asyncio.Event()
        await self._event.wait()

    def __repr__(self) -> str:
        state = "cancelled" if self._cancelled else "active"
        return f"<CancellationToken {state}>"
