"""CallContext — caller-supplied cancellation and deadline token.

Threaded through every service and repository call.  The in-memory
store only consults it before taking the table lock and to bound the
lock wait; a blocking backend is expected to check it around I/O.
"""

from __future__ import annotations

import threading
import time


class ContextError(Exception):
    """Base exception for cancelled or expired call contexts."""


class OperationCancelledError(ContextError):
    """Raised when the caller cancelled the context."""


class DeadlineExceededError(ContextError):
    """Raised when the context deadline has passed."""


class CallContext:
    """Cancellation flag plus an optional monotonic deadline.

    Usage::

        ctx = CallContext(timeout=0.5)
        service.get(customer_id, ctx=ctx)

    Another thread may call :meth:`cancel` at any time.
    """

    def __init__(self, timeout: float | None = None) -> None:
        self._deadline = None if timeout is None else time.monotonic() + timeout
        self._cancelled = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        self._cancelled.set()

    def remaining(self) -> float | None:
        """Seconds left before the deadline, None when unbounded."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    def check(self) -> None:
        """Raise if the context is cancelled or past its deadline."""
        if self.cancelled:
            raise OperationCancelledError("Operation cancelled by caller")
        if self.expired():
            raise DeadlineExceededError("Operation deadline exceeded")
