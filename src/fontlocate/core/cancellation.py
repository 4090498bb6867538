"""Cooperative cancellation tokens.

A token is polled at well-defined checkpoints; it never interrupts running
work. Tokens carry the reason they fired so callers can tell an explicit
cancellation from an expired deadline.
"""

import itertools
import logging
import threading
import time
from collections.abc import Callable
from enum import Enum

from .exceptions import DeadlineExceededError, ResolutionCancelledError

logger = logging.getLogger(__name__)


class CancelReason(str, Enum):
    """Why a token fired."""

    CANCELLED = "cancelled"
    DEADLINE_EXCEEDED = "deadline_exceeded"


class CancellationToken:
    """Thread-safe cancellation signal with optional deadline and parent."""

    def __init__(self, parent: "CancellationToken | None" = None):
        self._lock = threading.Lock()
        self._event = threading.Event()
        self._reason: CancelReason | None = None
        self._callbacks: dict[int, Callable[[], None]] = {}
        self._handles = itertools.count(1)
        self._timer: threading.Timer | None = None
        self._deadline: float | None = None
        self._parent = parent
        self._parent_handle = 0

        if parent is not None:
            self._parent_handle = parent.add_callback(
                lambda: self._fire(parent.reason or CancelReason.CANCELLED)
            )

    @classmethod
    def never(cls) -> "CancellationToken":
        """Return the shared token that is never cancelled."""
        return _NEVER

    @classmethod
    def with_timeout(
        cls, seconds: float, parent: "CancellationToken | None" = None
    ) -> "CancellationToken":
        """Create a token that fires with DEADLINE_EXCEEDED after `seconds`."""
        token = cls(parent)
        if token._reason is not None:
            # parent already fired
            return token
        token._deadline = time.monotonic() + seconds
        token._timer = threading.Timer(
            max(seconds, 0.0), token._fire, args=(CancelReason.DEADLINE_EXCEEDED,)
        )
        token._timer.daemon = True
        token._timer.start()
        return token

    def child(self) -> "CancellationToken":
        """Create a token that is cancelled whenever this one is."""
        return CancellationToken(parent=self)

    def cancel(self) -> None:
        """Request cancellation."""
        self._fire(CancelReason.CANCELLED)

    def _fire(self, reason: CancelReason) -> None:
        with self._lock:
            if self._reason is not None:
                return
            self._reason = reason
            callbacks = list(self._callbacks.values())
            self._callbacks.clear()
            timer, self._timer = self._timer, None
        self._event.set()
        if timer is not None:
            timer.cancel()
        self._detach()
        logger.debug(f"Cancellation token fired: {reason.value}")
        for callback in callbacks:
            try:
                callback()
            except Exception:
                logger.exception("Cancellation callback failed")

    def _detach(self) -> None:
        with self._lock:
            parent, self._parent = self._parent, None
            handle, self._parent_handle = self._parent_handle, 0
        if parent is not None and handle:
            parent.remove_callback(handle)

    def close(self) -> None:
        """Release the deadline timer and the link to the parent without firing."""
        with self._lock:
            timer, self._timer = self._timer, None
            self._deadline = None
        if timer is not None:
            timer.cancel()
        self._detach()

    def _check_deadline(self) -> None:
        if self._deadline is not None and self._reason is None:
            if time.monotonic() >= self._deadline:
                self._fire(CancelReason.DEADLINE_EXCEEDED)

    @property
    def cancelled(self) -> bool:
        self._check_deadline()
        return self._event.is_set()

    @property
    def reason(self) -> CancelReason | None:
        self._check_deadline()
        return self._reason

    def error(self) -> ResolutionCancelledError | None:
        """Return the exception matching the cancellation reason, if fired."""
        reason = self.reason
        if reason is None:
            return None
        if reason is CancelReason.DEADLINE_EXCEEDED:
            return DeadlineExceededError()
        return ResolutionCancelledError()

    def raise_if_cancelled(self) -> None:
        error = self.error()
        if error is not None:
            raise error

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the token fires or `timeout` elapses."""
        return self._event.wait(timeout=timeout)

    def add_callback(self, callback: Callable[[], None]) -> int:
        """Register `callback` to run once when the token fires.

        Runs immediately if the token already fired. Returns a handle for
        `remove_callback`.
        """
        self._check_deadline()
        with self._lock:
            if self._reason is None:
                handle = next(self._handles)
                self._callbacks[handle] = callback
                return handle
        callback()
        return 0

    def remove_callback(self, handle: int) -> None:
        with self._lock:
            self._callbacks.pop(handle, None)

    def __repr__(self) -> str:
        state = self._reason.value if self._reason else "active"
        return f"CancellationToken({state})"


class _NeverCancelled(CancellationToken):
    """Token that ignores cancellation requests."""

    def cancel(self) -> None:
        logger.warning("Ignoring cancel() on the never-cancelled token")

    def add_callback(self, callback: Callable[[], None]) -> int:
        return 0


_NEVER = _NeverCancelled()
