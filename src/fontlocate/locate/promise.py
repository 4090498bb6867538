"""Awaitable handle for a resolution running in the background."""

import threading

from fontlocate.core.cancellation import CancellationToken
from fontlocate.core.models import Resolution
from fontlocate.fonts.models import NULL_FONT


class FontPromise:
    """Future for the result of a background font resolution.

    `font()` returns whichever comes first: the finished resolution or the
    firing of the caller's cancellation token. A token that has fired always
    wins, even if the resolution finished earlier; the computed result then
    stays available through `result_nowait()`.
    """

    def __init__(self, key: str = ""):
        self.key = key
        self._result: Resolution | None = None
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._waiters: list[threading.Event] = []

    def _set_result(self, result: Resolution) -> None:
        """Set the result (called by the resolution engine)."""
        with self._lock:
            self._result = result
            self._event.set()
            waiters, self._waiters = self._waiters, []
        for waiter in waiters:
            waiter.set()

    def font(self, token: CancellationToken | None = None) -> Resolution:
        """Block until the font is resolved or `token` fires.

        Args:
            token: Cancellation token of the caller; never cancels if omitted

        Returns:
            The resolution, or (NULL_FONT, cancellation error) if `token` fired
        """
        token = token or CancellationToken.never()
        if token.cancelled:
            return Resolution(NULL_FONT, token.error())

        wake = threading.Event()
        with self._lock:
            if not self._event.is_set():
                self._waiters.append(wake)
            else:
                wake.set()
        handle = token.add_callback(wake.set)
        try:
            wake.wait()
        finally:
            token.remove_callback(handle)
            with self._lock:
                if wake in self._waiters:
                    self._waiters.remove(wake)

        if token.cancelled:
            return Resolution(NULL_FONT, token.error())
        return self._result

    def done(self) -> bool:
        """Check if the resolution has finished."""
        return self._event.is_set()

    def result_nowait(self) -> Resolution | None:
        """Return the finished resolution, or None while still running."""
        with self._lock:
            return self._result

    def wait(self, timeout: float | None = None) -> bool:
        """Wait for the resolution to finish; False if `timeout` elapsed first."""
        return self._event.wait(timeout=timeout)

    def __repr__(self) -> str:
        state = "done" if self.done() else "pending"
        return f"FontPromise({self.key!r}, {state})"
