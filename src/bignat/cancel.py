from __future__ import annotations

import threading
import time

from bignat.errors import Cancelled


class CancelToken:
    """
    Cooperative cancellation for the long-running searches.

    cancel() may be called from another thread; the searches poll
    raise_if_cancelled() once per iteration. An optional timeout (seconds)
    cancels the token automatically once the monotonic deadline passes.
    """

    def __init__(self, timeout: float | None = None):
        self._event = threading.Event()
        self._deadline = None if timeout is None else time.monotonic() + float(timeout)
        self.reason: str | None = None

    def cancel(self, reason: str = "cancelled") -> None:
        self.reason = reason
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        if self._deadline is not None and time.monotonic() >= self._deadline:
            self.cancel("timed out")
            return True
        return False

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise Cancelled(self.reason or "cancelled")


def check(token: CancelToken | None) -> None:
    if token is not None:
        token.raise_if_cancelled()
