"""Transient status message with expiry, and the loading flag."""

import time
from typing import Callable, Optional


class StatusChannel:
    """Holds at most one status message and whether a fetch is outstanding.

    Timestamps come from ``clock`` (monotonic seconds by default).
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self.message: Optional[str] = None
        self.created_at: Optional[float] = None
        self.loading = False

    def set(self, text: str, now: Optional[float] = None) -> None:
        """Show ``text``, replacing any current message; ends loading."""
        self.message = text
        self.created_at = self._clock() if now is None else now
        self.loading = False

    def start_loading(self, text: str, now: Optional[float] = None) -> None:
        self.set(text, now)
        self.loading = True

    def clear(self) -> None:
        self.message = None
        self.created_at = None

    def expire_if_stale(self, now: Optional[float] = None, timeout: float = 5.0) -> bool:
        """Drop the message once it is ``timeout`` seconds old.

        Returns True when a message was cleared.
        """
        if self.message is None or self.created_at is None:
            return False
        now = self._clock() if now is None else now
        if now - self.created_at >= timeout:
            self.clear()
            return True
        return False
