"""Per-user expiry timers for active quiz attempts."""

from __future__ import annotations

import logging
from collections.abc import Callable
from threading import Timer
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    """Subset of ``threading.Timer`` the registry relies on."""

    daemon: bool
    name: str

    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], Any]], TimerHandle]
ExpiryCallback = Callable[[str, TimerHandle], None]


class SessionTimerRegistry:
    """Keeps at most one live expiry timer per username.

    Not synchronized on its own. The owning engine calls every method while
    holding the same lock its expiry callback takes, so arming, cancelling and
    firing are serialized with state mutation.
    """

    def __init__(self, timer_factory: TimerFactory = Timer) -> None:
        self._timer_factory = timer_factory
        self._timers: dict[str, TimerHandle] = {}

    def __len__(self) -> int:
        return len(self._timers)

    def __contains__(self, username: object) -> bool:
        return username in self._timers

    def arm(self, username: str, timeout_seconds: float, on_expire: ExpiryCallback) -> TimerHandle:
        """Cancel any existing timer for ``username`` and start a new one."""
        if self.cancel(username):
            logger.warning("Existing quiz session timer stopped for %s", username)

        def fire() -> None:
            on_expire(username, timer)

        timer = self._timer_factory(timeout_seconds, fire)
        timer.daemon = True
        timer.name = f"quiz-expiry-{username}"
        self._timers[username] = timer
        timer.start()
        logger.debug("Session timer armed for %s (%.1fs)", username, timeout_seconds)
        return timer

    def cancel(self, username: str) -> bool:
        timer = self._timers.pop(username, None)
        if timer is None:
            return False
        timer.cancel()
        return True

    def is_current(self, username: str, timer: TimerHandle) -> bool:
        return self._timers.get(username) is timer

    def discard(self, username: str, timer: TimerHandle) -> bool:
        """Forget ``timer`` if it is still the one registered for ``username``."""
        if not self.is_current(username, timer):
            return False
        del self._timers[username]
        return True

    def cancel_all(self) -> int:
        timers = list(self._timers.values())
        self._timers.clear()
        for timer in timers:
            timer.cancel()
        return len(timers)
