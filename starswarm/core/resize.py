"""Coalescing of window resize requests."""
from __future__ import annotations
from dataclasses import dataclass


@dataclass
class ResizeDebouncer:
    """Collapses a burst of resize requests into a single rebuild.

    Each ``request`` restarts the quiet period. ``poll`` returns the most
    recently requested size once ``quiet_period`` seconds have passed
    without a new request, and None otherwise.
    """
    quiet_period: float = 0.1
    _pending: tuple[int, int] | None = None
    _last_request: float = 0.0

    def request(self, width: int, height: int, now: float) -> None:
        """Record a resize to (width, height) observed at time ``now``."""
        self._pending = (width, height)
        self._last_request = now

    def poll(self, now: float) -> tuple[int, int] | None:
        """Return the settled size if the quiet period has elapsed."""
        if self._pending is None:
            return None
        if now - self._last_request < self.quiet_period:
            return None
        size = self._pending
        self._pending = None
        return size

    @property
    def pending(self) -> bool:
        """True while a resize is waiting for its quiet period."""
        return self._pending is not None
