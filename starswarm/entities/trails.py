"""Trail storage for ship path visualization."""
from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class TrailSample:
    """A single recorded ship state."""
    x: float
    y: float
    direction: float


class Trail:
    """Bounded position history, most recent sample first.

    Pushing beyond ``max_points`` evicts the oldest sample.
    """

    def __init__(self, max_points: int) -> None:
        self._points: deque[TrailSample] = deque(maxlen=max_points)

    @property
    def max_points(self) -> int:
        return self._points.maxlen or 0

    def push(self, x: float, y: float, direction: float) -> None:
        """Record a new sample at the front of the trail."""
        self._points.appendleft(TrailSample(x, y, direction))

    @property
    def newest(self) -> TrailSample | None:
        return self._points[0] if self._points else None

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[TrailSample]:
        return iter(self._points)
