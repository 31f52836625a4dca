"""Base class for scene systems."""
from __future__ import annotations
from abc import ABC, abstractmethod

from .rng import RandomSource


class System(ABC):
    """Base class for all systems. Systems own a population and advance it each tick."""

    priority: int = 0  # Lower numbers run first

    def __init__(self, rng: RandomSource) -> None:
        self.rng = rng
        self.width = 0
        self.height = 0

    @abstractmethod
    def initialize(self, width: int, height: int) -> None:
        """(Re)build the population for a canvas of the given size.

        Args:
            width: Canvas width in pixels
            height: Canvas height in pixels
        """
        pass

    @abstractmethod
    def update(self, dt: float) -> None:
        """Advance the population by one tick.

        Args:
            dt: Delta time since last tick in seconds
        """
        pass

    @property
    def name(self) -> str:
        """Human-readable name for this system."""
        return self.__class__.__name__
