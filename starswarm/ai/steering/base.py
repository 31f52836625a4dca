"""Base class for steering controllers using the Strategy pattern.

Each controller looks at one concern (borders, being stuck, following a
sibling, idle wandering) and proposes a heading change for the ship.
The chain in ``chain.py`` decides which proposal is applied.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...config import ShipConfig
    from ...core.rng import RandomSource
    from ...entities.ships import Ship


class SteeringDecision(Enum):
    """Which controller steered the ship this tick."""
    EDGE_AVOID = "edge_avoid"
    STUCK_ESCAPE = "stuck_escape"
    FOLLOW = "follow"
    WANDER = "wander"


@dataclass
class SteeringContext:
    """Context passed to controllers during a tick.

    ``target`` is the follow target's position as committed at the end of
    the previous tick, never a position updated earlier in this tick.
    """
    ship: Ship
    width: float
    height: float
    rng: RandomSource
    target: tuple[float, float] | None = None
    frame_scale: float = 1.0  # Elapsed time in units of 1/60 s

    @property
    def config(self) -> ShipConfig:
        return self.ship.config


@dataclass
class SteeringResult:
    """Heading change proposed by a controller."""
    decision: SteeringDecision
    heading_delta: float = 0.0
    # Lower-priority results folded into this one
    composed: tuple[SteeringDecision, ...] = ()
    # Message for debugging/logging
    message: str = ""

    def includes(self, decision: SteeringDecision) -> bool:
        """True if `decision` won the tick or was folded into it."""
        return decision == self.decision or decision in self.composed


class SteeringBehavior(ABC):
    """Abstract base class for steering controllers.

    Controllers keep no per-ship state of their own; anything that must
    persist between ticks lives on the Ship.
    """

    # A composing controller still contributes its delta when a
    # higher-priority controller has already won the tick.
    composes: bool = False

    @property
    def name(self) -> str:
        """Human-readable name for this controller."""
        return self.__class__.__name__

    @abstractmethod
    def evaluate(self, ctx: SteeringContext) -> SteeringResult | None:
        """Propose a heading change.

        Args:
            ctx: Current context with the ship, canvas size and target

        Returns:
            SteeringResult, or None when the controller is inactive
        """
        pass
