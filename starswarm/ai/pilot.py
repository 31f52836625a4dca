"""Per-ship motion: steering, integration, trail recording and clamping."""
from __future__ import annotations
import math

from ..entities.ships import normalize_angle
from .steering import SteeringChain, SteeringContext, SteeringResult


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value to the inclusive range [low, high]."""
    return max(low, min(high, value))


class ShipPilot:
    """Advances a single ship by one tick.

    Order within a tick: steering chain, position integration, heading
    normalization, clamp into the canvas, trail push. The trail sample is
    taken after normalization and the clamp rather than straight after
    integration, so it always equals the committed position and never
    lies outside the canvas. The clamp never changes heading; it only
    keeps the ship on screen.
    """

    def __init__(self, chain: SteeringChain | None = None) -> None:
        self.chain = chain or SteeringChain()

    def step(self, ctx: SteeringContext) -> SteeringResult:
        """Steer and move ``ctx.ship``.

        Returns:
            The steering result applied this tick
        """
        ship = ctx.ship
        result = self.chain.evaluate(ctx)

        ship.direction += result.heading_delta
        distance = ship.config.speed * ctx.frame_scale
        ship.x += math.cos(ship.direction) * distance
        ship.y += math.sin(ship.direction) * distance

        ship.direction = normalize_angle(ship.direction)
        ship.x = clamp(ship.x, 0.0, ctx.width)
        ship.y = clamp(ship.y, 0.0, ctx.height)

        ship.trail.push(ship.x, ship.y, ship.direction)
        return result
