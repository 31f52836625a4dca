"""Idle wandering: a persistent, occasionally resampled curve."""
from __future__ import annotations

from ...core.rng import centered
from .base import SteeringBehavior, SteeringContext, SteeringResult, SteeringDecision


class Wander(SteeringBehavior):
    """Fallback controller. Always active."""

    def evaluate(self, ctx: SteeringContext) -> SteeringResult | None:
        ship = ctx.ship
        config = ctx.config

        if ctx.rng.random() < config.curve_change_rate:
            ship.curve_value = centered(ctx.rng, config.curve_intensity)

        return SteeringResult(
            decision=SteeringDecision.WANDER,
            heading_delta=ship.curve_value
        )
