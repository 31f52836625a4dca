"""Following: steer towards the assigned sibling ship."""
from __future__ import annotations
import math

from ...entities.ships import angle_difference
from .base import SteeringBehavior, SteeringContext, SteeringResult, SteeringDecision


class FollowTarget(SteeringBehavior):
    """Proportional turn towards the target, stronger the closer it is."""

    def evaluate(self, ctx: SteeringContext) -> SteeringResult | None:
        config = ctx.config
        if not config.follow_enabled or ctx.target is None:
            return None

        ship = ctx.ship
        tx, ty = ctx.target
        distance = ship.distance_to(tx, ty)
        if distance == 0.0 or distance > config.follow_distance:
            return None

        bearing = math.atan2(ty - ship.y, tx - ship.x)
        diff = angle_difference(bearing, ship.direction)
        delta = diff * config.follow_strength * (1.0 - distance / config.follow_distance)
        return SteeringResult(
            decision=SteeringDecision.FOLLOW,
            heading_delta=delta,
            message=f"Following ship {ship.target_index} at {distance:.0f}px"
        )
