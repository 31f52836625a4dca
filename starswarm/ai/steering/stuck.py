"""Stuck detection and the escape perturbation."""
from __future__ import annotations
import math

from ...config import STUCK_DISPLACEMENT_FRACTION, STUCK_DECAY_PER_TICK
from ...core.rng import centered
from .base import SteeringBehavior, SteeringContext, SteeringResult, SteeringDecision


class StuckDetector:
    """Counts ticks of near-zero displacement.

    A tick that moves less than ``STUCK_DISPLACEMENT_FRACTION * speed``
    adds one frame; a normal tick removes ``STUCK_DECAY_PER_TICK`` frames,
    never going below zero.

    Frame counts are in ticks, not seconds, so how long "stuck" lasts
    depends on the host frame rate.
    """

    def __init__(
        self,
        displacement_fraction: float = STUCK_DISPLACEMENT_FRACTION,
        decay: int = STUCK_DECAY_PER_TICK
    ) -> None:
        self.displacement_fraction = displacement_fraction
        self.decay = decay

    def observe(self, frames: int, displacement: float, speed: float) -> int:
        """Return the updated stuck frame count after one tick."""
        if displacement < self.displacement_fraction * speed:
            return frames + 1
        return max(0, frames - self.decay)

    def update(self, ctx: SteeringContext) -> None:
        """Measure the ship's displacement since the previous tick.

        The movement measured was made during the previous tick, so it is
        compared against that tick's frame scale.
        """
        ship = ctx.ship
        if ship.last_x is None or ship.last_y is None or ship.last_frame_scale is None:
            expected = ship.config.speed * ctx.frame_scale
            displacement = expected
        else:
            expected = ship.config.speed * ship.last_frame_scale
            displacement = math.hypot(ship.x - ship.last_x, ship.y - ship.last_y)

        ship.stuck_frames = self.observe(ship.stuck_frames, displacement, expected)
        ship.last_x = ship.x
        ship.last_y = ship.y
        ship.last_frame_scale = ctx.frame_scale


class StuckEscape(SteeringBehavior):
    """Large random heading kick once a ship stays stuck for two thresholds.

    After the kick, stuck frames drop back to exactly the threshold so the
    new heading gets one full cycle before another kick can fire.
    """

    composes = True

    def evaluate(self, ctx: SteeringContext) -> SteeringResult | None:
        ship = ctx.ship
        threshold = ctx.config.stuck_threshold

        if not ship.is_stuck or ship.stuck_frames <= 2 * threshold:
            return None

        delta = centered(ctx.rng, math.pi)
        ship.stuck_frames = threshold
        return SteeringResult(
            decision=SteeringDecision.STUCK_ESCAPE,
            heading_delta=delta,
            message=f"Escaping after {2 * threshold} stuck ticks"
        )
