"""Ship swarm system - builds, links and advances the ships."""
from __future__ import annotations
import logging
import math
from collections import Counter

from ..ai.pilot import ShipPilot, clamp
from ..ai.steering import SteeringContext, SteeringDecision, SteeringResult
from ..config import ShipConfig, BASE_FRAME_RATE
from ..core.events import EventBus, ShipStuckEvent, StuckEscapeEvent
from ..core.rng import RandomSource, centered, uniform
from ..core.system import System
from ..core.system_priority import SystemPriority
from ..entities.ships import Ship, resolve_follow_target

logger = logging.getLogger(__name__)

# Heading pointing up the canvas (y grows downwards)
UP = 1.5 * math.pi


class ShipSwarmSystem(System):
    """Owns the ships and runs them through their pilot each tick.

    Ships live in a list and are addressed by index. A tick reads every
    ship's position into a snapshot before any ship moves, so following
    always sees last tick's committed positions regardless of update order.
    """

    priority = SystemPriority.SWARM

    def __init__(
        self,
        config: ShipConfig,
        rng: RandomSource,
        event_bus: EventBus | None = None,
        pilot: ShipPilot | None = None
    ) -> None:
        super().__init__(rng)
        self.config = config
        self.event_bus = event_bus
        self.pilot = pilot or ShipPilot()
        self.ships: list[Ship] = []
        self.last_results: list[SteeringResult] = []

    def initialize(self, width: int, height: int) -> None:
        """Build the swarm, then link follow targets in a second pass."""
        self.width = width
        self.height = height
        self.ships = []
        self.last_results = []

        count = self.config.count
        for index in range(count):
            x, y = self._place(index, count)
            ship = Ship(
                index=index,
                config=self.config,
                x=x,
                y=y,
                direction=self._initial_heading(),
            )
            self.ships.append(ship)

        self.assign_targets()
        logger.debug(
            "Placed %d ships (%s layout) on %dx%d canvas",
            count, self.config.placement, width, height
        )

    def assign_targets(self) -> None:
        """Point each ship at the sibling it should follow."""
        count = len(self.ships)
        for ship in self.ships:
            ship.target_index = resolve_follow_target(ship.index, count, self.config.follow_index)

    def target_of(self, ship: Ship) -> Ship | None:
        """Resolve a ship's follow target index against the swarm."""
        if ship.target_index is None or not 0 <= ship.target_index < len(self.ships):
            return None
        return self.ships[ship.target_index]

    def update(self, dt: float) -> None:
        """Advance every ship by one tick."""
        frame_scale = dt * BASE_FRAME_RATE
        snapshot = [ship.position for ship in self.ships]
        results: list[SteeringResult] = []

        for ship in self.ships:
            target = None
            if self.target_of(ship) is not None:
                target = snapshot[ship.target_index]

            ctx = SteeringContext(
                ship=ship,
                width=self.width,
                height=self.height,
                rng=self.rng,
                target=target,
                frame_scale=frame_scale,
            )

            was_stuck = ship.is_stuck
            result = self.pilot.step(ctx)
            results.append(result)

            if self.event_bus is not None:
                if result.includes(SteeringDecision.STUCK_ESCAPE):
                    self.event_bus.queue(StuckEscapeEvent(
                        ship_index=ship.index,
                        heading_delta=result.heading_delta,
                    ))
                elif ship.is_stuck and not was_stuck:
                    self.event_bus.queue(ShipStuckEvent(
                        ship_index=ship.index,
                        stuck_frames=ship.stuck_frames,
                    ))

        self.last_results = results

    def decision_counts(self) -> Counter:
        """How many ships each controller steered during the last tick."""
        return Counter(result.decision for result in self.last_results)

    def _place(self, index: int, count: int) -> tuple[float, float]:
        """Initial position for ship ``index`` under the configured layout."""
        w, h = self.width, self.height
        spread = self.config.swarm_spread
        offset = self.config.swarm_offset
        # Signed distance from the middle of the swarm, in ships
        rank = index - (count - 1) / 2

        if self.config.placement == "fan":
            x = w / 2 + rank * spread
            y = h - offset - abs(rank) * offset
        else:
            x = uniform(self.rng, w * 0.25, w * 0.75) + rank * spread * 0.5
            y = uniform(self.rng, h * 0.25, h * 0.75) + centered(self.rng, spread) * 0.5

        return clamp(x, 0.0, w), clamp(y, 0.0, h)

    def _initial_heading(self) -> float:
        if self.config.heading_bias_up:
            return UP + centered(self.rng, self.config.heading_jitter)
        return uniform(self.rng, 0.0, 2 * math.pi)
