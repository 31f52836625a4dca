"""Edge avoidance: turn away from canvas borders the ship is close to."""
from __future__ import annotations
import math

from ...core.rng import centered
from ...entities.ships import Edge, angle_difference
from .base import SteeringBehavior, SteeringContext, SteeringResult, SteeringDecision

# Unit vector pointing away from each border (canvas y grows downwards)
AWAY_VECTORS: dict[Edge, tuple[float, float]] = {
    Edge.LEFT: (1.0, 0.0),
    Edge.RIGHT: (-1.0, 0.0),
    Edge.TOP: (0.0, 1.0),
    Edge.BOTTOM: (0.0, -1.0),
}

_HORIZONTAL = (Edge.LEFT, Edge.RIGHT)


def edge_distances(x: float, y: float, width: float, height: float) -> dict[Edge, float]:
    """Distance from a point to each border."""
    return {
        Edge.LEFT: x,
        Edge.RIGHT: width - x,
        Edge.TOP: y,
        Edge.BOTTOM: height - y,
    }


def ideal_heading(edge: Edge, near: list[Edge]) -> float:
    """Escape heading for ``edge``, bent diagonally by a perpendicular near edge.

    Near the left border alone the ideal heading points right; near the
    left and top borders together it points down-right.
    """
    ax, ay = AWAY_VECTORS[edge]
    edge_is_horizontal = edge in _HORIZONTAL
    for other in near:
        if other is edge or (other in _HORIZONTAL) == edge_is_horizontal:
            continue
        ox, oy = AWAY_VECTORS[other]
        ax += ox
        ay += oy
    return math.atan2(ay, ax)


class EdgeAvoidance(SteeringBehavior):
    """Bang-bang turn away from every border within ``edge_distance``.

    Only the sign of the angular error to the ideal heading is used; its
    magnitude comes from how deep the ship is inside the edge zone.
    Lingering near an edge, or being stuck, multiplies the turn rate.
    """

    def evaluate(self, ctx: SteeringContext) -> SteeringResult | None:
        ship = ctx.ship
        config = ctx.config
        edge_distance = config.edge_distance

        distances = edge_distances(ship.x, ship.y, ctx.width, ctx.height)
        near = [edge for edge in Edge if distances[edge] < edge_distance]

        for edge in Edge:
            ship.edge_frames[edge] = ship.edge_frames[edge] + 1 if edge in near else 0

        if not near:
            return None

        delta = 0.0
        for edge in near:
            distance_factor = max(0.0, min(1.0, distances[edge] / edge_distance))
            curve_strength = config.edge_curve_intensity * (1.0 - distance_factor)
            if ship.edge_frames[edge] > config.stuck_threshold or ship.is_stuck:
                curve_strength *= config.stuck_escape_multiplier

            diff = angle_difference(ideal_heading(edge, near), ship.direction)
            if diff != 0.0:
                delta += math.copysign(curve_strength, diff)

        if len(near) >= 2:
            # Corner: symmetric pulls can cancel out
            delta += centered(ctx.rng, config.corner_jitter)

        names = ", ".join(edge.value for edge in near)
        return SteeringResult(
            decision=SteeringDecision.EDGE_AVOID,
            heading_delta=delta,
            message=f"Avoiding {names}"
        )
