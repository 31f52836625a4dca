"""Ship agents of the swarm."""
from __future__ import annotations
import math
from dataclasses import dataclass, field
from enum import Enum

from ..config import ShipConfig
from .trails import Trail

TWO_PI = 2 * math.pi


class Edge(Enum):
    """Canvas borders a ship can be near."""
    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"


def normalize_angle(angle: float) -> float:
    """Wrap an angle into [0, 2*pi)."""
    angle = math.fmod(angle, TWO_PI)
    if angle < 0:
        angle += TWO_PI
    # fmod of a tiny negative number can round up to exactly 2*pi
    if angle >= TWO_PI:
        angle = 0.0
    return angle


def angle_difference(target: float, current: float) -> float:
    """Shortest signed rotation taking ``current`` to ``target``, in [-pi, pi]."""
    diff = target - current
    return math.atan2(math.sin(diff), math.cos(diff))


@dataclass
class Ship:
    """A steered agent.

    Ships are addressed by ``index`` within their swarm. The follow target
    is stored as an index and resolved against the swarm each tick, so a
    ship never holds a reference to a sibling.
    """
    index: int
    config: ShipConfig
    x: float = 0.0
    y: float = 0.0
    direction: float = 0.0  # Radians, [0, 2*pi)
    curve_value: float = 0.0  # Persistent wander bias added each tick
    target_index: int | None = None
    trail: Trail = field(init=False)

    # Per-edge ticks spent within edge_distance
    edge_frames: dict[Edge, int] = field(
        default_factory=lambda: {edge: 0 for edge in Edge}
    )

    # Stuck detection
    stuck_frames: int = 0
    last_x: float | None = None
    last_y: float | None = None
    last_frame_scale: float | None = None

    def __post_init__(self) -> None:
        self.trail = Trail(self.config.tail_length)
        self.direction = normalize_angle(self.direction)

    @property
    def is_stuck(self) -> bool:
        """True once stuck_frames exceeds the configured threshold."""
        return self.stuck_frames > self.config.stuck_threshold

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)

    def distance_to(self, x: float, y: float) -> float:
        return math.hypot(x - self.x, y - self.y)


def resolve_follow_target(index: int, count: int, follow_index: int | None) -> int | None:
    """Pick the ship that ship ``index`` follows.

    An explicit ``follow_index`` wins unless it names the ship itself;
    otherwise the next ship cyclically is used. A lone ship follows nobody.

    Args:
        index: Index of the following ship
        count: Swarm size
        follow_index: Explicit target index from configuration, or None

    Returns:
        Target index, or None when no other ship exists
    """
    if count < 2:
        return None
    if follow_index is not None and follow_index != index and 0 <= follow_index < count:
        return follow_index
    return (index + 1) % count
