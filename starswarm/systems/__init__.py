"""Scene systems package."""
from .starfield import StarFieldSystem
from .swarm import ShipSwarmSystem
from .trail_system import TrailStyle, TrailSegment, build_trail_segments

__all__ = [
    "StarFieldSystem", "ShipSwarmSystem",
    "TrailStyle", "TrailSegment", "build_trail_segments",
]
