"""Star particles for the perspective star field."""
from __future__ import annotations
from dataclasses import dataclass

from ..core.colors import RGB


@dataclass
class Star:
    """A point receding towards the viewer.

    ``x`` and ``y`` are in canvas-centered coordinates; ``z`` is depth,
    strictly positive while the star is alive.
    """
    x: float
    y: float
    z: float
    color: RGB = (255, 255, 255)


def project_star(
    star: Star,
    width: float,
    height: float,
    max_radius: float = 2.0
) -> tuple[float, float, float]:
    """Project a star onto the canvas.

    Returns:
        (screen_x, screen_y, radius); radius shrinks linearly to zero as
        z approaches the canvas width
    """
    screen_x = width / 2 + (star.x / star.z) * width
    screen_y = height / 2 + (star.y / star.z) * height
    radius = max(0.0, max_radius * (1.0 - star.z / width))
    return screen_x, screen_y, radius
