"""Star field system - a perspective field of receding stars."""
from __future__ import annotations
from typing import Iterator

from ..config import StarFieldConfig, BASE_FRAME_RATE, COLORS
from ..core.colors import RGB, parse_hex_color
from ..core.rng import RandomSource
from ..core.system import System
from ..core.system_priority import SystemPriority
from ..entities.stars import Star, project_star


class StarFieldSystem(System):
    """Owns a fixed-size star population.

    Each tick every star moves closer by ``speed * 60 * dt``; a star that
    reaches the viewer (z <= 0) is respawned in place at the back of the
    field with a fresh position.
    """

    priority = SystemPriority.STARFIELD

    def __init__(self, config: StarFieldConfig, rng: RandomSource) -> None:
        super().__init__(rng)
        self.config = config
        self.stars: list[Star] = []
        self._palette: list[RGB] = [parse_hex_color(c) for c in config.colors]
        self.recycled = 0  # Stars respawned during the last tick

    def initialize(self, width: int, height: int) -> None:
        """Populate the field with stars at random depths in (0, width]."""
        self.width = width
        self.height = height
        self.stars = []
        for _ in range(self.config.star_count):
            x, y = self._random_position()
            z = width * (1.0 - self.rng.random())
            self.stars.append(Star(x=x, y=y, z=z, color=self._pick_color()))

    def update(self, dt: float) -> None:
        """Advance every star towards the viewer."""
        step = self.config.speed * BASE_FRAME_RATE * dt
        self.recycled = 0

        for star in self.stars:
            star.z -= step
            if star.z <= 0:
                self._respawn(star)
                self.recycled += 1

    def projected(self) -> Iterator[tuple[float, float, float, RGB]]:
        """Yield (screen_x, screen_y, radius, color) for every star."""
        for star in self.stars:
            sx, sy, radius = project_star(star, self.width, self.height, self.config.max_radius)
            yield sx, sy, radius, star.color

    def _respawn(self, star: Star) -> None:
        star.x, star.y = self._random_position()
        star.z = float(self.width)
        if self.config.color_mode == "multi":
            star.color = self._pick_color()

    def _random_position(self) -> tuple[float, float]:
        """Uniform position over the canvas in centered coordinates."""
        x = self.rng.random() * self.width - self.width / 2
        y = self.rng.random() * self.height - self.height / 2
        return x, y

    def _pick_color(self) -> RGB:
        if self.config.color_mode != "multi":
            return COLORS['star']
        index = int(self.rng.random() * len(self._palette))
        return self._palette[min(index, len(self._palette) - 1)]
