"""Main rendering logic."""
from __future__ import annotations
from typing import TYPE_CHECKING
import pygame

from ..core.colors import RGB, parse_hex_color, blend_over
from ..systems.trail_system import TrailStyle, build_trail_segments
from .canvas import Canvas
from .overlay import DebugOverlay

if TYPE_CHECKING:
    from ..config import ShipConfig
    from ..core.scene import Scene
    from ..systems.starfield import StarFieldSystem
    from ..systems.swarm import ShipSwarmSystem

# Stars smaller than this are not drawn
MIN_STAR_RADIUS = 0.5


def ship_outline(size: float) -> list[tuple[float, float]]:
    """Ship triangle in the ship's own frame, pointing along +x."""
    return [
        (size, 0.0),
        (-size / 2, -size / 2),
        (-size / 2, size / 2),
    ]


class Renderer:
    """Draws the scene: stars, then each ship's trail and body, then the overlay."""

    def __init__(self, screen: pygame.Surface, show_overlay: bool = False) -> None:
        self.canvas = Canvas(screen)
        self.overlay = DebugOverlay()
        self.show_overlay = show_overlay

        # Resolved per ShipConfig, rebuilt when the scene swaps configs
        self._style_config: ShipConfig | None = None
        self._trail_style: TrailStyle | None = None
        self._ship_color: RGB = (255, 255, 255)

    def handle_resize(self, new_screen: pygame.Surface) -> None:
        """Draw onto a new display surface after the window was resized."""
        self.canvas = Canvas(new_screen)

    def toggle_overlay(self) -> None:
        self.show_overlay = not self.show_overlay

    def render(self, scene: Scene, fps: float = 0.0) -> None:
        """Render the scene state."""
        background = parse_hex_color(scene.config.background)
        self.canvas.clear(background)

        star_field = scene.star_field
        if star_field is not None:
            self._render_stars(star_field)

        swarm = scene.swarm
        if swarm is not None:
            self._resolve_ship_style(swarm.config)
            self._render_ships(swarm, background)

        if self.show_overlay:
            self.overlay.draw(self.canvas.surface, scene, fps)

    def _resolve_ship_style(self, config: ShipConfig) -> None:
        if config is self._style_config:
            return
        self._style_config = config
        self._trail_style = TrailStyle.from_config(config)
        self._ship_color = parse_hex_color(config.color)

    def _render_stars(self, star_field: StarFieldSystem) -> None:
        """Render stars as disks growing as they approach."""
        canvas = self.canvas
        width = canvas.width
        height = canvas.height

        for sx, sy, radius, color in star_field.projected():
            if radius < MIN_STAR_RADIUS:
                continue
            # Skip if off screen
            if not (-radius <= sx <= width + radius and -radius <= sy <= height + radius):
                continue
            canvas.fill_color = color
            canvas.fill_circle(sx, sy, radius)

    def _render_ships(self, swarm: ShipSwarmSystem, background: RGB) -> None:
        """Render each ship's fading trail followed by its body."""
        canvas = self.canvas
        outline = ship_outline(swarm.config.size)

        for ship in swarm.ships:
            self._render_trail(ship.trail, background)

            canvas.save()
            canvas.translate(ship.x, ship.y)
            canvas.rotate(ship.direction)
            canvas.fill_color = self._ship_color
            canvas.fill_polygon(outline)
            canvas.restore()

    def _render_trail(self, trail, background: RGB) -> None:
        """Render a trail as line segments blended over the background.

        Pygame lines don't support alpha directly, so each segment is drawn
        with its color pre-blended against the background.
        """
        canvas = self.canvas
        for segment in build_trail_segments(trail, self._trail_style):
            canvas.stroke_color = blend_over(segment.color, background, segment.opacity)
            canvas.line_width = segment.width
            canvas.stroke_line(*segment.start, *segment.end)
