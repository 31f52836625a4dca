"""Debug overlay showing frame rate and steering activity."""
from __future__ import annotations
from typing import TYPE_CHECKING
import pygame

from ..ai.steering import SteeringDecision
from ..config import COLORS

if TYPE_CHECKING:
    from ..core.scene import Scene


class DebugOverlay:
    """Small text panel in the top-left corner."""

    def __init__(self, x: int = 10, y: int = 10, line_height: int = 18) -> None:
        self.x = x
        self.y = y
        self.line_height = line_height
        self._font: pygame.font.Font | None = None

    @property
    def font(self) -> pygame.font.Font:
        if self._font is None:
            pygame.font.init()
            self._font = pygame.font.Font(None, 20)
        return self._font

    def lines(self, scene: Scene, fps: float) -> list[str]:
        """Build the overlay text."""
        pause_str = " [PAUSED]" if scene.paused else ""
        lines = [
            f"FPS: {fps:.0f}{pause_str}",
            str(scene.time),
            f"Canvas: {scene.width}x{scene.height}",
        ]

        if scene.star_field is not None:
            lines.append(f"Stars: {len(scene.star_field.stars)}")

        swarm = scene.swarm
        if swarm is not None:
            counts = swarm.decision_counts()
            stuck = sum(1 for ship in swarm.ships if ship.is_stuck)
            lines.append(f"Ships: {len(swarm.ships)}  stuck: {stuck}")
            lines.append("  ".join(
                f"{decision.value}: {counts.get(decision, 0)}"
                for decision in SteeringDecision
            ))

        return lines

    def draw(self, surface: pygame.Surface, scene: Scene, fps: float) -> None:
        """Draw the overlay onto the surface."""
        lines = self.lines(scene, fps)
        font = self.font

        width = max(font.size(line)[0] for line in lines) + 12
        height = len(lines) * self.line_height + 8
        pygame.draw.rect(surface, COLORS['overlay_bg'], (self.x, self.y, width, height))

        for i, line in enumerate(lines):
            text_surf = font.render(line, True, COLORS['overlay_text'])
            surface.blit(text_surf, (self.x + 6, self.y + 4 + i * self.line_height))
