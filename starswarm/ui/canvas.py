"""Drawing surface with a canvas-style transform stack."""
from __future__ import annotations
from dataclasses import dataclass, replace
import math
import pygame

from ..core.colors import RGB


@dataclass(frozen=True)
class Transform:
    """2D affine transform: x' = a*x + c*y + e, y' = b*x + d*y + f."""
    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    def apply(self, x: float, y: float) -> tuple[float, float]:
        return (self.a * x + self.c * y + self.e, self.b * x + self.d * y + self.f)

    def translated(self, dx: float, dy: float) -> Transform:
        return replace(
            self,
            e=self.a * dx + self.c * dy + self.e,
            f=self.b * dx + self.d * dy + self.f,
        )

    def rotated(self, angle: float) -> Transform:
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        return replace(
            self,
            a=self.a * cos_a + self.c * sin_a,
            b=self.b * cos_a + self.d * sin_a,
            c=self.c * cos_a - self.a * sin_a,
            d=self.d * cos_a - self.b * sin_a,
        )


@dataclass
class _State:
    transform: Transform
    fill_color: RGB
    stroke_color: RGB
    line_width: int


class Canvas:
    """Wraps a pygame Surface with fill/stroke state and save/restore.

    Shapes are given in the current transformed coordinate space, the way
    an HTML canvas context works.
    """

    def __init__(self, surface: pygame.Surface) -> None:
        self.surface = surface
        self.transform = Transform()
        self.fill_color: RGB = (255, 255, 255)
        self.stroke_color: RGB = (255, 255, 255)
        self.line_width: int = 1
        self._stack: list[_State] = []

    @property
    def width(self) -> int:
        return self.surface.get_width()

    @property
    def height(self) -> int:
        return self.surface.get_height()

    def save(self) -> None:
        """Push the current transform and style."""
        self._stack.append(_State(self.transform, self.fill_color, self.stroke_color, self.line_width))

    def restore(self) -> None:
        """Pop the most recently saved transform and style."""
        if not self._stack:
            return
        state = self._stack.pop()
        self.transform = state.transform
        self.fill_color = state.fill_color
        self.stroke_color = state.stroke_color
        self.line_width = state.line_width

    def translate(self, dx: float, dy: float) -> None:
        self.transform = self.transform.translated(dx, dy)

    def rotate(self, angle: float) -> None:
        self.transform = self.transform.rotated(angle)

    def clear(self, color: RGB) -> None:
        """Fill the whole surface with a solid color."""
        self.surface.fill(color)

    def fill_circle(self, x: float, y: float, radius: float) -> None:
        center = self.transform.apply(x, y)
        pygame.draw.circle(self.surface, self.fill_color, center, max(1.0, radius))

    def stroke_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        start = self.transform.apply(x1, y1)
        end = self.transform.apply(x2, y2)
        pygame.draw.line(self.surface, self.stroke_color, start, end, self.line_width)

    def fill_polygon(self, points: list[tuple[float, float]]) -> None:
        pygame.draw.polygon(self.surface, self.fill_color, [self.transform.apply(x, y) for x, y in points])
