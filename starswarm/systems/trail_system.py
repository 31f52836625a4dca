"""Trail system - turns a ship's position history into drawable segments."""
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Iterable

from ..config import ShipConfig, TRAIL_COLOR_SATURATION
from ..core.colors import RGB, parse_hex_color, lerp_color
from ..entities.trails import TrailSample


@dataclass(frozen=True)
class TrailStyle:
    """Resolved trail appearance for one swarm."""
    start_color: RGB
    end_color: RGB
    max_distance: float
    opacity: float
    width: int

    @classmethod
    def from_config(cls, config: ShipConfig) -> TrailStyle:
        return cls(
            start_color=parse_hex_color(config.tail_start_color),
            end_color=parse_hex_color(config.tail_end_color),
            max_distance=config.tail_max_distance,
            opacity=config.tail_opacity,
            width=max(1, round(config.size * config.tail_width_fraction)),
        )


@dataclass(frozen=True)
class TrailSegment:
    """One stroke of a rendered trail."""
    start: tuple[float, float]
    end: tuple[float, float]
    color: RGB
    opacity: float
    width: int
    distance: float  # Cumulative trail distance at the far end of the segment


def _is_finite(sample: TrailSample) -> bool:
    return math.isfinite(sample.x) and math.isfinite(sample.y)


def build_trail_segments(samples: Iterable[TrailSample], style: TrailStyle) -> list[TrailSegment]:
    """Build fading segments from newest to oldest sample.

    Opacity falls linearly with cumulative distance from the ship, and the
    color reaches the end color at a quarter of ``max_distance``. Walking
    stops before the drawn length would exceed ``max_distance``. A sample
    with non-finite coordinates is skipped along with both segments
    touching it.
    """
    segments: list[TrailSegment] = []
    if style.opacity <= 0 or style.max_distance <= 0:
        return segments

    saturation_distance = style.max_distance * TRAIL_COLOR_SATURATION
    cumulative = 0.0
    previous: TrailSample | None = None

    for sample in samples:
        if not _is_finite(sample):
            previous = None
            continue

        if previous is None:
            previous = sample
            continue

        length = math.hypot(sample.x - previous.x, sample.y - previous.y)
        cumulative += length
        if cumulative > style.max_distance:
            break

        opacity = max(0.0, style.opacity * (1.0 - cumulative / style.max_distance))
        if opacity <= 0.0:
            break

        color = lerp_color(
            style.start_color, style.end_color,
            min(1.0, cumulative / saturation_distance)
        )
        segments.append(TrailSegment(
            start=(previous.x, previous.y),
            end=(sample.x, sample.y),
            color=color,
            opacity=opacity,
            width=style.width,
            distance=cumulative,
        ))
        previous = sample

    return segments
