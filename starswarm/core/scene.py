"""Scene state container."""
from __future__ import annotations
import logging
import time
from dataclasses import dataclass
from typing import Callable

from ..config import SceneConfig, MAX_FRAME_DT, validate_canvas_size
from .events import EventBus, SceneRebuiltEvent, ShipStuckEvent, StuckEscapeEvent
from .resize import ResizeDebouncer
from .rng import RandomSource, make_rng
from .system import System

logger = logging.getLogger(__name__)


@dataclass
class FrameTime:
    """Tracks elapsed scene time."""
    total_seconds: float = 0.0
    frames: int = 0

    def advance(self, dt: float) -> None:
        """Advance scene time by one tick of dt seconds."""
        self.total_seconds += dt
        self.frames += 1

    def __str__(self) -> str:
        return f"Frame {self.frames}, {self.total_seconds:.1f}s"


class Scene:
    """Star field and ship swarm sharing one tick.

    The host calls ``initialize`` once with the canvas size, then ``tick``
    every animation frame. Resizes go through ``request_resize`` and
    rebuild the whole population once they settle.
    """

    def __init__(
        self,
        config: SceneConfig | None = None,
        rng: RandomSource | None = None,
        clock: Callable[[], float] = time.monotonic
    ) -> None:
        self.config = config or SceneConfig()
        self.event_bus = EventBus()
        self.time = FrameTime()
        self.width = 0
        self.height = 0
        self._rng = rng
        self._owns_rng = rng is None
        self._clock = clock
        self._systems: list[System] = []
        self._paused: bool = False
        self._debouncer = ResizeDebouncer(self.config.resize_debounce)

        self.event_bus.subscribe(ShipStuckEvent, self._on_ship_stuck)
        self.event_bus.subscribe(StuckEscapeEvent, self._on_stuck_escape)

    def initialize(self, canvas_size: tuple[int, int], config: SceneConfig | None = None) -> None:
        """(Re)build star and ship populations for a canvas.

        Args:
            canvas_size: (width, height) in pixels
            config: Replacement configuration; the current one is kept if None

        Raises:
            ConfigError: If the configuration or canvas size is invalid
        """
        from ..systems.starfield import StarFieldSystem
        from ..systems.swarm import ShipSwarmSystem

        if config is not None:
            self.config = config
            self._debouncer.quiet_period = config.resize_debounce
        self.config.validate()

        width, height = canvas_size
        validate_canvas_size(width, height)
        self.width = width
        self.height = height

        # A new config reseeds; a resize rebuild keeps the running sequence
        if self._owns_rng and (config is not None or self._rng is None):
            self._rng = make_rng(self.config.seed)

        self._systems = []
        if self.config.stars.enabled:
            self.add_system(StarFieldSystem(self.config.stars, self._rng))
        if self.config.ships.enabled:
            self.add_system(ShipSwarmSystem(self.config.ships, self._rng, self.event_bus))

        for system in self._systems:
            system.initialize(width, height)

        star_count = len(self.star_field.stars) if self.star_field else 0
        ship_count = len(self.swarm.ships) if self.swarm else 0
        logger.info(
            "Scene built for %dx%d canvas: %d stars, %d ships",
            width, height, star_count, ship_count
        )
        self.event_bus.publish(SceneRebuiltEvent(
            width=width,
            height=height,
            star_count=star_count,
            ship_count=ship_count,
        ))

    def add_system(self, system: System) -> None:
        """Add a system to the scene."""
        self._systems.append(system)
        self._systems.sort(key=lambda s: s.priority)

    @property
    def systems(self) -> list[System]:
        return list(self._systems)

    @property
    def star_field(self):
        """The StarFieldSystem, or None when stars are disabled."""
        from ..systems.starfield import StarFieldSystem
        return self._find(StarFieldSystem)

    @property
    def swarm(self):
        """The ShipSwarmSystem, or None when ships are disabled."""
        from ..systems.swarm import ShipSwarmSystem
        return self._find(ShipSwarmSystem)

    def _find(self, system_type: type[System]):
        for system in self._systems:
            if isinstance(system, system_type):
                return system
        return None

    def request_resize(self, width: int, height: int, now: float | None = None) -> None:
        """Schedule a rebuild for a new canvas size once resizing settles."""
        now = self._clock() if now is None else now
        if self._debouncer.pending:
            logger.debug("Coalescing resize to %dx%d", width, height)
        self._debouncer.request(width, height, now)

    def tick(self, dt: float, now: float | None = None) -> None:
        """Advance the scene by one frame.

        A skipped frame is simply lost; long frames are capped at
        ``MAX_FRAME_DT`` instead of being caught up.
        """
        now = self._clock() if now is None else now
        size = self._debouncer.poll(now)
        if size is not None and size != (self.width, self.height):
            self.initialize(size)

        if self._paused:
            return

        dt = max(0.0, min(dt, MAX_FRAME_DT))
        self.time.advance(dt)

        for system in self._systems:
            system.update(dt)

        # Process any queued events
        self.event_bus.process_queue()

    def _on_ship_stuck(self, event: ShipStuckEvent) -> None:
        logger.debug("Ship %d stuck for %d ticks", event.ship_index, event.stuck_frames)

    def _on_stuck_escape(self, event: StuckEscapeEvent) -> None:
        logger.debug("Ship %d escape turn %.2f rad", event.ship_index, event.heading_delta)

    def pause(self) -> None:
        """Pause the scene."""
        self._paused = True

    def unpause(self) -> None:
        """Unpause the scene."""
        self._paused = False

    def toggle_pause(self) -> None:
        """Toggle pause state."""
        self._paused = not self._paused

    @property
    def paused(self) -> bool:
        """Check if the scene is paused."""
        return self._paused
