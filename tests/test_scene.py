"""Integration tests for the scene."""
import math
import random
import pytest
from starswarm import Scene
from starswarm.config import SceneConfig, StarFieldConfig, ShipConfig, ConfigError, MAX_FRAME_DT
from starswarm.core import EventBus, Event, ResizeDebouncer, SystemPriority
from starswarm.core.events import SceneRebuiltEvent, ShipStuckEvent
from starswarm.core.scene import FrameTime


def small_config(**kwargs) -> SceneConfig:
    options = dict(
        stars=StarFieldConfig(star_count=30),
        ships=ShipConfig(count=3),
        seed=42,
    )
    options.update(kwargs)
    return SceneConfig(**options)


class TestFrameTime:
    """Tests for FrameTime."""

    def test_advance(self):
        """Test advancing scene time."""
        time = FrameTime()
        time.advance(0.5)
        time.advance(0.25)

        assert time.frames == 2
        assert time.total_seconds == pytest.approx(0.75)
        assert "Frame 2" in str(time)


class TestScene:
    """Tests for Scene."""

    def test_initialize_builds_systems(self):
        """Test that both systems are built in priority order."""
        scene = Scene(small_config())
        scene.initialize((800, 600))

        assert [s.priority for s in scene.systems] == [SystemPriority.STARFIELD, SystemPriority.SWARM]
        assert [s.name for s in scene.systems] == ["StarFieldSystem", "ShipSwarmSystem"]
        assert len(scene.star_field.stars) == 30
        assert len(scene.swarm.ships) == 3
        assert (scene.width, scene.height) == (800, 600)

    def test_disabled_systems(self):
        """Test that disabled layers are not built."""
        config = small_config(
            stars=StarFieldConfig(enabled=False),
            ships=ShipConfig(enabled=False),
        )
        scene = Scene(config)
        scene.initialize((800, 600))
        scene.tick(1 / 60, now=0.0)

        assert scene.star_field is None
        assert scene.swarm is None
        assert scene.systems == []

    def test_invalid_canvas(self):
        """Test that a zero-sized canvas is rejected."""
        scene = Scene(small_config())

        with pytest.raises(ConfigError):
            scene.initialize((0, 600))

    def test_invalid_config(self):
        """Test that an invalid configuration is rejected at initialize."""
        scene = Scene(small_config(ships=ShipConfig(speed=-1.0)))

        with pytest.raises(ConfigError, match="speed"):
            scene.initialize((800, 600))

    def test_seed_reproducible(self):
        """Test that two scenes with the same seed evolve identically."""
        scenes = [Scene(small_config()) for _ in range(2)]
        for scene in scenes:
            scene.initialize((640, 480))
            for i in range(100):
                scene.tick(1 / 60, now=float(i))

        a, b = scenes
        assert [s.position for s in a.swarm.ships] == [s.position for s in b.swarm.ships]
        assert [(s.x, s.y, s.z) for s in a.star_field.stars] == [(s.x, s.y, s.z) for s in b.star_field.stars]

    def test_pause_unpause(self):
        """Test pausing and unpausing."""
        scene = Scene(small_config())

        assert not scene.paused

        scene.pause()
        assert scene.paused

        scene.unpause()
        assert not scene.paused

        scene.toggle_pause()
        assert scene.paused

    def test_tick_paused(self):
        """Test that tick does nothing when paused."""
        scene = Scene(small_config())
        scene.initialize((800, 600))
        positions = [s.position for s in scene.swarm.ships]
        scene.pause()

        scene.tick(1 / 60, now=0.0)

        assert scene.time.frames == 0
        assert [s.position for s in scene.swarm.ships] == positions

    def test_long_frame_capped(self):
        """Test that a long frame is capped instead of caught up."""
        scene = Scene(small_config())
        scene.initialize((800, 600))

        scene.tick(10.0, now=0.0)

        assert scene.time.total_seconds == pytest.approx(MAX_FRAME_DT)

    def test_negative_dt_ignored(self):
        """Test that a negative elapsed time is treated as zero."""
        scene = Scene(small_config())
        scene.initialize((800, 600))

        scene.tick(-1.0, now=0.0)

        assert scene.time.total_seconds == 0.0
        assert scene.time.frames == 1

    def test_resize_debounced(self):
        """Test that a burst of resizes triggers a single rebuild."""
        scene = Scene(small_config(resize_debounce=0.1))
        scene.initialize((800, 600))
        rebuilds = []
        scene.event_bus.subscribe(SceneRebuiltEvent, rebuilds.append)

        scene.request_resize(900, 600, now=1.00)
        scene.tick(1 / 60, now=1.02)
        scene.request_resize(1000, 700, now=1.05)
        scene.tick(1 / 60, now=1.10)
        assert rebuilds == []
        assert (scene.width, scene.height) == (800, 600)

        scene.tick(1 / 60, now=1.20)

        assert len(rebuilds) == 1
        assert (rebuilds[0].width, rebuilds[0].height) == (1000, 700)
        assert (scene.width, scene.height) == (1000, 700)
        assert scene.swarm.width == 1000

    def test_resize_same_size_no_rebuild(self):
        """Test that settling on the current size does not rebuild."""
        scene = Scene(small_config(resize_debounce=0.1))
        scene.initialize((800, 600))
        rebuilds = []
        scene.event_bus.subscribe(SceneRebuiltEvent, rebuilds.append)

        scene.request_resize(800, 600, now=0.0)
        scene.tick(1 / 60, now=1.0)

        assert rebuilds == []

    def test_reinitialize_with_new_config(self):
        """Test rebuilding with a replacement configuration."""
        scene = Scene(small_config())
        scene.initialize((800, 600))

        scene.initialize((800, 600), small_config(ships=ShipConfig(count=7)))

        assert len(scene.swarm.ships) == 7
        assert scene.config.ships.count == 7

    def test_reinitialize_applies_new_seed(self):
        """Test that a replacement config's seed is honored on rebuild."""
        scene = Scene(small_config(seed=1))
        scene.initialize((800, 600))
        scene.initialize((800, 600), small_config(seed=2))

        fresh = Scene(small_config(seed=2))
        fresh.initialize((800, 600))

        assert [s.position for s in scene.swarm.ships] == [s.position for s in fresh.swarm.ships]
        assert [(s.x, s.y, s.z) for s in scene.star_field.stars] == [(s.x, s.y, s.z) for s in fresh.star_field.stars]

    def test_reinitialize_same_seed_reproduces(self):
        """Test that rebuilding with the same seed repeats the same layout."""
        scene = Scene(small_config(seed=5))
        scene.initialize((800, 600))
        first = [s.position for s in scene.swarm.ships]

        scene.initialize((800, 600), small_config(seed=5))

        assert [s.position for s in scene.swarm.ships] == first

    def test_injected_rng_kept(self):
        """Test that a caller-supplied random source survives a config change."""
        rng = random.Random(3)
        scene = Scene(small_config(), rng=rng)
        scene.initialize((800, 600))

        scene.initialize((800, 600), small_config(seed=9))

        assert scene.swarm.rng is rng
        assert scene.star_field.rng is rng

    def test_stuck_events_dispatched(self):
        """Test that stuck events queued during a tick reach subscribers."""
        config = small_config(ships=ShipConfig(
            count=1, stuck_threshold=2, edge_curve_intensity=0.0, curve_change_rate=0.0
        ))
        scene = Scene(config)
        scene.initialize((800, 600))
        ship = scene.swarm.ships[0]
        ship.x, ship.y, ship.direction = 0.0, 300.0, math.pi
        received = []
        scene.event_bus.subscribe(ShipStuckEvent, received.append)

        for i in range(6):
            scene.tick(1 / 60, now=float(i))

        assert received
        assert scene.event_bus.pending == 0


class TestEventBus:
    """Tests for EventBus."""

    def test_subscribe_publish(self):
        """Test event subscription and publishing."""
        bus = EventBus()
        received = []

        def handler(event: Event):
            received.append(event)

        # Subscribe handler
        bus.subscribe(Event, handler)

        event = Event()
        bus.publish(event)

        assert len(received) == 1

    def test_base_class_subscription(self):
        """Test that a base class handler sees subclass events."""
        bus = EventBus()
        received = []
        bus.subscribe(Event, received.append)

        bus.publish(ShipStuckEvent(ship_index=1, stuck_frames=31))

        assert len(received) == 1

    def test_queue_deferred(self):
        """Test that queued events wait for process_queue."""
        bus = EventBus()
        received = []
        bus.subscribe(ShipStuckEvent, received.append)

        bus.queue(ShipStuckEvent(ship_index=0, stuck_frames=31))
        assert received == []
        assert bus.pending == 1

        bus.process_queue()
        assert len(received) == 1
        assert bus.pending == 0


class TestResizeDebouncer:
    """Tests for ResizeDebouncer."""

    def test_quiet_period(self):
        """Test that the size is released only after the quiet period."""
        debouncer = ResizeDebouncer(quiet_period=0.1)
        debouncer.request(640, 480, now=0.0)

        assert debouncer.pending
        assert debouncer.poll(now=0.05) is None
        assert debouncer.poll(now=0.1) == (640, 480)
        assert not debouncer.pending
        assert debouncer.poll(now=0.5) is None

    def test_latest_request_wins(self):
        """Test that a newer request replaces the pending one and restarts the timer."""
        debouncer = ResizeDebouncer(quiet_period=0.1)
        debouncer.request(640, 480, now=0.0)
        debouncer.request(1024, 768, now=0.08)

        assert debouncer.poll(now=0.12) is None
        assert debouncer.poll(now=0.2) == (1024, 768)
