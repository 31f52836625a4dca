"""Display constants and scene configuration."""
from __future__ import annotations
import json
import math
from dataclasses import dataclass, field, fields, asdict
from pathlib import Path
from typing import Any

from .core.colors import parse_hex_color

# Display settings
SCREEN_WIDTH = 1280
SCREEN_HEIGHT = 800
FPS = 50
TITLE = "Starswarm"

# Motion speeds are expressed per 1/60 s and scaled by elapsed time
BASE_FRAME_RATE = 60
MAX_FRAME_DT = 0.25  # Longer frames are treated as this long (no catch-up)

# Star projection
STAR_MAX_RADIUS = 2.0

# Stuck detection: a tick moving less than this fraction of speed counts as stuck
STUCK_DISPLACEMENT_FRACTION = 0.2
STUCK_DECAY_PER_TICK = 2

# Trail color reaches the end color at this fraction of tail_max_distance
TRAIL_COLOR_SATURATION = 0.25

# Resize events are coalesced until this many seconds pass without another
RESIZE_DEBOUNCE = 0.1

# Colors
COLORS = {
    'star': (255, 255, 255),
    'overlay_text': (200, 200, 220),
    'overlay_bg': (20, 20, 40),
}

STAR_PALETTE = (
    "#ffffff",
    "#ffe9c4",
    "#d4fbff",
    "#9bb0ff",
    "#ffcc6f",
)

STAR_COLOR_MODES = ("white", "multi")
SHIP_PLACEMENTS = ("center", "fan")


class ConfigError(ValueError):
    """Raised when a configuration value is out of range or malformed."""


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigError(message)


def _check_color(name: str, value: str) -> None:
    try:
        parse_hex_color(value)
    except ConfigError as e:
        raise ConfigError(f"{name}: {e}") from None


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


# Annotation string -> (check, description); ints are accepted for float fields
_FIELD_TYPES = {
    "bool": (lambda v: isinstance(v, bool), "a boolean"),
    "int": (_is_int, "an integer"),
    "float": (_is_number, "a number"),
    "str": (lambda v: isinstance(v, str), "a string"),
    "int | None": (lambda v: v is None or _is_int(v), "an integer or null"),
    "tuple[str, ...]": (
        lambda v: isinstance(v, (tuple, list)) and all(isinstance(i, str) for i in v),
        "a list of strings",
    ),
}


def _check_types(section: str, record: Any) -> None:
    """Reject field values that do not match their declared type."""
    for f in fields(record):
        if f.type not in _FIELD_TYPES:
            continue
        check, expected = _FIELD_TYPES[f.type]
        value = getattr(record, f.name)
        if not check(value):
            name = f"{section}.{f.name}" if section else f.name
            raise ConfigError(f"{name} must be {expected}, got {value!r}")


def _check_finite(section: str, record: Any) -> None:
    for f in fields(record):
        value = getattr(record, f.name)
        if isinstance(value, float) and not math.isfinite(value):
            raise ConfigError(f"{section}.{f.name} must be finite, got {value!r}")


def _build(cls: type, data: dict[str, Any], section: str):
    """Build a config record from a mapping, rejecting unknown keys."""
    if not isinstance(data, dict):
        raise ConfigError(f"{section} must be a mapping, got {type(data).__name__}")
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown {section} option(s): {', '.join(unknown)}")
    return cls(**data)


@dataclass
class StarFieldConfig:
    """Options for the receding star field."""
    enabled: bool = True
    star_count: int = 400
    speed: float = 10.0  # Depth units per 1/60 s
    color_mode: str = "white"  # "white" or "multi"
    colors: tuple[str, ...] = STAR_PALETTE  # Palette used in multi mode
    max_radius: float = STAR_MAX_RADIUS

    def validate(self) -> None:
        _check_types("stars", self)
        _check_finite("stars", self)
        _require(self.star_count >= 0, f"stars.star_count must be >= 0, got {self.star_count}")
        _require(self.speed > 0, f"stars.speed must be > 0, got {self.speed}")
        _require(self.max_radius > 0, f"stars.max_radius must be > 0, got {self.max_radius}")
        _require(
            self.color_mode in STAR_COLOR_MODES,
            f"stars.color_mode must be one of {STAR_COLOR_MODES}, got {self.color_mode!r}"
        )
        _require(len(self.colors) > 0, "stars.colors must not be empty")
        for i, color in enumerate(self.colors):
            _check_color(f"stars.colors[{i}]", color)


@dataclass
class ShipConfig:
    """Options for the ship swarm. Immutable once ships are built."""
    enabled: bool = True
    count: int = 5

    # Body
    speed: float = 3.0  # Pixels per 1/60 s
    size: float = 10.0
    color: str = "#ffffff"

    # Trail
    tail_start_color: str = "#00c8ff"
    tail_end_color: str = "#7a00ff"
    tail_length: int = 120  # Max samples kept
    tail_max_distance: float = 300.0  # Max drawn trail length in pixels
    tail_opacity: float = 0.8
    tail_width_fraction: float = 0.2  # Stroke width as fraction of size

    # Wander
    curve_intensity: float = 0.02
    curve_change_rate: float = 0.005  # Probability per tick

    # Edge avoidance
    edge_distance: float = 100.0
    edge_curve_intensity: float = 0.05
    corner_jitter: float = 0.1

    # Stuck recovery
    stuck_threshold: int = 30  # Ticks
    stuck_escape_multiplier: float = 3.0

    # Placement
    placement: str = "center"  # "center" or "fan"
    swarm_spread: float = 40.0
    swarm_offset: float = 30.0
    heading_bias_up: bool = True
    heading_jitter: float = 0.5

    # Following
    follow_enabled: bool = True
    follow_strength: float = 0.02
    follow_distance: float = 300.0
    follow_index: int | None = None  # None follows the next ship cyclically

    def validate(self) -> None:
        _check_types("ships", self)
        _check_finite("ships", self)
        _require(self.count >= 0, f"ships.count must be >= 0, got {self.count}")
        _require(self.speed > 0, f"ships.speed must be > 0, got {self.speed}")
        _require(self.size > 0, f"ships.size must be > 0, got {self.size}")
        _require(self.tail_length >= 0, f"ships.tail_length must be >= 0, got {self.tail_length}")
        _require(
            self.tail_max_distance > 0,
            f"ships.tail_max_distance must be > 0, got {self.tail_max_distance}"
        )
        _require(
            0.0 <= self.tail_opacity <= 1.0,
            f"ships.tail_opacity must be in [0, 1], got {self.tail_opacity}"
        )
        _require(
            self.tail_width_fraction > 0,
            f"ships.tail_width_fraction must be > 0, got {self.tail_width_fraction}"
        )
        _require(self.curve_intensity >= 0, f"ships.curve_intensity must be >= 0, got {self.curve_intensity}")
        _require(
            0.0 <= self.curve_change_rate <= 1.0,
            f"ships.curve_change_rate must be in [0, 1], got {self.curve_change_rate}"
        )
        _require(self.edge_distance > 0, f"ships.edge_distance must be > 0, got {self.edge_distance}")
        _require(
            self.edge_curve_intensity >= 0,
            f"ships.edge_curve_intensity must be >= 0, got {self.edge_curve_intensity}"
        )
        _require(self.corner_jitter >= 0, f"ships.corner_jitter must be >= 0, got {self.corner_jitter}")
        _require(self.stuck_threshold > 0, f"ships.stuck_threshold must be > 0, got {self.stuck_threshold}")
        _require(
            self.stuck_escape_multiplier >= 1.0,
            f"ships.stuck_escape_multiplier must be >= 1, got {self.stuck_escape_multiplier}"
        )
        _require(
            self.placement in SHIP_PLACEMENTS,
            f"ships.placement must be one of {SHIP_PLACEMENTS}, got {self.placement!r}"
        )
        _require(self.swarm_spread >= 0, f"ships.swarm_spread must be >= 0, got {self.swarm_spread}")
        _require(self.swarm_offset >= 0, f"ships.swarm_offset must be >= 0, got {self.swarm_offset}")
        _require(self.heading_jitter >= 0, f"ships.heading_jitter must be >= 0, got {self.heading_jitter}")
        _require(self.follow_strength >= 0, f"ships.follow_strength must be >= 0, got {self.follow_strength}")
        _require(self.follow_distance > 0, f"ships.follow_distance must be > 0, got {self.follow_distance}")
        if self.follow_index is not None:
            _require(
                0 <= self.follow_index < max(self.count, 1),
                f"ships.follow_index must be in [0, {self.count}), got {self.follow_index}"
            )
        _check_color("ships.color", self.color)
        _check_color("ships.tail_start_color", self.tail_start_color)
        _check_color("ships.tail_end_color", self.tail_end_color)


@dataclass
class SceneConfig:
    """Top-level configuration record consumed by ``Scene.initialize``."""
    stars: StarFieldConfig = field(default_factory=StarFieldConfig)
    ships: ShipConfig = field(default_factory=ShipConfig)
    background: str = "#000000"
    fps_max: int = FPS
    seed: int | None = None
    resize_debounce: float = RESIZE_DEBOUNCE
    show_overlay: bool = False

    def validate(self) -> None:
        _check_types("", self)
        self.stars.validate()
        self.ships.validate()
        _check_color("background", self.background)
        _require(self.fps_max > 0, f"fps_max must be > 0, got {self.fps_max}")
        _require(
            self.resize_debounce >= 0,
            f"resize_debounce must be >= 0, got {self.resize_debounce}"
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SceneConfig:
        """Build and validate a config from a plain mapping.

        Nested ``"stars"`` and ``"ships"`` sections map onto
        ``StarFieldConfig`` and ``ShipConfig``.
        """
        if not isinstance(data, dict):
            raise ConfigError(f"Config must be a mapping, got {type(data).__name__}")
        data = dict(data)
        stars = _build(StarFieldConfig, data.pop("stars", {}), "stars")
        if isinstance(stars.colors, list):
            stars.colors = tuple(stars.colors)
        ships = _build(ShipConfig, data.pop("ships", {}), "ships")
        config = _build(cls, {**data, "stars": stars, "ships": ships}, "scene")
        config.validate()
        return config

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        data = asdict(self)
        data["stars"]["colors"] = list(self.stars.colors)
        return data


def validate_canvas_size(width: int, height: int) -> None:
    """Reject canvas dimensions that would divide by zero in projection."""
    _require(width > 0 and height > 0, f"Canvas size must be positive, got {width}x{height}")


def load_config(path: Path | str) -> SceneConfig:
    """Load a scene configuration from a JSON file.

    Raises:
        ConfigError: If the file is missing, not valid JSON, or fails validation
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(path, "r") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config file {path.name} is not valid JSON: {e}") from e

    return SceneConfig.from_dict(data)
