"""Color helpers for hex config values and trail blending."""
from __future__ import annotations

RGB = tuple[int, int, int]

_HEX_DIGITS = set("0123456789abcdefABCDEF")


def parse_hex_color(value: str) -> RGB:
    """Parse a ``#rrggbb`` or ``#rgb`` string into an RGB tuple.

    Raises:
        ConfigError: If the value is not a well-formed hex color
    """
    from ..config import ConfigError

    if not isinstance(value, str) or not value.startswith("#"):
        raise ConfigError(f"Color must be a '#rrggbb' string, got {value!r}")

    digits = value[1:]
    if len(digits) not in (3, 6):
        raise ConfigError(f"Color {value!r} must have 3 or 6 hex digits")
    if not all(c in _HEX_DIGITS for c in digits):
        raise ConfigError(f"Color {value!r} contains non-hex characters")

    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)

    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def format_hex_color(color: RGB) -> str:
    """Format an RGB tuple as a lowercase ``#rrggbb`` string."""
    r, g, b = (max(0, min(255, int(c))) for c in color)
    return f"#{r:02x}{g:02x}{b:02x}"


def lerp_color(start: RGB, end: RGB, t: float) -> RGB:
    """Linearly interpolate between two colors in RGB space.

    ``t`` is clamped to [0, 1], so the endpoints are returned exactly.
    """
    t = max(0.0, min(1.0, t))
    return (
        round(start[0] + (end[0] - start[0]) * t),
        round(start[1] + (end[1] - start[1]) * t),
        round(start[2] + (end[2] - start[2]) * t),
    )


def blend_over(color: RGB, background: RGB, alpha: float) -> RGB:
    """Composite ``color`` at ``alpha`` over an opaque background.

    Pygame line drawing has no per-line alpha, so trails are drawn with
    the pre-blended color instead.
    """
    return lerp_color(background, color, alpha)
