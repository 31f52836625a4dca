"""
Random source injection for the scene.

Every randomized decision (star respawn, wander resampling, corner jitter,
stuck escapes) draws from a single source passed down from the scene, so
a seeded scene replays the same motion.
"""

import random
from typing import Protocol


class RandomSource(Protocol):
    """Anything exposing ``random() -> float`` in [0, 1)."""

    def random(self) -> float:
        ...


def make_rng(seed: int | None = None) -> random.Random:
    """
    Create the scene's random source.

    Args:
        seed: Fixed seed for reproducible runs, or None for a fresh source

    Returns:
        A ``random.Random`` instance
    """
    return random.Random(seed)


def uniform(rng: RandomSource, low: float, high: float) -> float:
    """Uniform sample in [low, high) using only ``rng.random()``."""
    return low + (high - low) * rng.random()


def centered(rng: RandomSource, width: float) -> float:
    """Uniform sample in [-width/2, width/2)."""
    return (rng.random() - 0.5) * width
