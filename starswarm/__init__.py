"""Starswarm: a perspective star field with a swarm of steered ships."""
from .core.scene import Scene

__version__ = "0.1.0"

__all__ = ['Scene']
