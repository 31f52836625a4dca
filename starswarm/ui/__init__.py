"""Pygame UI layer."""
from .canvas import Canvas, Transform
from .renderer import Renderer
from .overlay import DebugOverlay
from .input import InputHandler, InputAction

__all__ = ['Canvas', 'Transform', 'Renderer', 'DebugOverlay', 'InputHandler', 'InputAction']
