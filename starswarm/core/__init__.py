"""Core scene engine."""
from .system import System
from .system_priority import SystemPriority
from .events import EventBus, Event
from .resize import ResizeDebouncer
from .rng import RandomSource, make_rng

__all__ = [
    'System', 'SystemPriority',
    'EventBus', 'Event',
    'ResizeDebouncer',
    'RandomSource', 'make_rng',
]
