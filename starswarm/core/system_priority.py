"""System execution priority definitions.

Defines the order in which systems update during a scene tick.
Lower numbers execute first.
"""
from enum import IntEnum


class SystemPriority(IntEnum):
    """Priority levels for system execution order.

    Systems are sorted by priority and executed in ascending order.
    Background layers update before the agents drawn over them.
    """
    # Background
    STARFIELD = 10

    # Agents
    SWARM = 30
