"""Steering controllers for swarm ships.

Controllers are strategies evaluated by ``SteeringChain`` in priority
order: edge avoidance, stuck escape, following, wandering.
"""
from __future__ import annotations

from .base import SteeringBehavior, SteeringContext, SteeringResult, SteeringDecision
from .edge import EdgeAvoidance
from .stuck import StuckDetector, StuckEscape
from .follow import FollowTarget
from .wander import Wander
from .chain import SteeringChain, default_behaviors

__all__ = [
    'SteeringBehavior',
    'SteeringContext',
    'SteeringResult',
    'SteeringDecision',
    'EdgeAvoidance',
    'StuckDetector',
    'StuckEscape',
    'FollowTarget',
    'Wander',
    'SteeringChain',
    'default_behaviors',
]
