"""Ship steering and motion."""
from .pilot import ShipPilot
from .steering import SteeringChain, SteeringContext, SteeringResult, SteeringDecision

__all__ = [
    'ShipPilot',
    'SteeringChain', 'SteeringContext', 'SteeringResult', 'SteeringDecision',
]
