"""Scene entities."""
from .stars import Star, project_star
from .trails import Trail, TrailSample
from .ships import Ship, Edge, resolve_follow_target

__all__ = [
    'Star', 'project_star',
    'Trail', 'TrailSample',
    'Ship', 'Edge', 'resolve_follow_target',
]
