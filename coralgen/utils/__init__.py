"""
Utility modules for coral generation.

Provides vector helpers and the field grid resolver.
"""

from .geometry import (
    normalize,
    rotate_around,
    perpendicular,
    spherical_direction,
    horizontal_distance,
)
from .resolution_resolver import GridResult, grid_extent, resolve_grid

__all__ = [
    "normalize",
    "rotate_around",
    "perpendicular",
    "spherical_direction",
    "horizontal_distance",
    "GridResult",
    "grid_extent",
    "resolve_grid",
]
