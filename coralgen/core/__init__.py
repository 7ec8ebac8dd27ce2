"""Core data structures for coral skeletons, fields and meshes."""

from .rng import SeededRNG
from .skeleton import Branch, Skeleton, Point3, as_point
from .field import ScalarField
from .mesh import TriangleSoup, CoralMesh

__all__ = [
    "SeededRNG",
    "Branch",
    "Skeleton",
    "Point3",
    "as_point",
    "ScalarField",
    "TriangleSoup",
    "CoralMesh",
]
