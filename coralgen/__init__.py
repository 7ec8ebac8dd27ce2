"""
Coral Forge - procedural branching solids.

Turns a handful of growth parameters and a seed into a coral or tree-like
skeleton, rasterizes it into a scalar field, and extracts a smoothed,
printable surface mesh.

Main entry points:
    from coralgen.api import generate_skeleton, build_mesh, export_mesh
    from coralgen.specs import CoralSpec
"""

__version__ = "0.3.0"

from .core import SeededRNG, Branch, Skeleton, ScalarField, TriangleSoup, CoralMesh
from .backends import create_generator, get_available_backends
from .api import (
    generate_skeleton,
    build_field,
    build_mesh,
    design_from_spec,
    export_mesh,
)
from .specs import CoralSpec

__all__ = [
    "SeededRNG",
    "Branch",
    "Skeleton",
    "ScalarField",
    "TriangleSoup",
    "CoralMesh",
    "create_generator",
    "get_available_backends",
    "generate_skeleton",
    "build_field",
    "build_mesh",
    "design_from_spec",
    "export_mesh",
    "CoralSpec",
]
