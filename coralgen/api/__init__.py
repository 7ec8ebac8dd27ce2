"""High-level API for coral generation."""

from .generate import generate_skeleton
from .field import build_field
from .mesh import build_mesh, postprocess_mesh
from .design import design_from_spec, CoralResult
from .export import export_mesh, orient_mesh, write_json

__all__ = [
    "generate_skeleton",
    "build_field",
    "build_mesh",
    "postprocess_mesh",
    "design_from_spec",
    "CoralResult",
    "export_mesh",
    "orient_mesh",
    "write_json",
]
