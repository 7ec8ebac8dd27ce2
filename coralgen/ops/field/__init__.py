"""
Scalar field construction: capsule rasterization, junction fillets, blur.
"""

from .rasterize import cone_distance, falloff, rasterize_branch, rasterize_branches
from .junctions import Junction, detect_junctions, blend_junctions
from .filters import blur_field

__all__ = [
    "cone_distance",
    "falloff",
    "rasterize_branch",
    "rasterize_branches",
    "Junction",
    "detect_junctions",
    "blend_junctions",
    "blur_field",
]
