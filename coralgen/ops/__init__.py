"""
Low-level operations: anastomosis, noise, field construction, isosurfacing
and mesh postprocessing.
"""

from .anastomosis import apply_anastomosis, fusion_probability
from .noise import simplex3, fractal_noise
from .isosurface import extract_isosurface

__all__ = [
    "apply_anastomosis",
    "fusion_probability",
    "simplex3",
    "fractal_noise",
    "extract_isosurface",
]
