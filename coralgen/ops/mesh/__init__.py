"""
Mesh postprocessing: weld, displace, smooth, clip.
"""

from .weld import weld_vertices, compute_vertex_normals, signed_volume, mesh_to_soup
from .displace import displace_vertices, height_mask
from .smooth import smooth_mesh
from .clip import clip_to_ground

__all__ = [
    "weld_vertices",
    "compute_vertex_normals",
    "signed_volume",
    "mesh_to_soup",
    "displace_vertices",
    "height_mask",
    "smooth_mesh",
    "clip_to_ground",
]
