"""
Laplacian smoothing.
"""

import logging
import numpy as np
import trimesh

from ...core.mesh import CoralMesh
from .weld import compute_vertex_normals

logger = logging.getLogger(__name__)

SMOOTHING_LAMBDA = 0.5


def smooth_mesh(mesh: CoralMesh, iterations: int = 2) -> CoralMesh:
    """
    Equal-weight one-ring Laplacian smoothing.

    Each iteration moves every vertex halfway to the average of its
    neighbors: x <- 0.5 x + 0.5 avg(neighbors). Zero iterations return an
    unchanged copy.
    """
    result = mesh.copy()
    if iterations <= 0 or mesh.face_count == 0:
        return result

    tm = mesh.to_trimesh()
    trimesh.smoothing.filter_laplacian(
        tm,
        lamb=SMOOTHING_LAMBDA,
        iterations=int(iterations),
        implicit_time_integration=False,
        volume_constraint=False,
    )

    result.vertices = np.array(tm.vertices, dtype=np.float64)
    result.normals = compute_vertex_normals(result.vertices, result.faces)
    logger.debug(f"Smoothed {mesh.vertex_count} vertices with {iterations} Laplacian iterations")
    return result


__all__ = ["smooth_mesh"]
