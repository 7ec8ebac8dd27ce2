"""
Noise displacement of mesh vertices.
"""

import logging
import numpy as np

from ...core.mesh import CoralMesh
from ..noise import fractal_noise
from .weld import compute_vertex_normals

logger = logging.getLogger(__name__)

FREQUENCY_FACTOR = 0.1
HEIGHT_MASK_FLOOR = 0.3


def height_mask(y: np.ndarray) -> np.ndarray:
    """0.3 at or below y=0 rising linearly to 1.0 at the highest vertex."""
    max_y = float(np.max(y)) if len(y) else 0.0
    if max_y < 0.01:
        max_y = 1.0
    return HEIGHT_MASK_FLOOR + (1.0 - HEIGHT_MASK_FLOOR) * np.clip(y / max_y, 0.0, 1.0)


def displace_vertices(
    mesh: CoralMesh,
    amount: float,
    scale: float,
    voxel_size: float,
    max_displacement_voxels: float = 1.5,
) -> CoralMesh:
    """
    Push vertices along their normals by three-octave simplex noise.

    Parameters
    ----------
    mesh : CoralMesh
    amount : float
        Displacement gain; <= 0 returns an unchanged copy
    scale : float
        Noise scale; base frequency is scale * 0.1
    voxel_size : float
        Field voxel size; the displacement magnitude is clamped to
        max_displacement_voxels * voxel_size
    max_displacement_voxels : float

    Returns
    -------
    CoralMesh
        New mesh with recomputed normals
    """
    result = mesh.copy()
    if amount <= 0 or mesh.vertex_count == 0:
        return result

    noise = fractal_noise(mesh.vertices, scale * FREQUENCY_FACTOR)
    limit = max_displacement_voxels * voxel_size
    displacement = np.clip(noise * amount * height_mask(mesh.vertices[:, 1]), -limit, limit)

    result.vertices = mesh.vertices + mesh.normals * displacement[:, None]
    if result.faces is not None:
        result.normals = compute_vertex_normals(result.vertices, result.faces)

    logger.debug(f"Displaced {mesh.vertex_count} vertices (max |d| = {np.abs(displacement).max():.4g})")
    return result


__all__ = ["displace_vertices", "height_mask"]
