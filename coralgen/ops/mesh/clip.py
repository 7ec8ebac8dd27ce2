"""
Ground clipping.

Flattens the underside of the stump so the solid stands on a flat pedestal.
"""

import logging
import numpy as np

from ...core.mesh import CoralMesh
from ...utils.geometry import horizontal_distance

logger = logging.getLogger(__name__)


def clip_to_ground(mesh: CoralMesh, base_y: float, center_xz, radius: float) -> CoralMesh:
    """
    Snap vertices below the stump base up to `base_y`.

    Only vertices within `radius` (horizontal distance) of the stump base
    are affected; geometry elsewhere, including branches dipping below the
    base far from the stump, is left alone.

    Parameters
    ----------
    mesh : CoralMesh
    base_y : float
        Height of the stump base
    center_xz : sequence of float
        (x, z) of the stump base
    radius : float
        Footprint radius
    """
    result = mesh.copy()
    if mesh.vertex_count == 0:
        return result

    center = (float(center_xz[0]), 0.0, float(center_xz[1]))
    below = mesh.vertices[:, 1] < base_y
    near = horizontal_distance(mesh.vertices, center) <= radius
    mask = below & near
    result.vertices[mask, 1] = base_y

    logger.debug(f"Clipped {int(mask.sum())} vertices to ground plane y={base_y:.4g}")
    return result


__all__ = ["clip_to_ground"]
