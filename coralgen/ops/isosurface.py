"""
Isosurface extraction adapter.

Wraps scikit-image's marching cubes and converts its indexed output into the
unindexed TriangleSoup consumed by the mesh postprocessor.
"""

import logging
import numpy as np

from ..core.field import ScalarField
from ..core.mesh import TriangleSoup

logger = logging.getLogger(__name__)


def extract_isosurface(field: ScalarField, isolation: float) -> TriangleSoup:
    """
    Extract the `isolation` level set of a scalar field.

    The field is stored (z, y, x); marching cubes returns vertices in that
    index order, which are flipped and mapped to world coordinates of the
    voxel centers. Winding is left as the extractor emits it; welding
    orients the final mesh.

    Parameters
    ----------
    field : ScalarField
    isolation : float
        Level value; the solid is where field >= isolation

    Returns
    -------
    TriangleSoup
        Unindexed triangles; empty (vertex_count 0) when the level does not
        intersect the field's value range.
    """
    from skimage.measure import marching_cubes

    values = field.values
    vmin = float(values.min())
    vmax = float(values.max())
    if not vmin < isolation < vmax:
        logger.warning(
            f"Isolation {isolation:.4g} outside field range [{vmin:.4g}, {vmax:.4g}]; no surface"
        )
        return TriangleSoup.empty()

    try:
        verts, faces, normals, _ = marching_cubes(
            values,
            level=isolation,
            gradient_direction="descent",
        )
    except (ValueError, RuntimeError) as e:
        logger.warning(f"Marching cubes failed: {e}")
        return TriangleSoup.empty()

    world = field.origin + (verts[:, ::-1] + 0.5) * field.voxel_size
    world_normals = normals[:, ::-1]

    positions = world[faces].reshape(-1, 3)
    soup_normals = world_normals[faces].reshape(-1, 3)

    logger.info(f"Extracted isosurface: {len(faces)} triangles at level {isolation:.4g}")
    return TriangleSoup(
        positions=positions.astype(np.float64),
        normals=soup_normals.astype(np.float64),
        vertex_count=int(len(positions)),
    )


__all__ = ["extract_isosurface"]
