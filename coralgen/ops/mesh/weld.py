"""
Vertex welding.

Turns the unindexed triangle soup from the isosurfacer into an indexed mesh
by merging vertices that round to the same tolerance cell.

UNIT CONVENTIONS
----------------
`tolerance` is in world units, the same as the soup positions.
"""

from typing import Tuple
import logging
import numpy as np

from ...core.mesh import TriangleSoup, CoralMesh

logger = logging.getLogger(__name__)

FALLBACK_NORMAL = np.array([0.0, 1.0, 0.0])


def signed_volume(vertices: np.ndarray, faces: np.ndarray) -> float:
    """Signed volume enclosed by the triangles (positive for outward winding)."""
    if len(faces) == 0:
        return 0.0
    a = vertices[faces[:, 0]]
    b = vertices[faces[:, 1]]
    c = vertices[faces[:, 2]]
    return float(np.einsum("ij,ij->i", a, np.cross(b, c)).sum() / 6.0)


def compute_vertex_normals(vertices: np.ndarray, faces: np.ndarray) -> np.ndarray:
    """
    Area-weighted vertex normals.

    Each face adds its unnormalized cross product (twice its area times the
    unit normal) to its three vertices. Vertices with no usable normal get +Y.
    """
    normals = np.zeros_like(vertices, dtype=np.float64)
    if len(faces) > 0:
        a = vertices[faces[:, 0]]
        b = vertices[faces[:, 1]]
        c = vertices[faces[:, 2]]
        face_normals = np.cross(b - a, c - a)
        for k in range(3):
            np.add.at(normals, faces[:, k], face_normals)

    lengths = np.linalg.norm(normals, axis=1)
    degenerate = lengths < 1e-20
    normals[degenerate] = FALLBACK_NORMAL
    lengths[degenerate] = 1.0
    return normals / lengths[:, None]


def _merge_by_cell(positions: np.ndarray, tolerance: float) -> Tuple[np.ndarray, np.ndarray]:
    keys = np.round(positions / tolerance).astype(np.int64)
    _, first, inverse = np.unique(keys, axis=0, return_index=True, return_inverse=True)
    inverse = inverse.reshape(-1)

    # renumber cells by first occurrence so output order follows the soup
    order = np.argsort(first, kind="stable")
    rank = np.empty_like(order)
    rank[order] = np.arange(len(order))
    return positions[first[order]], rank[inverse]


def weld_vertices(soup: TriangleSoup, tolerance: float = 1e-4) -> CoralMesh:
    """
    Weld a triangle soup into an indexed mesh.

    Parameters
    ----------
    soup : TriangleSoup
        Only the first `vertex_count` vertices are used
    tolerance : float
        Positions rounding to the same multiple of `tolerance` are merged;
        the first one encountered is kept

    Returns
    -------
    CoralMesh
        Mesh without degenerate faces or unreferenced vertices, wound so the
        signed volume is non-negative, with area-weighted normals. Welding
        the result's own soup again returns the same mesh.
    """
    if tolerance <= 0:
        raise ValueError(f"tolerance must be > 0, got {tolerance}")

    soup = soup.trimmed()
    if soup.vertex_count == 0:
        return CoralMesh(np.zeros((0, 3)), np.zeros((0, 3)), np.zeros((0, 3), dtype=np.int64))

    vertices, index = _merge_by_cell(soup.positions, tolerance)
    faces = index.reshape(-1, 3)

    keep = (faces[:, 0] != faces[:, 1]) & (faces[:, 1] != faces[:, 2]) & (faces[:, 0] != faces[:, 2])
    dropped = int(len(faces) - keep.sum())
    faces = faces[keep]

    if signed_volume(vertices, faces) < 0:
        faces = faces[:, [0, 2, 1]]

    # compact to referenced vertices, numbered by first use in the face list
    used, first_use = np.unique(faces.reshape(-1), return_index=True)
    used = used[np.argsort(first_use, kind="stable")]
    remap = np.full(len(vertices), -1, dtype=np.int64)
    remap[used] = np.arange(len(used))
    vertices = vertices[used]
    faces = remap[faces]

    normals = compute_vertex_normals(vertices, faces)
    logger.debug(
        f"Welded {soup.vertex_count} soup vertices into {len(vertices)} vertices, "
        f"{len(faces)} faces ({dropped} degenerate dropped)"
    )
    return CoralMesh(vertices=vertices, normals=normals, faces=faces)


def mesh_to_soup(mesh: CoralMesh) -> TriangleSoup:
    """Expand an indexed mesh back into an unindexed soup."""
    positions = mesh.vertices[mesh.faces].reshape(-1, 3)
    normals = mesh.normals[mesh.faces].reshape(-1, 3)
    return TriangleSoup(positions=positions, normals=normals, vertex_count=len(positions))


__all__ = ["weld_vertices", "compute_vertex_normals", "signed_volume", "mesh_to_soup"]
