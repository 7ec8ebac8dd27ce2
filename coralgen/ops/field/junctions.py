"""
Junction blending.

Where two or more branch endpoints meet, a spherical blob is added to the
field so the union of capsules gets a smooth fillet instead of a crease.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple
import logging
import numpy as np

from ...core.field import ScalarField
from ...core.skeleton import Branch
from .rasterize import falloff, voxel_block

logger = logging.getLogger(__name__)


@dataclass
class Junction:
    """A cluster of coincident branch endpoints."""

    center: np.ndarray
    radius: float
    endpoint_count: int
    cell: Tuple[int, int, int]


def detect_junctions(branches: Iterable[Branch], tolerance: float) -> List[Junction]:
    """
    Find points where two or more branch endpoints coincide.

    Endpoints are hashed into cubic cells of side `tolerance`. A cell holding
    at least two endpoints becomes a junction centered at the mean of those
    endpoints, with the largest branch radius at any of them.

    Returns
    -------
    list of Junction
        Sorted by cell key
    """
    if tolerance <= 0:
        raise ValueError(f"tolerance must be > 0, got {tolerance}")

    cells: Dict[Tuple[int, int, int], List[Tuple[np.ndarray, float]]] = {}
    for branch in branches:
        for point, radius in ((branch.start, branch.start_radius), (branch.end, branch.end_radius)):
            p = np.asarray(point, dtype=np.float64)
            key = tuple(int(v) for v in np.round(p / tolerance))
            cells.setdefault(key, []).append((p, radius))

    junctions = []
    for key in sorted(cells):
        members = cells[key]
        if len(members) < 2:
            continue
        center = np.mean([p for p, _ in members], axis=0)
        radius = max(r for _, r in members)
        junctions.append(Junction(center=center, radius=radius, endpoint_count=len(members), cell=key))
    return junctions


def blend_junctions(
    field: ScalarField,
    junctions: List[Junction],
    blobiness: float,
    influence: float = 1.0,
) -> int:
    """
    Add a spherical fillet at each junction (in place).

    The blob radius is ``junction.radius * blobiness`` and its falloff margin
    is max(2R, 2 voxel_size). Contributions are added, not max-combined.

    Returns
    -------
    int
        Number of junctions blended
    """
    if blobiness <= 0 or not junctions:
        return 0

    vs = field.voxel_size
    blended = 0
    for junction in junctions:
        r = junction.radius * blobiness
        margin = max(2.0 * r, 2.0 * vs)
        extent = r + margin
        block = voxel_block(field, junction.center - extent, junction.center + extent)
        if block is None:
            continue
        slices, points = block
        d = np.linalg.norm(points - junction.center, axis=-1) - r
        field.values[slices] += (influence * falloff(d, margin)).astype(np.float32)
        blended += 1

    logger.debug(f"Blended {blended} junctions (blobiness {blobiness})")
    return blended


__all__ = ["Junction", "detect_junctions", "blend_junctions"]
