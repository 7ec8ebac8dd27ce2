"""
Anastomosis pass: fuse nearby branch junctions into loops.

Every branch start point is a junction node tagged with the branch's
start radius and depth. Node pairs inside a distance band are fused with a
probability that decays quadratically with depth, so loops form near the
base and rarely at the tips. Each node fuses at most once.
"""

from typing import List, Tuple
import logging
import numpy as np
from scipy.spatial import cKDTree

from ..core.rng import SeededRNG
from ..core.skeleton import Branch, Skeleton

logger = logging.getLogger(__name__)


def fusion_probability(probability: float, depth_a: int, depth_b: int, max_depth: int) -> float:
    """
    Depth-decaying fusion chance: probability * (1 - avg_depth / max_depth)^2.

    The depth factor is clamped to [0, 1]; a non-positive max_depth gives a
    factor of 1.
    """
    if max_depth <= 0:
        factor = 1.0
    else:
        avg_depth = (depth_a + depth_b) / 2.0
        factor = min(max(1.0 - avg_depth / max_depth, 0.0), 1.0)
    return probability * factor * factor


def apply_anastomosis(
    skeleton: Skeleton,
    probability: float,
    rng: SeededRNG,
    min_distance: float,
    max_distance: float,
    max_depth: int,
) -> List[Tuple[int, int]]:
    """
    Append fused branches between nearby junction nodes.

    Candidates are scanned in index order: for each unfused node i, unfused
    nodes j > i are visited in increasing j, and the first one inside
    [min_distance, max_distance] whose random draw succeeds is fused. Only
    in-band pairs consume a draw. A KD-tree ball query supplies the in-band
    candidates, which keeps the pass bounded for large skeletons while
    matching a full pairwise scan draw for draw.

    Parameters
    ----------
    skeleton : Skeleton
        Skeleton to extend in place
    probability : float
        Base fusion probability (0 disables the pass)
    rng : SeededRNG
        Generator stream, continued after tree construction
    min_distance, max_distance : float
        Inclusive distance band for candidate pairs
    max_depth : int
        Depth normalizer for the decay

    Returns
    -------
    list of (int, int)
        Node index pairs that were fused, in the order they were added
    """
    if probability <= 0 or len(skeleton.branches) < 2 or max_distance <= 0:
        return []

    nodes: List[Branch] = list(skeleton.branches)
    positions = np.array([b.start for b in nodes], dtype=np.float64)

    tree = cKDTree(positions)
    neighborhoods = tree.query_ball_point(positions, r=max_distance * (1.0 + 1e-9))

    fused = set()
    pairs: List[Tuple[int, int]] = []

    for i in range(len(nodes)):
        if i in fused:
            continue
        candidates = sorted(j for j in neighborhoods[i] if j > i)
        for j in candidates:
            if j in fused:
                continue
            dist = float(np.linalg.norm(positions[i] - positions[j]))
            if dist < min_distance or dist > max_distance:
                continue

            chance = fusion_probability(probability, nodes[i].depth, nodes[j].depth, max_depth)
            if rng.random() < chance:
                radius = min(nodes[i].start_radius, nodes[j].start_radius)
                skeleton.branches.append(Branch(
                    start=nodes[i].start,
                    end=nodes[j].start,
                    start_radius=radius,
                    end_radius=radius,
                    depth=max(nodes[i].depth, nodes[j].depth),
                    kind="fused",
                ))
                fused.add(i)
                fused.add(j)
                pairs.append((i, j))
                break

    logger.debug(f"Anastomosis fused {len(pairs)} node pairs out of {len(nodes)} nodes")
    return pairs


__all__ = ["apply_anastomosis", "fusion_probability"]
