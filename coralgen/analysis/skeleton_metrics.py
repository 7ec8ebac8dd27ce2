"""
Skeleton statistics.

Summarizes a skeleton's size, depth profile and topology. Loops are counted
as the cycle rank of the endpoint graph (edges - nodes + components), so
every fused branch that joins two already-connected nodes adds one loop.
"""

from typing import Any, Dict
import logging
import numpy as np
import networkx as nx

from ..core.skeleton import Skeleton
from ..adapters.networkx_adapter import to_networkx_graph

logger = logging.getLogger(__name__)


def count_loops(G: nx.Graph) -> int:
    """Cycle rank of an undirected graph."""
    if G.number_of_nodes() == 0:
        return 0
    return G.number_of_edges() - G.number_of_nodes() + nx.number_connected_components(G)


def skeleton_metrics(skeleton: Skeleton) -> Dict[str, Any]:
    """
    Compute summary metrics for a skeleton.

    Returns
    -------
    dict
        branch_count, count_by_kind, count_by_depth, max_depth, total_length,
        min/max radius, node_count, edge_count, connected_components,
        loop_count and bounding box
    """
    branches = skeleton.branches
    G, _ = to_networkx_graph(skeleton)

    count_by_depth: Dict[int, int] = {}
    for b in branches:
        count_by_depth[b.depth] = count_by_depth.get(b.depth, 0) + 1

    lo, hi = skeleton.bounds()
    radii = [r for b in branches for r in (b.start_radius, b.end_radius)]

    metrics = {
        "branch_count": len(branches),
        "count_by_kind": skeleton.count_by_kind(),
        "count_by_depth": dict(sorted(count_by_depth.items())),
        "max_depth": skeleton.max_depth,
        "total_length": float(sum(b.length for b in branches)),
        "min_radius": float(min(radii)) if radii else 0.0,
        "max_radius": float(max(radii)) if radii else 0.0,
        "node_count": G.number_of_nodes(),
        "edge_count": G.number_of_edges(),
        "connected_components": nx.number_connected_components(G) if G.number_of_nodes() else 0,
        "loop_count": count_loops(G),
        "bbox_min": [float(v) for v in lo],
        "bbox_max": [float(v) for v in hi],
        "bbox_extent": [float(v) for v in np.asarray(hi) - np.asarray(lo)],
    }
    logger.debug(f"Skeleton metrics: {metrics['branch_count']} branches, {metrics['loop_count']} loops")
    return metrics


__all__ = ["skeleton_metrics", "count_loops"]
