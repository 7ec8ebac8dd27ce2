"""
Skeleton to networkx graph conversion.
"""

from typing import Dict, Tuple
import numpy as np
import networkx as nx

from ..core.skeleton import Skeleton

NodeKey = Tuple[int, int, int]


def to_networkx_graph(skeleton: Skeleton, tolerance: float = 1e-6) -> Tuple[nx.Graph, Dict[NodeKey, int]]:
    """
    Convert a skeleton to an undirected networkx graph.

    Branch endpoints that round to the same multiple of `tolerance` become
    one node, so a child attached to its parent's end shares the parent's
    node and a fused branch closes a loop.

    Parameters
    ----------
    skeleton : Skeleton
        Skeleton to convert
    tolerance : float
        Snapping distance for endpoint identity

    Returns
    -------
    G : nx.Graph
        Nodes carry `position` and `radius`; edges carry `branch_index`,
        `length`, `start_radius`, `end_radius`, `depth` and `kind`
    node_id_map : dict
        Mapping from snapped endpoint key to node ID
    """
    G = nx.Graph()
    node_id_map: Dict[NodeKey, int] = {}

    def node_for(point, radius) -> int:
        p = np.asarray(point, dtype=np.float64)
        key = tuple(int(v) for v in np.round(p / tolerance))
        node_id = node_id_map.get(key)
        if node_id is None:
            node_id = len(node_id_map)
            node_id_map[key] = node_id
            G.add_node(node_id, position=tuple(p), radius=radius)
        elif radius > G.nodes[node_id]["radius"]:
            G.nodes[node_id]["radius"] = radius
        return node_id

    for index, branch in enumerate(skeleton.branches):
        u = node_for(branch.start, branch.start_radius)
        v = node_for(branch.end, branch.end_radius)
        if u == v:
            continue
        G.add_edge(
            u,
            v,
            branch_index=index,
            length=branch.length,
            start_radius=branch.start_radius,
            end_radius=branch.end_radius,
            depth=branch.depth,
            kind=branch.kind,
        )

    return G, node_id_map


__all__ = ["to_networkx_graph"]
