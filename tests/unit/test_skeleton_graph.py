"""
Tests for the networkx adapter and skeleton metrics.
"""

import pytest
import networkx as nx

from coralgen.core.skeleton import Branch, Skeleton
from coralgen.adapters import to_networkx_graph
from coralgen.analysis import skeleton_metrics, count_loops
from coralgen.backends import HeuristicGenerator
from coral_policies import HeuristicParams


def _fork(with_loop):
    branches = [
        Branch((0.0, 0.0, 0.0), (0.0, 1.0, 0.0), 1.0, 1.0, 0, kind="stump"),
        Branch((0.0, 1.0, 0.0), (1.0, 2.0, 0.0), 1.0, 0.6, 1, kind="primary"),
        Branch((0.0, 1.0, 0.0), (-1.0, 2.0, 0.0), 1.0, 0.6, 1, kind="primary"),
    ]
    if with_loop:
        branches.append(Branch((1.0, 2.0, 0.0), (-1.0, 2.0, 0.0), 0.6, 0.6, 1, kind="fused"))
    return Skeleton(branches=branches, max_depth=1)


class TestNetworkxAdapter:
    """Tests for to_networkx_graph."""

    def test_shared_endpoints_become_one_node(self):
        """Test children attached at a parent's end share its node."""
        G, node_map = to_networkx_graph(_fork(False))

        assert isinstance(G, nx.Graph)
        assert G.number_of_nodes() == 4
        assert G.number_of_edges() == 3
        assert len(node_map) == 4

    def test_edge_attributes(self):
        """Test edges carry branch index, kind and radii."""
        G, _ = to_networkx_graph(_fork(True))
        kinds = sorted(d["kind"] for _, _, d in G.edges(data=True))

        assert kinds == ["fused", "primary", "primary", "stump"]
        for _, _, d in G.edges(data=True):
            assert d["start_radius"] > 0
            assert d["length"] > 0


class TestSkeletonMetrics:
    """Tests for skeleton_metrics."""

    def test_fused_branch_closes_loop(self):
        """Test a fused branch between connected nodes adds one loop."""
        assert skeleton_metrics(_fork(False))["loop_count"] == 0
        assert skeleton_metrics(_fork(True))["loop_count"] == 1

    def test_counts(self):
        """Test per-kind and per-depth counts."""
        metrics = skeleton_metrics(_fork(True))

        assert metrics["branch_count"] == 4
        assert metrics["count_by_kind"]["fused"] == 1
        assert metrics["count_by_depth"] == {0: 1, 1: 3}
        assert metrics["connected_components"] == 1
        assert metrics["bbox_extent"] == pytest.approx([2.0, 2.0, 0.0])

    def test_tree_without_fusion_has_no_loops(self):
        """Test a generated tree without anastomosis is acyclic."""
        skeleton = HeuristicGenerator().generate(HeuristicParams(generations=3, anastomosis=0.0))
        G, _ = to_networkx_graph(skeleton)

        assert count_loops(G) == 0

    def test_empty_skeleton(self):
        """Test metrics of an empty skeleton."""
        metrics = skeleton_metrics(Skeleton())

        assert metrics["branch_count"] == 0
        assert metrics["loop_count"] == 0
