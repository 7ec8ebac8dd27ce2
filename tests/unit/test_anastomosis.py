"""
Tests for the anastomosis (branch fusion) pass.
"""

import pytest

from coralgen.core.rng import SeededRNG
from coralgen.core.skeleton import Branch, Skeleton
from coralgen.ops.anastomosis import apply_anastomosis, fusion_probability
from coralgen.backends import HeuristicGenerator, FlowConservingGenerator
from coral_policies import HeuristicParams, FlowParams


def _row_skeleton(xs, depth=0, radius=1.0):
    return Skeleton(branches=[
        Branch(start=(x, 0.0, 0.0), end=(x, 1.0, 0.0), start_radius=radius, end_radius=radius, depth=depth)
        for x in xs
    ])


class TestFusionProbability:
    """Tests for the depth-decay factor."""

    def test_root_depth_full_probability(self):
        """Test depth 0 keeps the base probability."""
        assert fusion_probability(0.3, 0, 0, 4) == pytest.approx(0.3)

    def test_max_depth_zero_probability(self):
        """Test nodes at max depth never fuse."""
        assert fusion_probability(0.3, 4, 4, 4) == 0.0

    def test_quadratic_decay(self):
        """Test p * (1 - avg/max)^2."""
        assert fusion_probability(0.8, 1, 3, 8) == pytest.approx(0.8 * (1 - 2 / 8) ** 2)

    def test_nonpositive_max_depth(self):
        """Test max_depth <= 0 disables the decay."""
        assert fusion_probability(0.5, 3, 3, 0) == pytest.approx(0.5)

    def test_depth_beyond_max_clamped(self):
        """Test depths past max_depth clamp to zero probability."""
        assert fusion_probability(0.5, 9, 9, 4) == 0.0


class TestApplyAnastomosis:
    """Tests for apply_anastomosis."""

    def test_zero_probability_no_draws(self):
        """Test probability 0 changes nothing and consumes no draws."""
        skeleton = _row_skeleton([0.0, 1.0, 2.0])
        rng = SeededRNG(3)
        state = rng.state

        pairs = apply_anastomosis(skeleton, 0.0, rng, 0.5, 1.5, 4)

        assert pairs == []
        assert len(skeleton) == 3
        assert rng.state == state

    def test_out_of_band_no_draws(self):
        """Test pairs outside the band consume no draws."""
        skeleton = _row_skeleton([0.0, 10.0, 20.0])
        rng = SeededRNG(3)
        state = rng.state

        pairs = apply_anastomosis(skeleton, 1.0, rng, 0.5, 1.5, 4)

        assert pairs == []
        assert rng.state == state

    def test_certain_fusion(self):
        """Test probability 1 at depth 0 fuses the first in-band pair."""
        skeleton = _row_skeleton([0.0, 1.0, 2.0])
        pairs = apply_anastomosis(skeleton, 1.0, SeededRNG(3), 0.5, 1.5, 10)

        assert pairs == [(0, 1)]
        fused = skeleton.branches[-1]
        assert fused.kind == "fused"
        assert fused.start == (0.0, 0.0, 0.0)
        assert fused.end == (1.0, 0.0, 0.0)

    def test_fused_radius_and_depth(self):
        """Test fused branches take the minimum radius and maximum depth."""
        skeleton = Skeleton(branches=[
            Branch((0.0, 0.0, 0.0), (0.0, 1.0, 0.0), 0.8, 0.5, 1),
            Branch((1.0, 0.0, 0.0), (1.0, 1.0, 0.0), 0.4, 0.2, 2),
        ])
        apply_anastomosis(skeleton, 1.0, SeededRNG(1), 0.5, 1.5, 100)

        fused = skeleton.branches[-1]
        assert fused.start_radius == fused.end_radius == 0.4
        assert fused.depth == 2

    def test_each_node_fuses_once(self):
        """Test no node appears in two fused pairs."""
        skeleton = _row_skeleton([0.0, 0.6, 1.2, 1.8, 2.4, 3.0])
        pairs = apply_anastomosis(skeleton, 1.0, SeededRNG(2), 0.5, 5.0, 100)

        nodes = [i for pair in pairs for i in pair]
        assert len(nodes) == len(set(nodes))
        assert len(pairs) == 3

    @pytest.mark.parametrize("generator,params", [
        (HeuristicGenerator, HeuristicParams(generations=4, anastomosis=1.0, seed=5)),
        (FlowConservingGenerator, FlowParams(density=5, anastomosis=1.0, seed=5)),
    ])
    def test_generated_exclusivity(self, generator, params):
        """Test generated skeletons fuse each node at most once."""
        skeleton = generator().generate(params)
        pairs = skeleton.metadata["fused_pairs"]

        nodes = [i for pair in pairs for i in pair]
        assert len(nodes) == len(set(nodes))
        assert skeleton.count_by_kind()["fused"] == len(pairs)
        assert len(skeleton) == skeleton.metadata["tree_branch_count"] + len(pairs)
