"""
Tests for the heuristic L-system generator.

These tests cover:
- Deterministic output for a fixed seed
- Branch counts for a two-generation tree
- Taper continuity and child attachment
- Branching-angle jitter bounds
"""

import math
import pytest
import numpy as np

from coral_policies import HeuristicParams
from coralgen.backends import HeuristicGenerator


def _params(**overrides):
    base = dict(
        generations=2,
        branch_angle_deg=35.0,
        branch_length=0.65,
        seed=42,
        trunk_thickness=1.0,
        taper=0.6,
        anastomosis=0.0,
    )
    base.update(overrides)
    return HeuristicParams(**base)


def _angle_between(u, v):
    u = np.asarray(u) / np.linalg.norm(u)
    v = np.asarray(v) / np.linalg.norm(v)
    return math.acos(min(max(float(np.dot(u, v)), -1.0), 1.0))


class TestHeuristicDeterminism:
    """Tests for seeded reproducibility."""

    def test_same_seed_same_skeleton(self):
        """Test identical parameters give identical branch lists."""
        gen = HeuristicGenerator()
        a = gen.generate(_params(generations=4, anastomosis=0.3))
        b = gen.generate(_params(generations=4, anastomosis=0.3))

        assert a.to_dict() == b.to_dict()

    def test_seed_override(self):
        """Test the seed argument overrides params.seed."""
        gen = HeuristicGenerator()
        a = gen.generate(_params(seed=1))
        b = gen.generate(_params(seed=99), seed=1)

        assert [br.to_dict() for br in a] == [br.to_dict() for br in b]

    def test_different_seed_differs(self):
        """Test different seeds give different skeletons."""
        gen = HeuristicGenerator()
        a = gen.generate(_params(seed=1))
        b = gen.generate(_params(seed=2))

        assert [br.to_dict() for br in a] != [br.to_dict() for br in b]


class TestHeuristicStructure:
    """Tests for the generated tree shape."""

    def test_two_generation_counts(self):
        """Test 1 stump + P primaries (5-7) + 2-3 children per primary."""
        skeleton = HeuristicGenerator().generate(_params())
        counts = skeleton.count_by_kind()

        assert counts["stump"] == 1
        assert 5 <= counts["primary"] <= 7
        assert 2 * counts["primary"] <= counts["child"] <= 3 * counts["primary"]
        assert counts["fused"] == 0
        assert len(skeleton) == 1 + counts["primary"] + counts["child"]
        assert skeleton.max_depth == 2

    def test_stump_geometry(self):
        """Test the stump is vertical from the origin with trunk radius."""
        skeleton = HeuristicGenerator().generate(_params())
        stump = skeleton.branches[0]

        assert stump.kind == "stump"
        assert stump.start == (0.0, 0.0, 0.0)
        assert stump.end[0] == 0.0 and stump.end[2] == 0.0
        assert stump.end[1] == pytest.approx(0.15 * 8 * 0.65)
        assert stump.start_radius == stump.end_radius == 1.0
        assert stump.depth == 0

    def test_primary_radius_and_fan_angle(self):
        """Test primary radii and angles from vertical stay in range."""
        skeleton = HeuristicGenerator().generate(_params())
        angle = math.radians(35.0)

        for b in skeleton:
            if b.kind != "primary":
                continue
            assert b.start_radius == 1.0
            assert 0.6 <= b.end_radius <= 0.9
            assert b.depth == 1
            polar = _angle_between(b.direction(), (0.0, 1.0, 0.0))
            assert 1.2 * angle - 1e-9 <= polar <= 2.2 * angle + 1e-9

    def test_children_attach_and_taper(self):
        """Test every child starts at a parent's end with its end radius."""
        skeleton = HeuristicGenerator().generate(_params(generations=3))
        by_end = {}
        for b in skeleton:
            by_end.setdefault(b.end, []).append(b)

        children = [b for b in skeleton if b.kind == "child"]
        assert children
        for child in children:
            parents = [p for p in by_end.get(child.start, []) if p.depth == child.depth - 1]
            assert len(parents) == 1
            parent = parents[0]
            assert child.start_radius == parent.end_radius
            assert child.end_radius == pytest.approx(parent.end_radius * 0.6)

    def test_child_angle_jitter(self):
        """Test child deflection stays within +/-20% of the branch angle."""
        skeleton = HeuristicGenerator().generate(_params(generations=3))
        angle = math.radians(35.0)
        by_end = {b.end: b for b in skeleton}

        for child in skeleton:
            if child.kind != "child":
                continue
            parent = by_end[child.start]
            theta = _angle_between(child.direction(), parent.direction())
            assert 0.8 * angle - 1e-9 <= theta <= 1.2 * angle + 1e-9

    def test_depth_bounded_by_generations(self):
        """Test no branch exceeds the generation count."""
        skeleton = HeuristicGenerator().generate(_params(generations=4, anastomosis=0.5))

        assert max(b.depth for b in skeleton) <= 4


class TestHeuristicParams:
    """Tests for parameter handling."""

    def test_dict_with_aliases(self):
        """Test camelCase keys are accepted."""
        skeleton = HeuristicGenerator().generate({
            "generations": 2,
            "branchAngle": 20,
            "trunkThickness": 2.0,
            "anastomosis": 0,
        })

        assert skeleton.metadata["params"]["branch_angle_deg"] == 20
        assert skeleton.branches[0].start_radius == 2.0

    def test_none_uses_defaults(self):
        """Test None params fall back to defaults."""
        skeleton = HeuristicGenerator().generate(None)

        assert skeleton.metadata["params"] == HeuristicParams().to_dict()

    def test_invalid_params_raise(self):
        """Test out-of-range parameters raise ValueError."""
        with pytest.raises(ValueError):
            HeuristicGenerator().generate(_params(generations=0))
        with pytest.raises(ValueError):
            HeuristicGenerator().generate(_params(trunk_thickness=-1.0))

    def test_wrong_params_type_raises(self):
        """Test passing the other generator's params raises TypeError."""
        from coral_policies import FlowParams

        with pytest.raises(TypeError):
            HeuristicGenerator().generate(FlowParams())
