"""
Tests for 3D simplex noise.
"""

import pytest
import numpy as np

from coralgen.ops.noise import simplex3, fractal_noise, PERM, PERM_MOD12


class TestSimplex3:
    """Tests for simplex3."""

    def test_scalar_returns_float(self):
        """Test scalar input gives a Python float."""
        value = simplex3(0.3, 1.7, -2.2)

        assert isinstance(value, float)

    def test_deterministic(self):
        """Test repeated evaluation gives identical values."""
        assert simplex3(1.1, 2.2, 3.3) == simplex3(1.1, 2.2, 3.3)

    def test_range(self):
        """Test values stay roughly within [-1, 1]."""
        rng = np.random.default_rng(0)
        pts = rng.uniform(-50, 50, size=(20000, 3))
        values = simplex3(pts[:, 0], pts[:, 1], pts[:, 2])

        assert values.shape == (20000,)
        assert np.all(np.abs(values) <= 1.2)
        assert values.std() > 0.1

    def test_vectorized_matches_scalar(self):
        """Test array evaluation agrees with point-by-point evaluation."""
        pts = np.array([[0.1, 0.2, 0.3], [-4.5, 2.25, 7.75], [13.0, -0.5, 0.9], [100.2, 3.3, -47.1]])
        values = simplex3(pts[:, 0], pts[:, 1], pts[:, 2])

        for p, v in zip(pts, values):
            assert simplex3(*p) == pytest.approx(v, abs=1e-15)

    def test_broadcasting(self):
        """Test arrays broadcast against scalars."""
        xs = np.linspace(0, 1, 5)
        values = simplex3(xs, 0.5, 0.25)

        assert values.shape == (5,)

    def test_tables_read_only(self):
        """Test the permutation tables cannot be mutated."""
        assert len(PERM) == 512
        assert PERM_MOD12.max() < 12
        with pytest.raises(ValueError):
            PERM[0] = 1


class TestFractalNoise:
    """Tests for the three-octave sum."""

    def test_shape_and_bounds(self):
        """Test one value per point, bounded by the weight sum."""
        pts = np.random.default_rng(1).uniform(-10, 10, size=(500, 3))
        values = fractal_noise(pts, 0.2)

        assert values.shape == (500,)
        assert np.all(np.abs(values) <= 1.2)
