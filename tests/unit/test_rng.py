"""
Tests for the seeded random stream.
"""

import pytest

from coralgen.core.rng import SeededRNG


class TestSeededRNG:
    """Tests for SeededRNG."""

    def test_values_in_unit_interval(self):
        """Test every draw lies in [0, 1)."""
        rng = SeededRNG(42)
        values = [rng.random() for _ in range(5000)]

        assert min(values) >= 0.0
        assert max(values) < 1.0

    def test_same_seed_same_stream(self):
        """Test identical seeds give identical streams."""
        a = SeededRNG(1234)
        b = SeededRNG(1234)

        assert [a.random() for _ in range(100)] == [b.random() for _ in range(100)]

    def test_different_seeds_differ(self):
        """Test different seeds give different streams."""
        a = SeededRNG(1)
        b = SeededRNG(2)

        assert [a.random() for _ in range(10)] != [b.random() for _ in range(10)]

    def test_seed_reduced_mod_2_32(self):
        """Test seeds are reduced modulo 2^32."""
        a = SeededRNG(5)
        b = SeededRNG(2 ** 32 + 5)

        assert a.random() == b.random()

    def test_integer_range(self):
        """Test integer(low, count) stays in [low, low + count)."""
        rng = SeededRNG(7)
        values = {rng.integer(5, 3) for _ in range(500)}

        assert values == {5, 6, 7}

    def test_uniform_range(self):
        """Test uniform(a, b) stays in [a, b)."""
        rng = SeededRNG(9)
        for _ in range(200):
            v = rng.uniform(-2.0, 3.0)
            assert -2.0 <= v < 3.0

    def test_choice_count_consumes_one_draw(self):
        """Test choice_count draws exactly once."""
        a = SeededRNG(11)
        b = SeededRNG(11)

        a.choice_count(0.5, 2, 3)
        b.random()

        assert a.state == b.state

    def test_choice_count_extremes(self):
        """Test probability 1 always returns a and 0 always returns b."""
        rng = SeededRNG(3)

        assert all(rng.choice_count(1.0, 2, 3) == 2 for _ in range(50))
        assert all(rng.choice_count(0.0, 2, 3) == 3 for _ in range(50))
