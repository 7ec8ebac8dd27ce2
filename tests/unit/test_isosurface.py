"""
Tests for the marching cubes adapter.
"""

import pytest
import numpy as np

from coralgen.core.field import ScalarField
from coralgen.ops.isosurface import extract_isosurface
from coralgen.ops.mesh import weld_vertices, signed_volume


def _sphere_field(center=(0.5, -0.25, 0.0), size=4.0, resolution=40):
    field = ScalarField.empty(center, size, resolution)
    xs = field.axis_coords(0)
    ys = field.axis_coords(1)
    zs = field.axis_coords(2)
    zz, yy, xx = np.meshgrid(zs, ys, xs, indexing="ij")
    c = np.asarray(center)
    dist = np.sqrt((xx - c[0]) ** 2 + (yy - c[1]) ** 2 + (zz - c[2]) ** 2)
    field.values[...] = np.clip(1.0 - dist / 2.0, 0.0, 1.0)
    return field


class TestExtractIsosurface:
    """Tests for extract_isosurface."""

    def test_sphere_in_world_coordinates(self):
        """Test the 0.5 level of a radial ramp is a unit sphere at the center."""
        field = _sphere_field()
        soup = extract_isosurface(field, 0.5)

        assert soup.vertex_count > 0
        assert soup.vertex_count % 3 == 0
        radii = np.linalg.norm(soup.positions[:soup.vertex_count] - np.array([0.5, -0.25, 0.0]), axis=1)
        np.testing.assert_allclose(radii, 1.0, atol=field.voxel_size)

    def test_outward_orientation(self):
        """Test the welded surface encloses positive volume."""
        soup = extract_isosurface(_sphere_field(), 0.5)
        mesh = weld_vertices(soup, 1e-6)

        volume = signed_volume(mesh.vertices, mesh.faces)
        assert volume == pytest.approx(4.0 / 3.0 * np.pi, rel=0.05)

    def test_level_above_range_is_empty(self):
        """Test a level above the field maximum gives an empty soup."""
        soup = extract_isosurface(_sphere_field(), 2.0)

        assert soup.is_empty
        assert soup.vertex_count == 0

    def test_constant_field_is_empty(self):
        """Test a constant field gives an empty soup."""
        field = ScalarField.empty((0.0, 0.0, 0.0), 2.0, 8)

        assert extract_isosurface(field, 0.5).is_empty
