"""
End-to-end pipeline tests: spec -> skeleton -> field -> mesh -> file.
"""

import json
import pytest
import numpy as np
import trimesh

from coralgen.api import design_from_spec, export_mesh, orient_mesh
from coralgen.ops.mesh import signed_volume
from coralgen.specs import CoralSpec


def _spec(generator="heuristic", **params):
    return CoralSpec.from_dict({
        "generator": generator,
        "params": params,
        "field": {"resolution": 40},
        "mesh": {"smoothing_iterations": 1},
    })


class TestPipelineEndToEnd:
    """Full builds for both generators."""

    @pytest.mark.parametrize("generator,params", [
        ("heuristic", {"generations": 2, "anastomosis": 0.3}),
        ("flow", {"density": 3, "anastomosis": 0.3}),
    ])
    def test_builds_closed_mesh(self, generator, params):
        """Test both generators produce a non-empty positively oriented mesh."""
        result, report = design_from_spec(_spec(generator, **params))

        assert result.mesh is not None
        assert result.mesh.face_count > 0
        assert report.success is True
        assert signed_volume(result.mesh.vertices, result.mesh.faces) > 0
        np.testing.assert_allclose(np.linalg.norm(result.mesh.normals, axis=1), 1.0)

    def test_deterministic_mesh(self):
        """Test identical specs give identical meshes."""
        a, _ = design_from_spec(_spec(generations=2, seed=3))
        b, _ = design_from_spec(_spec(generations=2, seed=3))

        np.testing.assert_array_equal(a.mesh.vertices, b.mesh.vertices)
        np.testing.assert_array_equal(a.mesh.faces, b.mesh.faces)

    def test_ground_clipped(self):
        """Test no vertex near the stump sits below the stump base."""
        result, _ = design_from_spec(_spec(generations=2))
        v = result.mesh.vertices
        near = np.hypot(v[:, 0], v[:, 2]) <= 2.5

        assert v[near, 1].min() >= 0.0

    def test_skeleton_only(self):
        """Test build_surface=False skips meshing."""
        result, report = design_from_spec(_spec(generations=2), build_surface=False)

        assert result.mesh is None
        assert len(result.skeleton) > 0
        assert "mesh" not in report.metrics


class TestExport:
    """Tests for mesh export."""

    def test_export_stl(self, tmp_path):
        """Test an STL file is written and loads back with the same face count."""
        result, _ = design_from_spec(_spec(generations=2))
        path = export_mesh(result.mesh, tmp_path / "out" / "coral.stl")

        assert path.exists()
        loaded = trimesh.load(str(path), process=False)
        assert len(loaded.faces) == result.mesh.face_count

    def test_z_up_orientation(self):
        """Test z-up export maps +Y to +Z and keeps orientation."""
        result, _ = design_from_spec(_spec(generations=2))
        rotated = orient_mesh(result.mesh, "z")

        np.testing.assert_allclose(rotated.vertices[:, 2], result.mesh.vertices[:, 1])
        assert signed_volume(rotated.vertices, rotated.faces) == pytest.approx(
            signed_volume(result.mesh.vertices, result.mesh.faces)
        )

    def test_bad_up_axis(self):
        """Test an unsupported up axis raises ValueError."""
        result, _ = design_from_spec(_spec(generations=2))

        with pytest.raises(ValueError):
            orient_mesh(result.mesh, "x")


class TestCli:
    """Tests for the coral-forge command line."""

    def test_skeleton_summary(self, capsys):
        """Test the skeleton subcommand prints a JSON summary."""
        from coralgen.cli import main

        assert main(["skeleton", "--seed", "3", "--generator", "flow"]) == 0
        payload = json.loads(capsys.readouterr().out)

        assert payload["generator"] == "flow"
        assert payload["params"]["seed"] == 3
        assert payload["metrics"]["branch_count"] > 0

    def test_mesh_command(self, tmp_path):
        """Test the mesh subcommand writes a mesh file from a config."""
        from coralgen.cli import main

        config = tmp_path / "spec.json"
        config.write_text(_spec(generations=2).to_json())
        output = tmp_path / "coral.ply"

        assert main(["mesh", "--config", str(config), "--output", str(output)]) == 0
        assert output.exists()
