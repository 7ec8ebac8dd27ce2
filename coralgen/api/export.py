"""
Export utilities for coral meshes and reports.
"""

from typing import Any, Dict, Union
from pathlib import Path
import json
import logging
import numpy as np

from coral_policies import OperationReport
from coral_policies.base import _json_default

from ..core.mesh import CoralMesh

logger = logging.getLogger(__name__)

UP_AXES = ("y", "z")

# Rotation taking +Y to +Z (right-handed, preserves winding)
_Y_TO_Z = np.array([
    [1.0, 0.0, 0.0],
    [0.0, 0.0, -1.0],
    [0.0, 1.0, 0.0],
])


def orient_mesh(mesh: CoralMesh, up_axis: str = "y") -> CoralMesh:
    """Return a copy rotated so that the coral's up direction is `up_axis`."""
    if up_axis not in UP_AXES:
        raise ValueError(f"up_axis must be one of {UP_AXES}, got {up_axis!r}")
    result = mesh.copy()
    if up_axis == "z":
        result.vertices = mesh.vertices @ _Y_TO_Z.T
        result.normals = mesh.normals @ _Y_TO_Z.T
    return result


def export_mesh(mesh: CoralMesh, path: Union[str, Path], up_axis: str = "y") -> Path:
    """
    Write a mesh to disk via trimesh.

    Parameters
    ----------
    mesh : CoralMesh
        Indexed mesh to write
    path : str or Path
        Output file; the format follows the extension (.stl, .obj, .ply, ...)
    up_axis : str
        "y" keeps the native orientation, "z" rotates +Y to +Z for
        Z-up tools such as slicers

    Returns
    -------
    Path
        Path to the saved file
    """
    if mesh.faces is None or mesh.face_count == 0:
        raise ValueError("Cannot export a mesh without faces")

    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    tm = orient_mesh(mesh, up_axis).to_trimesh()
    tm.export(str(output_path))
    logger.info(f"Saved mesh to {output_path} ({mesh.face_count} faces, up={up_axis})")
    return output_path


def write_json(data: Union[Dict[str, Any], OperationReport], path: Union[str, Path]) -> Path:
    """Write a dict or OperationReport as indented JSON."""
    if isinstance(data, OperationReport):
        data = data.to_dict()
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(data, f, indent=2, default=_json_default)
    logger.info(f"Wrote {output_path}")
    return output_path


__all__ = ["export_mesh", "orient_mesh", "write_json", "UP_AXES"]
