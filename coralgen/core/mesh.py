"""
Mesh containers passed between the isosurfacer and the postprocessor.
"""

from dataclasses import dataclass
from typing import Optional
import numpy as np


@dataclass
class TriangleSoup:
    """
    Unindexed triangles as emitted by the isosurface extractor.

    Buffers may be larger than the emitted geometry; only the first
    `vertex_count` rows are valid.
    """

    positions: np.ndarray
    normals: np.ndarray
    vertex_count: int

    @classmethod
    def empty(cls) -> "TriangleSoup":
        return cls(np.zeros((0, 3)), np.zeros((0, 3)), 0)

    @property
    def is_empty(self) -> bool:
        return self.vertex_count == 0

    def trimmed(self) -> "TriangleSoup":
        """Copy holding only the emitted vertices (whole triangles)."""
        n = self.vertex_count - self.vertex_count % 3
        return TriangleSoup(
            positions=np.array(self.positions[:n], dtype=np.float64),
            normals=np.array(self.normals[:n], dtype=np.float64),
            vertex_count=n,
        )


@dataclass
class CoralMesh:
    """
    Indexed triangle mesh with per-vertex normals.
    """

    vertices: np.ndarray
    normals: np.ndarray
    faces: Optional[np.ndarray] = None

    @property
    def vertex_count(self) -> int:
        return int(len(self.vertices))

    @property
    def face_count(self) -> int:
        return 0 if self.faces is None else int(len(self.faces))

    def copy(self) -> "CoralMesh":
        return CoralMesh(
            vertices=self.vertices.copy(),
            normals=self.normals.copy(),
            faces=None if self.faces is None else self.faces.copy(),
        )

    def bounds(self):
        return self.vertices.min(axis=0), self.vertices.max(axis=0)

    def to_trimesh(self):
        """Convert to a trimesh.Trimesh without merging or reordering anything."""
        import trimesh

        return trimesh.Trimesh(
            vertices=self.vertices,
            faces=self.faces,
            vertex_normals=self.normals,
            process=False,
        )


__all__ = ["TriangleSoup", "CoralMesh"]
