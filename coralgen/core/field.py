"""
Dense scalar field over a cubic world region.
"""

from dataclasses import dataclass
from typing import Tuple
import numpy as np


@dataclass
class ScalarField:
    """
    Cubic voxel grid of float32 values.

    `values` has shape (res, res, res) and is stored z-major, so the flat
    C-order index of voxel (ix, iy, iz) is ``ix + iy*res + iz*res**2``.
    Voxel centers sit at ``origin + (index + 0.5) * voxel_size``.
    """

    values: np.ndarray
    origin: np.ndarray
    size: float

    @classmethod
    def empty(cls, center, size: float, resolution: int) -> "ScalarField":
        center = np.asarray(center, dtype=np.float64)
        origin = center - size / 2.0
        values = np.zeros((resolution, resolution, resolution), dtype=np.float32)
        return cls(values=values, origin=origin, size=float(size))

    @property
    def resolution(self) -> int:
        return int(self.values.shape[0])

    @property
    def voxel_size(self) -> float:
        return self.size / self.resolution

    @property
    def center(self) -> np.ndarray:
        return self.origin + self.size / 2.0

    @property
    def flat(self) -> np.ndarray:
        """Flat view using the ix + iy*res + iz*res^2 convention."""
        return self.values.reshape(-1)

    def index(self, ix: int, iy: int, iz: int) -> int:
        res = self.resolution
        return ix + iy * res + iz * res * res

    def axis_coords(self, axis: int, lo: int = 0, hi: int = None) -> np.ndarray:
        """World coordinates of voxel centers along one axis (0=x) for indices [lo, hi)."""
        if hi is None:
            hi = self.resolution
        return self.origin[axis] + (np.arange(lo, hi) + 0.5) * self.voxel_size

    def world_to_index(self, p) -> Tuple[int, int, int]:
        """Nearest voxel (ix, iy, iz) to a world point, clamped to the grid."""
        rel = (np.asarray(p, dtype=np.float64) - self.origin) / self.voxel_size - 0.5
        idx = np.clip(np.rint(rel), 0, self.resolution - 1).astype(int)
        return int(idx[0]), int(idx[1]), int(idx[2])

    def value_at(self, p) -> float:
        ix, iy, iz = self.world_to_index(p)
        return float(self.values[iz, iy, ix])

    def index_range(self, lo_world: np.ndarray, hi_world: np.ndarray):
        """
        Voxel index slices (x, y, z) whose centers may fall in a world AABB.

        Returns None when the box misses the grid entirely.
        """
        vs = self.voxel_size
        lo = np.floor((np.asarray(lo_world) - self.origin) / vs - 0.5).astype(int)
        hi = np.ceil((np.asarray(hi_world) - self.origin) / vs - 0.5).astype(int) + 1
        lo = np.clip(lo, 0, self.resolution)
        hi = np.clip(hi, 0, self.resolution)
        if np.any(hi <= lo):
            return None
        return lo, hi


__all__ = ["ScalarField"]
