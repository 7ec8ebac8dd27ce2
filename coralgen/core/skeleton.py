"""
Core skeleton data structures.

A skeleton is an ordered list of tapered segments (branches). Generators own
the list while building it; every downstream stage treats it as read-only.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any, Tuple
import numpy as np

Point3 = Tuple[float, float, float]

BRANCH_KINDS = ("stump", "primary", "child", "fused")


def as_point(p) -> Point3:
    """Convert any 3-sequence (list, tuple, ndarray) to a float tuple."""
    return (float(p[0]), float(p[1]), float(p[2]))


@dataclass(frozen=True)
class Branch:
    """
    Tapered cylindrical segment of the skeleton.

    The radius varies linearly from start_radius at `start` to end_radius at
    `end`. A child's start_radius equals its parent's end_radius; fused
    branches carry the smaller of the two fused radii at both ends.
    """

    start: Point3
    end: Point3
    start_radius: float
    end_radius: float
    depth: int
    kind: str = "child"

    @property
    def length(self) -> float:
        return float(np.linalg.norm(np.subtract(self.end, self.start)))

    @property
    def max_radius(self) -> float:
        return max(self.start_radius, self.end_radius)

    def direction(self) -> np.ndarray:
        """Unit direction from start to end (zero vector for degenerate segments)."""
        d = np.subtract(self.end, self.start)
        n = np.linalg.norm(d)
        if n < 1e-12:
            return np.zeros(3)
        return d / n

    def radius_at(self, t: float) -> float:
        t = min(max(t, 0.0), 1.0)
        return self.start_radius + (self.end_radius - self.start_radius) * t

    def to_dict(self) -> dict:
        return {
            "start": list(self.start),
            "end": list(self.end),
            "start_radius": self.start_radius,
            "end_radius": self.end_radius,
            "depth": self.depth,
            "kind": self.kind,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "Branch":
        radius = d.get("radius")
        return cls(
            start=as_point(d["start"]),
            end=as_point(d["end"]),
            start_radius=float(d.get("start_radius", radius)),
            end_radius=float(d.get("end_radius", radius)),
            depth=int(d.get("depth", 0)),
            kind=d.get("kind", "child"),
        )


@dataclass
class Skeleton:
    """
    Branch list produced by a generator.

    Attributes
    ----------
    branches : list of Branch
        Segments in construction order; the stump is first.
    max_depth : int
        Maximum depth observed while generating the tree (before fusion).
    metadata : dict
        Generator name, effective parameters, counts.
    """

    branches: List[Branch] = field(default_factory=list)
    max_depth: int = 0
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.branches)

    def __iter__(self):
        return iter(self.branches)

    @property
    def stump(self) -> Optional[Branch]:
        for branch in self.branches:
            if branch.kind == "stump":
                return branch
        return self.branches[0] if self.branches else None

    def endpoints(self) -> np.ndarray:
        """All branch endpoints as an (2N, 3) array, start/end interleaved."""
        if not self.branches:
            return np.zeros((0, 3))
        pts = []
        for b in self.branches:
            pts.append(b.start)
            pts.append(b.end)
        return np.asarray(pts, dtype=np.float64)

    def bounds(self) -> Tuple[np.ndarray, np.ndarray]:
        """Axis-aligned (min, max) corners of the branch endpoints."""
        pts = self.endpoints()
        if len(pts) == 0:
            return np.zeros(3), np.zeros(3)
        return pts.min(axis=0), pts.max(axis=0)

    def max_radius(self) -> float:
        if not self.branches:
            return 0.0
        return max(b.max_radius for b in self.branches)

    def count_by_kind(self) -> Dict[str, int]:
        counts = {kind: 0 for kind in BRANCH_KINDS}
        for b in self.branches:
            counts[b.kind] = counts.get(b.kind, 0) + 1
        return counts

    def to_dict(self) -> dict:
        return {
            "branches": [b.to_dict() for b in self.branches],
            "max_depth": self.max_depth,
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "Skeleton":
        return cls(
            branches=[Branch.from_dict(b) for b in d.get("branches", [])],
            max_depth=int(d.get("max_depth", 0)),
            metadata=dict(d.get("metadata", {})),
        )


__all__ = ["Branch", "Skeleton", "Point3", "as_point", "BRANCH_KINDS"]
