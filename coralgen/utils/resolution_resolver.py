"""
Shared grid resolver for the scalar field.

This module provides the single deterministic function that turns a skeleton
plus a requested resolution into the cubic world region and effective
resolution of the field. Resolution scales with the skeleton size so voxel
density stays consistent, and is clamped to a hard ceiling so memory stays
bounded.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import logging
import numpy as np

from coral_policies.resolution import ResolutionPolicy

from ..core.skeleton import Skeleton

logger = logging.getLogger(__name__)


@dataclass
class GridResult:
    """
    Result of grid resolution.

    Supports tuple unpacking:
        center, size, resolution = resolve_grid(...)
    """
    center: np.ndarray
    size: float
    resolution: int
    requested_resolution: int
    was_clamped: bool = False
    warnings: List[str] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=dict)

    def __iter__(self):
        return iter((self.center, self.size, self.resolution))

    @property
    def voxel_size(self) -> float:
        return self.size / self.resolution

    def to_dict(self) -> Dict[str, Any]:
        return {
            "center": [float(c) for c in self.center],
            "size": self.size,
            "resolution": self.resolution,
            "requested_resolution": self.requested_resolution,
            "was_clamped": self.was_clamped,
            "warnings": self.warnings,
            "metrics": self.metrics,
        }


def grid_extent(skeleton: Skeleton, padding_factor: float = 3.0):
    """
    Cubic region enclosing the skeleton.

    The cube is centered on the endpoint bounding box and padded by
    `padding_factor` times the largest branch radius on every side.

    Returns
    -------
    center : np.ndarray
    size : float
    """
    lo, hi = skeleton.bounds()
    pad = skeleton.max_radius() * padding_factor
    center = (lo + hi) / 2.0
    size = float(np.max(hi - lo)) + 2.0 * pad
    if size <= 0:
        size = 1.0
    return center, size


def resolve_grid(
    skeleton: Skeleton,
    requested_resolution: int,
    resolution_policy: Optional[ResolutionPolicy] = None,
) -> GridResult:
    """
    Resolve the field grid for a skeleton.

    Parameters
    ----------
    skeleton : Skeleton
        Skeleton to enclose.
    requested_resolution : int
        Voxels per side at the policy's reference size.
    resolution_policy : ResolutionPolicy, optional
        Scaling and ceiling rules. Uses default if None.

    Returns
    -------
    GridResult
        Center, size, effective resolution, clamp flag and warnings.
    """
    if resolution_policy is None:
        resolution_policy = ResolutionPolicy()

    center, size = grid_extent(skeleton, resolution_policy.padding_factor)

    if resolution_policy.scale_with_size and resolution_policy.reference_size > 0:
        scaled = int(round(requested_resolution * size / resolution_policy.reference_size))
    else:
        scaled = int(requested_resolution)

    warnings = []
    effective = scaled
    if effective > resolution_policy.max_resolution:
        effective = resolution_policy.max_resolution
        msg = (
            f"Resolution {scaled} exceeds ceiling {resolution_policy.max_resolution}; "
            f"clamped to {effective}"
        )
        warnings.append(msg)
        logger.warning(msg)
    elif effective < resolution_policy.min_resolution:
        effective = resolution_policy.min_resolution
        logger.debug(f"Resolution {scaled} raised to minimum {effective}")

    metrics = {
        "grid_size": size,
        "scaled_resolution": scaled,
        "effective_resolution": effective,
        "total_voxels": effective ** 3,
        "voxel_size": size / effective,
    }

    return GridResult(
        center=center,
        size=size,
        resolution=effective,
        requested_resolution=int(requested_resolution),
        was_clamped=scaled > resolution_policy.max_resolution,
        warnings=warnings,
        metrics=metrics,
    )


__all__ = ["GridResult", "grid_extent", "resolve_grid"]
