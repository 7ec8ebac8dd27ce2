"""
Field construction policy.

Controls how a skeleton is rasterized into the scalar field handed to the
isosurface extractor.
"""

from dataclasses import dataclass, field, asdict
from typing import Dict, Any, List

from .base import alias_fields, coerce_int, drop_none
from .resolution import ResolutionPolicy


FIELD_ALIASES = {
    "mcResolution": "resolution",
    "mcThickness": "thickness",
    "blurPasses": "blur_passes",
}


def thickness_to_isolation(thickness: float) -> float:
    """
    Map the 0-100 thickness control to an isolation threshold.

    High thickness means a low isolation and a fatter surface. The mapping is
    relative to a unit influence, so the result lives in (0, 1).
    """
    thickness = min(max(float(thickness), 0.0), 100.0)
    isolation = (150.0 - thickness * 1.4) / 100.0
    return min(max(isolation, 0.05), 0.95)


@dataclass
class FieldPolicy:
    """
    Policy for scalar field rasterization.

    JSON Schema:
    {
        "resolution": int (voxels per side at the reference size),
        "thickness": float (0-100, mapped to the isolation threshold),
        "blobiness": float (0-2, junction fillet scale; 0 disables),
        "blur_passes": int (3x3x3 box filter passes after rasterization),
        "influence": float (field value inside a branch),
        "resolution_policy": {...}
    }
    """
    resolution: int = 200
    thickness: float = 75.0
    blobiness: float = 0.5
    blur_passes: int = 1
    influence: float = 1.0
    resolution_policy: ResolutionPolicy = field(default_factory=ResolutionPolicy)

    def __post_init__(self):
        if isinstance(self.resolution_policy, dict):
            self.resolution_policy = ResolutionPolicy.from_dict(self.resolution_policy)

    @property
    def isolation(self) -> float:
        return thickness_to_isolation(self.thickness) * self.influence

    def validate(self) -> List[str]:
        errors = []
        if self.resolution < 2:
            errors.append(f"resolution must be >= 2, got {self.resolution}")
        if not 0 <= self.blobiness <= 2:
            errors.append(f"blobiness must be in [0, 2], got {self.blobiness}")
        if self.blur_passes < 0:
            errors.append(f"blur_passes must be >= 0, got {self.blur_passes}")
        if self.influence <= 0:
            errors.append(f"influence must be > 0, got {self.influence}")
        return errors

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "FieldPolicy":
        d = drop_none(alias_fields(d, FIELD_ALIASES))
        policy = FieldPolicy(**{k: v for k, v in d.items() if k in FieldPolicy.__dataclass_fields__})
        policy.resolution = coerce_int(policy.resolution, FieldPolicy.resolution)
        policy.blur_passes = int(policy.blur_passes)
        return policy


__all__ = ["FieldPolicy", "thickness_to_isolation", "FIELD_ALIASES"]
