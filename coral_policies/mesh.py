"""
Mesh postprocessing policy.

Controls welding, noise displacement, Laplacian smoothing and ground
clipping of the extracted isosurface.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Any, List

from .base import alias_fields, drop_none


MESH_ALIASES = {
    "noiseAmount": "noise_amount",
    "noiseScale": "noise_scale",
    "smoothingIterations": "smoothing_iterations",
    "weldTolerance": "weld_tolerance",
}


@dataclass
class MeshPostprocessPolicy:
    """
    Policy for mesh postprocessing.

    JSON Schema:
    {
        "weld_tolerance": float (world units),
        "noise_amount": float (>= 0, 0 disables displacement),
        "noise_scale": float (> 0),
        "max_displacement_voxels": float (clamp in voxel widths),
        "smoothing_iterations": int (>= 0),
        "clip_enabled": bool,
        "clip_radius_factor": float (footprint radius / trunk thickness)
    }
    """
    weld_tolerance: float = 1e-4
    noise_amount: float = 0.5
    noise_scale: float = 2.0
    max_displacement_voxels: float = 1.5
    smoothing_iterations: int = 2
    clip_enabled: bool = True
    clip_radius_factor: float = 2.5

    def validate(self) -> List[str]:
        errors = []
        if self.weld_tolerance <= 0:
            errors.append(f"weld_tolerance must be > 0, got {self.weld_tolerance}")
        if self.noise_amount < 0:
            errors.append(f"noise_amount must be >= 0, got {self.noise_amount}")
        if self.noise_scale <= 0:
            errors.append(f"noise_scale must be > 0, got {self.noise_scale}")
        if self.smoothing_iterations < 0:
            errors.append(f"smoothing_iterations must be >= 0, got {self.smoothing_iterations}")
        if self.clip_radius_factor < 0:
            errors.append(f"clip_radius_factor must be >= 0, got {self.clip_radius_factor}")
        return errors

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "MeshPostprocessPolicy":
        d = drop_none(alias_fields(d, MESH_ALIASES))
        policy = MeshPostprocessPolicy(
            **{k: v for k, v in d.items() if k in MeshPostprocessPolicy.__dataclass_fields__}
        )
        policy.smoothing_iterations = int(policy.smoothing_iterations)
        return policy


__all__ = ["MeshPostprocessPolicy", "MESH_ALIASES"]
