"""
Resolution policy for the scalar field grid.

The field is a dense cube of resolution^3 voxels, so the resolution is the
single knob that controls memory. This policy is the single source of truth
for how the requested resolution is scaled with the skeleton size and where
it is capped.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Any


@dataclass
class ResolutionPolicy:
    """
    Policy for field grid resolution.

    JSON Schema:
    {
        "reference_size": float (world size at which resolution is used as-is),
        "scale_with_size": bool,
        "min_resolution": int,
        "max_resolution": int (hard ceiling, bounds memory),
        "padding_factor": float (grid padding in multiples of the max radius)
    }

    A 350^3 float32 grid is roughly 171 MB, which is the default ceiling.
    """
    reference_size: float = 20.0
    scale_with_size: bool = True
    min_resolution: int = 8
    max_resolution: int = 350
    padding_factor: float = 3.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "ResolutionPolicy":
        return ResolutionPolicy(**{k: v for k, v in d.items() if k in ResolutionPolicy.__dataclass_fields__ and v is not None})


__all__ = ["ResolutionPolicy"]
