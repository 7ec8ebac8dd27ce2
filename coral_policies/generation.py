"""
Generation parameters for coral skeletons.

This module contains the parameter dataclasses consumed by the skeleton
generators. All parameter objects are JSON-serializable and accept the
camelCase names used by slider presets as aliases.

UNIT CONVENTIONS
----------------
Lengths are in abstract world units; the stump base sits at the origin
and +Y is up.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Any, List

from .base import alias_fields, coerce_int, drop_none

# Branch count grows roughly 2-3x per level
MAX_FLOW_DEPTH = 14


HEURISTIC_ALIASES = {
    "branchAngle": "branch_angle_deg",
    "branch_angle": "branch_angle_deg",
    "branchLength": "branch_length",
    "trunkThickness": "trunk_thickness",
}

FLOW_ALIASES = {
    "diameterExponent": "diameter_exponent",
    "branchLength": "branch_length",
    "trunkThickness": "trunk_thickness",
    "maxDepth": "max_depth",
    "binaryProbability": "binary_probability",
}


@dataclass
class HeuristicParams:
    """
    Parameters for the heuristic L-system generator.

    JSON Schema:
    {
        "generations": int (recursion depth below the primaries),
        "branch_angle_deg": float (degrees),
        "branch_length": float (child/parent length ratio),
        "seed": int,
        "trunk_thickness": float,
        "taper": float (child/parent radius ratio),
        "anastomosis": float (0-1)
    }
    """
    generations: int = 4
    branch_angle_deg: float = 35.0
    branch_length: float = 0.65
    seed: int = 42
    trunk_thickness: float = 1.0
    taper: float = 0.6
    anastomosis: float = 0.3

    def validate(self) -> List[str]:
        errors = []
        if self.generations < 1:
            errors.append(f"generations must be >= 1, got {self.generations}")
        if self.generations > 10:
            errors.append(f"generations must be <= 10, got {self.generations}")
        if self.trunk_thickness <= 0:
            errors.append(f"trunk_thickness must be > 0, got {self.trunk_thickness}")
        if self.branch_length <= 0:
            errors.append(f"branch_length must be > 0, got {self.branch_length}")
        if not 0 < self.taper <= 1:
            errors.append(f"taper must be in (0, 1], got {self.taper}")
        if not 0 <= self.anastomosis <= 1:
            errors.append(f"anastomosis must be in [0, 1], got {self.anastomosis}")
        return errors

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "HeuristicParams":
        d = drop_none(alias_fields(d, HEURISTIC_ALIASES))
        params = HeuristicParams(**{k: v for k, v in d.items() if k in HeuristicParams.__dataclass_fields__})
        params.generations = coerce_int(params.generations, HeuristicParams.generations)
        params.seed = int(params.seed)
        return params


@dataclass
class FlowParams:
    """
    Parameters for the flow-conserving (Murray/Kamiya) generator.

    JSON Schema:
    {
        "density": float (flow termination threshold is 2^-density),
        "diameter_exponent": float (Murray's law exponent n),
        "asymmetry": float in [0, 0.5),
        "branch_length": float (segment length / radius),
        "seed": int,
        "trunk_thickness": float,
        "anastomosis": float (0-1),
        "max_depth": int (hard recursion cap, at most 14),
        "binary_probability": float (chance of a two-way split)
    }
    """
    density: float = 5.0
    diameter_exponent: float = 3.0
    asymmetry: float = 0.3
    branch_length: float = 6.0
    seed: int = 42
    trunk_thickness: float = 1.0
    anastomosis: float = 0.3
    max_depth: int = 12
    binary_probability: float = 0.7

    def validate(self) -> List[str]:
        errors = []
        if self.density <= 0:
            errors.append(f"density must be > 0, got {self.density}")
        if self.diameter_exponent <= 0:
            errors.append(f"diameter_exponent must be > 0, got {self.diameter_exponent}")
        if not 0 <= self.asymmetry < 0.5:
            errors.append(f"asymmetry must be in [0, 0.5), got {self.asymmetry}")
        if self.branch_length <= 0:
            errors.append(f"branch_length must be > 0, got {self.branch_length}")
        if self.trunk_thickness <= 0:
            errors.append(f"trunk_thickness must be > 0, got {self.trunk_thickness}")
        if not 0 <= self.anastomosis <= 1:
            errors.append(f"anastomosis must be in [0, 1], got {self.anastomosis}")
        if self.max_depth < 2:
            errors.append(f"max_depth must be >= 2, got {self.max_depth}")
        if self.max_depth > MAX_FLOW_DEPTH:
            errors.append(f"max_depth must be <= {MAX_FLOW_DEPTH}, got {self.max_depth}")
        if not 0 <= self.binary_probability <= 1:
            errors.append(f"binary_probability must be in [0, 1], got {self.binary_probability}")
        return errors

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "FlowParams":
        d = drop_none(alias_fields(d, FLOW_ALIASES))
        params = FlowParams(**{k: v for k, v in d.items() if k in FlowParams.__dataclass_fields__})
        params.max_depth = coerce_int(params.max_depth, FlowParams.max_depth)
        params.seed = int(params.seed)
        return params


__all__ = [
    "HeuristicParams",
    "FlowParams",
    "HEURISTIC_ALIASES",
    "FLOW_ALIASES",
    "MAX_FLOW_DEPTH",
]
