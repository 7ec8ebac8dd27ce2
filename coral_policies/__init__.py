"""
Coral Policies - Centralized parameter and policy definitions for Coral Forge.

This package provides the dataclasses used by the skeleton generators, the
field rasterizer and the mesh postprocessor. All policies are
JSON-serializable and support the "requested vs effective" pattern for
tracking runtime adjustments.

Usage:
    from coral_policies import HeuristicParams, FieldPolicy, OperationReport
    from coral_policies.mesh import MeshPostprocessPolicy
"""

from .base import (
    OperationReport,
    coerce_int,
    alias_fields,
    drop_none,
)

from .generation import (
    HeuristicParams,
    FlowParams,
)

from .resolution import ResolutionPolicy

from .field import (
    FieldPolicy,
    thickness_to_isolation,
)

from .mesh import MeshPostprocessPolicy

__all__ = [
    "OperationReport",
    "coerce_int",
    "alias_fields",
    "drop_none",
    "HeuristicParams",
    "FlowParams",
    "ResolutionPolicy",
    "FieldPolicy",
    "thickness_to_isolation",
    "MeshPostprocessPolicy",
]
