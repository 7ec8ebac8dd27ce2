"""
End-to-end build from a CoralSpec.
"""

from dataclasses import dataclass
from typing import Optional, Tuple
import logging

from coral_policies import OperationReport

from ..core.mesh import CoralMesh
from ..core.skeleton import Skeleton
from ..specs.coral_spec import CoralSpec
from .generate import generate_skeleton
from .mesh import build_mesh

logger = logging.getLogger(__name__)


@dataclass
class CoralResult:
    """Skeleton and (possibly absent) mesh of one build."""

    spec: CoralSpec
    skeleton: Skeleton
    mesh: Optional[CoralMesh] = None


def design_from_spec(
    spec: CoralSpec,
    build_surface: bool = True,
) -> Tuple[CoralResult, OperationReport]:
    """
    Run the full pipeline: skeleton, field, isosurface, postprocess.

    Parameters
    ----------
    spec : CoralSpec
        Build description
    build_surface : bool
        When False only the skeleton is generated

    Returns
    -------
    result : CoralResult
    report : OperationReport
        Stage reports merged under "skeleton" and "mesh"
    """
    errors = spec.validate()
    if errors:
        raise ValueError("Invalid coral spec: " + "; ".join(errors))

    report = OperationReport(
        operation="design_from_spec",
        requested_policy=spec.to_dict(),
    )

    skeleton, gen_report = generate_skeleton(spec.generator, spec.params)
    report.merge(gen_report, prefix="skeleton")

    mesh = None
    if build_surface:
        mesh, mesh_report = build_mesh(skeleton, spec.field, spec.mesh)
        report.merge(mesh_report, prefix="mesh")

    report.effective_policy = {
        "generator": spec.generator,
        "params": gen_report.effective_policy,
        "field": spec.field.to_dict(),
        "mesh": spec.mesh.to_dict(),
    }
    logger.info(
        f"Design complete: {len(skeleton)} branches, "
        f"mesh {'absent' if mesh is None else f'{mesh.vertex_count} vertices'}"
    )
    return CoralResult(spec=spec, skeleton=skeleton, mesh=mesh), report


__all__ = ["design_from_spec", "CoralResult"]
