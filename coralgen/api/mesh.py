"""
Mesh construction API: isosurface extraction plus postprocessing.
"""

from typing import Optional, Tuple
import logging

from coral_policies import FieldPolicy, MeshPostprocessPolicy, OperationReport

from ..core.field import ScalarField
from ..core.mesh import CoralMesh, TriangleSoup
from ..core.skeleton import Skeleton
from ..ops.isosurface import extract_isosurface
from ..ops.mesh import (
    weld_vertices,
    displace_vertices,
    smooth_mesh,
    clip_to_ground,
    compute_vertex_normals,
)
from .field import build_field

logger = logging.getLogger(__name__)


def postprocess_mesh(
    soup: TriangleSoup,
    skeleton: Skeleton,
    voxel_size: float,
    policy: Optional[MeshPostprocessPolicy] = None,
) -> Tuple[Optional[CoralMesh], OperationReport]:
    """
    Weld, displace, smooth and clip an extracted triangle soup.

    Parameters
    ----------
    soup : TriangleSoup
        Isosurface output; only the first `vertex_count` vertices are used
    skeleton : Skeleton
        Source skeleton; its stump locates the ground plane
    voxel_size : float
        Field voxel size (bounds the displacement)
    policy : MeshPostprocessPolicy, optional
        Uses default if None.

    Returns
    -------
    mesh : CoralMesh or None
        None when the soup is empty
    report : OperationReport
    """
    if policy is None:
        policy = MeshPostprocessPolicy()
    errors = policy.validate()
    if errors:
        raise ValueError("Invalid mesh policy: " + "; ".join(errors))

    report = OperationReport(
        operation="postprocess_mesh",
        requested_policy=policy.to_dict(),
        effective_policy=policy.to_dict(),
    )

    if soup.is_empty:
        report.add_warning("Isosurface is empty; no mesh produced")
        logger.warning(report.warnings[-1])
        return None, report

    mesh = weld_vertices(soup, policy.weld_tolerance)
    report.metrics["welded_vertex_count"] = mesh.vertex_count
    report.metrics["face_count"] = mesh.face_count

    mesh = displace_vertices(
        mesh,
        amount=policy.noise_amount,
        scale=policy.noise_scale,
        voxel_size=voxel_size,
        max_displacement_voxels=policy.max_displacement_voxels,
    )
    mesh = smooth_mesh(mesh, policy.smoothing_iterations)

    stump = skeleton.stump
    if policy.clip_enabled and stump is not None:
        radius = policy.clip_radius_factor * stump.start_radius
        mesh = clip_to_ground(mesh, stump.start[1], (stump.start[0], stump.start[2]), radius)
        mesh.normals = compute_vertex_normals(mesh.vertices, mesh.faces)
        report.metrics["clip_radius"] = radius

    lo, hi = mesh.bounds()
    report.metrics.update({
        "vertex_count": mesh.vertex_count,
        "bounds_min": [float(v) for v in lo],
        "bounds_max": [float(v) for v in hi],
    })
    logger.info(f"Postprocessed mesh: {mesh.vertex_count} vertices, {mesh.face_count} faces")
    return mesh, report


def build_mesh(
    skeleton: Skeleton,
    field_policy: Optional[FieldPolicy] = None,
    mesh_policy: Optional[MeshPostprocessPolicy] = None,
    field: Optional[ScalarField] = None,
) -> Tuple[Optional[CoralMesh], OperationReport]:
    """
    Build the final surface mesh for a skeleton.

    Parameters
    ----------
    skeleton : Skeleton
    field_policy : FieldPolicy, optional
        Used to build the field (when `field` is None) and for the isolation
        threshold
    mesh_policy : MeshPostprocessPolicy, optional
    field : ScalarField, optional
        Prebuilt field to reuse

    Returns
    -------
    mesh : CoralMesh or None
        None for skeletons with fewer than two branches or an empty surface
    report : OperationReport
        Merged report of the field, isosurface and postprocess stages
    """
    if field_policy is None:
        field_policy = FieldPolicy()

    report = OperationReport(
        operation="build_mesh",
        requested_policy={
            "field": field_policy.to_dict(),
            "mesh": (mesh_policy or MeshPostprocessPolicy()).to_dict(),
        },
    )

    field_effective = field_policy.to_dict()
    if field is None:
        field, field_report = build_field(skeleton, field_policy)
        report.merge(field_report, prefix="field")
        field_effective = field_report.effective_policy
        if field is None:
            report.effective_policy = dict(report.requested_policy)
            return None, report

    isolation = field_policy.isolation
    soup = extract_isosurface(field, isolation)
    report.metrics["isosurface"] = {
        "isolation": isolation,
        "soup_vertex_count": soup.vertex_count,
    }

    mesh, post_report = postprocess_mesh(soup, skeleton, field.voxel_size, mesh_policy)
    report.merge(post_report, prefix="postprocess")
    report.effective_policy = {
        "field": field_effective,
        "mesh": post_report.effective_policy,
    }
    return mesh, report


__all__ = ["build_mesh", "postprocess_mesh"]
