"""
Flow-conserving generation backend.

Each branch carries a share of the root's throughput ("flow"). At every
split the children's flow fractions sum to one, radii follow Murray's law
(r_child = r_parent * f^(1/n)) and each child's deflection from the parent
axis follows Kamiya's volume-minimizing angle. The branching plane turns by
90 degrees at every generation, as in real arterial trees.

Recursion stops once a branch's flow falls below 2^-density or the hard depth
cap is reached.
"""

from dataclasses import dataclass
from typing import List
import math
import logging
import numpy as np

from coral_policies.generation import FlowParams

from .base import BranchGenerator, AnastomosisBand
from ..core.rng import SeededRNG
from ..core.skeleton import Branch, Skeleton, as_point
from ..utils.geometry import EPSILON, UP, normalize, perpendicular, rotate_around, spherical_direction

logger = logging.getLogger(__name__)

STUMP_LENGTH_FACTOR = 0.5
START_JITTER = 0.15
FAN_ANGLE_MIN_DEG = 40.0
FAN_ANGLE_SPAN_DEG = 30.0
FUSION_MIN_FACTOR = 0.5
FUSION_MAX_FACTOR = 0.4


def murray_radius(parent_radius: float, fraction: float, exponent: float) -> float:
    """Murray's law: radius of a branch carrying `fraction` of its parent's flow."""
    return parent_radius * fraction ** (1.0 / exponent)


def kamiya_cosine(fraction: float, exponent: float) -> float:
    """
    Unclamped cosine of the Kamiya branching angle.

    cos(theta) = (1 + f^e - (1 - f)^e) / (2 f^e2), with e = 4/n and e2 = 2/n.
    """
    e = 4.0 / exponent
    e2 = 2.0 / exponent
    return (1.0 + fraction ** e - (1.0 - fraction) ** e) / (2.0 * fraction ** e2)


def kamiya_angle(fraction: float, exponent: float) -> float:
    """Angle (radians) between a child carrying `fraction` of the flow and the parent axis."""
    if fraction <= 0:
        return math.pi / 2.0
    cos_theta = min(max(kamiya_cosine(fraction, exponent), -1.0), 1.0)
    return math.acos(cos_theta)


def split_flow(rng: SeededRNG, child_count: int, asymmetry: float) -> List[float]:
    """
    Draw flow fractions for a split, sorted descending and summing to 1.

    Two children: the minor fraction r is uniform in [0.5 - asymmetry, 0.5].
    Three children: one weight is biased larger than the other two before
    normalization.
    """
    if child_count == 2:
        r = (0.5 - asymmetry) + rng.random() * asymmetry
        fractions = [r, 1.0 - r]
    else:
        weights = [1.0 + rng.random()]
        weights.extend(0.25 + rng.random() * 0.5 for _ in range(child_count - 1))
        total = sum(weights)
        fractions = [w / total for w in weights]
    return sorted(fractions, reverse=True)


def next_plane_normal(direction: np.ndarray, parent_normal: np.ndarray) -> np.ndarray:
    """Branching-plane normal rotated 90 degrees about the branch axis."""
    normal = np.cross(direction, parent_normal)
    if np.linalg.norm(normal) < 1e-6:
        return perpendicular(direction)
    return normalize(normal)


def deflection_axes(direction: np.ndarray, normal: np.ndarray, child_count: int) -> List[np.ndarray]:
    """
    Unit axes (perpendicular to direction) that children deflect towards.

    Two children split along +normal and -normal; more children are spread
    evenly in azimuth around the branch axis starting at the normal.
    """
    if child_count == 2:
        return [normal, -normal]
    return [
        normalize(rotate_around(normal, direction, 2.0 * math.pi * k / child_count))
        for k in range(child_count)
    ]


@dataclass
class _PendingBranch:
    origin: np.ndarray
    direction: np.ndarray
    start_radius: float
    radius: float
    flow: float
    depth: int
    normal: np.ndarray
    kind: str = "child"


class FlowConservingGenerator(BranchGenerator):
    """
    Generation backend using flow-conserving recursive bifurcation.

    Flow is transient: it shapes radii and angles during generation but is
    not stored on the resulting branches.
    """

    name = "flow"
    params_class = FlowParams

    def build_tree(self, params: FlowParams, rng: SeededRNG) -> Skeleton:
        n = params.diameter_exponent
        threshold = 2.0 ** (-params.density)
        trunk = params.trunk_thickness

        skeleton = Skeleton()
        branches = skeleton.branches
        max_depth_seen = [0]

        def recurse(b: _PendingBranch):
            length = b.radius * params.branch_length * (0.7 + rng.random() * 0.6)
            end = b.origin + b.direction * length
            branches.append(Branch(
                start=as_point(b.origin),
                end=as_point(end),
                start_radius=b.start_radius,
                end_radius=b.radius,
                depth=b.depth,
                kind=b.kind,
            ))
            max_depth_seen[0] = max(max_depth_seen[0], b.depth)

            if b.flow < threshold or b.depth >= params.max_depth:
                return

            child_count = rng.choice_count(params.binary_probability, 2, 3)
            fractions = split_flow(rng, child_count, params.asymmetry)
            normal = next_plane_normal(b.direction, b.normal)
            axes = deflection_axes(b.direction, normal, child_count)

            for fraction, axis in zip(fractions, axes):
                theta = kamiya_angle(fraction, n)
                child_dir = normalize(math.cos(theta) * b.direction + math.sin(theta) * axis)
                recurse(_PendingBranch(
                    origin=end,
                    direction=child_dir,
                    start_radius=b.radius,
                    radius=murray_radius(b.radius, fraction, n),
                    flow=b.flow * fraction,
                    depth=b.depth + 1,
                    normal=normal,
                ))

        stump_height = trunk * params.branch_length * STUMP_LENGTH_FACTOR
        stump_top = np.array([0.0, stump_height, 0.0])
        branches.append(Branch(
            start=(0.0, 0.0, 0.0),
            end=as_point(stump_top),
            start_radius=trunk,
            end_radius=trunk,
            depth=0,
            kind="stump",
        ))

        primary_count = rng.integer(3, 3)
        weights = [0.5 + rng.random() for _ in range(primary_count)]
        total = sum(weights)
        fractions = [w / total for w in weights]
        jitter = trunk * START_JITTER

        for i, fraction in enumerate(fractions):
            azimuth = (i / primary_count) * 2.0 * math.pi + (rng.random() - 0.5) * 0.6
            fan_angle = math.radians(FAN_ANGLE_MIN_DEG + rng.random() * FAN_ANGLE_SPAN_DEG)
            direction = spherical_direction(fan_angle, azimuth)
            start = stump_top + np.array([math.cos(azimuth) * jitter, 0.0, math.sin(azimuth) * jitter])

            normal = np.cross(direction, UP)
            if np.linalg.norm(normal) < EPSILON:
                normal = perpendicular(direction)

            recurse(_PendingBranch(
                origin=start,
                direction=direction,
                start_radius=trunk,
                radius=murray_radius(trunk, fraction, n),
                flow=fraction,
                depth=1,
                normal=normalize(normal),
                kind="primary",
            ))

        skeleton.max_depth = max_depth_seen[0]
        skeleton.metadata["primary_count"] = primary_count
        skeleton.metadata["primary_fractions"] = fractions
        skeleton.metadata["flow_threshold"] = threshold

        logger.info(
            f"Flow tree: {len(branches)} branches, {primary_count} primaries, "
            f"observed max depth {skeleton.max_depth} (threshold {threshold:.4g})"
        )
        return skeleton

    def anastomosis_band(self, params: FlowParams, skeleton: Skeleton) -> AnastomosisBand:
        return AnastomosisBand(
            min_distance=FUSION_MIN_FACTOR * params.trunk_thickness,
            max_distance=FUSION_MAX_FACTOR * params.trunk_thickness * params.branch_length,
            max_depth=skeleton.max_depth,
        )


__all__ = [
    "FlowConservingGenerator",
    "murray_radius",
    "kamiya_cosine",
    "kamiya_angle",
    "split_flow",
    "next_plane_normal",
    "deflection_axes",
]
