"""
Heuristic L-system generation backend.

Builds a short vertical stump, fans 5-7 primary branches out from its top,
and recursively splits each branch into 2 or 3 children with fixed angle,
length and taper statistics.

All random draws come from the SeededRNG in a fixed depth-first order, so a
seed fully determines the skeleton.
"""

import math
import logging
import numpy as np

from coral_policies.generation import HeuristicParams

from .base import BranchGenerator, AnastomosisBand
from ..core.rng import SeededRNG
from ..core.skeleton import Branch, Skeleton, as_point
from ..utils.geometry import normalize, rotate_around, perpendicular, spherical_direction

logger = logging.getLogger(__name__)

PRIMARY_LENGTH_FACTOR = 8.0
STUMP_HEIGHT_FRACTION = 0.15
START_JITTER_FRACTION = 0.3
FUSION_MIN_DISTANCE = 0.5
FUSION_MAX_FRACTION = 0.4


class HeuristicGenerator(BranchGenerator):
    """
    Generation backend using recursive stochastic subdivision.

    Every segment, including the stump and the primaries, is appended to the
    branch list before its children are generated.
    """

    name = "heuristic"
    params_class = HeuristicParams

    @staticmethod
    def primary_length(params: HeuristicParams) -> float:
        return params.branch_length * PRIMARY_LENGTH_FACTOR

    def build_tree(self, params: HeuristicParams, rng: SeededRNG) -> Skeleton:
        angle = math.radians(params.branch_angle_deg)
        primary_len = self.primary_length(params)
        stump_height = primary_len * STUMP_HEIGHT_FRACTION
        trunk = params.trunk_thickness

        skeleton = Skeleton()
        branches = skeleton.branches
        max_depth_seen = [0]

        def recurse(origin, direction, length, start_radius, radius, depth, kind="child"):
            end = origin + direction * length
            branches.append(Branch(
                start=as_point(origin),
                end=as_point(end),
                start_radius=start_radius,
                end_radius=radius,
                depth=depth,
                kind=kind,
            ))
            max_depth_seen[0] = max(max_depth_seen[0], depth)

            if depth >= params.generations:
                return

            child_count = rng.choice_count(0.5, 2, 3)
            for _ in range(child_count):
                perp = perpendicular(direction)
                azimuth = rng.angle()
                axis = rotate_around(perp, direction, azimuth)
                child_dir = normalize(rotate_around(direction, axis, angle * (0.8 + rng.random() * 0.4)))

                child_length = length * params.branch_length * (0.5 + rng.random())
                recurse(end, child_dir, child_length, radius, radius * params.taper, depth + 1)

        base = np.zeros(3)
        stump_top = np.array([0.0, stump_height, 0.0])
        branches.append(Branch(
            start=as_point(base),
            end=as_point(stump_top),
            start_radius=trunk,
            end_radius=trunk,
            depth=0,
            kind="stump",
        ))

        primary_count = rng.integer(5, 3)
        jitter = stump_height * START_JITTER_FRACTION

        for i in range(primary_count):
            azimuth = (i / primary_count) * 2.0 * math.pi + (rng.random() - 0.5) * 0.6
            fan_angle = angle * (1.2 + rng.random())
            direction = spherical_direction(fan_angle, azimuth)

            start = stump_top + np.array([
                math.cos(azimuth) * jitter,
                (rng.random() - 0.5) * jitter * 0.5,
                math.sin(azimuth) * jitter,
            ])

            length = primary_len * (0.7 + rng.random() * 0.6)
            radius = trunk * (0.6 + rng.random() * 0.3)

            recurse(start, direction, length, trunk, radius, 1, kind="primary")

        skeleton.max_depth = max_depth_seen[0]
        skeleton.metadata["primary_count"] = primary_count
        skeleton.metadata["stump_height"] = stump_height

        logger.info(
            f"Heuristic tree: {len(branches)} branches, {primary_count} primaries, "
            f"max depth {skeleton.max_depth}"
        )
        return skeleton

    def anastomosis_band(self, params: HeuristicParams, skeleton: Skeleton) -> AnastomosisBand:
        return AnastomosisBand(
            min_distance=FUSION_MIN_DISTANCE,
            max_distance=self.primary_length(params) * FUSION_MAX_FRACTION,
            max_depth=params.generations,
        )


__all__ = ["HeuristicGenerator"]
