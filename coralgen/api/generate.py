"""
Skeleton generation API.

UNIT CONVENTIONS
----------------
Lengths are abstract world units; the stump base sits at the origin and +Y
is up.
"""

from typing import Any, Dict, Optional, Tuple, Union
import logging

from coral_policies import OperationReport

from ..backends import create_generator
from ..core.skeleton import Skeleton

logger = logging.getLogger(__name__)


def generate_skeleton(
    generator: str = "heuristic",
    params: Union[None, Dict[str, Any], Any] = None,
    seed: Optional[int] = None,
) -> Tuple[Skeleton, OperationReport]:
    """
    Generate a coral skeleton.

    Parameters
    ----------
    generator : str
        Registered generator name:
        - "heuristic": stochastic L-system subdivision
        - "flow": flow-conserving bifurcation (Murray's law, Kamiya angles)
    params : dataclass or dict, optional
        Generator parameters; camelCase aliases are accepted in dicts
    seed : int, optional
        Overrides the seed in params

    Returns
    -------
    skeleton : Skeleton
        Generated branches, including fused (anastomosis) branches
    report : OperationReport
        Requested/effective parameters and branch counts

    Raises
    ------
    ValueError
        Unknown generator name or invalid parameters
    """
    backend = create_generator(generator)

    if params is None:
        requested = {}
    elif isinstance(params, dict):
        requested = dict(params)
    else:
        requested = params.to_dict()

    skeleton = backend.generate(params, seed=seed)
    meta = skeleton.metadata

    report = OperationReport(
        operation="generate_skeleton",
        success=True,
        requested_policy=requested,
        effective_policy=dict(meta.get("params", {})),
        metrics={
            "generator": backend.name,
            "branch_count": meta.get("branch_count", len(skeleton)),
            "tree_branch_count": meta.get("tree_branch_count"),
            "fused_branch_count": meta.get("fused_branch_count", 0),
            "primary_count": meta.get("primary_count"),
            "max_depth": skeleton.max_depth,
        },
    )
    if len(skeleton) < 2:
        report.add_warning(f"Generator produced only {len(skeleton)} branch(es)")

    logger.info(
        f"Generated {backend.name} skeleton: {len(skeleton)} branches "
        f"({meta.get('fused_branch_count', 0)} fused), max depth {skeleton.max_depth}"
    )
    return skeleton, report


__all__ = ["generate_skeleton"]
