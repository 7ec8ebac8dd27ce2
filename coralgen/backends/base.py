"""
Base interface for coral skeleton generation backends.

This module defines the abstract interface that all generation backends must
implement, providing a unified API for the heuristic L-system and the
flow-conserving branching model. Both produce a Skeleton and share the
anastomosis pass.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Union

from ..core.rng import SeededRNG
from ..core.skeleton import Skeleton
from ..ops.anastomosis import apply_anastomosis


@dataclass
class AnastomosisBand:
    """Distance band and depth normalizer for the anastomosis pass."""

    min_distance: float
    max_distance: float
    max_depth: int


class BranchGenerator(ABC):
    """
    Abstract base class for skeleton generators.

    Subclasses implement `build_tree`, which draws every random decision from
    the supplied SeededRNG, and `anastomosis_band`. `generate` runs the tree
    construction followed by the shared anastomosis pass on the same stream.
    """

    name: str = "base"
    params_class: type = None

    def coerce_params(self, params: Union[None, Dict[str, Any], Any]):
        """Accept a params dataclass, a plain dict, or None (defaults)."""
        if params is None:
            params = self.params_class()
        elif isinstance(params, dict):
            params = self.params_class.from_dict(params)
        elif not isinstance(params, self.params_class):
            raise TypeError(
                f"{self.__class__.__name__} expects {self.params_class.__name__}, "
                f"got {type(params).__name__}"
            )
        errors = params.validate()
        if errors:
            raise ValueError(f"Invalid {self.name} parameters: " + "; ".join(errors))
        return params

    @abstractmethod
    def build_tree(self, params, rng: SeededRNG) -> Skeleton:
        """
        Build the branch tree (without anastomosis).

        Parameters
        ----------
        params : dataclass
            Validated generator parameters
        rng : SeededRNG
            Stream seeded from params.seed

        Returns
        -------
        Skeleton
            Branches in construction order, with max_depth set
        """
        pass

    @abstractmethod
    def anastomosis_band(self, params, skeleton: Skeleton) -> AnastomosisBand:
        """Fusion distance band and depth normalizer for this generator."""
        pass

    def generate(self, params=None, seed: Optional[int] = None) -> Skeleton:
        """
        Generate a skeleton.

        Parameters
        ----------
        params : dataclass or dict, optional
            Generator parameters; missing values fall back to defaults
        seed : int, optional
            Overrides params.seed when given

        Returns
        -------
        Skeleton
            Tree plus any fused branches
        """
        params = self.coerce_params(params)
        if seed is not None:
            params = replace(params, seed=int(seed))

        rng = SeededRNG(params.seed)
        skeleton = self.build_tree(params, rng)
        tree_count = len(skeleton.branches)

        band = self.anastomosis_band(params, skeleton)
        fused = apply_anastomosis(
            skeleton,
            probability=params.anastomosis,
            rng=rng,
            min_distance=band.min_distance,
            max_distance=band.max_distance,
            max_depth=band.max_depth,
        )

        skeleton.metadata.update({
            "generator": self.name,
            "params": params.to_dict(),
            "tree_branch_count": tree_count,
            "fused_branch_count": len(fused),
            "fused_pairs": [list(pair) for pair in fused],
            "branch_count": len(skeleton.branches),
        })
        return skeleton


__all__ = ["BranchGenerator", "AnastomosisBand"]
