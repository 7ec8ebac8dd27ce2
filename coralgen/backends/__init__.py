"""
Skeleton generation backends.

This module provides a unified interface for the two generation methods:
- Heuristic L-system backend (stochastic subdivision)
- Flow-conserving backend (Murray's law radii, Kamiya angles)

Backend Registration Pattern:
- Backends are registered by name together with their parameter class
- Use get_available_backends() to discover backends at runtime
- create_generator() raises ValueError for unknown names
"""

from typing import Dict, List, Optional, Type

from .base import BranchGenerator, AnastomosisBand
from .heuristic_backend import HeuristicGenerator
from .flow_backend import FlowConservingGenerator

_BACKEND_REGISTRY: Dict[str, Type[BranchGenerator]] = {
    "heuristic": HeuristicGenerator,
    "flow": FlowConservingGenerator,
}


def get_available_backends() -> List[str]:
    """
    Get list of available backend names.

    Returns
    -------
    List[str]
        Names of registered generators
    """
    return list(_BACKEND_REGISTRY.keys())


def get_backend(name: str) -> Optional[Type[BranchGenerator]]:
    """
    Get a backend class by name.

    Parameters
    ----------
    name : str
        Backend name ("heuristic" or "flow")

    Returns
    -------
    Type[BranchGenerator] or None
        Backend class if registered, None otherwise
    """
    return _BACKEND_REGISTRY.get(name)


def get_backend_params_class(name: str) -> Optional[type]:
    backend_class = _BACKEND_REGISTRY.get(name)
    if backend_class is None:
        return None
    return backend_class.params_class


def create_generator(name: str) -> BranchGenerator:
    """Instantiate a registered generator, raising ValueError for unknown names."""
    backend_class = get_backend(name)
    if backend_class is None:
        raise ValueError(
            f"Unknown generator '{name}'. Available: {', '.join(get_available_backends())}"
        )
    return backend_class()


__all__ = [
    "BranchGenerator",
    "AnastomosisBand",
    "HeuristicGenerator",
    "FlowConservingGenerator",
    "get_available_backends",
    "get_backend",
    "get_backend_params_class",
    "create_generator",
]
