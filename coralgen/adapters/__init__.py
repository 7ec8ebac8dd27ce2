"""
Adapters between coral skeletons and third-party graph libraries.
"""

from .networkx_adapter import to_networkx_graph

__all__ = ["to_networkx_graph"]
